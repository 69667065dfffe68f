from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from application.conformance.models import RunReport, Scenario, ScenarioContext, ScenarioResult, ScenarioStatus
from application.conformance.outcome import Failure, attempt
from application.conformance.registry import ScenarioRegistry
from domain.interfaces import SessionFactory

logger = logging.getLogger(__name__)


class RunListener(Protocol):
    def started(self, scenario: Scenario) -> None: ...

    def finished(self, result: ScenarioResult) -> None: ...


def run_scenario(scenario: Scenario, context: ScenarioContext) -> ScenarioResult:
    """Run one scenario; faults are contained and turned into a failed result."""

    result = ScenarioResult(name=scenario.name)
    result.transition(ScenarioStatus.RUNNING)
    outcome = attempt(scenario.body, context)
    result.notes = list(context.notes)

    if isinstance(outcome, Failure):
        result.failure = outcome
        result.transition(ScenarioStatus.FAILED)
    elif outcome.value is True:
        result.transition(ScenarioStatus.PASSED)
    else:
        result.transition(ScenarioStatus.FAILED)
    logger.debug("Scenario %s finished: %s", scenario.name, result.status.value)
    return result


def run_suite(
    registry: ScenarioRegistry,
    *,
    data_dir: Path,
    session_factory: SessionFactory,
    abort_on_failure: bool = False,
    listener: RunListener | None = None,
) -> RunReport:
    report = RunReport()
    for scenario in registry:
        if listener is not None:
            listener.started(scenario)
        context = ScenarioContext(data_dir=data_dir, session_factory=session_factory)
        result = run_scenario(scenario, context)
        report.record(result)
        if listener is not None:
            listener.finished(result)
        if not result.passed and abort_on_failure:
            report.aborted = True
            logger.info("Aborting after failure of %s", scenario.name)
            break
    return report


__all__ = ["RunListener", "run_scenario", "run_suite"]
