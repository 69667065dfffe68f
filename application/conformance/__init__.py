from application.conformance.models import (
    RunReport,
    Scenario,
    ScenarioBody,
    ScenarioContext,
    ScenarioResult,
    ScenarioStatus,
)
from application.conformance.outcome import Failure, FaultKind, Outcome, Success, attempt
from application.conformance.registry import ScenarioRegistry
from application.conformance.runner import RunListener, run_scenario, run_suite
from application.conformance.scenarios import DEFAULT_SCENARIOS, build_default_registry

__all__ = [
    "Scenario",
    "ScenarioBody",
    "ScenarioContext",
    "ScenarioResult",
    "ScenarioStatus",
    "RunReport",
    "FaultKind",
    "Success",
    "Failure",
    "Outcome",
    "attempt",
    "ScenarioRegistry",
    "RunListener",
    "run_scenario",
    "run_suite",
    "DEFAULT_SCENARIOS",
    "build_default_registry",
]
