from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Sequence

from application.conformance.outcome import Failure
from domain.interfaces import SearchSession, SessionFactory


class ScenarioStatus(str, Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    PASSED = "passed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (ScenarioStatus.PASSED, ScenarioStatus.FAILED)


@dataclass(slots=True)
class ScenarioContext:
    """Everything a scenario body may touch; built fresh for every scenario."""

    data_dir: Path
    session_factory: SessionFactory
    notes: list[str] = field(default_factory=list)

    def fixture(self, name: str) -> str:
        return str(self.data_dir / name)

    def open_session(self, *fixtures: str, kind: str = "inmemory") -> SearchSession:
        session = self.session_factory()
        try:
            if fixtures:
                session.open(kind, [self.fixture(name) for name in fixtures])
        except BaseException:
            session.close()
            raise
        return session

    def note(self, message: str) -> None:
        self.notes.append(message)


ScenarioBody = Callable[[ScenarioContext], bool]


@dataclass(frozen=True, slots=True)
class Scenario:
    name: str
    body: ScenarioBody


@dataclass(slots=True)
class ScenarioResult:
    name: str
    status: ScenarioStatus = ScenarioStatus.NOT_STARTED
    failure: Failure | None = None
    notes: list[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.status is ScenarioStatus.PASSED

    def transition(self, status: ScenarioStatus) -> None:
        if self.status.is_terminal:
            raise RuntimeError(f"Scenario '{self.name}' already finished as {self.status.value}")
        self.status = status


@dataclass(slots=True)
class RunReport:
    passed: int = 0
    failed: int = 0
    aborted: bool = False
    results: list[ScenarioResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.passed + self.failed

    def record(self, result: ScenarioResult) -> None:
        self.results.append(result)
        if result.passed:
            self.passed += 1
        else:
            self.failed += 1

    def failures(self) -> Sequence[ScenarioResult]:
        return [result for result in self.results if not result.passed]


__all__ = [
    "ScenarioStatus",
    "ScenarioContext",
    "ScenarioBody",
    "Scenario",
    "ScenarioResult",
    "RunReport",
]
