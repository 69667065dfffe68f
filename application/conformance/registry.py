"""Ordered, immutable table of named scenarios."""
from __future__ import annotations

from typing import Iterable, Iterator

from application.conformance.models import Scenario, ScenarioBody


class ScenarioRegistry:
    """Scenarios in registration order; names must be unique."""

    def __init__(self, entries: Iterable[tuple[str, ScenarioBody]] = ()) -> None:
        scenarios: list[Scenario] = []
        seen: set[str] = set()
        for name, body in entries:
            if not name:
                raise ValueError("Scenario name must not be empty")
            if name in seen:
                raise ValueError(f"Duplicate scenario name '{name}'")
            seen.add(name)
            scenarios.append(Scenario(name=name, body=body))
        self._scenarios: tuple[Scenario, ...] = tuple(scenarios)

    def __iter__(self) -> Iterator[Scenario]:
        return iter(self._scenarios)

    def __len__(self) -> int:
        return len(self._scenarios)

    def __getitem__(self, position: int) -> Scenario:
        return self._scenarios[position]

    def __contains__(self, name: object) -> bool:
        return any(scenario.name == name for scenario in self._scenarios)

    @property
    def names(self) -> list[str]:
        return [scenario.name for scenario in self._scenarios]

    def get(self, name: str) -> Scenario | None:
        for scenario in self._scenarios:
            if scenario.name == name:
                return scenario
        return None


__all__ = ["ScenarioRegistry"]
