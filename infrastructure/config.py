"""Configuration and dependency wiring for the conformance harness."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Literal, Mapping

from domain.interfaces import SearchSession, SessionFactory
from infrastructure.storage.in_memory_session import InMemorySession


EngineName = Literal["inmemory"]

DATA_ROOT_VARIABLE = "srcdir"
ENGINE_VARIABLE = "APITEST_ENGINE"
TESTDATA_DIRNAME = "testdata"


class ConfigurationError(Exception):
    """Raised when the harness cannot be bootstrapped."""


@dataclass(slots=True)
class HarnessConfig:
    """Run options for a single harness invocation."""

    data_dir: Path
    verbose: bool = False
    abort_on_failure: bool = False
    fussy: bool = False
    engine: EngineName = "inmemory"


_ENGINE_FACTORIES: dict[EngineName, Callable[[], SearchSession]] = {
    "inmemory": InMemorySession,
}


def resolve_data_dir(environ: Mapping[str, str] | None = None) -> Path:
    """Return ``$srcdir/testdata``; the variable is mandatory."""

    env = os.environ if environ is None else environ
    srcdir = env.get(DATA_ROOT_VARIABLE)
    if not srcdir:
        raise ConfigurationError(f"${DATA_ROOT_VARIABLE} must be in the environment!")
    return Path(srcdir) / TESTDATA_DIRNAME


def load_config(
    *,
    verbose: bool = False,
    abort_on_failure: bool = False,
    fussy: bool = False,
    environ: Mapping[str, str] | None = None,
) -> HarnessConfig:
    env = os.environ if environ is None else environ
    engine = env.get(ENGINE_VARIABLE, "inmemory")
    if engine not in _ENGINE_FACTORIES:
        raise ConfigurationError(f"Unknown engine '{engine}'")
    return HarnessConfig(
        data_dir=resolve_data_dir(env),
        verbose=verbose,
        abort_on_failure=abort_on_failure,
        fussy=fussy,
        engine=engine,  # type: ignore[arg-type]
    )


def build_session_factory(config: HarnessConfig) -> SessionFactory:
    """Return the callable that creates one fresh session per scenario."""

    try:
        return _ENGINE_FACTORIES[config.engine]
    except KeyError as exc:  # pragma: no cover
        raise ConfigurationError(f"Unknown engine '{config.engine}'") from exc


__all__ = [
    "ConfigurationError",
    "HarnessConfig",
    "load_config",
    "resolve_data_dir",
    "build_session_factory",
]
