"""Tagged results for calls that cross the collaborator boundary."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, TypeVar, Union

from domain.interfaces import RetrievalError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FaultKind(str, Enum):
    COLLABORATOR = "collaborator"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class Failure:
    kind: FaultKind
    reason: str

    def describe(self) -> str:
        if self.kind is FaultKind.COLLABORATOR:
            return f"RetrievalError: {self.reason}"
        return f"Unknown exception! {self.reason}"


Outcome = Union[Success[T], Failure]


def attempt(call: Callable[..., T], *args: Any, **kwargs: Any) -> Outcome[T]:
    """Run ``call`` and fold any raised fault into a :class:`Failure`."""

    try:
        return Success(call(*args, **kwargs))
    except RetrievalError as exc:
        logger.debug("Collaborator failure in %s: %s", getattr(call, "__name__", call), exc.message)
        return Failure(FaultKind.COLLABORATOR, exc.message)
    except Exception as exc:
        logger.warning("Unexpected fault in %s", getattr(call, "__name__", call), exc_info=True)
        return Failure(FaultKind.UNEXPECTED, f"{type(exc).__name__}: {exc}")


__all__ = ["FaultKind", "Success", "Failure", "Outcome", "attempt"]
