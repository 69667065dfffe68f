"""Abstract interfaces for the retrieval conformance harness."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Sequence

from domain.entities import ExpansionSet, MatchSet, Query, RelevanceSet


class RetrievalError(Exception):
    """Structured failure signalled by a search collaborator."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TextExtractor(ABC):
    """Extracts text from user provided sources (files, URLs, etc.)."""

    @abstractmethod
    def extract(self, source: bytes | str) -> str:
        """Return the textual representation of a source."""


class SearchSession(ABC):
    """A set of opened sources plus the query bound to them.

    Sessions are scoped to a single scenario; use them as context managers so
    that they are released on every exit path.
    """

    @abstractmethod
    def open(self, kind: str, args: Sequence[str]) -> None:
        """Add one or more sources of the given kind to the session."""

    @abstractmethod
    def bind(self, query: Query) -> None:
        """Associate a query with the session, replacing any previous one."""

    @abstractmethod
    def execute(self, first: int, max_items: int) -> MatchSet:
        """Run the bound query and return up to ``max_items`` results from ``first``."""

    @abstractmethod
    def expand(self, max_items: int, relevant: RelevanceSet) -> ExpansionSet:
        """Suggest up to ``max_items`` expansion terms for the relevance set."""

    def close(self) -> None:
        """Release the sources held by the session."""

    def __enter__(self) -> "SearchSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


SessionFactory = Callable[[], SearchSession]


__all__ = [
    "RetrievalError",
    "TextExtractor",
    "SearchSession",
    "SessionFactory",
]
