"""Domain entities for the retrieval conformance harness."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterable

_TERM_PATTERN = re.compile(r"\w+", re.UNICODE)


@dataclass(slots=True)
class Document:
    """A single document loaded from a source into a session."""

    id: int
    content: str
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Query:
    """Immutable user query. ``Query()`` is the empty query."""

    text: str = ""

    @property
    def terms(self) -> tuple[str, ...]:
        return tuple(match.group(0).lower() for match in _TERM_PATTERN.finditer(self.text))

    @property
    def is_empty(self) -> bool:
        return not self.terms


@dataclass(frozen=True, slots=True)
class MatchItem:
    score: float
    document_id: int


@dataclass(frozen=True, slots=True, eq=False)
class MatchSet:
    """Ranked window of the documents matching a query."""

    matches_estimated: int
    max_score: float
    items: tuple[MatchItem, ...] = ()

    @property
    def document_ids(self) -> list[int]:
        return [item.document_id for item in self.items]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MatchSet):
            return NotImplemented
        return match_sets_equal(self, other)

    def __hash__(self) -> int:
        return hash((self.matches_estimated, self.max_score, self.items))


def match_sets_equal(first: MatchSet, second: MatchSet) -> bool:
    """Structural equality: bound, max score and every (score, id) pair in order."""

    if (
        first.matches_estimated != second.matches_estimated
        or first.max_score != second.max_score
        or len(first.items) != len(second.items)
    ):
        return False
    for left, right in zip(first.items, second.items):
        if left.score != right.score or left.document_id != right.document_id:
            return False
    return True


@dataclass(frozen=True, slots=True)
class ExpansionTerm:
    term: str
    weight: float


@dataclass(frozen=True, slots=True)
class ExpansionSet:
    """Candidate query expansion terms derived from a relevance set."""

    items: tuple[ExpansionTerm, ...] = ()

    @property
    def terms(self) -> list[str]:
        return [item.term for item in self.items]


@dataclass(slots=True)
class RelevanceSet:
    """Document ids the operator marked as relevant."""

    document_ids: set[int] = field(default_factory=set)

    @classmethod
    def of(cls, document_ids: Iterable[int]) -> "RelevanceSet":
        return cls(document_ids=set(document_ids))

    def add_document(self, document_id: int) -> None:
        self.document_ids.add(document_id)

    def __contains__(self, document_id: object) -> bool:
        return document_id in self.document_ids

    def __len__(self) -> int:
        return len(self.document_ids)


__all__ = [
    "Document",
    "Query",
    "MatchItem",
    "MatchSet",
    "match_sets_equal",
    "ExpansionTerm",
    "ExpansionSet",
    "RelevanceSet",
]
