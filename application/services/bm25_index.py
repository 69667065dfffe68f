"""BM25 индекс с кэшированием между запросами одной сессии."""
from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Sequence

import numpy as np
from rank_bm25 import BM25Plus


@dataclass(slots=True)
class _State:
    index: BM25Plus | None
    doc_ids: list[int]
    term_sets: list[frozenset[str]]
    fingerprint: str
    document_frequency: Counter = field(default_factory=Counter)


class BM25Index:
    """Кэширует BM25 индекс, перестраивая его только при изменении коллекции.

    Документ считается совпавшим, если содержит хотя бы один термин запроса;
    BM25 используется только для весов.
    """

    def __init__(self) -> None:
        self._state = _State(index=None, doc_ids=[], term_sets=[], fingerprint="")

    @property
    def size(self) -> int:
        return len(self._state.doc_ids)

    def update_documents(self, documents: Sequence[tuple[int, list[str]]]) -> None:
        fingerprint = self._fingerprint(documents)
        if fingerprint == self._state.fingerprint:
            return
        corpus = [terms for _doc_id, terms in documents]
        term_sets = [frozenset(terms) for terms in corpus]
        frequency: Counter = Counter()
        for terms in term_sets:
            frequency.update(terms)
        index = BM25Plus(corpus) if documents and any(corpus) else None
        self._state = _State(
            index=index,
            doc_ids=[doc_id for doc_id, _terms in documents],
            term_sets=term_sets,
            fingerprint=fingerprint,
            document_frequency=frequency,
        )

    def scores(self, query_terms: Sequence[str]) -> dict[int, float]:
        if self._state.index is None or not query_terms:
            return {}
        wanted = set(query_terms)
        values = np.asarray(self._state.index.get_scores(list(query_terms)), dtype=np.float64).tolist()
        return {
            doc_id: score
            for doc_id, terms, score in zip(self._state.doc_ids, self._state.term_sets, values)
            if terms & wanted
        }

    def terms_of(self, doc_id: int) -> frozenset[str]:
        position = self._state.doc_ids.index(doc_id)
        return self._state.term_sets[position]

    def expansion_weights(self, relevant_ids: Iterable[int]) -> dict[str, float]:
        """Вес термина: доля релевантных документов с ним, умноженная на idf."""

        relevant = sorted(set(relevant_ids))
        if not relevant or self._state.index is None:
            return {}
        occurrences: Counter = Counter()
        for doc_id in relevant:
            occurrences.update(self.terms_of(doc_id))
        total = self.size
        weights: dict[str, float] = {}
        for term, count in occurrences.items():
            idf = math.log((total + 1) / self._state.document_frequency[term])
            weights[term] = (count / len(relevant)) * idf
        return weights

    @staticmethod
    def _fingerprint(documents: Sequence[tuple[int, list[str]]]) -> str:
        return "|".join(f"{doc_id}:{len(terms)}" for doc_id, terms in documents)


__all__ = ["BM25Index"]
