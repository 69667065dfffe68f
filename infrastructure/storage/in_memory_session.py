"""Поисковая сессия в памяти поверх текстовых файлов."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from application.services.bm25_index import BM25Index
from domain.entities import Document, ExpansionSet, ExpansionTerm, MatchItem, MatchSet, Query, RelevanceSet
from domain.interfaces import RetrievalError, SearchSession
from infrastructure.analysis.porter_analyzer import PorterAnalyzer
from infrastructure.splitting.paragraph_splitter import ParagraphSplitter
from infrastructure.text_extraction.plain_text_extractor import PlainTextExtractor

logger = logging.getLogger(__name__)

SOURCE_KIND = "inmemory"


class InMemorySession(SearchSession):
    """Хранит документы в списках Python и ищет перебором через BM25."""

    def __init__(
        self,
        analyzer: PorterAnalyzer | None = None,
        extractor: PlainTextExtractor | None = None,
        splitter: ParagraphSplitter | None = None,
    ) -> None:
        self._analyzer = analyzer or PorterAnalyzer()
        self._extractor = extractor or PlainTextExtractor()
        self._splitter = splitter or ParagraphSplitter()
        self._documents: list[Document] = []
        self._terms: dict[int, list[str]] = {}
        self._index = BM25Index()
        self._query: Query | None = None
        self._query_terms: tuple[str, ...] = ()
        self._closed = False

    @property
    def documents(self) -> list[Document]:
        return list(self._documents)

    @property
    def query(self) -> Query | None:
        return self._query

    def open(self, kind: str, args: Sequence[str]) -> None:
        self._ensure_open()
        if kind != SOURCE_KIND:
            raise RetrievalError(f"Unknown database type '{kind}'")
        if not args:
            raise RetrievalError("No source paths given")
        for arg in args:
            self._load(Path(arg))

    def bind(self, query: Query) -> None:
        self._ensure_open()
        if query.is_empty:
            raise RetrievalError("Query must contain at least one term")
        self._query = query
        self._query_terms = tuple(self._analyzer.stem(query.terms))
        logger.debug("Bound query %r as terms %s", query.text, self._query_terms)

    def execute(self, first: int, max_items: int) -> MatchSet:
        self._ensure_open()
        if first < 0 or max_items < 0:
            raise RetrievalError(f"Invalid window first={first} max_items={max_items}")
        if self._query is None:
            raise RetrievalError("No query has been set")
        self._refresh_index()

        scores = self._index.scores(self._query_terms)
        ranked = sorted(scores.items(), key=lambda item: (-item[1], item[0]))
        window = ranked[first : first + max_items]
        return MatchSet(
            matches_estimated=len(ranked),
            max_score=ranked[0][1] if ranked else 0.0,
            items=tuple(MatchItem(score=score, document_id=doc_id) for doc_id, score in window),
        )

    def expand(self, max_items: int, relevant: RelevanceSet) -> ExpansionSet:
        self._ensure_open()
        if max_items < 0:
            raise RetrievalError(f"Invalid max_items={max_items}")
        unknown = sorted(doc_id for doc_id in relevant.document_ids if doc_id not in self._terms)
        if unknown:
            raise RetrievalError(f"Relevance set refers to unknown documents: {unknown}")
        self._refresh_index()

        weights = self._index.expansion_weights(relevant.document_ids)
        ranked = sorted(weights.items(), key=lambda item: (-item[1], item[0]))
        return ExpansionSet(
            items=tuple(ExpansionTerm(term=term, weight=weight) for term, weight in ranked[:max_items])
        )

    def close(self) -> None:
        if self._closed:
            return
        logger.debug("Closing session with %d documents", len(self._documents))
        self._documents.clear()
        self._terms.clear()
        self._index = BM25Index()
        self._closed = True

    def _load(self, path: Path) -> None:
        try:
            raw = path.read_bytes()
        except OSError as exc:
            raise RetrievalError(f"Cannot open source '{path}': {exc.strerror or exc}") from exc
        text = self._extractor.extract(raw)
        documents = self._splitter.split(text, source=str(path), first_id=len(self._documents) + 1)
        for document in documents:
            self._documents.append(document)
            self._terms[document.id] = self._analyzer.terms(document.content)
        logger.debug("Loaded %d documents from %s", len(documents), path)

    def _refresh_index(self) -> None:
        self._index.update_documents([(doc.id, self._terms[doc.id]) for doc in self._documents])

    def _ensure_open(self) -> None:
        if self._closed:
            raise RetrievalError("Session has been closed")


__all__ = ["InMemorySession", "SOURCE_KIND"]
