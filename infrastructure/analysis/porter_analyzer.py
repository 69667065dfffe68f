"""Tokenizer and Porter stemmer shared by indexing and querying."""
from __future__ import annotations

import re
from typing import Iterable

import snowballstemmer

_TOKEN_PATTERN = re.compile(r"\w+", re.UNICODE)


class PorterAnalyzer:
    """Lower-case word tokens reduced with the original Porter algorithm."""

    def __init__(self, algorithm: str = "porter") -> None:
        self.algorithm = algorithm
        self._stemmer = snowballstemmer.stemmer(algorithm)

    def tokenize(self, text: str) -> list[str]:
        return [token.lower() for token in _TOKEN_PATTERN.findall(text)]

    def stem(self, tokens: Iterable[str]) -> list[str]:
        return self._stemmer.stemWords([token.lower() for token in tokens])

    def terms(self, text: str) -> list[str]:
        return self.stem(self.tokenize(text))


__all__ = ["PorterAnalyzer"]
