"""Text extractor for plain UTF-8 fixture files."""
from __future__ import annotations

from domain.interfaces import TextExtractor


class PlainTextExtractor(TextExtractor):
    """Decode text files and normalise their line endings."""

    def __init__(self, encoding: str = "utf-8-sig") -> None:
        self.encoding = encoding

    def extract(self, source: bytes | str) -> str:
        if isinstance(source, bytes):
            source = source.decode(self.encoding, errors="replace")
        return source.replace("\r\n", "\n").replace("\r", "\n")


__all__ = ["PlainTextExtractor"]
