"""Splitter that turns a text source into one document per paragraph."""
from __future__ import annotations

import re

from domain.entities import Document

_BLANK_LINES = re.compile(r"\n[ \t]*\n")


class ParagraphSplitter:
    """Split text on blank lines; empty paragraphs are skipped."""

    def split(self, text: str, *, source: str, first_id: int) -> list[Document]:
        documents: list[Document] = []
        for paragraph in _BLANK_LINES.split(text):
            content = " ".join(line.strip() for line in paragraph.splitlines() if line.strip())
            if not content:
                continue
            documents.append(
                Document(
                    id=first_id + len(documents),
                    content=content,
                    metadata={"source": source, "paragraph": len(documents)},
                )
            )
        return documents


__all__ = ["ParagraphSplitter"]
