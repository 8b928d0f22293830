"""Core data models for documents and chunks."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ChunkSpan:
    """A chunk of text with its position in the source text."""

    text: str
    index: int
    start: int
    end: int


@dataclass(frozen=True)
class Document:
    """An ingested document, stored as the chunks of its extracted text."""

    id: str
    name: str
    chunks: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "chunks": list(self.chunks)}


@dataclass(frozen=True)
class SourceText:
    """Text extracted from one input source."""

    name: str
    size_bytes: int
    text: Optional[str] = None  # None when no text could be extracted
    error: Optional[str] = None  # set when reading the source itself failed
