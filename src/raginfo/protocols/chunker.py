"""Protocol for text chunking strategies."""

from typing import Protocol, runtime_checkable

from raginfo.models import ChunkSpan


@runtime_checkable
class ChunkingStrategy(Protocol):
    """Protocol for text chunking strategies.

    Implementations must terminate on any input and return chunks in
    left-to-right order covering the whole text.
    """

    def spans(self, text: str) -> list[ChunkSpan]:
        """Split text into chunks with their offsets."""
        ...

    def chunk(self, text: str) -> list[str]:
        """Split text into chunk strings."""
        ...
