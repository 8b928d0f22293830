"""Text chunking strategies."""

from raginfo.chunkers.fixed_window import FixedWindowChunker
from raginfo.chunkers.params import validate_parameters
from raginfo.chunkers.sentence_chunker import SentenceChunker, split_sentences
from raginfo.constants import DEFAULT_OVERLAP, DEFAULT_TARGET_SIZE
from raginfo.errors import InvalidChunkParameters
from raginfo.protocols import ChunkingStrategy

# Registry of available strategies
STRATEGIES = {
    "fixed": FixedWindowChunker,
    "sentence": SentenceChunker,
}


def get_chunker(
    strategy: str = "fixed",
    target_size: int = DEFAULT_TARGET_SIZE,
    overlap: int = DEFAULT_OVERLAP,
) -> ChunkingStrategy:
    """Build the chunker registered under ``strategy``.

    Raises:
        InvalidChunkParameters: for an unknown strategy or invalid sizes
    """
    try:
        factory = STRATEGIES[strategy]
    except KeyError:
        raise InvalidChunkParameters(
            f"Unknown chunking strategy {strategy!r}; expected one of {sorted(STRATEGIES)}"
        ) from None
    return factory(target_size, overlap)


def chunk_text(
    text: str,
    target_size: int = DEFAULT_TARGET_SIZE,
    overlap: int = DEFAULT_OVERLAP,
    strategy: str = "fixed",
) -> list[str]:
    """Split text into ordered, overlapping chunks.

    Args:
        text: Raw text of one document
        target_size: Maximum chunk length in characters
        overlap: Characters shared by consecutive chunks (< target_size)
        strategy: "fixed" (default) or "sentence"

    Returns:
        List of chunk strings; empty if and only if text is empty
    """
    return get_chunker(strategy, target_size, overlap).chunk(text)


__all__ = [
    "STRATEGIES",
    "FixedWindowChunker",
    "SentenceChunker",
    "chunk_text",
    "get_chunker",
    "split_sentences",
    "validate_parameters",
]
