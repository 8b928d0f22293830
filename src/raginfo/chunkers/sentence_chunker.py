"""Sentence-aware chunking strategy."""

import re

from raginfo.chunkers.fixed_window import FixedWindowChunker
from raginfo.chunkers.params import validate_parameters
from raginfo.constants import DEFAULT_OVERLAP, DEFAULT_TARGET_SIZE
from raginfo.models import ChunkSpan

# Terminal punctuation followed by whitespace ends a sentence. The
# whitespace stays with the sentence before it.
_SENTENCE_END = re.compile(r"[.?!]\s+")

_Unit = tuple[int, int]


def split_sentences(text: str) -> list[_Unit]:
    """Return (start, end) offsets of each sentence in text.

    The units are contiguous and together cover the whole string.
    """
    units: list[_Unit] = []
    start = 0
    for match in _SENTENCE_END.finditer(text):
        units.append((start, match.end()))
        start = match.end()
    if start < len(text):
        units.append((start, len(text)))
    return units


def _length(units: list[_Unit]) -> int:
    return units[-1][1] - units[0][0] if units else 0


class SentenceChunker:
    """Pack whole sentences into chunks of at most target_size chars.

    This strategy never splits a sentence:
    - sentences accumulate until the next one would overflow the chunk
    - the next chunk is seeded with the trailing sentences of the previous
      one that fit within ``overlap``
    - a sentence longer than target_size becomes its own oversized chunk

    Text without any sentence boundary is handed to FixedWindowChunker.
    """

    def __init__(
        self,
        target_size: int = DEFAULT_TARGET_SIZE,
        overlap: int = DEFAULT_OVERLAP,
    ):
        validate_parameters(target_size, overlap)
        self.target_size = target_size
        self.overlap = overlap
        self._fallback = FixedWindowChunker(target_size, overlap)

    def spans(self, text: str) -> list[ChunkSpan]:
        """Split text into sentence-aligned chunks with position information.

        Args:
            text: The text content to chunk

        Returns:
            List of ChunkSpan objects, empty only when text is empty
        """
        if not text:
            return []

        sentences = split_sentences(text)
        if len(sentences) < 2:
            return self._fallback.spans(text)

        spans: list[ChunkSpan] = []
        buffer: list[_Unit] = []

        for unit in sentences:
            length = unit[1] - unit[0]
            if buffer and _length(buffer) + length > self.target_size:
                spans.append(self._make_span(text, buffer, len(spans)))
                buffer = self._overlap_seed(buffer)
                # The seed must leave room for the new sentence, otherwise
                # the next chunk would repeat old material only.
                while buffer and _length(buffer) + length > self.target_size:
                    buffer.pop(0)
            buffer.append(unit)

        spans.append(self._make_span(text, buffer, len(spans)))
        return spans

    def chunk(self, text: str) -> list[str]:
        """Split text into sentence-aligned chunks."""
        return [span.text for span in self.spans(text)]

    def _overlap_seed(self, flushed: list[_Unit]) -> list[_Unit]:
        """Collect trailing sentences of a flushed chunk that fit in overlap."""
        seed: list[_Unit] = []
        total = 0
        for unit in reversed(flushed):
            length = unit[1] - unit[0]
            if total + length > self.overlap:
                break
            seed.append(unit)
            total += length
        seed.reverse()
        return seed

    @staticmethod
    def _make_span(text: str, units: list[_Unit], index: int) -> ChunkSpan:
        start, end = units[0][0], units[-1][1]
        return ChunkSpan(text=text[start:end], index=index, start=start, end=end)
