"""Fixed-window chunking strategy."""

from raginfo.chunkers.params import validate_parameters
from raginfo.constants import DEFAULT_OVERLAP, DEFAULT_TARGET_SIZE
from raginfo.models import ChunkSpan


class FixedWindowChunker:
    """Default chunking: windows of target_size chars, overlap chars shared.

    The cursor advances by target_size - overlap after every window and
    stops once a window reaches the end of the text, so:
    - consecutive chunks share exactly ``overlap`` characters
    - only the final chunk may be shorter than target_size
    - dropping the first ``overlap`` characters of every chunk after the
      first and concatenating gives back the original text
    """

    def __init__(
        self,
        target_size: int = DEFAULT_TARGET_SIZE,
        overlap: int = DEFAULT_OVERLAP,
    ):
        validate_parameters(target_size, overlap)
        self.target_size = target_size
        self.overlap = overlap

    def spans(self, text: str) -> list[ChunkSpan]:
        """Split text into overlapping windows with position information.

        Args:
            text: The text content to chunk

        Returns:
            List of ChunkSpan objects, empty only when text is empty
        """
        if not text:
            return []

        step = self.target_size - self.overlap
        spans: list[ChunkSpan] = []
        start = 0

        while True:
            end = min(start + self.target_size, len(text))
            spans.append(
                ChunkSpan(text=text[start:end], index=len(spans), start=start, end=end)
            )
            if end >= len(text):
                break
            start += step

        return spans

    def chunk(self, text: str) -> list[str]:
        """Split text into overlapping windows."""
        return [span.text for span in self.spans(text)]
