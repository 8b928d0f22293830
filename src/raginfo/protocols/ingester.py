"""Protocol for text extraction adapters."""

from pathlib import Path
from typing import Iterator, Protocol, runtime_checkable

from raginfo.models import SourceText


@runtime_checkable
class Ingester(Protocol):
    """Protocol for input source handlers.

    Implementations turn a path (file, folder, archive) into plain text per
    document. Uses structural subtyping - no inheritance required.
    """

    @property
    def source_type(self) -> str:
        """Return identifier for this source type (e.g., 'zip', 'folder')."""
        ...

    def can_handle(self, source: Path) -> bool:
        """Check if this ingester can process the given source."""
        ...

    def ingest(self, source: Path) -> Iterator[SourceText]:
        """Yield extracted text for each document in the source.

        Sources without extractable text are yielded with text=None.
        """
        ...
