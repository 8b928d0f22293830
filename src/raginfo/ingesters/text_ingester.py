"""Ingester for single text files."""

from pathlib import Path
from typing import Iterator

from raginfo.constants import MAX_FILE_SIZE_BYTES
from raginfo.models import SourceText
from raginfo.utils.binary import extract_text


class TextFileIngester:
    """Ingester for one file on disk."""

    source_type = "file"

    def can_handle(self, source: Path) -> bool:
        """Check if this is an existing regular file (but not a zip)."""
        return source.is_file() and source.suffix.lower() != ".zip"

    def ingest(self, source: Path) -> Iterator[SourceText]:
        """Yield the file's text, or text=None if it cannot be read as text.

        Files over the size limit are not read at all.
        """
        size = source.stat().st_size
        if size > MAX_FILE_SIZE_BYTES:
            yield SourceText(name=source.name, size_bytes=size)
            return

        yield SourceText(
            name=source.name,
            size_bytes=size,
            text=extract_text(source.name, source.read_bytes()),
        )
