"""Ingester for local folders."""

import logging
import os
from pathlib import Path
from typing import Iterator

from raginfo.constants import MAX_FILE_SIZE_BYTES
from raginfo.models import SourceText
from raginfo.utils.binary import extract_text

logger = logging.getLogger(__name__)

# Directory names never descended into
SKIP_DIRS = {
    "__pycache__",
    "node_modules",
    "venv",
    "env",
    "dist",
    "build",
}


class FolderIngester:
    """Ingester for local filesystem folders."""

    source_type = "folder"

    def can_handle(self, source: Path) -> bool:
        """Check if this is an existing directory."""
        return source.is_dir()

    def ingest(self, source: Path) -> Iterator[SourceText]:
        """Yield extracted text for each file in the folder, recursively.

        Files are visited in sorted order so repeated runs ingest in the
        same sequence. Documents are named by their path relative to source.
        """
        for root, dirs, files in os.walk(source):
            dirs[:] = sorted(d for d in dirs if not self._should_skip(d))
            for filename in sorted(files):
                if filename.startswith("."):
                    continue

                full_path = Path(root) / filename
                name = full_path.relative_to(source).as_posix()

                try:
                    size = full_path.stat().st_size
                    if size > MAX_FILE_SIZE_BYTES:
                        yield SourceText(name=name, size_bytes=size)
                        continue
                    raw_content = full_path.read_bytes()
                except OSError as e:
                    logger.debug(f"Could not read {name}: {e}")
                    yield SourceText(name=name, size_bytes=0, error=f"extraction failed: {e}")
                    continue

                yield SourceText(
                    name=name,
                    size_bytes=len(raw_content),
                    text=extract_text(name, raw_content),
                )

    @staticmethod
    def _should_skip(dirname: str) -> bool:
        """Skip hidden directories, VCS metadata and build artifacts."""
        return dirname.startswith(".") or dirname in SKIP_DIRS or dirname.endswith(".egg-info")
