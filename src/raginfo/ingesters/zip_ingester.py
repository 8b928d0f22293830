"""Ingester for ZIP archive files."""

import logging
import zipfile
import zlib
from pathlib import Path
from typing import Iterator

from raginfo.constants import MAX_FILE_SIZE_BYTES
from raginfo.models import SourceText
from raginfo.utils.binary import extract_text

logger = logging.getLogger(__name__)

# What zipfile raises for a member it cannot decompress: bad CRC or header
# (BadZipFile), encrypted (RuntimeError), unsupported method
# (NotImplementedError), damaged stream (zlib.error, EOFError).
ZIP_READ_ERRORS = (
    OSError,
    zipfile.BadZipFile,
    RuntimeError,
    NotImplementedError,
    zlib.error,
    EOFError,
)


class ZipIngester:
    """Ingester for ZIP archive files."""

    source_type = "zip"

    def can_handle(self, source: Path) -> bool:
        """Check if this is a zip file."""
        return source.suffix.lower() == ".zip" and source.is_file()

    def ingest(self, source: Path) -> Iterator[SourceText]:
        """Yield extracted text for each file in the archive.

        Members over the size limit are yielded without being decompressed.
        A member that cannot be read is yielded with ``error`` set and the
        remaining members are still processed.
        """
        with zipfile.ZipFile(source, "r") as zf:
            for info in zf.infolist():
                if info.is_dir():
                    continue

                if info.file_size > MAX_FILE_SIZE_BYTES:
                    yield SourceText(name=info.filename, size_bytes=info.file_size)
                    continue

                try:
                    raw_content = zf.read(info)
                except ZIP_READ_ERRORS as e:
                    logger.debug(f"Could not read {info.filename} from {source}: {e}")
                    yield SourceText(
                        name=info.filename,
                        size_bytes=info.file_size,
                        error=f"extraction failed: {e}",
                    )
                    continue

                yield SourceText(
                    name=info.filename,
                    size_bytes=info.file_size,
                    text=extract_text(info.filename, raw_content),
                )
