"""Sequential ingestion of extracted text into the session."""

import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional

from raginfo.constants import MAX_FILE_SIZE_BYTES, MAX_FILE_SIZE_MB
from raginfo.errors import ExtractionError
from raginfo.ingesters import get_ingester
from raginfo.ingesters.zip_ingester import ZIP_READ_ERRORS
from raginfo.models import Document, SourceText
from raginfo.protocols import ChunkingStrategy
from raginfo.session import Session

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IngestResult:
    """Outcome for one source in a batch."""

    name: str
    document: Optional[Document] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


# Called after every source with (sources done so far, result)
ProgressCallback = Callable[[int, IngestResult], None]


def build_document(source: SourceText, chunker: ChunkingStrategy) -> Document:
    """Chunk one source into a new Document.

    Raises:
        ExtractionError: if the source could not be read, is too large or
            has no text
    """
    if source.error is not None:
        raise ExtractionError(source.error)
    if source.size_bytes > MAX_FILE_SIZE_BYTES:
        raise ExtractionError(f"exceeds the {MAX_FILE_SIZE_MB}MB size limit")
    if source.text is None:
        raise ExtractionError("no text could be extracted")
    return Document(
        id=f"{source.name}-{uuid.uuid4().hex}",
        name=source.name,
        chunks=tuple(chunker.chunk(source.text)),
    )


def ingest_sources(
    session: Session,
    sources: Iterable[SourceText | IngestResult],
    chunker: ChunkingStrategy,
    on_progress: Optional[ProgressCallback] = None,
) -> list[IngestResult]:
    """Chunk and commit each source before moving to the next.

    Items that are already failed IngestResults (extraction failed upstream)
    are reported as-is. A failing source never stops the batch; sources
    committed before an interruption stay committed.
    """
    results: list[IngestResult] = []
    for item in sources:
        if isinstance(item, IngestResult):
            result = item
        else:
            try:
                doc = build_document(item, chunker)
            except ExtractionError as e:
                result = IngestResult(name=item.name, error=str(e))
            else:
                session.add_document(doc)
                result = IngestResult(name=item.name, document=doc)

        if result.ok:
            logger.info(f"  {result.name}: {len(result.document.chunks)} chunks")
        else:
            logger.warning(f"  {result.name}: failed ({result.error})")

        results.append(result)
        if on_progress is not None:
            on_progress(len(results), result)
    return results


def extract_paths(paths: Iterable[Path | str]) -> Iterator[SourceText | IngestResult]:
    """Lazily run the matching ingester over each path.

    A path no ingester handles, or whose ingester fails, yields a failed
    IngestResult instead of raising.
    """
    for path in map(Path, paths):
        ingester = get_ingester(path)
        if ingester is None:
            yield IngestResult(name=str(path), error="no ingester for this source")
            continue
        try:
            yield from ingester.ingest(path)
        except ZIP_READ_ERRORS + (ExtractionError,) as e:
            yield IngestResult(name=str(path), error=f"extraction failed: {e}")


def ingest_paths(
    session: Session,
    paths: Iterable[Path | str],
    chunker: ChunkingStrategy,
    on_progress: Optional[ProgressCallback] = None,
) -> list[IngestResult]:
    """Extract, chunk and commit every document found under paths."""
    return ingest_sources(session, extract_paths(paths), chunker, on_progress)
