"""Text extraction adapters (ingesters) for raginfo."""

from pathlib import Path
from typing import Optional

from raginfo.ingesters.folder_ingester import FolderIngester
from raginfo.ingesters.text_ingester import TextFileIngester
from raginfo.ingesters.zip_ingester import ZipIngester
from raginfo.protocols import Ingester

# Registry of available ingesters, first match wins
_INGESTERS: list[Ingester] = [
    ZipIngester(),
    FolderIngester(),
    TextFileIngester(),
]


def get_ingester(source: Path | str) -> Optional[Ingester]:
    """Find an ingester that can handle the given source.

    Args:
        source: Path to a file, folder or zip archive

    Returns:
        An Ingester instance that can handle the source, or None
    """
    source_path = Path(source)
    for ingester in _INGESTERS:
        if ingester.can_handle(source_path):
            return ingester
    return None


def register_ingester(ingester: Ingester) -> None:
    """Register a custom ingester, e.g. a PDF text extractor.

    Registered ingesters are consulted before the built-in ones.

    Args:
        ingester: An object implementing the Ingester protocol
    """
    _INGESTERS.insert(0, ingester)


__all__ = [
    "get_ingester",
    "register_ingester",
    "FolderIngester",
    "TextFileIngester",
    "ZipIngester",
]
