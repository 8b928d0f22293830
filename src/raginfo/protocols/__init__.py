"""Protocol definitions for extensible components."""

from raginfo.protocols.chunker import ChunkingStrategy
from raginfo.protocols.generator import TextGenerator
from raginfo.protocols.ingester import Ingester
from raginfo.protocols.persistence import PersistencePort

__all__ = ["ChunkingStrategy", "Ingester", "PersistencePort", "TextGenerator"]
