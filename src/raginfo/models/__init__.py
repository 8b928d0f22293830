"""Data models for raginfo."""

from raginfo.models.document import ChunkSpan, Document, SourceText
from raginfo.models.state import ApplicationState, Chat, Settings

__all__ = ["ApplicationState", "Chat", "ChunkSpan", "Document", "Settings", "SourceText"]
