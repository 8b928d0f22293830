"""Application state: settings, documents and chat history."""

from dataclasses import dataclass, field, replace

from raginfo.constants import DEFAULT_MODEL
from raginfo.models.document import Document


@dataclass(frozen=True)
class Settings:
    """User settings. ``api_key`` is always plaintext in memory."""

    api_key: str = ""
    model: str = DEFAULT_MODEL

    def to_dict(self) -> dict:
        return {"apiKey": self.api_key, "model": self.model}


@dataclass(frozen=True)
class Chat:
    """One question and the generated answer."""

    id: str
    user_query: str
    ai_response: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "userQuery": self.user_query,
            "aiResponse": self.ai_response,
        }


@dataclass(frozen=True)
class ApplicationState:
    """The single unit of persistence.

    Snapshots are immutable; every mutation helper returns a new instance.
    """

    settings: Settings = field(default_factory=Settings)
    files: tuple[Document, ...] = ()
    chats: tuple[Chat, ...] = ()

    @classmethod
    def empty(cls) -> "ApplicationState":
        """Return the default-empty state."""
        return cls()

    @property
    def is_empty(self) -> bool:
        """True when there are no files, no chats and no API key."""
        return not self.files and not self.chats and not self.settings.api_key

    def with_document(self, doc: Document) -> "ApplicationState":
        return replace(self, files=self.files + (doc,))

    def without_document(self, doc_id: str) -> "ApplicationState":
        return replace(self, files=tuple(f for f in self.files if f.id != doc_id))

    def with_chat(self, chat: Chat) -> "ApplicationState":
        return replace(self, chats=self.chats + (chat,))

    def without_chat(self, chat_id: str) -> "ApplicationState":
        return replace(self, chats=tuple(c for c in self.chats if c.id != chat_id))

    def with_settings(self, settings: Settings) -> "ApplicationState":
        return replace(self, settings=settings)

    def to_dict(self) -> dict:
        """Return the JSON wire shape (API key as held in memory)."""
        return {
            "settings": self.settings.to_dict(),
            "files": [doc.to_dict() for doc in self.files],
            "chats": [chat.to_dict() for chat in self.chats],
        }
