"""The in-process owner of the application state."""

import logging
import uuid
from typing import Optional

from raginfo.ai import QueryOrchestrator
from raginfo.errors import MissingApiKeyError
from raginfo.models import ApplicationState, Chat, Document, Settings
from raginfo.storage import StateStore

logger = logging.getLogger(__name__)


class Session:
    """Hold the current state snapshot and persist every change.

    State is loaded once, when the session is created. Each mutation builds
    a new immutable snapshot, swaps it in and saves it. Nothing here is
    thread-safe; one session per process.
    """

    def __init__(self, store: StateStore, orchestrator: Optional[QueryOrchestrator] = None):
        self.store = store
        self.orchestrator = orchestrator
        self._state = store.load()
        logger.debug(
            f"Loaded {len(self._state.files)} documents and {len(self._state.chats)} chats"
        )

    @property
    def state(self) -> ApplicationState:
        return self._state

    def _commit(self, state: ApplicationState) -> ApplicationState:
        self.store.save(state)
        self._state = state
        return state

    def find_document(self, doc_id: str) -> Optional[Document]:
        return next((doc for doc in self._state.files if doc.id == doc_id), None)

    def add_document(self, doc: Document) -> ApplicationState:
        return self._commit(self._state.with_document(doc))

    def delete_document(self, doc_id: str) -> ApplicationState:
        if self.find_document(doc_id) is None:
            raise KeyError(doc_id)
        return self._commit(self._state.without_document(doc_id))

    def add_chat(self, chat: Chat) -> ApplicationState:
        return self._commit(self._state.with_chat(chat))

    def delete_chat(self, chat_id: str) -> ApplicationState:
        if not any(chat.id == chat_id for chat in self._state.chats):
            raise KeyError(chat_id)
        return self._commit(self._state.without_chat(chat_id))

    def update_settings(self, settings: Settings) -> ApplicationState:
        return self._commit(self._state.with_settings(settings))

    def reset(self) -> ApplicationState:
        """Drop everything; the persisted record is deleted."""
        return self._commit(ApplicationState.empty())

    def import_json(self, payload: str) -> ApplicationState:
        """Replace the state with an imported one.

        Raises:
            StateImportError: if payload is malformed; the state is unchanged
        """
        return self._commit(self.store.import_json(payload))

    def export_json(self) -> str:
        return self.store.export_json(self._state)

    def context_chunks(self) -> list[str]:
        """Every chunk of every document, in document order."""
        return [chunk for doc in self._state.files for chunk in doc.chunks]

    def ask(self, query: str) -> Chat:
        """Answer query from the stored documents and record the exchange.

        Raises:
            MissingApiKeyError: if no API key is configured
            GenerationError: if the model (and its fallback) fail
        """
        if self.orchestrator is None:
            raise RuntimeError("Session was created without a query orchestrator")
        settings = self._state.settings
        if not settings.api_key:
            raise MissingApiKeyError("Set an API key before asking questions")

        response = self.orchestrator.answer(
            query, self.context_chunks(), settings.model, settings.api_key
        )
        chat = Chat(id=uuid.uuid4().hex, user_query=query, ai_response=response)
        self.add_chat(chat)
        return chat
