"""Rewriting of loaded state records into the current shape.

Records written by older builds differ from the current wire format:
- documents carried the full extracted text in ``text`` instead of chunks
- documents carried their chunks under ``textChunks``
- top-level sections or settings fields may be missing entirely

``migrate`` resolves every document into a tagged record once, here, so the
rest of the application only ever sees ``Document``.
"""

import json
import logging
import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union

from raginfo.chunkers import chunk_text
from raginfo.constants import DEFAULT_MODEL
from raginfo.errors import StateImportError
from raginfo.models import ApplicationState, Chat, Document, Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurrentDocumentRecord:
    """A document already stored as a chunk list."""

    id: str
    name: str
    chunks: tuple[str, ...]


@dataclass(frozen=True)
class LegacyDocumentRecord:
    """A document from an older build.

    Exactly one of ``text`` (the full extracted text) or ``text_chunks``
    (chunks stored under the old field name) is set.
    """

    id: str
    name: str
    text: Optional[str] = None
    text_chunks: Optional[tuple[str, ...]] = None


DocumentRecord = Union[CurrentDocumentRecord, LegacyDocumentRecord]


def _new_id() -> str:
    return uuid.uuid4().hex


def _str_or(value: Any, default: str) -> str:
    return value if isinstance(value, str) else default


def _string_items(values: list) -> tuple[str, ...]:
    return tuple(v for v in values if isinstance(v, str) and v)


def classify_document(raw: Mapping) -> DocumentRecord:
    """Decide which shape a raw document record has."""
    doc_id = raw.get("id")
    if not isinstance(doc_id, str) or not doc_id:
        doc_id = _new_id()
    name = _str_or(raw.get("name"), "untitled") or "untitled"

    chunks = raw.get("chunks")
    if isinstance(chunks, list):
        return CurrentDocumentRecord(id=doc_id, name=name, chunks=_string_items(chunks))

    text_chunks = raw.get("textChunks")
    if isinstance(text_chunks, list):
        return LegacyDocumentRecord(id=doc_id, name=name, text_chunks=_string_items(text_chunks))

    text = raw.get("text")
    if isinstance(text, str):
        return LegacyDocumentRecord(id=doc_id, name=name, text=text)

    logger.warning(f"Document {name!r} has no chunks or text; keeping it empty")
    return CurrentDocumentRecord(id=doc_id, name=name, chunks=())


def resolve_document(record: DocumentRecord) -> Document:
    """Turn a tagged record into a current Document."""
    if isinstance(record, CurrentDocumentRecord):
        return Document(id=record.id, name=record.name, chunks=record.chunks)
    if record.text_chunks is not None:
        return Document(id=record.id, name=record.name, chunks=record.text_chunks)
    logger.info(f"Chunking legacy full-text document {record.name!r}")
    return Document(id=record.id, name=record.name, chunks=tuple(chunk_text(record.text or "")))


def _migrate_settings(raw: Any) -> Settings:
    if not isinstance(raw, Mapping):
        return Settings()
    return Settings(
        api_key=_str_or(raw.get("apiKey"), ""),
        model=_str_or(raw.get("model"), "") or DEFAULT_MODEL,
    )


def _migrate_files(raw: Any) -> tuple[Document, ...]:
    if not isinstance(raw, list):
        return ()
    docs: list[Document] = []
    seen: set[str] = set()
    for entry in raw:
        if not isinstance(entry, Mapping):
            logger.warning(f"Dropping malformed document entry: {entry!r:.80}")
            continue
        doc = resolve_document(classify_document(entry))
        if doc.id in seen:
            logger.warning(f"Duplicate document id {doc.id!r}; assigning a new one")
            doc = Document(id=_new_id(), name=doc.name, chunks=doc.chunks)
        seen.add(doc.id)
        docs.append(doc)
    return tuple(docs)


def _migrate_chats(raw: Any) -> tuple[Chat, ...]:
    if not isinstance(raw, list):
        return ()
    chats: list[Chat] = []
    seen: set[str] = set()
    for entry in raw:
        if not isinstance(entry, Mapping):
            logger.warning(f"Dropping malformed chat entry: {entry!r:.80}")
            continue
        chat_id = entry.get("id")
        if not isinstance(chat_id, str) or not chat_id or chat_id in seen:
            chat_id = _new_id()
        seen.add(chat_id)
        chats.append(
            Chat(
                id=chat_id,
                user_query=_str_or(entry.get("userQuery"), ""),
                ai_response=_str_or(entry.get("aiResponse"), ""),
            )
        )
    return tuple(chats)


def migrate(raw: Any) -> ApplicationState:
    """Rewrite a loaded record into the current ApplicationState.

    Pure: never reads or writes storage. Missing or malformed sections become
    empty defaults instead of failing the whole load. The API key is passed
    through exactly as stored.
    """
    if not isinstance(raw, Mapping):
        logger.warning(f"Stored state is a {type(raw).__name__}, not an object; starting empty")
        return ApplicationState.empty()

    return ApplicationState(
        settings=_migrate_settings(raw.get("settings")),
        files=_migrate_files(raw.get("files")),
        chats=_migrate_chats(raw.get("chats")),
    )


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise StateImportError(message)


def parse_import(payload: str) -> dict:
    """Parse and strictly validate externally supplied state JSON.

    Unlike ``migrate``, nothing is repaired: any malformed part rejects the
    whole payload.

    Raises:
        StateImportError: if the payload is not valid state JSON
    """
    try:
        data = json.loads(payload)
    except (json.JSONDecodeError, TypeError) as e:
        raise StateImportError(f"Import is not valid JSON: {e}") from e

    _require(isinstance(data, dict), "Import must be a JSON object")

    settings = data.get("settings", {})
    _require(isinstance(settings, dict), "'settings' must be an object")
    for field_name in ("apiKey", "model"):
        if field_name in settings:
            _require(isinstance(settings[field_name], str), f"'settings.{field_name}' must be a string")

    files = data.get("files", [])
    _require(isinstance(files, list), "'files' must be a list")
    for i, entry in enumerate(files):
        _require(isinstance(entry, dict), f"files[{i}] must be an object")
        _require(isinstance(entry.get("id"), str), f"files[{i}].id must be a string")
        _require(isinstance(entry.get("name"), str), f"files[{i}].name must be a string")
        chunks = entry.get("chunks", entry.get("textChunks"))
        if chunks is not None:
            _require(
                isinstance(chunks, list) and all(isinstance(c, str) for c in chunks),
                f"files[{i}].chunks must be a list of strings",
            )
        else:
            _require(isinstance(entry.get("text"), str), f"files[{i}] has no chunks or text")

    chats = data.get("chats", [])
    _require(isinstance(chats, list), "'chats' must be a list")
    for i, entry in enumerate(chats):
        _require(isinstance(entry, dict), f"chats[{i}] must be an object")
        for field_name in ("id", "userQuery", "aiResponse"):
            _require(isinstance(entry.get(field_name), str), f"chats[{i}].{field_name} must be a string")

    return data
