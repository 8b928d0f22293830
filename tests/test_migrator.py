"""Tests for schema migration of loaded state."""

import json

import pytest

from raginfo.chunkers import chunk_text
from raginfo.constants import DEFAULT_MODEL
from raginfo.errors import StateImportError
from raginfo.models import ApplicationState, Document, Settings
from raginfo.storage.migrator import (
    CurrentDocumentRecord,
    LegacyDocumentRecord,
    classify_document,
    migrate,
    parse_import,
    resolve_document,
)


class TestClassifyDocument:
    """Tests for resolving raw records into tagged variants."""

    def test_current_shape(self):
        record = classify_document({"id": "a", "name": "f.pdf", "chunks": ["one", "two"]})

        assert record == CurrentDocumentRecord(id="a", name="f.pdf", chunks=("one", "two"))

    def test_legacy_full_text(self):
        record = classify_document({"id": "a", "name": "f.pdf", "text": "S1. S2. S3."})

        assert isinstance(record, LegacyDocumentRecord)
        assert record.text == "S1. S2. S3."
        assert record.text_chunks is None

    def test_legacy_text_chunks_field(self):
        record = classify_document({"id": "a", "name": "f.pdf", "textChunks": ["x", "y"]})

        assert record == LegacyDocumentRecord(id="a", name="f.pdf", text_chunks=("x", "y"))

    def test_chunks_win_over_text(self):
        record = classify_document({"id": "a", "name": "f", "chunks": ["c"], "text": "t"})

        assert isinstance(record, CurrentDocumentRecord)

    def test_missing_id_and_name_are_filled(self):
        record = classify_document({"chunks": ["c"]})

        assert record.id
        assert record.name == "untitled"

    def test_non_string_chunks_are_dropped(self):
        record = classify_document({"id": "a", "name": "f", "chunks": ["ok", 3, None, ""]})

        assert record.chunks == ("ok",)


class TestResolveDocument:
    """Tests for turning records into Documents."""

    def test_legacy_text_is_chunked_with_defaults(self):
        text = "word " * 700
        doc = resolve_document(LegacyDocumentRecord(id="a", name="f", text=text))

        assert doc.chunks == tuple(chunk_text(text))
        assert len(doc.chunks) == 3

    def test_legacy_empty_text_gives_no_chunks(self):
        doc = resolve_document(LegacyDocumentRecord(id="a", name="f", text=""))

        assert doc.chunks == ()


class TestMigrate:
    """Tests for whole-record migration."""

    def test_legacy_document_scenario(self):
        """Test the legacy single-text document example."""
        state = migrate(
            {
                "settings": {"apiKey": "", "model": "m"},
                "files": [{"id": "a", "name": "f.pdf", "text": "S1. S2. S3."}],
                "chats": [],
            }
        )

        doc = state.files[0]
        assert doc == Document(id="a", name="f.pdf", chunks=("S1. S2. S3.",))
        assert "text" not in doc.to_dict()

    def test_current_record_is_unchanged(self):
        original = ApplicationState(
            settings=Settings(api_key="blob", model="gemini-pro"),
            files=(Document(id="a", name="f", chunks=("one", "two")),),
        )

        assert migrate(original.to_dict()) == original

    @pytest.mark.parametrize("raw", [None, [], "text", 42])
    def test_non_object_gives_empty_state(self, raw):
        assert migrate(raw) == ApplicationState.empty()

    def test_missing_sections_default(self):
        state = migrate({})

        assert state.files == ()
        assert state.chats == ()
        assert state.settings == Settings(api_key="", model=DEFAULT_MODEL)

    def test_wrong_typed_sections_default(self):
        state = migrate({"settings": "x", "files": {"a": 1}, "chats": "none"})

        assert state == ApplicationState.empty()

    def test_partial_settings(self):
        state = migrate({"settings": {"apiKey": "k"}})

        assert state.settings == Settings(api_key="k", model=DEFAULT_MODEL)

    def test_malformed_entries_dropped(self, caplog):
        state = migrate(
            {
                "files": ["junk", {"id": "a", "name": "f", "chunks": ["c"]}],
                "chats": [7, {"id": "c1", "userQuery": "q", "aiResponse": "r"}],
            }
        )

        assert [doc.id for doc in state.files] == ["a"]
        assert [chat.id for chat in state.chats] == ["c1"]
        assert "Dropping malformed" in caplog.text

    def test_chat_missing_fields(self):
        state = migrate({"chats": [{"userQuery": "q"}]})

        chat = state.chats[0]
        assert chat.id
        assert chat.user_query == "q"
        assert chat.ai_response == ""

    def test_duplicate_ids_are_made_unique(self):
        state = migrate(
            {
                "files": [
                    {"id": "a", "name": "one", "chunks": ["1"]},
                    {"id": "a", "name": "two", "chunks": ["2"]},
                ]
            }
        )

        assert len({doc.id for doc in state.files}) == 2
        assert state.files[0].id == "a"
        assert [doc.name for doc in state.files] == ["one", "two"]


class TestParseImport:
    """Tests for strict validation of imported JSON."""

    def test_valid_payload(self):
        payload = json.dumps(
            {
                "settings": {"apiKey": "k", "model": "m"},
                "files": [{"id": "a", "name": "f", "chunks": ["c"]}],
                "chats": [{"id": "c", "userQuery": "q", "aiResponse": "r"}],
            }
        )

        assert parse_import(payload)["files"][0]["id"] == "a"

    def test_legacy_text_document_accepted(self):
        payload = json.dumps({"files": [{"id": "a", "name": "f", "text": "t"}]})

        assert parse_import(payload)["files"][0]["text"] == "t"

    @pytest.mark.parametrize(
        "payload",
        [
            "{not json",
            "[]",
            json.dumps({"settings": []}),
            json.dumps({"settings": {"apiKey": 5}}),
            json.dumps({"files": {}}),
            json.dumps({"files": ["x"]}),
            json.dumps({"files": [{"id": "a", "name": "f"}]}),
            json.dumps({"files": [{"id": "a", "name": "f", "chunks": [1]}]}),
            json.dumps({"files": [{"name": "f", "chunks": []}]}),
            json.dumps({"chats": [{"id": "c", "userQuery": "q"}]}),
        ],
    )
    def test_malformed_payload_rejected(self, payload: str):
        with pytest.raises(StateImportError):
            parse_import(payload)
