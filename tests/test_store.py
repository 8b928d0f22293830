"""Tests for the state store."""

import json

import pytest

from raginfo import crypto
from raginfo.constants import STATE_KEY
from raginfo.errors import StateImportError
from raginfo.models import ApplicationState, Chat, Document, Settings
from raginfo.storage import FilePort, MemoryPort, StateStore


def populated_state() -> ApplicationState:
    return ApplicationState(
        settings=Settings(api_key="sk-123", model="m"),
        files=(Document(id="a", name="f.pdf", chunks=("one", "two")),),
        chats=(Chat(id="c1", user_query="q", ai_response="r"),),
    )


class TestLoad:
    """Tests for loading state."""

    def test_absent_record_gives_empty_state(self, store: StateStore, port: MemoryPort):
        assert store.load() == ApplicationState.empty()
        assert port.data == {}

    def test_corrupt_json_gives_empty_state(self, port: MemoryPort):
        port.set(STATE_KEY, "{broken")

        assert StateStore(port).load() == ApplicationState.empty()
        assert port.load(STATE_KEY) == "{broken"

    def test_invalid_utf8_gives_empty_state(self, tmp_path):
        port = FilePort(tmp_path)
        path = port.path_for(STATE_KEY)
        path.write_bytes(b'{"files": [], "x": "\xff\xfe"}')

        assert StateStore(port).load() == ApplicationState.empty()
        assert path.exists()

    def test_legacy_plaintext_api_key(self, port: MemoryPort):
        """Test that a key stored before encryption existed loads as-is."""
        port.set(STATE_KEY, json.dumps({"settings": {"apiKey": "sk-legacy", "model": "m"}}))

        assert StateStore(port).load().settings.api_key == "sk-legacy"

    def test_legacy_document_is_migrated(self, port: MemoryPort):
        port.set(
            STATE_KEY,
            json.dumps({"files": [{"id": "a", "name": "f.pdf", "text": "S1. S2. S3."}]}),
        )

        doc = StateStore(port).load().files[0]
        assert doc.chunks == ("S1. S2. S3.",)

    def test_custom_key(self, port: MemoryPort):
        StateStore(port, key="other").save(populated_state())

        assert "other" in port.data
        assert StateStore(port).load() == ApplicationState.empty()


class TestSave:
    """Tests for saving state."""

    def test_round_trip(self, store: StateStore):
        state = populated_state()
        store.save(state)

        assert store.load() == state

    def test_api_key_encrypted_at_rest(self, store: StateStore, port: MemoryPort):
        """Test the save-then-load scenario with an encrypted key."""
        store.save(ApplicationState(settings=Settings(api_key="sk-123", model="m")))

        persisted = json.loads(port.load(STATE_KEY))
        assert persisted["settings"]["apiKey"] != "sk-123"
        assert crypto.decrypt(persisted["settings"]["apiKey"]) == "sk-123"
        assert store.load().settings.api_key == "sk-123"

    def test_only_api_key_is_encrypted(self, store: StateStore, port: MemoryPort):
        store.save(populated_state())

        persisted = json.loads(port.load(STATE_KEY))
        assert persisted["settings"]["model"] == "m"
        assert persisted["files"] == [{"id": "a", "name": "f.pdf", "chunks": ["one", "two"]}]
        assert persisted["chats"] == [{"id": "c1", "userQuery": "q", "aiResponse": "r"}]

    def test_saving_empty_state_deletes_record(self, store: StateStore, port: MemoryPort):
        store.save(populated_state())
        store.save(ApplicationState.empty())

        assert STATE_KEY not in port.data
        assert store.load() == ApplicationState.empty()

    def test_empty_state_with_other_model_still_deletes(self, store: StateStore, port: MemoryPort):
        store.save(populated_state())
        store.save(ApplicationState(settings=Settings(api_key="", model="gemini-pro")))

        assert STATE_KEY not in port.data

    def test_saving_twice_is_equivalent(self, store: StateStore, port: MemoryPort):
        state = populated_state()
        store.save(state)
        first = port.load(STATE_KEY)
        store.save(state)
        second = port.load(STATE_KEY)

        assert first != second  # fresh nonce
        assert store.load() == state

    def test_last_write_wins(self, store: StateStore):
        store.save(populated_state())
        replacement = ApplicationState(files=(Document(id="b", name="g", chunks=("x",)),))
        store.save(replacement)

        assert store.load() == replacement


class TestImportExport:
    """Tests for the wire-format exchange."""

    def test_export_then_import(self, store: StateStore):
        state = populated_state()

        assert store.import_json(store.export_json(state)) == state

    def test_export_hides_api_key(self, store: StateStore):
        exported = json.loads(store.export_json(populated_state()))

        assert exported["settings"]["apiKey"] != "sk-123"

    def test_import_does_not_write(self, store: StateStore, port: MemoryPort):
        store.import_json(json.dumps({"files": [{"id": "a", "name": "f", "chunks": ["c"]}]}))

        assert port.data == {}

    def test_malformed_import_rejected(self, store: StateStore):
        with pytest.raises(StateImportError):
            store.import_json('{"files": "nope"}')
