"""Tests for the state data models."""

import dataclasses

import pytest

from raginfo.constants import DEFAULT_MODEL
from raginfo.models import ApplicationState, Chat, Document, Settings


class TestApplicationState:
    """Tests for immutable state snapshots."""

    def test_empty(self):
        state = ApplicationState.empty()

        assert state.is_empty
        assert state.settings == Settings(api_key="", model=DEFAULT_MODEL)

    @pytest.mark.parametrize(
        "state",
        [
            ApplicationState(settings=Settings(api_key="k")),
            ApplicationState(files=(Document(id="a", name="f"),)),
            ApplicationState(chats=(Chat(id="c", user_query="q", ai_response="r"),)),
        ],
    )
    def test_not_empty(self, state: ApplicationState):
        assert not state.is_empty

    def test_model_alone_does_not_count(self):
        assert ApplicationState(settings=Settings(model="gemini-pro")).is_empty

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            ApplicationState.empty().files = ()

    def test_helpers_return_new_snapshots(self):
        base = ApplicationState.empty()
        with_doc = base.with_document(Document(id="a", name="f", chunks=("c",)))

        assert base.files == ()
        assert with_doc.without_document("a") == base

    def test_wire_shape(self):
        state = ApplicationState(
            settings=Settings(api_key="k", model="m"),
            files=(Document(id="a", name="f", chunks=("c",)),),
            chats=(Chat(id="c", user_query="q", ai_response="r"),),
        )

        assert state.to_dict() == {
            "settings": {"apiKey": "k", "model": "m"},
            "files": [{"id": "a", "name": "f", "chunks": ["c"]}],
            "chats": [{"id": "c", "userQuery": "q", "aiResponse": "r"}],
        }
