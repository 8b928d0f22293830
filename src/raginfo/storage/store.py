"""Load and save of the application state through a persistence port."""

import json
import logging
from dataclasses import replace

from raginfo import crypto
from raginfo.constants import STATE_KEY
from raginfo.models import ApplicationState
from raginfo.protocols import PersistencePort
from raginfo.storage.migrator import migrate, parse_import

logger = logging.getLogger(__name__)


class StateStore:
    """Persist ApplicationState as one JSON record under a fixed key.

    Only ``settings.apiKey`` is encrypted at rest; everything else stays as
    plain, inspectable JSON. Each save replaces the previous record
    completely (last write wins). The store holds no lock; callers serialise
    their own mutations.
    """

    def __init__(self, port: PersistencePort, key: str = STATE_KEY):
        self.port = port
        self.key = key

    def load(self) -> ApplicationState:
        """Read, migrate and decrypt the stored state.

        An absent record yields the default-empty state and nothing is
        written. A record that is not valid UTF-8 JSON is logged and treated
        the same way; it is left in place.
        """
        try:
            raw = self.port.load(self.key)
            if raw is None:
                return ApplicationState.empty()
            data = json.loads(raw)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.error(f"Stored state {self.key!r} is unreadable, starting empty: {e}")
            return ApplicationState.empty()

        return self._decrypt_settings(migrate(data))

    def save(self, state: ApplicationState) -> None:
        """Write state, or delete the record if state is default-empty."""
        if state.is_empty:
            logger.debug(f"State is empty, deleting {self.key!r}")
            self.port.delete(self.key)
            return

        self.port.set(self.key, self.serialize(state))

    def serialize(self, state: ApplicationState) -> str:
        """Return the persisted JSON for state, API key encrypted."""
        data = state.to_dict()
        data["settings"]["apiKey"] = crypto.encrypt(state.settings.api_key)
        return json.dumps(data, ensure_ascii=False)

    def export_json(self, state: ApplicationState) -> str:
        """Return state in the wire format, indented for people to read."""
        return json.dumps(json.loads(self.serialize(state)), indent=2, ensure_ascii=False)

    def import_json(self, payload: str) -> ApplicationState:
        """Build a state from external JSON without touching storage.

        Raises:
            StateImportError: if the payload is malformed
        """
        return self._decrypt_settings(migrate(parse_import(payload)))

    @staticmethod
    def _decrypt_settings(state: ApplicationState) -> ApplicationState:
        settings = replace(state.settings, api_key=crypto.decrypt(state.settings.api_key))
        return state.with_settings(settings)
