"""State persistence: ports, schema migration and the state store."""

from raginfo.storage.migrator import migrate, parse_import
from raginfo.storage.ports import FilePort, MemoryPort, SQLitePort, open_port
from raginfo.storage.store import StateStore

__all__ = [
    "FilePort",
    "MemoryPort",
    "SQLitePort",
    "StateStore",
    "migrate",
    "open_port",
    "parse_import",
]
