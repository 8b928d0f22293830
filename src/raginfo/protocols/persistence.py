"""Protocol for the key-value slot the state store writes to."""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class PersistencePort(Protocol):
    """A string key-value store with exactly three operations."""

    def load(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        ...

    def delete(self, key: str) -> None:
        """Remove key. Removing an absent key is not an error."""
        ...
