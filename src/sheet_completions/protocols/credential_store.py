"""Credential storage protocol.

A key-value property store scoped to the calling user. The pipeline only
reads from it; writes go through the key-setting formula.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class CredentialStore(Protocol):
    """Protocol for per-user credential storage."""

    def get(self, name: str) -> str | None:
        """Return the stored value, or None if not set."""
        ...

    def set(self, name: str, value: str) -> None:
        """Store a value under name, replacing any previous one."""
        ...

    def delete(self, name: str) -> None:
        """Remove the value stored under name, if any."""
        ...
