"""File-backed CredentialStore using a per-user dotenv file."""

import logging
import os
from pathlib import Path

from dotenv import get_key, set_key, unset_key

from sheet_completions.config import Settings, settings

logger = logging.getLogger(__name__)


class DotenvCredentialStore:
    """Store credentials as ``NAME=value`` lines in a private dotenv file.

    This class satisfies the CredentialStore protocol through structural
    typing. The file is created on first write with owner-only permissions.
    """

    def __init__(self, path: str | os.PathLike | None = None) -> None:
        self._path = Path(path or settings.credentials_path)

    @classmethod
    def create(cls, config: Settings | None = None) -> "DotenvCredentialStore":
        config = config or settings
        return cls(path=config.credentials_path)

    def get(self, name: str) -> str | None:
        if not self._path.exists():
            return None
        return get_key(self._path, name) or None

    def set(self, name: str, value: str) -> None:
        if not self._path.exists():
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.touch(mode=0o600)
        set_key(self._path, name, value)
        logger.info("Stored credential %s in %s", name, self._path)

    def delete(self, name: str) -> None:
        if not self._path.exists():
            return
        if get_key(self._path, name) is None:
            return
        unset_key(self._path, name)
        logger.info("Removed credential %s from %s", name, self._path)

    @property
    def path(self) -> Path:
        return self._path
