# Token Store — bearer token persistence keyed by client id.
# Created: 2026-10-19
#
# Tokens live in a generic key-value store under "token_<client_id>".
# The default backend is a JSON file in the config dir (chmod 0600).

from __future__ import annotations

import json
import logging
import os
import stat
import threading
from pathlib import Path
from typing import Protocol

from dribbble_oauth.config import get_config_dir

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Durable string settings, one value per key."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> bool: ...


class MemoryKeyValueStore:
    """Dict-backed store. Nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None


class FileKeyValueStore:
    """JSON file store at ~/.dribbble-oauth/settings.json.

    The file is chmod 0600 (owner-only read/write). A missing or corrupt
    file reads as empty.
    """

    def __init__(self, path: Path | None = None):
        self.path = path or get_config_dir() / "settings.json"

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except (OSError, ValueError) as e:
            logger.warning("Failed to read settings file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring settings file %s: not a JSON object", self.path)
            return {}
        return data

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2))
        os.chmod(self.path, stat.S_IRUSR | stat.S_IWUSR)

    def get(self, key: str) -> str | None:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def delete(self, key: str) -> bool:
        data = self._read()
        if key not in data:
            return False
        del data[key]
        self._write(data)
        return True


class TokenStore:
    """One bearer token per client id, cached in memory and persisted.

    Reads go straight to the in-memory value; writers take a lock so the
    auth completion and the clear-on-error path never interleave.
    """

    def __init__(self, backend: KeyValueStore | None = None):
        self.backend: KeyValueStore = backend if backend is not None else FileKeyValueStore()
        self.client_id: str | None = None
        self._token: str | None = None
        self._lock = threading.Lock()

    @staticmethod
    def key_for(client_id: str) -> str:
        return f"token_{client_id}"

    def restore(self, client_id: str, token: str | None = None) -> bool:
        """Bind the store to ``client_id`` and load its token.

        An explicit ``token`` is stored (and persisted) as-is. Otherwise the
        previously persisted token is loaded. Returns True if a token is now
        available.
        """
        with self._lock:
            self.client_id = client_id
            self._token = None
            if token:
                self._token = token
                self.backend.set(self.key_for(client_id), token)
                return True

            saved = self.backend.get(self.key_for(client_id))
            if saved:
                self._token = saved
                logger.info("Restored saved token for client %s", client_id)
                return True
            return False

    def get(self) -> str | None:
        return self._token

    def set(self, token: str) -> None:
        """Store a token in memory and persist it."""
        with self._lock:
            client_id = self._require_client_id()
            self._token = token
            self.backend.set(self.key_for(client_id), token)
        logger.info("Saved token for client %s", client_id)

    def clear(self) -> None:
        """Forget the token so the next restore requires a new handshake."""
        with self._lock:
            client_id = self._require_client_id()
            self._token = None
            self.backend.delete(self.key_for(client_id))
        logger.info("Cleared token for client %s", client_id)

    def _require_client_id(self) -> str:
        if self.client_id is None:
            raise ValueError("TokenStore has no client id; call restore() first")
        return self.client_id
