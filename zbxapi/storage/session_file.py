"""Encrypted session file storage"""

import hashlib
import logging
from pathlib import Path

from ..cipher.base import TokenCipher
from ..core.exceptions import StorageError
from ..core.types import Account

logger = logging.getLogger(__name__)

SESSION_PREFIX = "zbx_"


def session_file_name(url: str, user: str) -> str:
    """Stable, filesystem-safe record name for an (url, user) pair"""
    fingerprint = hashlib.md5((url + user).encode("utf-8")).hexdigest()
    return f"{SESSION_PREFIX}{fingerprint}"


class SessionFileStorage:
    """Store one encrypted token per (url, user) in its own file"""

    def __init__(self, session_dir: str | Path, cipher: TokenCipher):
        self._dir = Path(session_dir)
        self._cipher = cipher

    @property
    def session_dir(self) -> Path:
        return self._dir

    def path_for(self, account: Account) -> Path:
        return self._dir / session_file_name(account.url, account.user)

    def load(self, account: Account) -> str | None:
        """Read and decrypt the token; any failure means no cached session"""
        path = self.path_for(account)
        try:
            with open(path, "r", encoding="ascii") as f:
                blob = f.read().strip()
        except FileNotFoundError:
            logger.debug(f"[zbxapi storage] sessionFile not found: {path}")
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"[zbxapi storage] Cannot read sessionFile {path}: {e}")
            return None

        if not blob:
            return None

        token = self._cipher.decrypt(blob, account)
        if not token:
            logger.debug(f"[zbxapi storage] Decrypting token failed: {path}")
            return None

        logger.debug(f"[zbxapi storage] Read token from sessionFile: {path}")
        return token

    def save(self, account: Account, token: str) -> None:
        path = self.path_for(account)
        blob = self._cipher.encrypt(token, account)
        try:
            f = open(path, "w", encoding="ascii")
        except OSError as e:
            raise StorageError(str(path), "Cannot open sessionFile") from e

        with f:
            try:
                f.write(blob)
            except OSError as e:
                raise StorageError(str(path), "Cannot write key to sessionFile") from e

        logger.debug(f"[zbxapi storage] Saved encrypted token to sessionFile: {path}")

    def delete(self, account: Account) -> None:
        path = self.path_for(account)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(str(path), "Cannot delete sessionFile") from e
        logger.debug(f"[zbxapi storage] Deleted sessionFile: {path}")
