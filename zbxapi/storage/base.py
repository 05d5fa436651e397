"""Session token storage protocol"""

from pathlib import Path
from typing import Protocol

from ..core.types import Account


class TokenStorage(Protocol):
    """Protocol for session token persistence"""

    @property
    def session_dir(self) -> Path:
        """Directory holding the token records"""
        ...

    def path_for(self, account: Account) -> Path:
        """Location of the token record for account"""
        ...

    def load(self, account: Account) -> str | None:
        """Load token for account, None if there is no usable record"""
        ...

    def save(self, account: Account, token: str) -> None:
        """Save account token"""
        ...

    def delete(self, account: Account) -> None:
        """Remove the token record, missing records are ignored"""
        ...
