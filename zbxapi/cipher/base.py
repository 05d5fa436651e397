"""Token cipher protocol"""

from typing import Protocol

from ..core.types import Account


class TokenCipher(Protocol):
    """Protocol for obscuring the cached auth token at rest"""

    def encrypt(self, token: str, account: Account) -> str:
        """Return the storable (text) form of token"""
        ...

    def decrypt(self, blob: str, account: Account) -> str | None:
        """Return the token, or None if blob cannot be decrypted"""
        ...
