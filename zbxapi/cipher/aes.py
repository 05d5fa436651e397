"""AES-128-CBC token cipher

Obfuscation only: the IV is fixed and the key is derived from credentials the
process already holds. Output is byte-compatible with session files written by
the PHP ZabbixApi library.
"""

import base64
import binascii
import hashlib
import logging

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ..core.types import Account

logger = logging.getLogger(__name__)

FIXED_IV = b"1356647968472110"
KEY_SIZE = 16


def derive_key(account: Account) -> bytes:
    """sha256(user + password) truncated to an AES-128 key"""
    digest = hashlib.sha256((account.user + account.password).encode("utf-8")).digest()
    return digest[:KEY_SIZE]


class AesTokenCipher:
    """Deterministic AES-128-CBC with PKCS7 padding, base64 encoded"""

    def _cipher(self, account: Account) -> Cipher:
        return Cipher(algorithms.AES(derive_key(account)), modes.CBC(FIXED_IV))

    def encrypt(self, token: str, account: Account) -> str:
        padder = padding.PKCS7(algorithms.AES.block_size).padder()
        padded = padder.update(token.encode("utf-8")) + padder.finalize()
        encryptor = self._cipher(account).encryptor()
        encrypted = encryptor.update(padded) + encryptor.finalize()
        return base64.b64encode(encrypted).decode("ascii")

    def decrypt(self, blob: str, account: Account) -> str | None:
        try:
            encrypted = base64.b64decode(blob, validate=True)
            decryptor = self._cipher(account).decryptor()
            padded = decryptor.update(encrypted) + decryptor.finalize()
            unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
            token = (unpadder.update(padded) + unpadder.finalize()).decode("utf-8")
        except (binascii.Error, ValueError, UnicodeDecodeError) as e:
            logger.debug(f"[zbxapi cipher] Decrypt failed: {e}")
            return None
        return token or None
