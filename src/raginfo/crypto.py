"""Obfuscation of the API key at rest.

The key is derived from a passphrase and salt embedded in this module, so
anyone with the source can recover it. This keeps the secret out of plain
sight in the state file; it is not protection against a local attacker.
"""

import base64
import binascii
import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

logger = logging.getLogger(__name__)

# Same values as the browser build, so its stored keys remain readable.
_PASSPHRASE = b"super-secret-key-for-raginfo-app"
_SALT = b"some-random-salt"
_ITERATIONS = 100_000
_KEY_LENGTH = 32

NONCE_SIZE = 12
TAG_SIZE = 16


@dataclass(frozen=True)
class CryptoResult:
    """Outcome of an encrypt or decrypt attempt."""

    value: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@lru_cache(maxsize=1)
def derive_key() -> bytes:
    """Derive the 256-bit AES key (PBKDF2-HMAC-SHA256, 100k iterations)."""
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=_KEY_LENGTH,
        salt=_SALT,
        iterations=_ITERATIONS,
    )
    return kdf.derive(_PASSPHRASE)


def try_encrypt(plaintext: str) -> CryptoResult:
    """Encrypt plaintext under a fresh random nonce.

    Returns:
        CryptoResult holding base64(nonce || ciphertext || tag), or the error
    """
    try:
        nonce = os.urandom(NONCE_SIZE)
        ciphertext = AESGCM(derive_key()).encrypt(nonce, plaintext.encode("utf-8"), None)
    except Exception as e:
        return CryptoResult(error=e)
    return CryptoResult(value=base64.b64encode(nonce + ciphertext).decode("ascii"))


def try_decrypt(blob: str) -> CryptoResult:
    """Decrypt a value produced by try_encrypt.

    Returns:
        CryptoResult holding the plaintext, or the reason decryption failed
    """
    try:
        combined = base64.b64decode(blob, validate=True)
        if len(combined) < NONCE_SIZE + TAG_SIZE:
            raise ValueError(f"blob too short ({len(combined)} bytes)")
        nonce, ciphertext = combined[:NONCE_SIZE], combined[NONCE_SIZE:]
        plaintext = AESGCM(derive_key()).decrypt(nonce, ciphertext, None)
        return CryptoResult(value=plaintext.decode("utf-8"))
    except (binascii.Error, ValueError, InvalidTag) as e:
        return CryptoResult(error=e)


def encrypt(plaintext: str) -> str:
    """Encrypt plaintext, falling back to the plaintext itself on failure."""
    result = try_encrypt(plaintext)
    if not result.ok:
        logger.warning(f"Encryption failed, storing value unencrypted: {result.error}")
        return plaintext
    return result.value


def decrypt(blob: str) -> str:
    """Decrypt blob, returning it unchanged if it is not a valid blob.

    Legacy records hold the API key in plaintext, so failure here is an
    expected outcome rather than an error.
    """
    if not blob:
        return ""
    result = try_decrypt(blob)
    if not result.ok:
        logger.debug(f"Value is not an encrypted blob, using as-is: {result.error}")
        return blob
    return result.value
