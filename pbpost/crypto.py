"""
Cryptographic primitives for the paste envelope.

- Randomness: os.urandom (CSPRNG)
- Key derivation: PBKDF2-HMAC-SHA256 (stdlib, 100K iterations, 32-byte key)
- Encryption: AES-256-GCM with a 16-byte IV (requires `cryptography` package)

The `cryptography` package is lazily imported so that a missing dependency
produces a clear error message instead of an ImportError deep in a traceback.
"""

from __future__ import annotations

import hashlib
import os

from pbpost import (
    CIPHER_ITER_COUNT,
    CIPHER_IV_BYTES,
    CIPHER_KEY_BYTES,
    CIPHER_SALT_BYTES,
    CIPHER_TAG_BYTES,
)
from pbpost.errors import CryptoError


def _import_cryptography():
    """Lazily import AESGCM from the cryptography package.

    Raises CryptoError with a helpful message if not installed.
    """
    try:
        from cryptography.hazmat.primitives.ciphers.aead import AESGCM

        return AESGCM
    except ImportError as e:
        raise CryptoError(
            "cryptography is required for paste encryption. "
            "Install with: pip install cryptography"
        ) from e


def random_bytes(size: int) -> bytes:
    """Return ``size`` bytes from the operating system CSPRNG.

    Raises CryptoError if no secure random source is available.
    """
    try:
        return os.urandom(size)
    except (NotImplementedError, OSError) as e:
        raise CryptoError(f"Secure random source unavailable: {e}") from e


def key_material(secret: bytes, password: str = "") -> bytes:
    """Combine the paste secret with an optional password.

    The password bytes are appended to the secret with no separator or
    length prefix. PrivateBin readers derive the key the same way.
    """
    if password:
        return secret + password.encode("utf-8")
    return secret


def derive_key(material: bytes, salt: bytes) -> bytes:
    """Derive the AES-256 paste key using PBKDF2-HMAC-SHA256.

    Args:
        material: Secret bytes, optionally followed by the password bytes.
        salt: The 8-byte salt that is also published in adata.

    Returns:
        The 32-byte key.
    """
    if len(salt) != CIPHER_SALT_BYTES:
        raise CryptoError(f"Salt must be {CIPHER_SALT_BYTES} bytes")

    try:
        return hashlib.pbkdf2_hmac(
            "sha256",
            material,
            salt,
            CIPHER_ITER_COUNT,
            dklen=CIPHER_KEY_BYTES,
        )
    except (ValueError, TypeError) as e:
        raise CryptoError(f"Key derivation failed: {e}") from e


def encrypt(key: bytes | bytearray, iv: bytes, plaintext: bytes, auth_data: bytes) -> bytes:
    """Encrypt with AES-256-GCM and return ciphertext followed by the 16-byte tag.

    Args:
        key: 32-byte key from derive_key().
        iv: 16-byte IV. PrivateBin uses the tag size as IV length.
        plaintext: Serialized (and possibly compressed) paste record.
        auth_data: Compact JSON of adata, authenticated but not encrypted.

    Returns:
        ciphertext + tag, the exact byte layout PrivateBin expects in ``ct``.
    """
    AESGCM = _import_cryptography()

    if len(key) != CIPHER_KEY_BYTES:
        raise CryptoError(f"Key must be {CIPHER_KEY_BYTES} bytes")
    if len(iv) != CIPHER_IV_BYTES:
        raise CryptoError(f"IV must be {CIPHER_IV_BYTES} bytes")

    try:
        sealed = AESGCM(key).encrypt(iv, plaintext, auth_data)
    except (ValueError, OverflowError) as e:
        raise CryptoError(f"Encryption failed: {e}") from e

    if len(sealed) != len(plaintext) + CIPHER_TAG_BYTES:
        raise CryptoError("Encryption produced an unexpected tag length")
    return sealed


def wipe(buf: bytearray) -> None:
    """Best-effort zeroing of a mutable key buffer.

    Only ``buf`` itself is cleared. The immutable bytes that derive_key()
    returned, and any copy the AES backend keeps, stay in memory until
    they are garbage collected.
    """
    for i in range(len(buf)):
        buf[i] = 0
