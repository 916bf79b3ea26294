"""
PrivateBin v2 envelope construction.

Wire format (compact JSON, keys in this order):
    {
      "adata": [[iv_b64, salt_b64, 100000, 256, 128, "aes", "gcm", compression],
                format, discussion, burn],
      "ct":    base64(ciphertext + tag),
      "meta":  {"expire": expire},
      "v":     2
    }

The compact JSON of "adata" is also the AEAD associated data, so its
serialization must be byte-identical to what a reader re-serializes:
no whitespace, forward slashes unescaped, non-ASCII as \\uXXXX.

The secret that unlocks the paste is never part of the envelope; it is
returned separately as a base58 token for the link fragment.
"""

from __future__ import annotations

import base64
import json
import logging
import zlib
from dataclasses import dataclass
from typing import Any, Callable

from pbpost import (
    CIPHER_ALGORITHM,
    CIPHER_ITER_COUNT,
    CIPHER_IV_BYTES,
    CIPHER_KEY_BITS,
    CIPHER_MODE,
    CIPHER_SALT_BYTES,
    CIPHER_TAG_BITS,
    PROTOCOL_VERSION,
    SECRET_BYTES,
)
from pbpost import base58, crypto
from pbpost.errors import EncodingError, InputError
from pbpost.options import PasteOptions

logger = logging.getLogger(__name__)

# Separators for compact JSON; json.dumps never escapes "/"
_COMPACT = (",", ":")


def _dumps(value: Any) -> str:
    try:
        return json.dumps(value, separators=_COMPACT)
    except (TypeError, ValueError) as e:
        raise EncodingError(f"Cannot serialize to JSON: {e}") from e


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


@dataclass(frozen=True)
class PasteRecord:
    """The plaintext that gets encrypted.

    A field counts as present when it is not None, so an empty paste
    next to an attachment is still sent as ``"paste": ""``.

    Attributes:
        paste: Paste text.
        attachment: Data URI, ``data:<mime>;base64,<payload>``.
        attachment_name: Original file name of the attachment.
    """

    paste: str | None = None
    attachment: str | None = None
    attachment_name: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.paste is None and self.attachment is None

    def to_dict(self) -> dict[str, str]:
        """Present fields only, in wire order."""
        fields = (
            ("paste", self.paste),
            ("attachment", self.attachment),
            ("attachment_name", self.attachment_name),
        )
        return {name: value for name, value in fields if value is not None}

    def to_json(self) -> str:
        return _dumps(self.to_dict())


@dataclass(frozen=True)
class CipherParams:
    """Per-paste cipher parameters published in adata[0]."""

    iv: bytes
    salt: bytes
    compression: str
    iterations: int = CIPHER_ITER_COUNT
    key_bits: int = CIPHER_KEY_BITS
    tag_bits: int = CIPHER_TAG_BITS
    algorithm: str = CIPHER_ALGORITHM
    mode: str = CIPHER_MODE

    def to_list(self) -> list:
        return [
            _b64(self.iv),
            _b64(self.salt),
            self.iterations,
            self.key_bits,
            self.tag_bits,
            self.algorithm,
            self.mode,
            self.compression,
        ]


@dataclass(frozen=True)
class AuthData:
    """The adata array. Position of each element is part of the protocol."""

    cipher: CipherParams
    format: str
    discussion: bool
    burn: bool

    def to_list(self) -> list:
        return [
            self.cipher.to_list(),
            self.format,
            int(self.discussion),
            int(self.burn),
        ]

    def to_json(self) -> str:
        return _dumps(self.to_list())

    def to_bytes(self) -> bytes:
        """Associated data exactly as fed to AES-GCM."""
        return self.to_json().encode("utf-8")


@dataclass(frozen=True)
class Envelope:
    """The request body submitted to a PrivateBin instance.

    Attributes:
        adata: Cipher and display parameters (authenticated, not encrypted).
        ct: Ciphertext with the 16-byte GCM tag appended.
        expire: Lifetime code placed in meta.
        v: Envelope version, always 2.
    """

    adata: AuthData
    ct: bytes
    expire: str
    v: int = PROTOCOL_VERSION

    def to_dict(self) -> dict[str, Any]:
        return {
            "adata": self.adata.to_list(),
            "ct": _b64(self.ct),
            "meta": {"expire": self.expire},
            "v": self.v,
        }

    def to_json(self) -> str:
        """Compact JSON for the POST body."""
        return _dumps(self.to_dict())


def compress(data: bytes, mode: str) -> bytes:
    """Apply the paste compression mode.

    "zlib" means raw DEFLATE (no zlib header or adler32 trailer), which is
    what PrivateBin's JavaScript inflater expects. Always applied when
    requested, even when the output ends up larger.
    """
    if mode == "none":
        return data
    if mode != "zlib":
        raise EncodingError(f"Unknown compression mode: {mode!r}")
    try:
        deflater = zlib.compressobj(wbits=-zlib.MAX_WBITS)
        return deflater.compress(data) + deflater.flush()
    except zlib.error as e:
        raise EncodingError(f"Compression failed: {e}") from e


def build_envelope(
    record: PasteRecord,
    options: PasteOptions,
    *,
    rng: Callable[[int], bytes] = crypto.random_bytes,
) -> tuple[Envelope, str]:
    """Encrypt a paste record into a v2 envelope.

    Args:
        record: Paste text and/or attachment.
        options: Validated paste options.
        rng: Source of random bytes. Defaults to the OS CSPRNG; tests pass a
            deterministic source to pin secret, iv and salt.

    Returns:
        (envelope, secret_token). The token goes after ``#`` in the link.

    Raises:
        InputError: If the record has neither paste nor attachment.
        EncodingError: If the record or adata cannot be serialized.
        CryptoError: If randomness, key derivation or encryption fails.
    """
    if record.is_empty:
        raise InputError("Nothing to send: paste text or attachment required")

    secret = rng(SECRET_BYTES)
    secret_token = base58.encode(secret)
    material = crypto.key_material(secret, options.password)

    iv = rng(CIPHER_IV_BYTES)
    salt = rng(CIPHER_SALT_BYTES)
    key = bytearray(crypto.derive_key(material, salt))

    adata = AuthData(
        cipher=CipherParams(iv=iv, salt=salt, compression=options.compression),
        format=options.format,
        discussion=options.discussion,
        burn=options.burn,
    )
    auth_data = adata.to_bytes()
    plaintext = compress(record.to_json().encode("utf-8"), options.compression)

    try:
        ct = crypto.encrypt(key, iv, plaintext, auth_data)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Paste data: %s", record.to_json())
            logger.debug("Secret token: %s", secret_token)
            logger.debug("PBKDF2 key: %s", _b64(key))
            logger.debug("Auth data: %s", auth_data.decode("utf-8"))
            logger.debug("Plaintext: %d bytes (%s)", len(plaintext), options.compression)
            logger.debug("Ciphertext: %s", _b64(ct[:len(plaintext)]))
            logger.debug("Tag: %s", _b64(ct[len(plaintext):]))
    finally:
        crypto.wipe(key)

    envelope = Envelope(adata=adata, ct=ct, expire=options.expire)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Prep data: %s", envelope.to_json())
    logger.info(
        "Built v%d envelope (%d bytes ciphertext, format=%s, expire=%s)",
        envelope.v, len(ct), options.format, options.expire,
    )
    return envelope, secret_token
