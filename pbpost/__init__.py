"""
pbpost: send client-side encrypted pastes to a PrivateBin instance (API v2).

Architecture:
    Secret:    32 random bytes, base58 encoded into the link fragment (never sent)
    Key:       PBKDF2-HMAC-SHA256(secret [+ password], salt, 100000) -> 32 bytes
    Envelope:  {"adata": [...], "ct": b64(ciphertext + tag), "meta": {...}, "v": 2}
    Transport: POST <url> with Content-Type/Accept JSON + X-Requested-With
"""

__version__ = "0.1.0"

# Envelope version understood by PrivateBin >= 1.3
PROTOCOL_VERSION = 2

# Cipher parameters. These are embedded in adata so the reader can
# reproduce the derivation, and must not change per paste.
CIPHER_ITER_COUNT = 100_000
CIPHER_SALT_BYTES = 8
CIPHER_KEY_BITS = 256
CIPHER_KEY_BYTES = CIPHER_KEY_BITS // 8  # 32
CIPHER_TAG_BITS = CIPHER_KEY_BITS // 2  # 128
CIPHER_TAG_BYTES = CIPHER_TAG_BITS // 8  # 16
CIPHER_IV_BYTES = CIPHER_TAG_BYTES  # 16, not the usual 12-byte GCM nonce
CIPHER_ALGORITHM = "aes"
CIPHER_MODE = "gcm"
SECRET_BYTES = CIPHER_KEY_BYTES

# Allowed option values
FORMATS = ("plaintext", "syntaxhighlighting", "markdown")
EXPIRE_CODES = ("5min", "10min", "1hour", "1day", "1week", "1month", "1year", "never")
COMPRESSION_MODES = ("zlib", "none")

DEFAULT_FORMAT = "plaintext"
DEFAULT_EXPIRE = "10min"
DEFAULT_COMPRESSION = "zlib"

# Transport
DEFAULT_URL = "https://paste.i2pd.xyz/"
DEFAULT_TIMEOUT_SECS = 30
