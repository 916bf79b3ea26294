"""
Tests for the secret token codec: base58.py.

TestEncode     known vectors, leading zeros, empty input
TestDecode     inverse, alphabet validation
TestRoundTrip  random 32-byte secrets survive encode/decode
"""

from __future__ import annotations

import secrets

import pytest

from pbpost.base58 import ALPHABET, decode, encode
from pbpost.errors import EncodingError


# Bitcoin Core base58 test vectors (hex input, encoded output)
VECTORS = [
    ("", ""),
    ("61", "2g"),
    ("626262", "a3gV"),
    ("636363", "aPEr"),
    ("00000000000000000000", "1111111111"),
    ("73696d706c792061206c6f6e6720737472696e67", "2cFupjhnEsSn59qHXstmK2ffpLv2"),
    ("00eb15231dfceb60925886b67d065299925915aeb172c06647", "1NS17iag9jJgTHD1VXjvLCEnZuQ3rJDE9L"),
    ("516b6fcd0f", "ABnLTmg"),
    ("bf4f89001e670274dd", "3SEo3LWLoPntC"),
    ("572e4794", "3EFU7m"),
    ("ecac89cad93923c02321", "EJDM8drfXA6uyA"),
    ("10c8511e", "Rt5zm"),
]


# ---------------------------------------------------------------------------
# TestEncode
# ---------------------------------------------------------------------------

class TestEncode:

    @pytest.mark.parametrize("hex_input,expected", VECTORS)
    def test_vectors(self, hex_input, expected):
        assert encode(bytes.fromhex(hex_input)) == expected

    def test_hello_world(self):
        assert encode(b"hello world") == "StV1DL6CwTryKyV"

    def test_leading_zeros(self):
        # Two zero bytes -> two "1"s, then the digit for 5
        assert encode(bytes([0, 0, 5])) == "116"

    def test_all_zero_secret(self):
        assert encode(bytes(32)) == "1" * 32

    def test_empty(self):
        assert encode(b"") == ""

    def test_single_zero(self):
        assert encode(b"\x00") == "1"

    def test_length_varies_with_value(self):
        assert len(encode(b"\x00" * 31 + b"\x01")) == 32
        assert len(encode(b"\xff" * 32)) == 44
        assert len(encode(b"\x01" + bytes(31))) == 43

    def test_only_alphabet_characters(self):
        token = encode(secrets.token_bytes(32))
        assert set(token) <= set(ALPHABET)

    def test_no_ambiguous_characters(self):
        for char in "0OIl":
            assert char not in ALPHABET


# ---------------------------------------------------------------------------
# TestDecode
# ---------------------------------------------------------------------------

class TestDecode:

    @pytest.mark.parametrize("hex_input,encoded", VECTORS)
    def test_vectors(self, hex_input, encoded):
        assert decode(encoded) == bytes.fromhex(hex_input)

    def test_restores_leading_zeros(self):
        assert decode("116") == bytes([0, 0, 5])

    def test_empty(self):
        assert decode("") == b""

    @pytest.mark.parametrize("bad", ["0", "O", "I", "l", "abc+", "2g "])
    def test_rejects_foreign_characters(self, bad):
        with pytest.raises(EncodingError, match="Invalid base58 character"):
            decode(bad)


# ---------------------------------------------------------------------------
# TestRoundTrip
# ---------------------------------------------------------------------------

class TestRoundTrip:

    def test_random_secrets(self):
        for _ in range(200):
            secret = secrets.token_bytes(32)
            assert decode(encode(secret)) == secret

    def test_secrets_with_leading_zero_bytes(self):
        for zeros in range(1, 5):
            secret = bytes(zeros) + secrets.token_bytes(32 - zeros)
            token = encode(secret)
            assert token.startswith("1" * zeros)
            assert decode(token) == secret
