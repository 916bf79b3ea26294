"""
Base58 (Bitcoin alphabet) codec for the paste secret token.

The token is the part of the share link after ``#``. The bytes are read as
one big-endian unsigned integer and written in base 58; every leading zero
byte becomes a leading ``1`` so the original length survives a round-trip.
Output length varies with the value, so callers must not assume a width.
"""

from __future__ import annotations

from pbpost.errors import EncodingError

ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
BASE = len(ALPHABET)

_DIGITS = {char: value for value, char in enumerate(ALPHABET)}


def encode(data: bytes) -> str:
    """Encode bytes as a base58 string. Empty input gives an empty string."""
    if not data:
        return ""

    number = int.from_bytes(data, "big")
    digits = []
    while number:
        number, remainder = divmod(number, BASE)
        digits.append(ALPHABET[remainder])

    leading_zeros = len(data) - len(data.lstrip(b"\x00"))
    return ALPHABET[0] * leading_zeros + "".join(reversed(digits))


def decode(token: str) -> bytes:
    """Decode a base58 string back to bytes.

    Raises:
        EncodingError: If the token contains a character outside the alphabet.
    """
    number = 0
    for position, char in enumerate(token):
        try:
            number = number * BASE + _DIGITS[char]
        except KeyError:
            raise EncodingError(
                f"Invalid base58 character {char!r} at position {position}"
            ) from None

    leading_ones = len(token) - len(token.lstrip(ALPHABET[0]))
    body = number.to_bytes((number.bit_length() + 7) // 8, "big")
    return b"\x00" * leading_ones + body
