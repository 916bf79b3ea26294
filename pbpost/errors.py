"""Exceptions raised while building and sending a paste."""


class PasteError(Exception):
    """Base class for every pbpost failure. Catch this to catch them all."""


class InputError(PasteError):
    """Nothing to send, conflicting flags, or an option value that is not allowed."""


class EncodingError(PasteError):
    """A record, adata or token could not be serialized or parsed."""


class CryptoError(PasteError):
    """Random source, key derivation or AEAD failure."""


class TransportError(PasteError):
    """The PrivateBin instance could not be reached or answered unexpectedly."""


class ServerError(TransportError):
    """The PrivateBin instance answered with a non-zero status."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Server refused paste: {message}")
