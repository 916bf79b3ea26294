"""
Paste options: one immutable value built per invocation.

Validation happens at construction time, before any randomness is drawn:
    - discussion and burn-after-reading are mutually exclusive
    - compression must be "zlib" or "none"
    - format and expire must be known values, unless the policy is PERMISSIVE
      (the "bypass" mode for instances configured with extra formats/expiries)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum

from pbpost import (
    COMPRESSION_MODES,
    DEFAULT_COMPRESSION,
    DEFAULT_EXPIRE,
    DEFAULT_FORMAT,
    EXPIRE_CODES,
    FORMATS,
)
from pbpost.errors import InputError


class ValidationPolicy(Enum):
    """How strictly format and expire values are checked."""

    STRICT = "strict"
    PERMISSIVE = "permissive"

    def check(self, name: str, value: str, allowed: tuple[str, ...]) -> None:
        if self is ValidationPolicy.PERMISSIVE:
            return
        if value not in allowed:
            raise InputError(
                f"Invalid {name} {value!r}: expected one of {', '.join(allowed)}"
            )


@dataclass(frozen=True)
class PasteOptions:
    """Everything about a paste except its content.

    Attributes:
        password: Optional password appended to the secret before key derivation.
        format: How the web UI renders the paste.
        expire: Server-side lifetime code.
        compression: "zlib" (raw DEFLATE) or "none".
        discussion: Open a comment thread under the paste.
        burn: Delete the paste after the first read.
        policy: STRICT rejects unknown format/expire values, PERMISSIVE passes them on.
    """

    password: str = field(default="", repr=False)
    format: str = DEFAULT_FORMAT
    expire: str = DEFAULT_EXPIRE
    compression: str = DEFAULT_COMPRESSION
    discussion: bool = False
    burn: bool = False
    policy: ValidationPolicy = ValidationPolicy.STRICT

    def __post_init__(self) -> None:
        if self.discussion and self.burn:
            raise InputError("Discussion and burn after reading cannot be combined")
        if self.compression not in COMPRESSION_MODES:
            raise InputError(
                f"Invalid compression {self.compression!r}: "
                f"expected one of {', '.join(COMPRESSION_MODES)}"
            )
        self.policy.check("format", self.format, FORMATS)
        self.policy.check("expire", self.expire, EXPIRE_CODES)

    @classmethod
    def from_env(cls, **overrides) -> PasteOptions:
        """Build options, taking the password from PRIVATEBIN_PASSWORD if not given.

        Reading the password from the environment keeps it out of the
        process list.
        """
        if not overrides.get("password"):
            overrides["password"] = os.environ.get("PRIVATEBIN_PASSWORD", "")
        return cls(**overrides)
