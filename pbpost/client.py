"""
PrivateBin client: POST an envelope to an instance and parse the answer.

Request:
    POST <url>/   body = compact JSON envelope
    Content-Type: application/json
    Accept: application/json
    X-Requested-With: JSONHttpRequest

Response:
    {"status": 0, "id": "...", "deletetoken": "...", ...}   on success
    {"status": 1, "message": "..."}                         on failure

Uses stdlib urllib.request. No retries: a
failed send is reported once.
"""

from __future__ import annotations

import json
import logging
import os
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from typing import Any

from pbpost import DEFAULT_TIMEOUT_SECS, DEFAULT_URL
from pbpost.envelope import Envelope, PasteRecord, build_envelope
from pbpost.errors import ServerError, TransportError
from pbpost.options import PasteOptions

logger = logging.getLogger(__name__)

REQUEST_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
    "X-Requested-With": "JSONHttpRequest",
}


def normalize_url(url: str) -> str:
    """Instance URLs must end with a slash; add one if missing."""
    if not url:
        raise ValueError("PrivateBin URL cannot be empty")
    return url if url.endswith("/") else url + "/"


@dataclass(frozen=True)
class PasteResult:
    """A stored paste and the links to share and delete it."""

    paste_id: str
    delete_token: str
    url: str
    secret_token: str = field(repr=False)

    @property
    def paste_url(self) -> str:
        return f"{self.url}?{self.paste_id}#{self.secret_token}"

    @property
    def delete_url(self) -> str:
        return f"{self.url}?pasteid={self.paste_id}&deletetoken={self.delete_token}"


class PrivateBinClient:
    """Minimal PrivateBin v2 API client using stdlib urllib.

    Usage:
        client = PrivateBinClient.from_env()
        result = client.send(envelope, secret_token)
    """

    def __init__(self, url: str = DEFAULT_URL, timeout: float = DEFAULT_TIMEOUT_SECS) -> None:
        self.url = normalize_url(url)
        self.timeout = timeout

    @classmethod
    def from_env(cls, url: str | None = None, timeout: float | None = None) -> PrivateBinClient:
        """Create a client from environment variables.

        Explicit ``url`` and ``timeout`` arguments win; the matching variable
        is not read at all when its argument is given.

        Reads:
            PRIVATEBIN_URL     instance address (default: https://paste.i2pd.xyz/)
            PRIVATEBIN_TIMEOUT request timeout in seconds (default: 30)
        """
        if not url:
            url = os.environ.get("PRIVATEBIN_URL", "") or DEFAULT_URL
        if timeout is None:
            raw_timeout = os.environ.get("PRIVATEBIN_TIMEOUT", "")
            try:
                timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT_SECS
            except ValueError:
                raise ValueError(f"PRIVATEBIN_TIMEOUT must be a number, got {raw_timeout!r}")
        return cls(url, timeout)

    def _post(self, body: bytes) -> dict[str, Any]:
        req = urllib.request.Request(
            self.url,
            data=body,
            headers=REQUEST_HEADERS,
            method="POST",
        )
        logger.debug("POST %s (%d bytes)", self.url, len(body))

        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                status = resp.status
                raw = resp.read()
        except urllib.error.HTTPError as e:
            raise TransportError(
                f"Received incorrect response code ({e.code}). "
                "Check if you correctly set instance URL."
            ) from e
        except urllib.error.URLError as e:
            raise TransportError(f"Connection failed: {e.reason}") from e
        except OSError as e:
            raise TransportError(f"Request failed: {e}") from e

        if status != 200:
            raise TransportError(
                f"Received incorrect response code ({status}). "
                "Check if you correctly set instance URL."
            )
        logger.debug("Response: %s", raw[:512])

        try:
            body_json = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise TransportError(f"Server did not answer with JSON: {e}") from e
        if not isinstance(body_json, dict):
            raise TransportError("Server answer is not a JSON object")
        return body_json

    def send(self, envelope: Envelope, secret_token: str) -> PasteResult:
        """Submit an envelope.

        Raises:
            TransportError: On connection failure, non-200 status or a malformed answer.
            ServerError: If the instance refused the paste (status != 0).
        """
        answer = self._post(envelope.to_json().encode("utf-8"))

        if answer.get("status") != 0:
            message = answer.get("message") or f"status {answer.get('status')!r}"
            raise ServerError(str(message))

        try:
            paste_id = answer["id"]
            delete_token = answer["deletetoken"]
        except KeyError as e:
            raise TransportError(f"Server answer is missing {e.args[0]!r}") from e

        logger.info("Paste stored as %s", paste_id)
        return PasteResult(
            paste_id=paste_id,
            delete_token=delete_token,
            url=self.url,
            secret_token=secret_token,
        )


def post_paste(
    record: PasteRecord,
    options: PasteOptions,
    client: PrivateBinClient,
) -> PasteResult:
    """Encrypt a record and send it in one step."""
    envelope, secret_token = build_envelope(record, options)
    return client.send(envelope, secret_token)
