"""
Input collection: turn text, stdin and an attachment file into a PasteRecord.
"""

from __future__ import annotations

import base64
import dataclasses
import mimetypes
import sys
from pathlib import Path
from typing import TextIO

from pbpost.envelope import PasteRecord
from pbpost.errors import InputError

_FALLBACK_MIME = "application/octet-stream"


def record_from_text(text: str) -> PasteRecord:
    """Wrap paste text in a record with no attachment."""
    return PasteRecord(paste=text)


def read_stdin(stream: TextIO | None = None) -> str:
    """Read all of stdin (or the given stream) as paste text."""
    stream = stream if stream is not None else sys.stdin
    return stream.read()


def attachment_from_file(path: str | Path) -> tuple[str, str]:
    """Read a file into a data URI.

    Returns (data_uri, file_name). The MIME type is guessed from the file
    name; unknown types fall back to application/octet-stream.

    Raises InputError if the file cannot be read.
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise InputError(f"Unable to open file {path}: {e.strerror or e}") from e

    mime, _encoding = mimetypes.guess_type(path.name)
    payload = base64.b64encode(data).decode("ascii")
    return f"data:{mime or _FALLBACK_MIME};base64,{payload}", path.name


def collect(
    text: str | None = None,
    use_stdin: bool = False,
    attachment: str | Path | None = None,
    stdin: TextIO | None = None,
) -> PasteRecord:
    """Merge all input sources into one record.

    Stdin wins over ``text`` when both are given.

    Raises InputError if neither text nor an attachment ends up in the record.
    """
    paste = read_stdin(stdin) if use_stdin else text
    record = record_from_text(paste) if paste is not None else PasteRecord()

    if attachment is not None:
        data_uri, name = attachment_from_file(attachment)
        record = dataclasses.replace(record, attachment=data_uri, attachment_name=name)

    if record.is_empty:
        raise InputError("Nothing to send: give text, --stdin or --file")
    return record
