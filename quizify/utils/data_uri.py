"""Helpers for base64 data URIs (data:<mime>;base64,<payload>)."""

from __future__ import annotations

import base64
import binascii
import re
from typing import Tuple

_DATA_URI_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?P<params>(?:;[^;,]+)*?);base64,(?P<data>.*)$", re.DOTALL)


def to_data_uri(data: bytes, mime_type: str) -> str:
    """Encode raw bytes as a base64 data URI."""
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def parse_data_uri(uri: str, default_mime: str = "application/octet-stream") -> Tuple[str, bytes]:
    """Return ``(mime_type, payload)`` for a base64 data URI.

    Raises ValueError when the URI is not a base64 data URI or the payload is
    not valid base64.
    """
    match = _DATA_URI_RE.match(uri.strip())
    if not match:
        raise ValueError("Expected a base64 data URI like 'data:application/pdf;base64,<encoded_data>'")
    try:
        payload = base64.b64decode(match.group("data"), validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload in data URI: {e}") from e
    return match.group("mime") or default_mime, payload
