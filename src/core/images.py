"""Helpers for base64 data URIs and generated image file names."""

from __future__ import annotations

import base64
import binascii
import time

PNG_DATA_URI_PREFIX = "data:image/png;base64,"
DOWNLOAD_FILENAME_PREFIX = "gemini-faceswap"


def png_data_uri(data: bytes | str) -> str:
    """Build a PNG data URI from inline image data.

    Bytes are base64-encoded; a string is taken as an already encoded payload
    and used unchanged.
    """
    if isinstance(data, (bytes, bytearray)):
        data = base64.b64encode(data).decode("ascii")
    return PNG_DATA_URI_PREFIX + data


def is_data_uri(value: str) -> bool:
    return value.startswith("data:") and ";base64," in value


def decode_data_uri(uri: str) -> tuple[bytes, str]:
    """Split a base64 data URI into raw bytes and its MIME type.

    Raises:
        ValueError: If ``uri`` is not a base64 data URI
    """
    if not is_data_uri(uri):
        raise ValueError("Not a base64 data URI")

    header, payload = uri.split(",", 1)
    mime_type = header[len("data:") :].split(";", 1)[0] or "application/octet-stream"
    try:
        return base64.b64decode(payload, validate=True), mime_type
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e


def download_filename(now: float | None = None) -> str:
    """File name for a downloaded result, stamped with epoch milliseconds."""
    timestamp = int((time.time() if now is None else now) * 1000)
    return f"{DOWNLOAD_FILENAME_PREFIX}-{timestamp}.png"
