# pdf_overlay/services/payload.py
from __future__ import annotations

import base64
import binascii
import re

from pdf_overlay.errors import OverlayRequestError

_DATA_URI_PREFIX = re.compile(r"^data:application/pdf;base64,?", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")


def strip_data_uri(value: str) -> str:
    return _DATA_URI_PREFIX.sub("", value.strip())


def decode_pdf_base64(value: str, *, max_bytes: int | None = None) -> bytes:
    """
    Accepts plain or url-safe base64, with or without a
    "data:application/pdf;base64," prefix, line breaks, or padding.
    """
    s = _WHITESPACE.sub("", strip_data_uri(value))
    s = s.replace("-", "+").replace("_", "/")
    s += "=" * (-len(s) % 4)

    try:
        data = base64.b64decode(s, validate=True)
    except (binascii.Error, ValueError) as e:
        raise OverlayRequestError("pdfBase64 is not valid base64") from e

    if not data:
        raise OverlayRequestError("pdfBase64 is empty")
    if max_bytes is not None and len(data) > max_bytes:
        raise OverlayRequestError(f"PDF is too large (limit {max_bytes} bytes)")
    return data


def encode_pdf_base64(data: bytes) -> str:
    # plain base64, never a data: URI
    return base64.b64encode(data).decode("ascii")
