# pdf_overlay/errors.py
from __future__ import annotations


class OverlayError(Exception):
    """Base for everything the overlay pipeline raises on purpose."""


class OverlayRequestError(OverlayError):
    """Caller sent something we can't work with (maps to HTTP 400)."""


class OverlayProcessingError(OverlayError):
    """
    Something broke while loading / fetching / rendering / saving (HTTP 500).

    `str(exc)` is safe to show to callers; the underlying exception is kept on
    __cause__ for logs only.
    """
