# pdf_overlay/services/remote_fetch.py
from __future__ import annotations

from typing import Callable

import httpx

from pdf_overlay.errors import OverlayProcessingError, OverlayRequestError

Fetcher = Callable[[str], bytes]


class HttpPdfFetcher:
    """
    Downloads the PDF behind `pdfUrl`. Completes (or fails) before any
    overlay work starts.

    The body is streamed so `max_bytes` is enforced while reading: an
    oversized Content-Length is rejected up front, and a body that grows past
    the limit is abandoned mid-download.
    """

    def __init__(
        self,
        timeout_seconds: float = 20.0,
        max_bytes: int | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.timeout_seconds = timeout_seconds
        self.max_bytes = max_bytes
        self._transport = transport

    def _too_large(self) -> OverlayRequestError:
        return OverlayRequestError(f"PDF is too large (limit {self.max_bytes} bytes)")

    def _declared_length(self, resp: httpx.Response) -> int | None:
        raw = resp.headers.get("content-length")
        if raw is None:
            return None
        try:
            return int(raw)
        except ValueError:
            return None

    def __call__(self, url: str) -> bytes:
        buf = bytearray()
        try:
            with httpx.Client(
                timeout=self.timeout_seconds,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                with client.stream("GET", url) as resp:
                    if not resp.is_success:
                        raise OverlayProcessingError(f"Could not fetch pdfUrl (HTTP {resp.status_code})")

                    if self.max_bytes is not None:
                        declared = self._declared_length(resp)
                        if declared is not None and declared > self.max_bytes:
                            raise self._too_large()

                    for chunk in resp.iter_bytes():
                        buf.extend(chunk)
                        if self.max_bytes is not None and len(buf) > self.max_bytes:
                            raise self._too_large()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise OverlayProcessingError(f"Could not fetch pdfUrl ({type(e).__name__})") from e

        if not buf:
            raise OverlayProcessingError("Could not fetch pdfUrl (empty body)")
        return bytes(buf)
