# pdf_overlay/services/overlay_service.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Tuple

from pdf_overlay.config import Settings, get_settings
from pdf_overlay.errors import OverlayProcessingError, OverlayRequestError
from pdf_overlay.rendering.pdf_document import PdfDocument
from pdf_overlay.rendering.text_renderer import ReportLabTextRenderer, TextRenderer
from pdf_overlay.services.overlay_engine import OverlayEngine
from pdf_overlay.services.payload import decode_pdf_base64, encode_pdf_base64
from pdf_overlay.services.remote_fetch import Fetcher, HttpPdfFetcher
from pdf_overlay.services.request_normalizer import normalize_request

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class OverlayResult:
    pdf_bytes: bytes
    page_count: int
    instruction_count: int

    def to_response(self) -> dict:
        return {"pdfBase64": encode_pdf_base64(self.pdf_bytes), "pageCount": self.page_count}


def resolve_source_bytes(
    body: Mapping[str, Any],
    *,
    fetcher: Fetcher,
    max_bytes: int | None = None,
) -> Tuple[bytes, str]:
    """
    Returns (pdf_bytes, source) where source is "pdfBase64" or "pdfUrl".
    Inline base64 wins when both are sent.
    """
    pdf_b64 = body.get("pdfBase64")
    if isinstance(pdf_b64, str) and pdf_b64.strip():
        return decode_pdf_base64(pdf_b64, max_bytes=max_bytes), "pdfBase64"

    pdf_url = body.get("pdfUrl")
    if isinstance(pdf_url, str) and pdf_url.strip():
        return fetcher(pdf_url.strip()), "pdfUrl"

    raise OverlayRequestError("Missing PDF data: provide pdfBase64 or pdfUrl")


def apply_overlays(
    pdf_bytes: bytes,
    body: Mapping[str, Any],
    *,
    renderer: TextRenderer | None = None,
    settings: Settings | None = None,
    logger: logging.Logger | None = None,
) -> OverlayResult:
    """
    Load -> normalize -> render -> save. Raises OverlayRequestError for a
    zero-page document or a request with nothing to draw.
    """
    settings = settings or get_settings()
    log = logger or _log

    doc = PdfDocument.from_bytes(pdf_bytes)
    if doc.page_count == 0:
        raise OverlayRequestError("PDF has no pages")

    instructions = normalize_request(body, doc.page_sizes())

    if renderer is None:
        try:
            renderer = ReportLabTextRenderer(settings.font_name)
        except ValueError as e:
            raise OverlayProcessingError(f"Font {settings.font_name!r} is not available") from e

    engine = OverlayEngine(renderer, logger=log)
    page_count = engine.apply(doc, instructions)
    out = doc.to_bytes()

    return OverlayResult(pdf_bytes=out, page_count=page_count, instruction_count=len(instructions))


def process_overlay_request(
    body: Any,
    *,
    fetcher: Fetcher | None = None,
    renderer: TextRenderer | None = None,
    settings: Settings | None = None,
    logger: logging.Logger | None = None,
) -> OverlayResult:
    """
    Full request pipeline shared by both HTTP endpoints.

    body = {pdfBase64? | pdfUrl?, text?/texts?/watermark?, ...}
    """
    if not isinstance(body, Mapping):
        raise OverlayRequestError("Request body must be a JSON object")

    settings = settings or get_settings()
    log = logger or _log
    if fetcher is None:
        fetcher = HttpPdfFetcher(settings.fetch_timeout_seconds, settings.max_pdf_bytes)

    pdf_bytes, source = resolve_source_bytes(body, fetcher=fetcher, max_bytes=settings.max_pdf_bytes)
    result = apply_overlays(pdf_bytes, body, renderer=renderer, settings=settings, logger=log)

    log.info(
        "overlay applied: source=%s pages=%d instructions=%d in_bytes=%d out_bytes=%d",
        source,
        result.page_count,
        result.instruction_count,
        len(pdf_bytes),
        len(result.pdf_bytes),
    )
    return result
