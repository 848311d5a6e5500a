# pdf_overlay/services/overlay_engine.py
from __future__ import annotations

import logging
from typing import Protocol, Sequence

from pypdf._page import PageObject

from pdf_overlay.errors import OverlayProcessingError
from pdf_overlay.rendering.text_renderer import TextRenderer
from pdf_overlay.services.page_selector import target_pages
from pdf_overlay.services.placement import PlacementInstruction


class OverlayDocument(Protocol):
    @property
    def page_count(self) -> int:
        ...

    def page(self, index: int) -> PageObject:
        ...


class OverlayEngine:
    """
    Applies instructions to a loaded document, strictly in list order, one
    renderer call per (instruction, target page). Draw order is visible in the
    output (later text paints over earlier text) so nothing is reordered or
    batched.
    """

    def __init__(self, renderer: TextRenderer, logger: logging.Logger | None = None):
        self.renderer = renderer
        self.logger = logger or logging.getLogger(__name__)

    def apply(self, document: OverlayDocument, instructions: Sequence[PlacementInstruction]) -> int:
        page_count = document.page_count
        for n, ins in enumerate(instructions):
            for idx in target_pages(ins.page_selector, page_count):
                try:
                    self.renderer.draw_text(document.page(idx), ins)
                except Exception as e:
                    self.logger.warning(
                        "render failed: instruction=%d kind=%s page=%d error=%s: %s",
                        n,
                        ins.kind,
                        idx,
                        type(e).__name__,
                        e,
                    )
                    raise OverlayProcessingError(f"Could not render overlay text on page {idx + 1}") from e
        return document.page_count
