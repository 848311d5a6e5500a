# pdf_overlay/rendering/text_renderer.py
from __future__ import annotations

import io
from typing import Protocol

from pypdf import PdfReader
from pypdf._page import PageObject
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from pdf_overlay.services.placement import PlacementInstruction

DEFAULT_FONT = "Helvetica"


class TextRenderer(Protocol):
    def draw_text(self, page: PageObject, instruction: PlacementInstruction) -> None:
        ...


class ReportLabTextRenderer:
    """
    Draws one instruction onto one page: render the text on a blank reportlab
    canvas the size of the page, then merge that overlay on top of the
    existing content. Later merges paint over earlier ones.

    Only the standard Type1 font is used (no embedding), so glyphs outside its
    encoding are best-effort.
    """

    def __init__(self, font_name: str = DEFAULT_FONT):
        try:
            pdfmetrics.getFont(font_name)
        except Exception as e:
            raise ValueError(f"Unknown font {font_name!r}") from e
        self.font_name = font_name

    def draw_text(self, page: PageObject, instruction: PlacementInstruction) -> None:
        w = float(page.mediabox.width)
        h = float(page.mediabox.height)

        overlay_buf = io.BytesIO()
        c = canvas.Canvas(overlay_buf, pagesize=(w, h))

        color = instruction.color
        c.saveState()
        c.setFillColorRGB(color.r, color.g, color.b)
        c.setFillAlpha(instruction.opacity)
        c.setFont(self.font_name, instruction.font_size)

        if instruction.is_rotated:
            # rotate around the text origin
            c.translate(instruction.x, instruction.y)
            c.rotate(instruction.rotation_degrees)
            c.drawString(0, 0, instruction.text)
        else:
            c.drawString(instruction.x, instruction.y, instruction.text)

        c.restoreState()
        c.save()
        overlay_buf.seek(0)

        overlay_page = PdfReader(overlay_buf).pages[0]
        page.merge_page(overlay_page)
