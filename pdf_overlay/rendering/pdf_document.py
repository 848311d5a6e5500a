# pdf_overlay/rendering/pdf_document.py
from __future__ import annotations

import io
from typing import List, Tuple

from pypdf import PdfReader, PdfWriter
from pypdf._page import PageObject

from pdf_overlay.errors import OverlayProcessingError


class PdfDocument:
    """
    Thin pypdf wrapper: reader pages are copied into a writer once at load
    time, overlays are merged into the writer pages, then the writer is
    serialized. Page sizes come from the mediabox and never change.
    """

    def __init__(self, writer: PdfWriter):
        self._writer = writer

    @classmethod
    def from_bytes(cls, data: bytes) -> "PdfDocument":
        try:
            reader = PdfReader(io.BytesIO(data))
            writer = PdfWriter()
            for page in reader.pages:
                writer.add_page(page)
        except Exception as e:
            raise OverlayProcessingError("Could not read the PDF document") from e
        return cls(writer)

    @property
    def page_count(self) -> int:
        return len(self._writer.pages)

    def page(self, index: int) -> PageObject:
        return self._writer.pages[index]

    def page_size(self, index: int) -> Tuple[float, float]:
        box = self._writer.pages[index].mediabox
        return float(box.width), float(box.height)

    def page_sizes(self) -> List[Tuple[float, float]]:
        return [self.page_size(i) for i in range(self.page_count)]

    def to_bytes(self) -> bytes:
        out = io.BytesIO()
        try:
            self._writer.write(out)
        except Exception as e:
            raise OverlayProcessingError("Could not write the PDF document") from e
        return out.getvalue()
