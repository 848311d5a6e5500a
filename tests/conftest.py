import base64
import io
from typing import List, Sequence, Tuple

import pytest
from pypdf import PdfReader, PdfWriter


def make_pdf_bytes(sizes: Sequence[Tuple[float, float]] = ((612, 792),)) -> bytes:
    writer = PdfWriter()
    for w, h in sizes:
        writer.add_blank_page(width=w, height=h)
    buf = io.BytesIO()
    writer.write(buf)
    return buf.getvalue()


def make_pdf_b64(pages: int = 1, size: Tuple[float, float] = (612, 792)) -> str:
    return base64.b64encode(make_pdf_bytes([size] * pages)).decode("ascii")


def read_pdf_b64(value: str) -> PdfReader:
    return PdfReader(io.BytesIO(base64.b64decode(value)))


class RecordingRenderer:
    """Stands in for the reportlab renderer; remembers every draw call."""

    def __init__(self):
        self.calls: List[tuple] = []

    def draw_text(self, page, instruction):
        self.calls.append((page, instruction))


class FakePage:
    def __init__(self, index: int):
        self.index = index


class FakeDocument:
    def __init__(self, page_count: int):
        self._pages = [FakePage(i) for i in range(page_count)]

    @property
    def page_count(self) -> int:
        return len(self._pages)

    def page(self, index: int) -> FakePage:
        return self._pages[index]


@pytest.fixture
def recording_renderer():
    return RecordingRenderer()
