# pdf_overlay/services/anchor.py
from __future__ import annotations

from enum import Enum
from typing import Any, Tuple

CORNER_PADDING = 24.0


class WatermarkPosition(str, Enum):
    CENTER = "center"
    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"


def normalize_position(value: Any) -> WatermarkPosition:
    p = str(value or "").strip().lower().replace("_", "-")
    try:
        return WatermarkPosition(p)
    except ValueError:
        return WatermarkPosition.CENTER  # safe default


def compute_anchor(
    width: float,
    height: float,
    position: WatermarkPosition,
    text: str,
    font_size: float,
    pad: float = CORNER_PADDING,
) -> Tuple[float, float]:
    """
    Where the watermark's text origin goes.

    Corners sit `pad` points in from the edges. CENTER is only roughly
    centered: there is no glyph measurement, the half-width is guessed as
    len(text) * font_size / 6. Callers already compensate for that offset,
    so don't "fix" it here.
    """
    if position is WatermarkPosition.TOP_LEFT:
        return pad, height - pad
    if position is WatermarkPosition.TOP_RIGHT:
        return width - pad, height - pad
    if position is WatermarkPosition.BOTTOM_LEFT:
        return pad, pad
    if position is WatermarkPosition.BOTTOM_RIGHT:
        return width - pad, pad

    shift = (len(text) * font_size) / 6
    return width / 2 - shift, height / 2
