# pdf_overlay/services/placement.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Literal, Mapping, Optional, Tuple, Union

from pdf_overlay.services.normalize import RGB, clamp_unit, coerce_color, coerce_number

InstructionKind = Literal["text", "watermark"]


@dataclass(frozen=True)
class SinglePage:
    index: int


@dataclass(frozen=True)
class AllPages:
    pass


PageSelector = Union[SinglePage, AllPages]


@dataclass(frozen=True)
class OverlayDefaults:
    x: Optional[float]
    y: Optional[float]
    font_size: float
    color: RGB
    opacity: float
    rotation_degrees: float


# The one place defaults live. Watermark x/y are always computed from the
# anchor position, so they have no default here.
DEFAULTS: Dict[str, OverlayDefaults] = {
    "text": OverlayDefaults(
        x=50.0,
        y=750.0,
        font_size=12.0,
        color=RGB(0.0, 0.0, 0.0),
        opacity=1.0,
        rotation_degrees=0.0,
    ),
    "watermark": OverlayDefaults(
        x=None,
        y=None,
        font_size=48.0,
        color=RGB(0.5, 0.5, 0.5),
        opacity=0.15,
        rotation_degrees=45.0,
    ),
}


@dataclass(frozen=True)
class PlacementInstruction:
    """
    Fully-defaulted "draw this text here" directive.

    Coordinates are PDF user space (points, origin bottom-left). A
    rotation_degrees of exactly 0 means "no rotation transform at all",
    renderers must not emit a rotate for it.
    """
    kind: InstructionKind
    text: str
    x: float
    y: float
    font_size: float
    color: RGB
    opacity: float
    rotation_degrees: float
    page_selector: PageSelector

    @property
    def is_rotated(self) -> bool:
        return self.rotation_degrees != 0


def overlay_text(value: Any) -> str:
    # falsy non-strings (None, false, 0, [], {}) mean "no text", like a JS `!text`
    if isinstance(value, str):
        return value
    if not value:
        return ""
    if value is True:
        return "true"
    return str(value)


def _number(raw: Mapping[str, Any], key: str, default: float) -> float:
    # absent key -> default; present (even null) goes through coerce_number
    if key not in raw:
        return default
    return coerce_number(raw[key], default)


AnchorFn = Callable[[str, float], Tuple[float, float]]


def build_instruction(
    raw: Mapping[str, Any],
    *,
    kind: InstructionKind,
    page_selector: PageSelector,
    anchor: AnchorFn | None = None,
) -> PlacementInstruction | None:
    """
    raw = {text, x?, y?, fontSize?, color?, opacity?, rotate?}

    Returns None when there is nothing to draw (missing/empty text). This is
    the only place that check happens; the engine and renderer assume text is
    non-empty.

    `anchor(text, font_size) -> (x, y)` replaces the x/y lookup (watermarks).
    """
    text = overlay_text(raw.get("text"))
    if not text:
        return None

    d = DEFAULTS[kind]

    font_size = _number(raw, "fontSize", d.font_size)
    # Stricter than "absent or non-finite": a size <= 0 draws nothing (or
    # mirrored text), so it also takes the kind default.
    if font_size <= 0:
        font_size = d.font_size

    if anchor is not None:
        x, y = anchor(text, font_size)
    else:
        x = _number(raw, "x", d.x)
        y = _number(raw, "y", d.y)

    return PlacementInstruction(
        kind=kind,
        text=text,
        x=x,
        y=y,
        font_size=font_size,
        color=coerce_color(raw.get("color"), d.color),
        opacity=clamp_unit(raw["opacity"], d.opacity) if "opacity" in raw else d.opacity,
        rotation_degrees=_number(raw, "rotate", d.rotation_degrees),
        page_selector=page_selector,
    )
