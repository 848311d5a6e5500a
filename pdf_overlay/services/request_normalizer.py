# pdf_overlay/services/request_normalizer.py
from __future__ import annotations

from typing import Any, List, Mapping, Sequence, Tuple

from pdf_overlay.errors import OverlayRequestError
from pdf_overlay.services.anchor import compute_anchor, normalize_position
from pdf_overlay.services.page_selector import resolve_page_selector
from pdf_overlay.services.placement import PlacementInstruction, SinglePage, build_instruction, overlay_text

# top-level keys that make up a legacy single-text request
LEGACY_TEXT_FIELDS = ("text", "x", "y", "pageNumber", "fontSize", "color", "opacity", "rotate")


def _watermark_instructions(
    wm: Mapping[str, Any],
    page_sizes: Sequence[Tuple[float, float]],
) -> List[PlacementInstruction]:
    apply_to_all = wm.get("applyToAll") is not False  # default true
    position = normalize_position(wm.get("position"))
    targets = range(len(page_sizes)) if apply_to_all else range(1)

    out: List[PlacementInstruction] = []
    for i in targets:
        width, height = page_sizes[i]
        ins = build_instruction(
            wm,
            kind="watermark",
            page_selector=SinglePage(i),
            anchor=lambda text, size, w=width, h=height: compute_anchor(w, h, position, text, size),
        )
        if ins is not None:
            out.append(ins)
    return out


def _text_instructions(items: Sequence[Any], page_count: int) -> List[PlacementInstruction]:
    out: List[PlacementInstruction] = []
    for item in items:
        if not isinstance(item, Mapping):
            continue
        ins = build_instruction(
            item,
            kind="text",
            page_selector=resolve_page_selector(item.get("pageNumber"), page_count),
        )
        if ins is not None:
            out.append(ins)
    return out


def normalize_request(
    body: Mapping[str, Any],
    page_sizes: Sequence[Tuple[float, float]],
) -> List[PlacementInstruction]:
    """
    Turn any of the accepted request shapes into one ordered instruction list.

    Shapes (can be combined):
      - watermark: {text, applyToAll?, position?, fontSize?, opacity?, rotate?, color?}
      - texts: [{text, x?, y?, pageNumber?, fontSize?, color?, opacity?, rotate?}, ...]
      - legacy: text/x/y/pageNumber/... at the top level (only used when
        `texts` is not a list)

    Watermark instructions always come first (background layer), one per
    target page with the anchor already computed for that page's size. Text
    instructions follow in request order; pageNumber -1 stays an AllPages
    selector for the engine to expand.

    Raises OverlayRequestError when the request carries no text at all.
    """
    page_count = len(page_sizes)
    instructions: List[PlacementInstruction] = []
    has_content = False

    wm = body.get("watermark")
    if isinstance(wm, Mapping) and overlay_text(wm.get("text")):
        has_content = True
        instructions.extend(_watermark_instructions(wm, page_sizes))

    texts = body.get("texts")
    if isinstance(texts, list):
        # an empty list is still a valid "texts" request
        has_content = True
        instructions.extend(_text_instructions(texts, page_count))
    elif overlay_text(body.get("text")):
        has_content = True
        legacy = {k: body[k] for k in LEGACY_TEXT_FIELDS if k in body}
        instructions.extend(_text_instructions([legacy], page_count))

    if not has_content:
        raise OverlayRequestError("Missing overlay content: provide text, texts or watermark.text")

    return instructions
