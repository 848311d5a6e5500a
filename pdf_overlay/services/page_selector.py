# pdf_overlay/services/page_selector.py
from __future__ import annotations

from typing import Any, List

from pdf_overlay.services.normalize import coerce_number
from pdf_overlay.services.placement import AllPages, PageSelector, SinglePage

ALL_PAGES_SENTINEL = -1


def resolve_page_selector(page_number: Any, page_count: int) -> PageSelector:
    """
    -1 -> every page. Anything else is truncated to an int and clamped into
    [0, page_count - 1]; callers passing 1-based or junk indices still get a
    page, never an error.
    """
    n = coerce_number(page_number, 0)
    if n == ALL_PAGES_SENTINEL:
        return AllPages()

    idx = int(n)
    idx = max(0, min(page_count - 1, idx))
    return SinglePage(idx)


def target_pages(selector: PageSelector, page_count: int) -> List[int]:
    if isinstance(selector, AllPages):
        return list(range(page_count))
    return [selector.index]
