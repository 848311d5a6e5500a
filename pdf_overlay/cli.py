# pdf_overlay/cli.py
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pdf_overlay.config import get_settings
from pdf_overlay.errors import OverlayProcessingError, OverlayRequestError
from pdf_overlay.services.overlay_service import apply_overlays

logger = logging.getLogger("pdf_overlay.cli")


def _read_request(arg: str) -> dict:
    raw = sys.stdin.read() if arg == "-" else Path(arg).read_text(encoding="utf-8")
    return json.loads(raw)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Stamp text overlays / a watermark onto a local PDF")
    parser.add_argument("--input", required=True, help="Source PDF path")
    parser.add_argument("--request", required=True, help="Overlay request JSON file ('-' for stdin)")
    parser.add_argument("--output", required=True, help="Where to write the stamped PDF")
    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        body = _read_request(args.request)
    except (OSError, ValueError) as e:
        print(f"Could not read request JSON: {e}", file=sys.stderr)
        return 2

    if not isinstance(body, dict):
        print("Request JSON must be an object", file=sys.stderr)
        return 2

    try:
        pdf_bytes = Path(args.input).read_bytes()
        result = apply_overlays(pdf_bytes, body, settings=settings, logger=logger)
        Path(args.output).write_bytes(result.pdf_bytes)
    except OverlayRequestError as e:
        print(f"Bad request: {e}", file=sys.stderr)
        return 2
    except (OverlayProcessingError, OSError) as e:
        logger.error("overlay failed: %s", e, exc_info=True)
        print(f"Failed: {e}", file=sys.stderr)
        return 1

    print(f"OK: wrote {args.output} ({result.page_count} pages, {result.instruction_count} overlays)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
