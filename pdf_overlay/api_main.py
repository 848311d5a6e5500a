# pdf_overlay/api_main.py
from __future__ import annotations

import logging
from typing import Any

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware

from pdf_overlay.config import get_settings
from pdf_overlay.errors import OverlayProcessingError, OverlayRequestError
from pdf_overlay.services.overlay_service import process_overlay_request
from pdf_overlay.services.remote_fetch import Fetcher, HttpPdfFetcher

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="PDF Overlay API")

# Browser form + n8n flows call from other origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins_list(),
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


def get_fetcher() -> Fetcher:
    s = get_settings()
    return HttpPdfFetcher(timeout_seconds=s.fetch_timeout_seconds, max_bytes=s.max_pdf_bytes)


@app.get("/")
def root():
    return {"ok": True, "try": ["/docs", "/api/health", "POST /api/processPdf", "POST /api/addText"]}


@app.get("/api/health")
def health():
    return {"ok": True}


async def _read_body(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Request body must be valid JSON")


def _run_overlay(body: Any, fetcher: Fetcher) -> dict:
    try:
        result = process_overlay_request(body, fetcher=fetcher, settings=get_settings(), logger=logger)
    except OverlayRequestError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except OverlayProcessingError as e:
        logger.error("Error processing PDF: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail=f"Could not process PDF: {e}")
    except Exception:
        logger.exception("Unexpected error processing PDF")
        raise HTTPException(status_code=500, detail="Could not process PDF")
    return result.to_response()


# ------------------------------------------------------------
# Overlay endpoints (POST only; other methods get 405 + Allow: POST)
# ------------------------------------------------------------
@app.post("/api/processPdf")
async def process_pdf(request: Request, fetcher: Fetcher = Depends(get_fetcher)):
    """
    body = {
      pdfBase64 | pdfUrl,
      texts?: [{text, x?, y?, pageNumber?, fontSize?, color?, opacity?, rotate?}],
      watermark?: {text, applyToAll?, position?, fontSize?, opacity?, rotate?, color?},
    }
    -> {pdfBase64, pageCount}
    """
    body = await _read_body(request)
    return await run_in_threadpool(_run_overlay, body, fetcher)


@app.post("/api/addText")
async def add_text(request: Request, fetcher: Fetcher = Depends(get_fetcher)):
    """
    Legacy n8n endpoint. Same engine as /api/processPdf; the old flat body
    {pdfBase64, text, x?, y?, pageNumber?} still works.
    """
    body = await _read_body(request)
    return await run_in_threadpool(_run_overlay, body, fetcher)


def main() -> None:
    uvicorn.run(app, host="0.0.0.0", port=get_settings().port)


if __name__ == "__main__":
    main()
