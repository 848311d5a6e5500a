# pdf_overlay/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List

from dotenv import load_dotenv

DEFAULT_MAX_PDF_BYTES = 25 * 1024 * 1024


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be a number, got {raw!r}")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    allowed_origins: str = "*"
    fetch_timeout_seconds: float = 20.0
    max_pdf_bytes: int = DEFAULT_MAX_PDF_BYTES
    font_name: str = "Helvetica"
    log_level: str = "INFO"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv(".env")
        return cls(
            allowed_origins=os.getenv("PDF_OVERLAY_ALLOWED_ORIGINS") or "*",
            fetch_timeout_seconds=_env_float("PDF_OVERLAY_FETCH_TIMEOUT", 20.0),
            max_pdf_bytes=_env_int("PDF_OVERLAY_MAX_PDF_BYTES", DEFAULT_MAX_PDF_BYTES),
            font_name=os.getenv("PDF_OVERLAY_FONT") or "Helvetica",
            log_level=(os.getenv("PDF_OVERLAY_LOG_LEVEL") or "INFO").upper(),
            port=_env_int("PORT", 8000),
        )

    def origins_list(self) -> List[str]:
        origins = [o.strip() for o in self.allowed_origins.split(",") if o.strip()]
        return origins or ["*"]


_settings_singleton: Settings | None = None


def get_settings() -> Settings:
    global _settings_singleton
    if _settings_singleton is None:
        _settings_singleton = Settings.from_env()
    return _settings_singleton
