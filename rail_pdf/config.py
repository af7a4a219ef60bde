"""Settings helpers for PDF generation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from django.conf import settings as django_settings

from .defaults import LIBRARY_DEFAULTS, merge_settings

logger = logging.getLogger(__name__)

SETTINGS_NAME = "RAIL_PDF"


@dataclass(frozen=True)
class PdfSettings:
    node_binary: Optional[str] = None
    script_path: Optional[str] = None
    timeout_seconds: float = 60
    temp_dir: Optional[str] = None
    temp_prefix: str = "rail-pdf-"
    node_modules_path: Optional[str] = None
    extra_path: list[str] = field(default_factory=list)
    fake: bool = False
    default_filename: str = "document.pdf"


def _pdf_settings() -> dict[str, Any]:
    """Read the raw ``RAIL_PDF`` block from Django settings."""
    value = getattr(django_settings, SETTINGS_NAME, None) or {}
    if not isinstance(value, dict):
        logger.warning("%s must be a dict, got %s", SETTINGS_NAME, type(value).__name__)
        return {}
    return value


def _coerce_timeout(value: Any) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        logger.warning("Invalid %s timeout_seconds %r, using default", SETTINGS_NAME, value)
        return float(LIBRARY_DEFAULTS["timeout_seconds"])
    if timeout <= 0:
        logger.warning("%s timeout_seconds must be positive, using default", SETTINGS_NAME)
        return float(LIBRARY_DEFAULTS["timeout_seconds"])
    return timeout


def get_pdf_settings() -> PdfSettings:
    merged = merge_settings(LIBRARY_DEFAULTS, _pdf_settings())
    extra_path = merged.get("extra_path") or []
    if isinstance(extra_path, str):
        extra_path = [extra_path]
    return PdfSettings(
        node_binary=merged.get("node_binary") or None,
        script_path=merged.get("script_path") or None,
        timeout_seconds=_coerce_timeout(merged.get("timeout_seconds")),
        temp_dir=merged.get("temp_dir") or None,
        temp_prefix=str(merged.get("temp_prefix") or "rail-pdf-"),
        node_modules_path=merged.get("node_modules_path") or None,
        extra_path=[str(item) for item in extra_path if item],
        fake=bool(merged.get("fake", False)),
        default_filename=str(merged.get("default_filename") or "document.pdf"),
    )
