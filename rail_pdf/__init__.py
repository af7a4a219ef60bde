"""
rail-pdf: fluent PDF generation for Django through headless Chromium.

HTML from a string, a Django template or a live URL is printed to PDF by the
Playwright entry script bundled in ``rail_pdf/bin``.
"""

from .base import BasePdfBuilder
from .bridge import RenderBridge, RenderRequest
from .builder import PdfBuilder
from .defaults import LIBRARY_VERSION
from .enums import Format, Unit
from .exceptions import (
    NodeBinaryNotFoundError,
    PdfConfigurationError,
    PdfError,
    PdfRenderError,
    PdfResourceError,
)
from .facade import Pdf, PdfFactory
from .fake import FakePdfBuilder
from .options import Margins, PageOptions
from .staging import stage_resources

__version__ = LIBRARY_VERSION

__all__ = [
    "BasePdfBuilder",
    "FakePdfBuilder",
    "Format",
    "Margins",
    "NodeBinaryNotFoundError",
    "PageOptions",
    "Pdf",
    "PdfBuilder",
    "PdfConfigurationError",
    "PdfError",
    "PdfFactory",
    "PdfRenderError",
    "PdfResourceError",
    "RenderBridge",
    "RenderRequest",
    "Unit",
    "stage_resources",
]
