"""
Process-wide entry point for building PDFs.

``Pdf`` hands out a fresh builder on every call. Which builder it hands out is
decided by ``RAIL_PDF["fake"]`` or, in tests, by ``Pdf.fake()``:

    Pdf.view("pdf/report.html", {"rows": rows}).format("A4").save(path)
"""

import logging
from typing import Any, Optional

from .base import BasePdfBuilder
from .builder import PdfBuilder
from .config import get_pdf_settings
from .fake import FakePdfBuilder

logger = logging.getLogger(__name__)


class PdfFactory:
    """Create builders; attribute access starts a new builder chain."""

    def __init__(self) -> None:
        self._swapped: Optional[BasePdfBuilder] = None

    def create(self) -> BasePdfBuilder:
        if self._swapped is not None:
            return self._swapped
        if get_pdf_settings().fake:
            return FakePdfBuilder.create()
        return PdfBuilder.create()

    def fake(self) -> FakePdfBuilder:
        """Swap in a ``FakePdfBuilder`` shared by every subsequent call."""
        fake = FakePdfBuilder()
        self._swapped = fake
        logger.debug("Pdf facade swapped to FakePdfBuilder")
        return fake

    def restore(self) -> None:
        """Undo ``fake()``."""
        self._swapped = None

    @property
    def is_fake(self) -> bool:
        return self._swapped is not None

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self.create(), name)


Pdf = PdfFactory()
