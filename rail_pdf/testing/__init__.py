"""
Public test utilities for rail-pdf.
"""

from .harness import fake_pdf, override_pdf_settings

__all__ = [
    "fake_pdf",
    "override_pdf_settings",
]
