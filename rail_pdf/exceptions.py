"""
Exceptions raised by the PDF builder and its render bridge.

Configuration errors are raised synchronously by the offending call, resource
errors name the path that could not be created or written, and render errors
carry the diagnostic output captured from the renderer process.
"""

from typing import Optional


class PdfError(Exception):
    """Base exception for PDF generation errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        self.details = details
        super().__init__(message)


class PdfConfigurationError(PdfError, ValueError):
    """Raised when a builder option or content source is invalid."""


class PdfResourceError(PdfError, OSError):
    """Raised when a staging file or the output file cannot be written."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        details: Optional[str] = None,
    ):
        self.path = path
        super().__init__(message, details)


class PdfRenderError(PdfError, RuntimeError):
    """Raised when the renderer process fails or returns unusable output."""

    def __init__(
        self,
        message: str,
        stderr: Optional[str] = None,
        returncode: Optional[int] = None,
    ):
        self.stderr = stderr
        self.returncode = returncode
        super().__init__(message, details=stderr)


class NodeBinaryNotFoundError(PdfRenderError):
    """Raised when no Node.js executable can be located."""
