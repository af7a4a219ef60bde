"""
PDF builder backed by the Playwright renderer.

Usage:
    from rail_pdf import PdfBuilder, Format

    path = (
        PdfBuilder.create()
        .view("pdf/invoice.html", {"invoice": invoice})
        .format(Format.A4)
        .margins(10, 10, 10, 10)
        .footer_template(get_template("pdf/footer.html"))
        .save("/tmp/invoice.pdf")
    )
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional

from django.http import HttpResponse

from .base import BasePdfBuilder, PathLike
from .bridge import RenderBridge, RenderRequest, decode_pdf
from .exceptions import PdfResourceError

logger = logging.getLogger(__name__)


class PdfBuilder(BasePdfBuilder):
    """Fluent builder that renders through an external Node.js process."""

    def __init__(self, bridge: Optional[RenderBridge] = None) -> None:
        super().__init__()
        self._bridge = bridge

    def build_request(self) -> RenderRequest:
        """Snapshot the current configuration; validates the content source."""
        return RenderRequest(
            html=self.resolved_html,
            url=self.url,
            header_html=self.header_html,
            footer_html=self.footer_html,
            options=self.options,
            margins=self.page_margins,
        )

    def get_bridge(self) -> RenderBridge:
        if self._bridge is not None:
            return self._bridge
        return RenderBridge(node_binary=self.node_binary_path)

    def _call_renderer(self) -> str:
        request = self.build_request()
        return self.get_bridge().render(request)

    def base64(self) -> str:
        """Generate the PDF and return it as base64 text."""
        return self._call_renderer()

    def raw(self) -> bytes:
        """Generate the PDF and return its bytes."""
        return decode_pdf(self._call_renderer())

    def save(self, output_path: PathLike) -> str:
        """
        Generate the PDF and write it to ``output_path``.

        Missing parent directories are created.

        Returns:
            The path the PDF was written to.

        Raises:
            PdfResourceError: If the directory cannot be created or written to.
        """
        content = self.raw()
        path = os.fspath(output_path)
        directory = Path(path).parent

        if not directory.is_dir():
            try:
                directory.mkdir(mode=0o755, parents=True, exist_ok=True)
            except OSError as exc:
                raise PdfResourceError(
                    f"Failed to create directory [{directory}]",
                    path=str(directory),
                    details=str(exc),
                ) from exc

        if not os.access(directory, os.W_OK):
            raise PdfResourceError(
                f"Directory [{directory}] is not writable", path=str(directory)
            )

        try:
            Path(path).write_bytes(content)
        except OSError as exc:
            raise PdfResourceError(
                f"Failed to write PDF content to [{path}]", path=path, details=str(exc)
            ) from exc

        logger.info("Saved PDF to %s (%d bytes)", path, len(content))
        return path

    def to_response(self, request: Any = None) -> HttpResponse:
        """Generate the PDF and wrap it in an ``HttpResponse``."""
        return self._build_response(self.raw())
