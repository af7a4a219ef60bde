"""
Test double for the PDF builder.

``FakePdfBuilder`` accepts exactly the same calls as ``PdfBuilder`` but never
spawns a process or touches the filesystem. Terminal operations return a
small placeholder PDF and the ``assert_*`` helpers check the recorded state:

    from rail_pdf import Pdf

    fake = Pdf.fake()
    generate_invoice(order)  # calls Pdf.view(...).format("A4").save(path)
    fake.assert_view("pdf/invoice.html").assert_format("A4").assert_saved(path)
    Pdf.restore()
"""

import base64
import os
from typing import Any, Callable, Mapping, Optional

from django.http import HttpResponse

from .base import BasePdfBuilder, PathLike, normalize_filename
from .enums import Unit
from .options import FormatLike, Margins, UnitLike, dimension, normalize_format

FAKE_PDF_CONTENT = (
    b"%PDF-1.4\n"
    b"1 0 obj\n<<\n/Type /Catalog\n/Pages 2 0 R\n>>\nendobj\n"
    b"2 0 obj\n<<\n/Type /Pages\n/Kids [3 0 R]\n/Count 1\n>>\nendobj\n"
    b"3 0 obj\n<<\n/Type /Page\n/Parent 2 0 R\n/MediaBox [0 0 612 792]\n>>\nendobj\n"
    b"xref\n0 4\n"
    b"0000000000 65535 f \n"
    b"0000000010 00000 n \n"
    b"0000000053 00000 n \n"
    b"0000000100 00000 n \n"
    b"trailer\n<<\n/Size 4\n/Root 1 0 R\n>>\n"
    b"startxref\n149\n%%EOF\n"
)


def _assert_equal(expected: Any, actual: Any, message: str) -> None:
    if expected != actual:
        raise AssertionError(f"{message} Expected {expected!r}, got {actual!r}.")


class FakePdfBuilder(BasePdfBuilder):
    """Records builder calls instead of rendering."""

    def __init__(self) -> None:
        super().__init__()
        self.generated_pdfs: dict[str, bytes] = {}

    def generate_fake_pdf_content(self) -> bytes:
        return FAKE_PDF_CONTENT

    # ------------------------------------------------------------------
    # Terminal operations
    # ------------------------------------------------------------------

    def save(self, output_path: PathLike) -> str:
        path = os.fspath(output_path)
        self.generated_pdfs[path] = self.generate_fake_pdf_content()
        return path

    def base64(self) -> str:
        return base64.b64encode(self.generate_fake_pdf_content()).decode("ascii")

    def raw(self) -> bytes:
        return self.generate_fake_pdf_content()

    def to_response(self, request: Any = None) -> HttpResponse:
        return self._build_response(self.generate_fake_pdf_content())

    # ------------------------------------------------------------------
    # Content assertions
    # ------------------------------------------------------------------

    def assert_url(self, url: str) -> "FakePdfBuilder":
        if not self.is_from_url:
            raise AssertionError("PDF was not generated from a URL.")
        _assert_equal(url, self.url, "URL does not match expected value.")
        return self

    def assert_view(
        self,
        template_name: str,
        callback: Optional[Callable[[str, dict[str, Any]], Any]] = None,
    ) -> "FakePdfBuilder":
        """
        Assert the template passed to ``view()``.

        The optional callback receives ``(template_name, context)``; a ``False``
        result fails the assertion.
        """
        if self.view_name is None:
            raise AssertionError("No view has been set for assertion.")
        _assert_equal(template_name, self.view_name, "View does not match expected value.")
        if callback is not None:
            result = callback(self.view_name, self.view_context)
            if result is False:
                raise AssertionError(
                    f"View [{self.view_name}] data does not match expected value."
                )
        return self

    def assert_html(self, expected_html: str) -> "FakePdfBuilder":
        _assert_equal(
            expected_html, self.resolved_html, "HTML content does not match expected value."
        )
        return self

    def assert_header_template(self, expected_html: str) -> "FakePdfBuilder":
        _assert_equal(
            expected_html, self.header_html, "Header template does not match expected value."
        )
        return self

    def assert_footer_template(self, expected_html: str) -> "FakePdfBuilder":
        _assert_equal(
            expected_html, self.footer_html, "Footer template does not match expected value."
        )
        return self

    # ------------------------------------------------------------------
    # Layout assertions
    # ------------------------------------------------------------------

    def assert_format(self, expected_format: FormatLike) -> "FakePdfBuilder":
        _assert_equal(
            normalize_format(expected_format),
            self.options.format,
            "Format does not match expected value.",
        )
        return self

    def assert_width(
        self, expected_width: float, unit: UnitLike = Unit.MILLIMETER
    ) -> "FakePdfBuilder":
        _assert_equal(
            dimension(expected_width, unit),
            self.options.width,
            "Width does not match expected value.",
        )
        return self

    def assert_height(
        self, expected_height: float, unit: UnitLike = Unit.MILLIMETER
    ) -> "FakePdfBuilder":
        _assert_equal(
            dimension(expected_height, unit),
            self.options.height,
            "Height does not match expected value.",
        )
        return self

    def assert_landscape(self) -> "FakePdfBuilder":
        _assert_equal(True, self.options.landscape, "Landscape option does not match expected value.")
        return self

    def assert_outline(self) -> "FakePdfBuilder":
        _assert_equal(True, self.options.outline, "Outline option does not match expected value.")
        return self

    def assert_prefer_css_page_size(self) -> "FakePdfBuilder":
        _assert_equal(
            True,
            self.options.prefer_css_page_size,
            "Prefer CSS page size option does not match expected value.",
        )
        return self

    def assert_margins(
        self,
        expected_top: float = 0,
        expected_right: float = 0,
        expected_bottom: float = 0,
        expected_left: float = 0,
        unit: UnitLike = Unit.MILLIMETER,
    ) -> "FakePdfBuilder":
        expected = Margins.from_values(
            expected_top, expected_right, expected_bottom, expected_left, unit
        )
        _assert_equal(
            expected.to_payload(),
            self.page_margins.to_payload(),
            "Margins do not match expected values.",
        )
        return self

    def assert_print_background(self) -> "FakePdfBuilder":
        _assert_equal(
            True,
            self.options.print_background,
            "Print background option does not match expected value.",
        )
        return self

    def assert_display_header_footer(self) -> "FakePdfBuilder":
        _assert_equal(
            True,
            self.options.display_header_footer,
            "Display header footer option does not match expected value.",
        )
        return self

    def assert_scale(self, expected_scale: float) -> "FakePdfBuilder":
        _assert_equal(expected_scale, self.options.scale, "Scale option does not match expected value.")
        return self

    def assert_tagged(self) -> "FakePdfBuilder":
        _assert_equal(True, self.options.tagged, "Tagged option does not match expected value.")
        return self

    def assert_page_ranges(self, expected_page_ranges: str) -> "FakePdfBuilder":
        _assert_equal(
            expected_page_ranges,
            self.options.page_ranges,
            "Page ranges option does not match expected value.",
        )
        return self

    # ------------------------------------------------------------------
    # Output assertions
    # ------------------------------------------------------------------

    def assert_name(self, expected_name: str) -> "FakePdfBuilder":
        _assert_equal(expected_name, self.download_filename, "Name option does not match expected value.")
        return self

    def assert_saved(self, path: PathLike) -> "FakePdfBuilder":
        key = os.fspath(path)
        if key not in self.generated_pdfs:
            saved = ", ".join(sorted(self.generated_pdfs)) or "none"
            raise AssertionError(f"PDF was not saved to path: {key}. Saved paths: {saved}.")
        return self

    def assert_not_saved(self, path: Optional[PathLike] = None) -> "FakePdfBuilder":
        if path is None:
            if self.generated_pdfs:
                saved = ", ".join(sorted(self.generated_pdfs))
                raise AssertionError(f"Expected no PDF to be saved, but saved: {saved}.")
            return self
        key = os.fspath(path)
        if key in self.generated_pdfs:
            raise AssertionError(f"PDF was unexpectedly saved to path: {key}.")
        return self

    def assert_headers(self, expected_headers: Mapping[str, str]) -> "FakePdfBuilder":
        for key, value in expected_headers.items():
            if key not in self.response_headers:
                raise AssertionError(f"{key} header is not set.")
            _assert_equal(value, self.response_headers[key], f"{key} header does not match expected value.")
        return self

    def assert_downloaded(self, filename: str = "document.pdf") -> "FakePdfBuilder":
        return self._assert_disposition("attachment", filename, "Download")

    def assert_inline(self, filename: str = "document.pdf") -> "FakePdfBuilder":
        return self._assert_disposition("inline", filename, "Inline")

    def _assert_disposition(self, disposition: str, filename: str, label: str) -> "FakePdfBuilder":
        _assert_equal(
            normalize_filename(filename),
            self.download_filename,
            f"{label} filename does not match expected value.",
        )
        return self.assert_headers(
            {
                "Content-Type": "application/pdf",
                "Content-Disposition": f'{disposition}; filename="{self.download_filename}"',
            }
        )
