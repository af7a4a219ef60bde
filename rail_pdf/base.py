"""
Fluent builder interface shared by the real and the fake PDF builders.

``BasePdfBuilder`` holds every chainable setter together with its validation.
Subclasses only provide the terminal operations (``save``, ``raw``,
``base64`` and ``to_response``), so swapping one implementation for the other
never changes calling code.
"""

import os
from typing import Any, Callable, Mapping, Optional, Union
from urllib.parse import urlsplit

from django.http import HttpResponse
from django.template import Context
from django.template import Template as EngineTemplate
from django.template.loader import render_to_string

from .config import get_pdf_settings
from .enums import Unit
from .exceptions import PdfConfigurationError
from .options import (
    FormatLike,
    Margins,
    PageOptions,
    UnitLike,
    dimension,
    normalize_format,
    validate_page_ranges,
    validate_scale,
)

PathLike = Union[str, "os.PathLike[str]"]

URL_SCHEMES = ("http", "https")


def normalize_filename(filename: str) -> str:
    """Lower-case a download filename and make sure it ends with ``.pdf``."""
    name = str(filename).lower()
    if not name.endswith(".pdf"):
        name = f"{name}.pdf"
    return name


def is_http_url(url: Any) -> bool:
    """True for absolute http(s) URLs with a host, including single-label hosts."""
    if not isinstance(url, str) or not url or any(ch.isspace() for ch in url):
        return False
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
    except ValueError:
        return False
    return parts.scheme.lower() in URL_SCHEMES and bool(hostname)


def _template_html(template: Any) -> str:
    if isinstance(template, EngineTemplate):
        return template.render(Context())
    if hasattr(template, "render"):
        return template.render({})
    return str(template)


class BasePdfBuilder:
    """Accumulates content, page options and response metadata."""

    def __init__(self) -> None:
        self.html_content: Optional[str] = None
        self.view_html: Optional[str] = None
        self.view_name: Optional[str] = None
        self.view_context: dict[str, Any] = {}
        self.url: Optional[str] = None
        self.header_html: Optional[str] = None
        self.footer_html: Optional[str] = None
        self.options = PageOptions()
        self.page_margins = Margins()
        self.response_headers: dict[str, str] = {}
        self.download_filename: Optional[str] = None
        self.node_binary_path: Optional[str] = None

    @classmethod
    def create(cls) -> "BasePdfBuilder":
        return cls()

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    @property
    def is_from_url(self) -> bool:
        return self.url is not None

    @property
    def resolved_html(self) -> Optional[str]:
        """Explicit HTML when set, otherwise the rendered template."""
        if self.html_content is not None:
            return self.html_content
        return self.view_html

    def html(self, html: str):
        """Set the HTML content. Takes precedence over ``view()`` in any call order."""
        self.html_content = html
        return self

    def view(self, template_name: str, context: Optional[Mapping[str, Any]] = None):
        """
        Render a Django template to use as the document.

        The template is not rendered once explicit ``html()`` content is set;
        the name and context are still recorded. Template errors propagate
        unchanged.
        """
        data = dict(context or {})
        if self.html_content is None:
            self.view_html = render_to_string(template_name, data)
        self.view_name = template_name
        self.view_context = data
        return self

    def from_url(self, url: str):
        if not is_http_url(url):
            raise PdfConfigurationError(
                f"Invalid URL [{url}]. Expected a valid URL format starts with "
                "http:// or https://"
            )
        self.url = url
        return self

    def header_template(self, template: Any):
        """
        Set the print header.

        Accepts an HTML string or a template object exposing ``render``. The
        renderer fills elements with the classes ``date``, ``title``, ``url``,
        ``pageNumber`` and ``totalPages``.
        """
        html = _template_html(template)
        self.display_header_footer()
        self.header_html = html
        return self

    def footer_template(self, template: Any):
        """Set the print footer; see ``header_template``."""
        html = _template_html(template)
        self.display_header_footer()
        self.footer_html = html
        return self

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def format(self, paper_format: FormatLike):
        """Paper format. Takes priority over ``width`` and ``height`` when both are set."""
        self.options = self.options.update(format=normalize_format(paper_format))
        return self

    def width(self, width: float, unit: UnitLike = Unit.MILLIMETER):
        self.options = self.options.update(width=dimension(width, unit))
        return self

    def height(self, height: float, unit: UnitLike = Unit.MILLIMETER):
        self.options = self.options.update(height=dimension(height, unit))
        return self

    def landscape(self):
        self.options = self.options.update(landscape=True)
        return self

    def outline(self):
        """Embed the document outline into the PDF."""
        self.options = self.options.update(outline=True)
        return self

    def prefer_css_page_size(self):
        """Give CSS ``@page`` size declarations priority over format, width and height."""
        self.options = self.options.update(prefer_css_page_size=True)
        return self

    def margins(
        self,
        top: float = 0,
        right: float = 0,
        bottom: float = 0,
        left: float = 0,
        unit: UnitLike = Unit.MILLIMETER,
    ):
        self.page_margins = Margins.from_values(top, right, bottom, left, unit)
        return self

    def print_background(self):
        self.options = self.options.update(print_background=True)
        return self

    def display_header_footer(self):
        self.options = self.options.update(display_header_footer=True)
        return self

    def scale(self, scale: float):
        """Rendering scale, between 0.1 and 2 inclusive."""
        self.options = self.options.update(scale=validate_scale(scale))
        return self

    def tagged(self):
        """Generate a tagged (accessible) PDF."""
        self.options = self.options.update(tagged=True)
        return self

    def page_ranges(self, ranges: str):
        """Pages to print, e.g. ``"1-5, 8, 11-13"``."""
        self.options = self.options.update(page_ranges=validate_page_ranges(ranges))
        return self

    # ------------------------------------------------------------------
    # Identity and response metadata
    # ------------------------------------------------------------------

    def name(self, filename: str):
        self.download_filename = normalize_filename(filename)
        return self

    def set_node_binary_path(self, path: PathLike):
        self.node_binary_path = os.fspath(path)
        return self

    def add_headers(self, headers: Mapping[str, str]):
        for key, value in headers.items():
            self.response_headers[key] = value
        return self

    def download(self, filename: Optional[str] = None):
        return self._set_disposition("attachment", filename)

    def inline(self, filename: Optional[str] = None):
        return self._set_disposition("inline", filename)

    def _set_disposition(self, disposition: str, filename: Optional[str]):
        if not self.download_filename:
            self.name(filename or get_pdf_settings().default_filename)
        return self.add_headers(
            {
                "Content-Type": "application/pdf",
                "Content-Disposition": f'{disposition}; filename="{self.download_filename}"',
            }
        )

    def _response_headers_with_default(self) -> dict[str, str]:
        headers = dict(self.response_headers)
        if "Content-Disposition" not in headers:
            default_name = normalize_filename(get_pdf_settings().default_filename)
            headers["Content-Disposition"] = f'inline; filename="{default_name}"'
        return headers

    def _build_response(self, content: bytes) -> HttpResponse:
        self.response_headers = self._response_headers_with_default()
        response = HttpResponse(content, status=200, content_type="application/pdf")
        for key, value in self.response_headers.items():
            response[key] = value
        return response

    # ------------------------------------------------------------------
    # Conditionals
    # ------------------------------------------------------------------

    def when(self, value: Any, callback: Callable, default: Optional[Callable] = None):
        """Apply ``callback(builder, value)`` when ``value`` is truthy."""
        resolved = value(self) if callable(value) else value
        if resolved:
            return callback(self, resolved) or self
        if default is not None:
            return default(self, resolved) or self
        return self

    def unless(self, value: Any, callback: Callable, default: Optional[Callable] = None):
        """Apply ``callback(builder, value)`` when ``value`` is falsy."""
        resolved = value(self) if callable(value) else value
        if not resolved:
            return callback(self, resolved) or self
        if default is not None:
            return default(self, resolved) or self
        return self

    # ------------------------------------------------------------------
    # Terminal operations
    # ------------------------------------------------------------------

    def save(self, output_path: PathLike) -> str:
        raise NotImplementedError

    def raw(self) -> bytes:
        raise NotImplementedError

    def base64(self) -> str:
        raise NotImplementedError

    def to_response(self, request: Any = None) -> HttpResponse:
        raise NotImplementedError

