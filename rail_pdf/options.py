"""
Page-layout options passed to the renderer.

This module validates every layout value before it is stored and converts the
accumulated options into the JSON payloads consumed by the Playwright entry
script. Dimensions are kept as ``"<number><unit>"`` tokens, e.g. ``"210mm"``.
"""

import json
import math
from dataclasses import dataclass, fields, replace
from numbers import Real
from typing import Any, Optional, Union

from .enums import Format, Unit
from .exceptions import PdfConfigurationError

# Bumped whenever the option payload changes shape.
OPTIONS_SCHEMA_VERSION = 1

SCALE_MIN = 0.1
SCALE_MAX = 2.0

VALID_UNITS = tuple(unit.value.lower() for unit in Unit)
VALID_FORMATS = tuple(fmt.value.upper() for fmt in Format)

UnitLike = Union[Unit, str]
FormatLike = Union[Format, str]


def normalize_unit(unit: UnitLike) -> str:
    """
    Resolve a unit to its lower-case token.

    Args:
        unit: A ``Unit`` member or its string value in any case.

    Returns:
        The lower-case unit, e.g. ``"mm"``.

    Raises:
        PdfConfigurationError: If the unit is not one of px, in, cm, mm.
    """
    value = unit.value if isinstance(unit, Unit) else str(unit)
    value = value.lower()
    if value not in VALID_UNITS:
        raise PdfConfigurationError(
            "Invalid unit [%s]. Expected one of: [%s]" % (value, ", ".join(VALID_UNITS))
        )
    return value


def normalize_format(fmt: FormatLike) -> str:
    """
    Resolve a paper format to its upper-case name.

    Raises:
        PdfConfigurationError: If the format is not a known paper size.
    """
    value = fmt.value if isinstance(fmt, Format) else str(fmt)
    value = value.upper()
    if value not in VALID_FORMATS:
        raise PdfConfigurationError(
            "Invalid format [%s]. Expected one of: [%s]" % (value, ", ".join(VALID_FORMATS))
        )
    return value


def format_number(value: Any) -> str:
    """Render a length without a trailing ``.0`` for integral values."""
    if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value):
        raise PdfConfigurationError(
            "Invalid length [%r]. Expected a number." % (value,)
        )
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)


def dimension(value: Any, unit: UnitLike = Unit.MILLIMETER) -> str:
    """Build a ``"<number><unit>"`` token after validating both parts."""
    normalized_unit = normalize_unit(unit)
    return f"{format_number(value)}{normalized_unit}"


def validate_scale(scale: Any) -> float:
    if isinstance(scale, bool) or not isinstance(scale, Real):
        raise PdfConfigurationError("Scale must be a positive number between 0.1 and 2.")
    if not math.isfinite(scale) or scale < SCALE_MIN or scale > SCALE_MAX:
        raise PdfConfigurationError("Scale must be a positive number between 0.1 and 2.")
    return scale


def validate_page_ranges(ranges: str) -> str:
    if not ranges:
        raise PdfConfigurationError("Page ranges cannot be empty.")
    return str(ranges)


@dataclass(frozen=True)
class Margins:
    """Paper margins; all four sides are replaced together."""

    top: str = "0mm"
    right: str = "0mm"
    bottom: str = "0mm"
    left: str = "0mm"

    @classmethod
    def from_values(
        cls,
        top: Any = 0,
        right: Any = 0,
        bottom: Any = 0,
        left: Any = 0,
        unit: UnitLike = Unit.MILLIMETER,
    ) -> "Margins":
        normalized_unit = normalize_unit(unit)
        return cls(
            top=dimension(top, normalized_unit),
            right=dimension(right, normalized_unit),
            bottom=dimension(bottom, normalized_unit),
            left=dimension(left, normalized_unit),
        )

    def to_payload(self) -> dict[str, str]:
        return {
            "top": self.top,
            "right": self.right,
            "bottom": self.bottom,
            "left": self.left,
        }


# Python attribute name -> key understood by Playwright's page.pdf().
_PAYLOAD_KEYS = {
    "format": "format",
    "width": "width",
    "height": "height",
    "landscape": "landscape",
    "outline": "outline",
    "prefer_css_page_size": "preferCSSPageSize",
    "print_background": "printBackground",
    "display_header_footer": "displayHeaderFooter",
    "scale": "scale",
    "tagged": "tagged",
    "page_ranges": "pageRanges",
}


@dataclass(frozen=True)
class PageOptions:
    """
    Validated page-layout options.

    Unset values are ``None`` (or ``False`` for flags) and are left out of the
    payload. When ``format`` is set it takes priority over ``width`` and
    ``height``, which stay recorded here but are not sent to the renderer.
    """

    format: Optional[str] = None
    width: Optional[str] = None
    height: Optional[str] = None
    landscape: bool = False
    outline: bool = False
    prefer_css_page_size: bool = False
    print_background: bool = False
    display_header_footer: bool = False
    scale: Optional[float] = None
    tagged: bool = False
    page_ranges: Optional[str] = None

    def update(self, **changes: Any) -> "PageOptions":
        return replace(self, **changes)

    def as_dict(self) -> dict[str, Any]:
        """Return the options that were set, keyed by payload name."""
        data: dict[str, Any] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if value is None or value is False:
                continue
            data[_PAYLOAD_KEYS[item.name]] = value
        return data

    def to_payload(self) -> dict[str, Any]:
        payload = self.as_dict()
        if "format" in payload:
            payload.pop("width", None)
            payload.pop("height", None)
        return payload


def serialize_options(options: PageOptions) -> str:
    return json.dumps(options.to_payload(), separators=(",", ":"))


def serialize_margins(margins: Margins) -> str:
    return json.dumps(margins.to_payload(), separators=(",", ":"))
