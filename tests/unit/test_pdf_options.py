"""
Unit tests for page-layout option validation and payloads.
"""

import json

import pytest

from rail_pdf.enums import Format, Unit
from rail_pdf.exceptions import PdfConfigurationError
from rail_pdf.options import (
    Margins,
    PageOptions,
    dimension,
    format_number,
    normalize_format,
    normalize_unit,
    serialize_margins,
    serialize_options,
    validate_page_ranges,
    validate_scale,
)

pytestmark = pytest.mark.unit


@pytest.mark.parametrize("unit", ["px", "in", "cm", "mm", "MM", Unit.INCH])
def test_normalize_unit_accepts_known_units(unit):
    assert normalize_unit(unit) in {"px", "in", "cm", "mm"}


def test_normalize_unit_rejects_unknown_unit():
    with pytest.raises(PdfConfigurationError) as exc:
        normalize_unit("pt")
    assert str(exc.value) == "Invalid unit [pt]. Expected one of: [px, in, cm, mm]"


def test_normalize_format_is_case_insensitive():
    assert normalize_format("a4") == "A4"
    assert normalize_format(Format.LETTER) == "LETTER"


def test_normalize_format_rejects_unknown_format():
    with pytest.raises(PdfConfigurationError) as exc:
        normalize_format("B5")
    assert str(exc.value).startswith("Invalid format [B5]. Expected one of: [LETTER")


def test_format_number_drops_trailing_zero():
    assert format_number(210) == "210"
    assert format_number(210.0) == "210"
    assert format_number(12.5) == "12.5"


@pytest.mark.parametrize("value", ["10", None, True, float("nan"), float("inf"), float("-inf")])
def test_format_number_rejects_non_numbers(value):
    with pytest.raises(PdfConfigurationError):
        format_number(value)


def test_dimension_combines_value_and_unit():
    assert dimension(100, "px") == "100px"
    assert dimension(8.5, Unit.INCH) == "8.5in"
    assert dimension(210) == "210mm"


@pytest.mark.parametrize("scale", [0.1, 1, 1.5, 2])
def test_validate_scale_accepts_bounds(scale):
    assert validate_scale(scale) == scale


@pytest.mark.parametrize("scale", [0.09, 2.01, 0, -1, "1", True, float("nan"), float("inf")])
def test_validate_scale_rejects_out_of_range(scale):
    with pytest.raises(PdfConfigurationError) as exc:
        validate_scale(scale)
    assert str(exc.value) == "Scale must be a positive number between 0.1 and 2."


def test_validate_page_ranges():
    assert validate_page_ranges("1-5, 8, 11-13") == "1-5, 8, 11-13"
    with pytest.raises(PdfConfigurationError) as exc:
        validate_page_ranges("")
    assert str(exc.value) == "Page ranges cannot be empty."


def test_margins_default_to_zero_millimetres():
    assert Margins().to_payload() == {
        "top": "0mm",
        "right": "0mm",
        "bottom": "0mm",
        "left": "0mm",
    }


def test_margins_from_values_share_one_unit():
    margins = Margins.from_values(1, 2, 3, 4.5, "cm")
    assert margins.to_payload() == {
        "top": "1cm",
        "right": "2cm",
        "bottom": "3cm",
        "left": "4.5cm",
    }


def test_margins_from_values_rejects_invalid_unit():
    with pytest.raises(PdfConfigurationError):
        Margins.from_values(1, 1, 1, 1, "pt")


class TestPageOptions:
    def test_empty_options_produce_empty_payload(self):
        assert PageOptions().to_payload() == {}

    def test_update_returns_new_instance(self):
        options = PageOptions()
        updated = options.update(landscape=True)
        assert options.landscape is False
        assert updated.landscape is True

    def test_payload_uses_renderer_key_names(self):
        options = PageOptions(
            prefer_css_page_size=True,
            print_background=True,
            display_header_footer=True,
            page_ranges="1-2",
            scale=0.5,
            tagged=True,
            outline=True,
        )
        assert options.to_payload() == {
            "preferCSSPageSize": True,
            "printBackground": True,
            "displayHeaderFooter": True,
            "pageRanges": "1-2",
            "scale": 0.5,
            "tagged": True,
            "outline": True,
        }

    def test_format_takes_priority_over_dimensions(self):
        options = PageOptions(format="A4", width="100mm", height="200mm")
        assert options.to_payload() == {"format": "A4"}
        assert options.as_dict()["width"] == "100mm"

    def test_dimensions_sent_without_format(self):
        options = PageOptions(width="100mm", height="200mm")
        assert options.to_payload() == {"width": "100mm", "height": "200mm"}


def test_serializers_produce_compact_json():
    options = PageOptions(format="A2", landscape=True)
    assert serialize_options(options) == '{"format":"A2","landscape":true}'
    margins = json.loads(serialize_margins(Margins.from_values(10, 0, 10, 0)))
    assert margins == {"top": "10mm", "right": "0mm", "bottom": "10mm", "left": "0mm"}
