"""
Unit tests for the recording fake builder and its assertions.
"""

import base64
from pathlib import Path

import pytest

from rail_pdf import FakePdfBuilder, Format, Unit
from rail_pdf.exceptions import PdfConfigurationError
from rail_pdf.fake import FAKE_PDF_CONTENT

pytestmark = pytest.mark.unit


@pytest.fixture
def fake():
    return FakePdfBuilder()


class TestTerminalOperations:
    def test_save_records_path_without_writing(self, fake, tmp_path):
        target = tmp_path / "invoice.pdf"
        assert fake.html("<p>x</p>").save(target) == str(target)
        assert fake.generated_pdfs[str(target)] == FAKE_PDF_CONTENT
        assert not target.exists()

    def test_raw_and_base64_return_placeholder(self, fake):
        assert fake.raw().startswith(b"%PDF-1.4")
        assert fake.raw().endswith(b"%%EOF\n")
        assert base64.b64decode(fake.base64()) == FAKE_PDF_CONTENT

    def test_to_response_carries_headers(self, fake):
        response = fake.download("report").to_response()
        assert response.status_code == 200
        assert response.content == FAKE_PDF_CONTENT
        assert response["Content-Disposition"] == 'attachment; filename="report.pdf"'

    def test_setters_validate_like_real_builder(self, fake):
        with pytest.raises(PdfConfigurationError):
            fake.scale(5)
        with pytest.raises(PdfConfigurationError):
            fake.from_url("mailto:someone@example.com")


class TestContentAssertions:
    def test_assert_view(self, fake):
        fake.view("pdf/greeting.html", {"name": "Ada"})
        fake.assert_view("pdf/greeting.html")
        with pytest.raises(AssertionError):
            fake.assert_view("pdf/other.html")

    def test_assert_view_without_view(self, fake):
        with pytest.raises(AssertionError, match="No view has been set for assertion."):
            fake.assert_view("pdf/greeting.html")

    def test_assert_view_callback_receives_name_and_context(self, fake):
        seen = []
        fake.view("pdf/greeting.html", {"name": "Ada"})
        fake.assert_view(
            "pdf/greeting.html",
            lambda name, context: seen.append((name, context)) or True,
        )
        assert seen == [("pdf/greeting.html", {"name": "Ada"})]

        with pytest.raises(AssertionError, match="data does not match"):
            fake.assert_view("pdf/greeting.html", lambda name, context: context["name"] == "Bob")

    def test_assert_html(self, fake):
        fake.html("<p>x</p>").assert_html("<p>x</p>")
        with pytest.raises(AssertionError, match="HTML content does not match"):
            fake.assert_html("<p>y</p>")

    def test_assert_html_sees_rendered_view(self, fake):
        fake.view("pdf/greeting.html", {"name": "Ada"})
        fake.assert_html(fake.resolved_html)
        assert "Hello Ada" in fake.resolved_html

    def test_assert_url(self, fake):
        with pytest.raises(AssertionError, match="not generated from a URL"):
            fake.assert_url("https://example.com")
        fake.from_url("https://example.com").assert_url("https://example.com")
        with pytest.raises(AssertionError):
            fake.assert_url("https://example.org")

    def test_assert_header_and_footer(self, fake):
        fake.header_template("<b>H</b>").footer_template("<i>F</i>")
        fake.assert_header_template("<b>H</b>").assert_footer_template("<i>F</i>")
        fake.assert_display_header_footer()
        with pytest.raises(AssertionError):
            fake.assert_footer_template("<b>H</b>")


class TestLayoutAssertions:
    def test_chained_assertions_pass(self, fake):
        (
            fake.format(Format.A3)
            .width(100)
            .height(8.5, Unit.INCH)
            .landscape()
            .outline()
            .prefer_css_page_size()
            .margins(1, 2, 3, 4, Unit.CENTIMETER)
            .print_background()
            .scale(0.75)
            .tagged()
            .page_ranges("2-4")
        )
        (
            fake.assert_format("a3")
            .assert_width(100)
            .assert_height(8.5, "in")
            .assert_landscape()
            .assert_outline()
            .assert_prefer_css_page_size()
            .assert_margins(1, 2, 3, 4, "cm")
            .assert_print_background()
            .assert_scale(0.75)
            .assert_tagged()
            .assert_page_ranges("2-4")
        )

    @pytest.mark.parametrize(
        "assertion",
        [
            lambda f: f.assert_format("A4"),
            lambda f: f.assert_width(100),
            lambda f: f.assert_height(100),
            lambda f: f.assert_landscape(),
            lambda f: f.assert_outline(),
            lambda f: f.assert_prefer_css_page_size(),
            lambda f: f.assert_print_background(),
            lambda f: f.assert_display_header_footer(),
            lambda f: f.assert_scale(1),
            lambda f: f.assert_tagged(),
            lambda f: f.assert_page_ranges("1"),
            lambda f: f.assert_name("doc.pdf"),
        ],
    )
    def test_unset_options_fail(self, fake, assertion):
        with pytest.raises(AssertionError):
            assertion(fake)

    def test_assert_margins_compares_all_sides(self, fake):
        fake.margins(10, 10, 10, 10)
        fake.assert_margins(10, 10, 10, 10)
        with pytest.raises(AssertionError, match="Margins do not match"):
            fake.assert_margins(10, 10, 10, 5)

    def test_assert_margins_default(self, fake):
        fake.assert_margins()

    def test_failure_message_names_values(self, fake):
        fake.format("A4")
        with pytest.raises(AssertionError) as exc:
            fake.assert_format("A5")
        assert "Format does not match expected value." in str(exc.value)
        assert "'A5'" in str(exc.value)
        assert "'A4'" in str(exc.value)


class TestOutputAssertions:
    def test_assert_saved(self, fake, tmp_path):
        target = tmp_path / "a.pdf"
        with pytest.raises(AssertionError, match="PDF was not saved to path"):
            fake.assert_saved(target)
        fake.html("<p/>").save(target)
        fake.assert_saved(target).assert_saved(str(target))

    def test_assert_saved_other_path_fails(self, fake):
        fake.save("/tmp/one.pdf")
        with pytest.raises(AssertionError):
            fake.assert_saved("/tmp/two.pdf")

    def test_assert_not_saved(self, fake):
        fake.assert_not_saved()
        fake.save(Path("/tmp/one.pdf"))
        fake.assert_not_saved("/tmp/two.pdf")
        with pytest.raises(AssertionError):
            fake.assert_not_saved()
        with pytest.raises(AssertionError):
            fake.assert_not_saved("/tmp/one.pdf")

    def test_assert_name(self, fake):
        fake.name("Quarterly").assert_name("quarterly.pdf")

    def test_assert_downloaded(self, fake):
        fake.download().assert_downloaded()
        with pytest.raises(AssertionError):
            fake.assert_inline()

    def test_assert_downloaded_custom_name(self, fake):
        fake.download("statement").assert_downloaded("statement.pdf")
        fake.assert_downloaded("statement")

    def test_assert_inline(self, fake):
        fake.inline("preview").assert_inline("preview.pdf")
        with pytest.raises(AssertionError):
            fake.assert_downloaded("preview.pdf")

    def test_assert_headers(self, fake):
        fake.add_headers({"X-Report-Id": "42"})
        fake.assert_headers({"X-Report-Id": "42"})
        with pytest.raises(AssertionError, match="X-Missing header is not set."):
            fake.assert_headers({"X-Missing": "1"})
        with pytest.raises(AssertionError, match="X-Report-Id header does not match"):
            fake.assert_headers({"X-Report-Id": "43"})
