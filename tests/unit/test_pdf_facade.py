"""
Unit tests for the Pdf facade and the public testing helpers.
"""

import pytest

from rail_pdf import FakePdfBuilder, Pdf, PdfBuilder
from rail_pdf.testing import fake_pdf, override_pdf_settings

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def restore_facade():
    yield
    Pdf.restore()


def test_create_returns_real_builder_by_default():
    builder = Pdf.create()
    assert isinstance(builder, PdfBuilder)
    assert builder is not Pdf.create()


def test_fake_setting_selects_fake_builder():
    with override_pdf_settings(fake=True):
        assert isinstance(Pdf.create(), FakePdfBuilder)
    assert isinstance(Pdf.create(), PdfBuilder)


def test_attribute_access_starts_new_chain():
    builder = Pdf.html("<p>x</p>")
    assert isinstance(builder, PdfBuilder)
    assert builder.html_content == "<p>x</p>"
    assert Pdf.format("A4").html_content is None


def test_fake_swap_is_shared_until_restored():
    fake = Pdf.fake()
    assert Pdf.is_fake
    Pdf.html("<p>x</p>").format("A4").save("/tmp/report.pdf")

    fake.assert_html("<p>x</p>").assert_format("A4").assert_saved("/tmp/report.pdf")
    Pdf.assert_saved("/tmp/report.pdf")

    Pdf.restore()
    assert not Pdf.is_fake
    assert isinstance(Pdf.create(), PdfBuilder)


def test_private_attributes_are_not_forwarded():
    with pytest.raises(AttributeError):
        Pdf._missing


def test_fake_pdf_context_manager_restores():
    with fake_pdf() as fake:
        Pdf.view("pdf/greeting.html", {"name": "Ada"}).download("hello")
        fake.assert_view("pdf/greeting.html").assert_downloaded("hello.pdf")
    assert not Pdf.is_fake


def test_fake_pdf_restores_after_error():
    with pytest.raises(RuntimeError):
        with fake_pdf():
            raise RuntimeError("boom")
    assert not Pdf.is_fake


def test_override_pdf_settings_merges_with_existing_values():
    from rail_pdf.config import get_pdf_settings

    with override_pdf_settings(timeout_seconds=10):
        with override_pdf_settings(temp_prefix="nested-"):
            pdf_settings = get_pdf_settings()
            assert pdf_settings.timeout_seconds == 10
            assert pdf_settings.temp_prefix == "nested-"
    assert get_pdf_settings().timeout_seconds == 60
