import pytest

from backends import PdfBackend
from label_protocol import BarcodeFormatting, Color
from zpl_interpreter import ArgumentRangeError


@pytest.fixture
def backend() -> PdfBackend:
    pdf = PdfBackend()
    pdf.create_document(101.6, 152.4)
    return pdf


def test_requires_document():
    with pytest.raises(RuntimeError, match="create_document"):
        PdfBackend().draw_text("Hello")


def test_draws_text_and_boxes(backend):
    backend.move_cursor(6.25, 7.5)
    backend.set_font_size(14.17)
    backend.draw_text("Hello")
    backend.draw_rect(3.125, 3.125, 47.5, 25.0, 0.25, Color.BLACK)
    backend.draw_rect(3.125, 3.125, 10.0, 10.0, 0.25, Color.WHITE)

    output = backend.serialize()
    assert output.startswith(b"%PDF")
    assert backend.serialize() is output
    assert backend.font_size == 14.17


@pytest.mark.parametrize("orientation", ["N", "R", "I", "B"])
def test_draws_barcodes(backend, orientation):
    backend.move_cursor(7.5, 15.0)
    backend.draw_barcode(
        "1234ABC",
        BarcodeFormatting(orientation=orientation, height_mm=7.5, module_width_mm=0.375),
    )
    assert backend.serialize().startswith(b"%PDF")


def test_empty_barcode_is_skipped(backend):
    backend.draw_barcode("", BarcodeFormatting())
    assert backend.serialize().startswith(b"%PDF")


def test_unencodable_barcode_is_a_range_error(backend):
    with pytest.raises(ArgumentRangeError) as info:
        backend.draw_barcode("Grüße", BarcodeFormatting())
    assert info.value.command == "BC"
    assert info.value.field == "content"
