"""PDF rendering backend built on a ReportLab canvas."""

from __future__ import annotations

import io
import logging
from typing import Optional

import reportlab.pdfbase.pdfmetrics
from reportlab.graphics.barcode import createBarcodeDrawing
from reportlab.lib.units import mm
from reportlab.pdfgen.canvas import Canvas

from label_protocol import BarcodeFormatting, Color, RenderingBackend
from zpl_interpreter.errors import ArgumentRangeError

logger = logging.getLogger(__name__)

# Rotation (degrees, counter-clockwise) and drawOn offset factors (width, height)
# that keep a rotated drawing's top-left corner on the cursor.
_ORIENTATIONS = {
    "N": (0, (0, -1)),
    "R": (-90, (0, 0)),
    "I": (180, (-1, 0)),
    "B": (90, (-1, -1)),
}


class PdfBackend(RenderingBackend):
    """Draws onto a single PDF page; the cursor uses a top-left origin."""

    def __init__(self, font_name: str = "Helvetica-Bold", creator: str = "zpl-interpreter") -> None:
        super().__init__()
        self.font_name = font_name
        self.creator = creator
        self.font_size: float = 12.0
        self._buffer = io.BytesIO()
        self._canvas: Optional[Canvas] = None
        self._output: Optional[bytes] = None

    @property
    def canvas(self) -> Canvas:
        if self._canvas is None:
            raise RuntimeError("PdfBackend has no document. Call create_document() first.")
        return self._canvas

    def _page_y(self, y_mm: float) -> float:
        """Convert a top-down millimetre offset into PDF user space."""
        return (self.height_mm - y_mm) * mm

    # ---- Implement protocol ----
    def create_document(self, width_mm, height_mm):
        self.width_mm, self.height_mm = float(width_mm), float(height_mm)
        self._canvas = Canvas(self._buffer, pagesize=(self.width_mm * mm, self.height_mm * mm))
        self._canvas.setCreator(self.creator)
        self._canvas.setFont(self.font_name, self.font_size)

    def move_cursor(self, x_mm, y_mm):
        self.cursor_x, self.cursor_y = float(x_mm), float(y_mm)

    def set_font_size(self, points):
        self.font_size = float(points)
        self.canvas.setFont(self.font_name, self.font_size)

    def draw_text(self, text):
        # The cursor marks the top of the field, so drop by the font ascent.
        ascent = reportlab.pdfbase.pdfmetrics.getAscent(self.font_name) * self.font_size / 1000.0
        self.canvas.setFillColorRGB(0, 0, 0)
        self.canvas.drawString(self.cursor_x * mm, self._page_y(self.cursor_y) - ascent, text)

    def draw_rect(self, x_mm, y_mm, width_mm, height_mm, thickness_mm, stroke_color):
        pdf = self.canvas
        pdf.setStrokeColorRGB(*Color(stroke_color).rgb)
        pdf.setLineWidth(thickness_mm * mm)
        pdf.rect(
            x_mm * mm,
            self._page_y(y_mm + height_mm),
            width_mm * mm,
            height_mm * mm,
            stroke=1,
            fill=0,
        )

    def draw_barcode(self, content, formatting: BarcodeFormatting):
        if not content:
            logger.debug("Skipping barcode without field data")
            return
        if formatting.print_above:
            logger.debug("Interpretation line above the bars is not drawn")

        try:
            drawing = createBarcodeDrawing(
                "Code128",
                value=content,
                barHeight=formatting.height_mm * mm,
                barWidth=formatting.module_width_mm * mm,
                humanReadable=formatting.print_below,
            )
            angle, (dx, dy) = _ORIENTATIONS.get(formatting.orientation, _ORIENTATIONS["N"])

            pdf = self.canvas
            pdf.saveState()
            try:
                pdf.translate(self.cursor_x * mm, self._page_y(self.cursor_y))
                pdf.rotate(angle)
                drawing.drawOn(pdf, dx * drawing.width, dy * drawing.height)
            finally:
                pdf.restoreState()
        except ValueError as exc:
            # reportlab rejects characters outside the Code 128 sets
            raise ArgumentRangeError("BC", "content", content, "encodable as Code 128") from exc

    def serialize(self) -> bytes:
        if self._output is None:
            self.canvas.showPage()
            self.canvas.save()
            self._output = self._buffer.getvalue()
        return self._output
