"""
Drawing surface used by the page composer.

The composer only needs four primitives (fill a rectangle, draw text, draw an
image, measure text). :class:`CanvasSurface` maps them onto a reportlab canvas;
tests substitute a recording implementation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from reportlab.lib import colors
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas


@dataclass(frozen=True)
class TextStyle:
    font_name: str
    font_size: float
    color: colors.Color
    align: str = "left"


class RenderingSurface(Protocol):
    def fill_rect(self, x: float, y: float, width: float, height: float, color: colors.Color) -> None:
        ...

    def draw_text(self, text: str, x: float, y: float, style: TextStyle) -> None:
        ...

    def draw_image(self, image: Any, x: float, y: float, width: float, height: float) -> None:
        ...

    def measure_text(self, text: str, font_name: str, font_size: float) -> float:
        ...


class CanvasSurface:
    """
    Reportlab-backed surface. Coordinates are PDF points with the origin at the
    bottom-left corner of the page.
    """

    def __init__(self, pdf: canvas.Canvas) -> None:
        self._pdf = pdf
        self.page_count = 0

    def fill_rect(self, x: float, y: float, width: float, height: float, color: colors.Color) -> None:
        self._pdf.setFillColor(color)
        self._pdf.rect(x, y, width, height, stroke=0, fill=1)

    def draw_text(self, text: str, x: float, y: float, style: TextStyle) -> None:
        self._pdf.setFont(style.font_name, style.font_size)
        self._pdf.setFillColor(style.color)
        if style.align == "center":
            self._pdf.drawCentredString(x, y, text)
        elif style.align == "right":
            self._pdf.drawRightString(x, y, text)
        else:
            self._pdf.drawString(x, y, text)

    def draw_image(self, image: Any, x: float, y: float, width: float, height: float) -> None:
        # Stretch to the exact rectangle: the image region is always filled edge to edge.
        self._pdf.drawImage(image, x, y, width, height, preserveAspectRatio=False, mask="auto")

    def measure_text(self, text: str, font_name: str, font_size: float) -> float:
        return pdfmetrics.stringWidth(text, font_name, font_size)

    def show_page(self) -> None:
        self._pdf.showPage()
        self.page_count += 1
