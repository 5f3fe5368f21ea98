from __future__ import annotations

from typing import List

from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from ..config import LayoutConfig
from .theme import ThemeRole, color


FONT_REGULAR = "Helvetica"
FONT_BOLD = "Helvetica-Bold"

# points -> millimetres
PT = 25.4 / 72.0
LINE_HEIGHT_FACTOR = 1.15


def line_height(font_size: float) -> float:
    return font_size * LINE_HEIGHT_FACTOR * PT


class Page:
    """
    Millimetre, top-down view of a reportlab canvas.

    Composers place everything with (x, y) measured from the top-left corner
    of the page; reportlab measures from the bottom-left in points.
    """

    def __init__(self, canv: canvas.Canvas, layout: LayoutConfig) -> None:
        self.canv = canv
        self.layout = layout
        self.width = layout.page_width
        self.height = layout.page_height
        self._font = FONT_REGULAR
        self._size = 10.0

    def _y(self, y: float) -> float:
        return (self.height - y) * mm

    def fill(self, role: ThemeRole) -> None:
        self.canv.setFillColor(color(role))

    def stroke(self, role: ThemeRole, width: float) -> None:
        self.canv.setStrokeColor(color(role))
        self.canv.setLineWidth(width * mm)

    def font(self, size: float, bold: bool = False) -> None:
        self._font = FONT_BOLD if bold else FONT_REGULAR
        self._size = float(size)
        self.canv.setFont(self._font, self._size)

    def rect(self, x: float, y: float, w: float, h: float, fill: bool = True, stroke: bool = False) -> None:
        self.canv.rect(x * mm, self._y(y + h), w * mm, h * mm, stroke=int(stroke), fill=int(fill))

    def round_rect(self, x: float, y: float, w: float, h: float, radius: float) -> None:
        self.canv.roundRect(x * mm, self._y(y + h), w * mm, h * mm, radius=radius * mm, stroke=0, fill=1)

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self.canv.line(x1 * mm, self._y(y1), x2 * mm, self._y(y2))

    def text(self, x: float, y: float, text: str, align: str = "left") -> None:
        if align == "right":
            self.canv.drawRightString(x * mm, self._y(y), text)
        elif align == "center":
            self.canv.drawCentredString(x * mm, self._y(y), text)
        else:
            self.canv.drawString(x * mm, self._y(y), text)

    def string_width(self, text: str) -> float:
        """Width of text in the current font, in millimetres."""
        return self.canv.stringWidth(text, self._font, self._size) / mm

    def wrap(self, text: str, max_width: float) -> List[str]:
        lines = simpleSplit(text or "", self._font, self._size, max_width * mm)
        return lines or [""]
