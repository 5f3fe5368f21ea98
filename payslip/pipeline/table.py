from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .page import PT, Page, line_height
from .theme import ThemeRole


Row = Tuple[str, str]


@dataclass(frozen=True)
class BandStyle:
    text: ThemeRole
    font_size: float = 8.0
    bold: bool = False
    padding: float = 3.0
    fill: Optional[ThemeRole] = None
    # cell borders, body rows only in the payslip
    rule: Optional[ThemeRole] = None
    rule_width: float = 0.2


@dataclass(frozen=True)
class TableStyle:
    head: BandStyle
    body: BandStyle
    foot: BandStyle
    label_ratio: float = 0.6


def amount_table_style(accent: ThemeRole, tint: ThemeRole) -> TableStyle:
    """Header and total rows tinted with the section colour, plain bordered body."""
    return TableStyle(
        head=BandStyle(text=accent, fill=tint, bold=True, font_size=8),
        body=BandStyle(text=ThemeRole.TEXT, font_size=8, rule=ThemeRole.BORDER),
        foot=BandStyle(text=accent, fill=tint, bold=True, font_size=9),
    )


def row_height(page: Page, row: Row, width: float, band: BandStyle, label_ratio: float) -> float:
    label_w = width * label_ratio
    page.font(band.font_size, band.bold)
    label_lines = page.wrap(row[0], label_w - 2 * band.padding)
    amount_lines = page.wrap(row[1], width - label_w - 2 * band.padding)
    lines = max(len(label_lines), len(amount_lines))
    return lines * line_height(band.font_size) + 2 * band.padding


def _draw_row(page: Page, x: float, y: float, width: float, row: Row, band: BandStyle, label_ratio: float) -> float:
    label_w = width * label_ratio
    amount_w = width - label_w
    h = row_height(page, row, width, band, label_ratio)

    if band.fill is not None:
        page.fill(band.fill)
        page.rect(x, y, width, h)

    if band.rule is not None:
        page.stroke(band.rule, band.rule_width)
        page.rect(x, y, label_w, h, fill=False, stroke=True)
        page.rect(x + label_w, y, amount_w, h, fill=False, stroke=True)

    page.fill(band.text)
    page.font(band.font_size, band.bold)
    lh = line_height(band.font_size)
    baseline = y + band.padding + band.font_size * PT * 0.8

    for i, line in enumerate(page.wrap(row[0], label_w - 2 * band.padding)):
        page.text(x + band.padding, baseline + i * lh, line)
    for i, line in enumerate(page.wrap(row[1], amount_w - 2 * band.padding)):
        page.text(x + width - band.padding, baseline + i * lh, line, align="right")

    return y + h


def draw_amount_table(
    page: Page,
    x: float,
    y_top: float,
    width: float,
    headers: Row,
    rows: Sequence[Row],
    footer: Optional[Row],
    style: TableStyle,
) -> float:
    """
    Draw a (label, amount) table with its top-left corner at (x, y_top).

    Returns the Y coordinate just below the last row, so the caller can chain
    the next element under it. Two calls at different x on the same y_top are
    independent of each other.
    """
    y = _draw_row(page, x, y_top, width, headers, style.head, style.label_ratio)
    for row in rows:
        y = _draw_row(page, x, y, width, row, style.body, style.label_ratio)
    if footer is not None:
        y = _draw_row(page, x, y, width, footer, style.foot, style.label_ratio)
    return y
