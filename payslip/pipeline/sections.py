from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable, List, Optional, Tuple

from ..config import (
    BRAND_NAME,
    DEFAULT_GENERATED_BY,
    DISCLAIMER_TEXT,
    DOCUMENT_TITLE,
    NOT_AVAILABLE,
    PRODUCT_URL,
    LayoutConfig,
)
from ..records import PayrollRecord
from .formatting import (
    format_currency,
    format_payment_date,
    format_period,
    humanize_designation,
    or_default,
    truncated_id,
)
from .page import Page, line_height
from .table import amount_table_style, draw_amount_table
from .theme import ThemeRole


@dataclass(frozen=True)
class LayoutState:
    """Bottom edge (mm from the top) of the earnings/deductions tables."""

    table_end_y: Optional[float] = None

    def anchor(self, layout: LayoutConfig) -> float:
        if self.table_end_y is None:
            return layout.fallback_table_end_y
        return self.table_end_y

    def advance(self, y: float) -> "LayoutState":
        if self.table_end_y is not None and y < self.table_end_y:
            return self
        return replace(self, table_end_y=y)


@dataclass(frozen=True)
class SectionContext:
    record: PayrollRecord
    organization_name: str
    layout: LayoutConfig
    period: str = field(init=False)

    def __post_init__(self) -> None:
        period = format_period(
            self.record.payroll_month,
            self.layout.fallback_year,
            self.layout.fallback_month,
        )
        object.__setattr__(self, "period", period)

    def money(self, amount_text: str) -> str:
        return format_currency(amount_text, self.record.currency)

    def short_id(self, value: str) -> str:
        return truncated_id(value, self.layout.id_prefix_len)


Composer = Callable[[Page, SectionContext, LayoutState], LayoutState]


def compose_header(page: Page, ctx: SectionContext, state: LayoutState) -> LayoutState:
    layout = ctx.layout
    margin = layout.margin
    right_x = page.width - margin

    page.fill(ThemeRole.PRIMARY)
    page.rect(0, 0, page.width, layout.accent_bar_h)

    # logo block
    page.fill(ThemeRole.PRIMARY)
    page.round_rect(margin, 12, 32, 20, 3)
    page.fill(ThemeRole.WHITE)
    page.font(11, bold=True)
    page.text(margin + 3.5, 24, BRAND_NAME)

    page.fill(ThemeRole.DARK)
    page.font(16, bold=True)
    page.text(margin + 38, 22, ctx.organization_name)

    page.font(8)
    page.fill(ThemeRole.LIGHT_TEXT)
    page.text(margin + 38, 29, PRODUCT_URL)

    page.font(20, bold=True)
    page.fill(ThemeRole.PRIMARY)
    page.text(right_x, 20, DOCUMENT_TITLE, align="right")

    page.font(9)
    page.fill(ThemeRole.LIGHT_TEXT)
    page.text(right_x, 27, ctx.period, align="right")

    page.stroke(ThemeRole.BORDER, 0.6)
    page.line(margin, layout.header_divider_y, margin + layout.content_width, layout.header_divider_y)
    return state


def _labelled(page: Page, x: float, y: float, label: str, value: str, value_dx: float) -> None:
    page.font(8, bold=True)
    page.text(x, y, label)
    page.font(8)
    page.text(x + value_dx, y, value)


def compose_employee_info(page: Page, ctx: SectionContext, state: LayoutState) -> LayoutState:
    layout = ctx.layout
    record = ctx.record
    employee = record.employee
    start_y = layout.employee_info_y
    half_w = layout.content_width / 2 - 4

    page.fill(ThemeRole.SECTION_BG)
    page.round_rect(layout.margin, start_y, layout.content_width, layout.employee_panel_h, 3)

    left_x = layout.margin + 8
    y = start_y + 10
    page.font(8, bold=True)
    page.fill(ThemeRole.PRIMARY)
    page.text(left_x, y, "EMPLOYEE DETAILS")

    y += 7
    page.font(9)
    page.fill(ThemeRole.DARK)
    page.text(left_x, y, or_default(employee.name if employee else None))

    y += 5.5
    page.font(8)
    page.fill(ThemeRole.TEXT)
    page.text(left_x, y, or_default(employee.email if employee else None))

    y += 5.5
    page.text(left_x, y, humanize_designation(employee.designation if employee else None))

    right_x = layout.margin + half_w + 12
    y = start_y + 10
    page.font(8, bold=True)
    page.fill(ThemeRole.PRIMARY)
    page.text(right_x, y, "PAY INFORMATION")

    page.fill(ThemeRole.TEXT)
    y += 7
    _labelled(page, right_x, y, "Employee ID:", ctx.short_id(record.employee_id), 28)
    y += 5.5
    _labelled(page, right_x, y, "Pay Period:", ctx.period, 24)
    y += 5.5
    _labelled(page, right_x, y, "Currency:", or_default(record.currency), 20)
    return state


def earnings_rows(ctx: SectionContext) -> Tuple[List[Tuple[str, str]], Tuple[str, str]]:
    record = ctx.record
    rows = [
        ("Basic Salary", ctx.money(record.base_salary)),
        ("Bonuses", ctx.money(record.bonuses)),
        ("Allowances", ctx.money(record.allowances)),
    ]
    return rows, ("Total Earnings", ctx.money(record.gross_pay))


def deduction_rows(ctx: SectionContext) -> Tuple[List[Tuple[str, str]], Tuple[str, str]]:
    record = ctx.record
    tax_pct = or_default(record.tax_percentage, "0")
    rows = [
        (f"Tax ({tax_pct}%)", ctx.money(record.tax_deduction)),
        (f"Leave ({record.unpaid_leave_days} days)", ctx.money(record.leave_deduction)),
    ]
    return rows, ("Total Deductions", ctx.money(record.total_deductions))


def compose_earnings_deductions(page: Page, ctx: SectionContext, state: LayoutState) -> LayoutState:
    layout = ctx.layout
    start_y = layout.tables_y
    col_w = layout.content_width / 2 - layout.table_gap / 2
    right_x = layout.margin + col_w + layout.table_gap
    headers = ("Description", "Amount")

    page.font(9, bold=True)
    page.fill(ThemeRole.EARNINGS)
    page.text(layout.margin, start_y, "EARNINGS")
    rows, total = earnings_rows(ctx)
    earnings_end = draw_amount_table(
        page,
        layout.margin,
        start_y + 3,
        col_w,
        headers,
        rows,
        total,
        amount_table_style(ThemeRole.EARNINGS, ThemeRole.EARNINGS_BG),
    )

    page.font(9, bold=True)
    page.fill(ThemeRole.DEDUCTIONS)
    page.text(right_x, start_y, "DEDUCTIONS")
    rows, total = deduction_rows(ctx)
    deductions_end = draw_amount_table(
        page,
        right_x,
        start_y + 3,
        col_w,
        headers,
        rows,
        total,
        amount_table_style(ThemeRole.DEDUCTIONS, ThemeRole.DEDUCTIONS_BG),
    )

    return state.advance(max(earnings_end, deductions_end))


def breakdown_line(ctx: SectionContext) -> str:
    record = ctx.record
    return (
        f"Gross: {ctx.money(record.gross_pay)}  |  "
        f"Deductions: {ctx.money(record.total_deductions)}  |  "
        f"Working Days: {record.total_working_days}"
    )


def compose_net_pay(page: Page, ctx: SectionContext, state: LayoutState) -> LayoutState:
    layout = ctx.layout
    summary_y = state.anchor(layout) + layout.net_pay_offset

    page.fill(ThemeRole.PRIMARY)
    page.round_rect(layout.margin, summary_y, layout.content_width, layout.net_pay_panel_h, 3)

    page.font(12, bold=True)
    page.fill(ThemeRole.WHITE)
    page.text(layout.margin + 10, summary_y + 14, "NET PAY")

    page.font(16, bold=True)
    page.text(page.width - layout.margin - 10, summary_y + 14.5, ctx.money(ctx.record.net_pay), align="right")

    page.font(8)
    page.fill(ThemeRole.LIGHT_TEXT)
    page.text(page.width / 2, summary_y + layout.breakdown_offset, breakdown_line(ctx), align="center")
    # payment info and footer anchor on the table extent, not on this panel
    return state


def compose_payment_info(page: Page, ctx: SectionContext, state: LayoutState) -> LayoutState:
    record = ctx.record
    if not (record.payment_date or record.payment_reference):
        return state

    layout = ctx.layout
    info_y = state.anchor(layout) + layout.payment_info_offset

    page.font(8, bold=True)
    page.fill(ThemeRole.PRIMARY)
    page.text(layout.margin, info_y, "PAYMENT DETAILS")

    y = info_y + 7
    page.font(8)
    page.fill(ThemeRole.TEXT)
    if record.payment_date:
        page.text(layout.margin, y, f"Payment Date: {format_payment_date(record.payment_date)}")
        y += layout.line_gap
    if record.payment_reference:
        page.text(layout.margin, y, f"Reference: {record.payment_reference}")
    return state


def footer_attribution(organization_name: str) -> str:
    return f"{organization_name} - Powered by {BRAND_NAME}"


def compose_footer(page: Page, ctx: SectionContext, state: LayoutState) -> LayoutState:
    layout = ctx.layout
    record = ctx.record
    margin = layout.margin
    footer_y = layout.footer_y
    right_x = page.width - margin

    if record.notes:
        notes_y = footer_y - layout.notes_offset
        page.font(7, bold=True)
        page.fill(ThemeRole.DARK)
        page.text(margin, notes_y, "Notes:")

        page.font(7)
        page.fill(ThemeRole.TEXT)
        lh = line_height(7)
        for i, line in enumerate(page.wrap(record.notes, layout.content_width)):
            page.text(margin, notes_y + layout.line_gap + i * lh, line)

    page.fill(ThemeRole.PRIMARY)
    page.rect(0, page.height - layout.accent_bar_h, page.width, layout.accent_bar_h)

    page.stroke(ThemeRole.BORDER, 0.3)
    page.line(margin, footer_y - 4, right_x, footer_y - 4)

    page.font(7)
    page.fill(ThemeRole.LIGHT_TEXT)
    page.text(margin, footer_y, DISCLAIMER_TEXT)

    generated_by = DEFAULT_GENERATED_BY
    if record.generated_by and record.generated_by.name:
        generated_by = record.generated_by.name
    page.text(
        margin,
        footer_y + layout.line_gap,
        f"Generated by: {generated_by}  |  Payslip ID: {ctx.short_id(record.id) or NOT_AVAILABLE}",
    )

    company = footer_attribution(ctx.organization_name)
    page.text(right_x - page.string_width(company), footer_y, company)

    page.fill(ThemeRole.PRIMARY)
    page.text(right_x - page.string_width(PRODUCT_URL), footer_y + layout.line_gap, PRODUCT_URL)
    return state


SECTIONS: List[Tuple[str, Composer]] = [
    ("header", compose_header),
    ("employee_info", compose_employee_info),
    ("earnings_deductions", compose_earnings_deductions),
    ("net_pay", compose_net_pay),
    ("payment_info", compose_payment_info),
    ("footer", compose_footer),
]
