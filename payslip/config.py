from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm


BASE_DIR = Path(__file__).resolve().parents[1]
OUT_DIR = Path(os.environ.get("PAYSLIP_OUT_DIR", BASE_DIR / "out"))
DB_PATH = OUT_DIR / "payslips.db"

BRAND_NAME = "Simplifiiq"
PRODUCT_URL = "hr.simplifiiq.com"
DOCUMENT_TITLE = "PAYSLIP"
DISCLAIMER_TEXT = "This is a system-generated payslip and does not require a signature."

DEFAULT_ORGANIZATION = "Organization"
DEFAULT_GENERATED_BY = "System"
NOT_AVAILABLE = "N/A"

PAYROLL_LINK_URL = "/payroll"


@dataclass(frozen=True)
class LayoutConfig:
    """
    Page geometry and fixed offsets of the payslip, in millimetres measured
    from the top-left corner of the page.
    """

    page_width: float = A4[0] / mm
    page_height: float = A4[1] / mm
    margin: float = 18.0

    accent_bar_h: float = 4.0
    header_divider_y: float = 38.0
    employee_info_y: float = 46.0
    employee_panel_h: float = 36.0
    tables_y: float = 90.0
    table_gap: float = 6.0

    net_pay_offset: float = 12.0
    net_pay_panel_h: float = 22.0
    breakdown_offset: float = 28.0
    payment_info_offset: float = 48.0
    fallback_table_end_y: float = 160.0

    footer_offset: float = 28.0
    notes_offset: float = 18.0
    line_gap: float = 5.0

    fallback_year: int = 2024
    fallback_month: int = 1
    id_prefix_len: int = 8

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin

    @property
    def footer_y(self) -> float:
        return self.page_height - self.footer_offset


DEFAULT_LAYOUT = LayoutConfig()


def set_out_dir(path: Path) -> None:
    global OUT_DIR, DB_PATH
    OUT_DIR = Path(path)
    DB_PATH = OUT_DIR / "payslips.db"
