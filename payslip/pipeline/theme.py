from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping, NamedTuple

from reportlab.lib import colors


class RGB(NamedTuple):
    r: int
    g: int
    b: int


class ThemeRole(str, Enum):
    PRIMARY = "primary"
    PRIMARY_DARK = "primary_dark"
    ACCENT = "accent"
    DARK = "dark"
    TEXT = "text"
    LIGHT_TEXT = "light_text"
    SECTION_BG = "section_bg"
    WHITE = "white"
    BORDER = "border"
    EARNINGS = "earnings"
    EARNINGS_BG = "earnings_bg"
    DEDUCTIONS = "deductions"
    DEDUCTIONS_BG = "deductions_bg"
    NET_PAY_BG = "net_pay_bg"


BRAND: Mapping[ThemeRole, RGB] = MappingProxyType(
    {
        ThemeRole.PRIMARY: RGB(15, 82, 186),
        ThemeRole.PRIMARY_DARK: RGB(10, 60, 140),
        ThemeRole.ACCENT: RGB(45, 156, 219),
        ThemeRole.DARK: RGB(30, 30, 40),
        ThemeRole.TEXT: RGB(55, 55, 70),
        ThemeRole.LIGHT_TEXT: RGB(120, 120, 140),
        ThemeRole.SECTION_BG: RGB(245, 247, 252),
        ThemeRole.WHITE: RGB(255, 255, 255),
        ThemeRole.BORDER: RGB(220, 225, 235),
        ThemeRole.EARNINGS: RGB(16, 124, 65),
        ThemeRole.EARNINGS_BG: RGB(240, 253, 244),
        ThemeRole.DEDUCTIONS: RGB(185, 28, 28),
        ThemeRole.DEDUCTIONS_BG: RGB(254, 242, 242),
        ThemeRole.NET_PAY_BG: RGB(238, 242, 255),
    }
)


def color(role: ThemeRole) -> colors.Color:
    rgb = BRAND[role]
    return colors.Color(rgb.r / 255.0, rgb.g / 255.0, rgb.b / 255.0)
