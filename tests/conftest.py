from __future__ import annotations

from pathlib import Path

import pytest
from reportlab.pdfbase import pdfmetrics

from payslip import config
from payslip.models import reset_engine


ACME_RECORD = {
    "id": "a1b2c3d4-0000-4000-8000-000000000001",
    "employeeId": "e5f6a7b8-0000-4000-8000-000000000002",
    "payrollMonth": "2024-06",
    "currency": "USD",
    "baseSalary": "5000",
    "bonuses": "200",
    "allowances": "0",
    "grossPay": "5200",
    "taxPercentage": "10",
    "taxDeduction": "500",
    "unpaidLeaveDays": 0,
    "leaveDeduction": "0",
    "totalDeductions": "500",
    "netPay": "4700",
    "totalWorkingDays": 22,
    "employee": {
        "userId": "user-42",
        "designation": "software_engineer",
        "user": {"name": "Jane Doe", "email": "jane@acme.test"},
    },
}


class RecordingCanvas:
    """Stands in for a reportlab canvas and records every drawing call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple, dict]] = []

    def stringWidth(self, text: str, font_name: str, font_size: float) -> float:  # noqa: N802 - reportlab API
        return pdfmetrics.stringWidth(text, font_name, font_size)

    def __getattr__(self, name: str):
        def record(*args, **kwargs) -> None:
            self.calls.append((name, args, kwargs))

        return record

    def texts(self) -> list[str]:
        return [
            args[2]
            for name, args, _ in self.calls
            if name in {"drawString", "drawRightString", "drawCentredString"}
        ]


@pytest.fixture
def acme_dict() -> dict:
    return {**ACME_RECORD, "employee": {**ACME_RECORD["employee"]}}


@pytest.fixture
def recorder() -> RecordingCanvas:
    return RecordingCanvas()


@pytest.fixture
def out_dir(tmp_path: Path):
    previous = config.OUT_DIR
    config.set_out_dir(tmp_path / "out")
    reset_engine()
    yield config.OUT_DIR
    config.set_out_dir(previous)
    reset_engine()
