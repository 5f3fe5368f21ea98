from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .errors import RecordFormatError


def _pick(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


def _text(value: Any, default: Optional[str] = None) -> Optional[str]:
    if value is None:
        return default
    text = str(value).strip()
    return text if text else default


def _int(value: Any, default: int = 0) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(str(value).strip())
    except ValueError:
        pass
    try:
        return int(float(str(value).strip()))
    except (ValueError, OverflowError):
        return default


@dataclass(frozen=True)
class EmployeeProfile:
    name: Optional[str] = None
    email: Optional[str] = None
    designation: Optional[str] = None
    user_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> Optional["EmployeeProfile"]:
        if not isinstance(data, Mapping):
            return None
        # API payloads nest the login identity under "user"
        user = data.get("user") if isinstance(data.get("user"), Mapping) else {}
        return cls(
            name=_text(_pick(user, "name") or _pick(data, "name")),
            email=_text(_pick(user, "email") or _pick(data, "email")),
            designation=_text(_pick(data, "designation")),
            user_id=_text(_pick(data, "userId", "user_id") or _pick(user, "id")),
        )


@dataclass(frozen=True)
class PayrollRecord:
    """
    One employee's pay for one calendar month.

    Monetary fields stay as decimal text; they are parsed only when formatted
    for display.
    """

    id: str
    employee_id: str
    payroll_month: str = ""
    currency: str = "USD"

    base_salary: str = "0"
    bonuses: str = "0"
    allowances: str = "0"
    gross_pay: str = "0"
    tax_percentage: str = "0"
    tax_deduction: str = "0"
    unpaid_leave_days: int = 0
    leave_deduction: str = "0"
    total_deductions: str = "0"
    net_pay: str = "0"
    total_working_days: int = 0

    employee: Optional[EmployeeProfile] = None
    generated_by: Optional[EmployeeProfile] = None

    payment_date: Optional[str] = None
    payment_reference: Optional[str] = None
    notes: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any, source: Optional[str] = None) -> "PayrollRecord":
        """Build a record from the camelCase API shape or snake_case keys."""
        if not isinstance(data, Mapping):
            raise RecordFormatError(f"expected an object, got {type(data).__name__}", source)

        record_id = _text(_pick(data, "id"))
        employee_id = _text(_pick(data, "employeeId", "employee_id"))
        if not record_id:
            raise RecordFormatError("missing id", source)
        if not employee_id:
            raise RecordFormatError("missing employeeId", source)

        def amount(*keys: str) -> str:
            return _text(_pick(data, *keys), "0")

        return cls(
            id=record_id,
            employee_id=employee_id,
            payroll_month=_text(_pick(data, "payrollMonth", "payroll_month"), ""),
            currency=_text(_pick(data, "currency"), "USD"),
            base_salary=amount("baseSalary", "base_salary"),
            bonuses=amount("bonuses"),
            allowances=amount("allowances"),
            gross_pay=amount("grossPay", "gross_pay"),
            tax_percentage=amount("taxPercentage", "tax_percentage"),
            tax_deduction=amount("taxDeduction", "tax_deduction"),
            unpaid_leave_days=_int(_pick(data, "unpaidLeaveDays", "unpaid_leave_days")),
            leave_deduction=amount("leaveDeduction", "leave_deduction"),
            total_deductions=amount("totalDeductions", "total_deductions"),
            net_pay=amount("netPay", "net_pay"),
            total_working_days=_int(_pick(data, "totalWorkingDays", "total_working_days")),
            employee=EmployeeProfile.from_dict(_pick(data, "employee")),
            generated_by=EmployeeProfile.from_dict(
                _pick(data, "generatedByEmployee", "generated_by_employee", "generated_by")
            ),
            payment_date=_text(_pick(data, "paymentDate", "payment_date")),
            payment_reference=_text(_pick(data, "paymentReference", "payment_reference")),
            notes=_text(_pick(data, "notes")),
        )

    @property
    def employee_name(self) -> Optional[str]:
        return self.employee.name if self.employee else None

    @property
    def employee_user_id(self) -> Optional[str]:
        return self.employee.user_id if self.employee else None
