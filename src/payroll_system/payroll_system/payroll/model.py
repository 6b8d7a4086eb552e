from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import PayrollStatus


@dataclass(frozen=True)
class StaffMonthlyTotals:
    """Result of folding one staff member's attendance for one month."""

    staff_id: int
    work_days: int = 0
    total_hours: float = 0.0
    base_pay: float = 0.0
    overtime_pay: float = 0.0
    night_pay: float = 0.0

    @property
    def gross_pay(self) -> float:
        return self.base_pay + self.overtime_pay + self.night_pay


@dataclass(frozen=True)
class Deductions:
    national_pension: int
    health_insurance: int
    long_term_care: int
    employment_insurance: int
    income_tax: int
    local_income_tax: int

    @property
    def total(self) -> int:
        return (
            self.national_pension
            + self.health_insurance
            + self.long_term_care
            + self.employment_insurance
            + self.income_tax
            + self.local_income_tax
        )


@dataclass(frozen=True)
class PayrollRecord:
    """One staff member's payroll for one month, unique on (staff_id, year, month)."""

    staff_id: int
    company_id: Optional[int]
    year: int
    month: int
    base_salary: float
    overtime_pay: float
    night_pay: float
    total_gross_pay: float
    national_pension: int
    health_insurance: int
    long_term_care: int
    employment_insurance: int
    income_tax: int
    local_income_tax: int
    total_deductions: int
    net_pay: float
    work_days: int
    total_hours: float
    holiday_pay: float = 0
    weekly_holiday_pay: float = 0
    meal_allowance: float = 0
    transport_allowance: float = 0
    position_allowance: float = 0
    status: PayrollStatus = PayrollStatus.PENDING
    payroll_id: Optional[int] = None
    confirmed_by: Optional[int] = None
    confirmed_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None

    @property
    def key(self) -> tuple[int, int, int]:
        return (self.staff_id, self.year, self.month)

    def to_dict(self) -> dict:
        return {
            "id": self.payroll_id,
            "staff_id": self.staff_id,
            "company_id": self.company_id,
            "year": self.year,
            "month": self.month,
            "base_salary": self.base_salary,
            "overtime_pay": self.overtime_pay,
            "night_pay": self.night_pay,
            "holiday_pay": self.holiday_pay,
            "weekly_holiday_pay": self.weekly_holiday_pay,
            "meal_allowance": self.meal_allowance,
            "transport_allowance": self.transport_allowance,
            "position_allowance": self.position_allowance,
            "total_gross_pay": self.total_gross_pay,
            "national_pension": self.national_pension,
            "health_insurance": self.health_insurance,
            "long_term_care": self.long_term_care,
            "employment_insurance": self.employment_insurance,
            "income_tax": self.income_tax,
            "local_income_tax": self.local_income_tax,
            "total_deductions": self.total_deductions,
            "net_pay": self.net_pay,
            "work_days": self.work_days,
            "total_hours": self.total_hours,
            "status": self.status.value,
            "confirmed_by": self.confirmed_by,
            "confirmed_at": self.confirmed_at.isoformat() if self.confirmed_at else None,
            "paid_at": self.paid_at.isoformat() if self.paid_at else None,
        }


@dataclass(frozen=True)
class PayrollFailure:
    staff_id: int
    error: str


@dataclass(frozen=True)
class PayrollRunResult:
    year: int
    month: int
    records: list[PayrollRecord] = field(default_factory=list)
    failures: list[PayrollFailure] = field(default_factory=list)

    @property
    def message(self) -> str:
        return f"{len(self.records)}명의 급여가 계산되었습니다."


@dataclass(frozen=True)
class PayrollPage:
    data: list[PayrollRecord]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return -(-self.total // self.limit) if self.limit else 0
