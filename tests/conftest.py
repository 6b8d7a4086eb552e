from __future__ import annotations

from datetime import date, datetime

import pytest

from src.payroll_system.payroll_system.attendance.model import AttendanceRecord
from src.payroll_system.payroll_system.payroll.rates import PayrollRates
from tests.helpers import make_attendance


@pytest.fixture
def rates() -> PayrollRates:
    # Illustrative statutory rates; assertions derive amounts from these.
    return PayrollRates(
        minimum_wage=10030,
        monthly_work_hours=209,
        standard_daily_hours=8,
        overtime_multiplier=1.5,
        national_pension_rate=0.045,
        health_insurance_rate=0.03545,
        long_term_care_rate=0.1295,
        employment_insurance_rate=0.009,
        income_tax_rate=0.03,
        local_income_tax_rate=0.1,
    )


@pytest.fixture
def jan_checked_out_day() -> AttendanceRecord:
    return make_attendance(
        1,
        7,
        date(2025, 1, 6),
        actual_check_in=datetime(2025, 1, 6, 9, 0),
        actual_check_out=datetime(2025, 1, 6, 18, 0),
        work_hours=8,
        base_pay=80000,
        overtime_pay=0,
        night_pay=0,
    )
