from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta
from typing import Optional

from ...attendance.model import AttendanceRecord
from ...common.money import round_won
from ..model import Deductions
from ..rates import PayrollRates
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Statutory Korean payroll with a flat income-tax approximation.

    Records with a recorded checkout are trusted as computed upstream. A
    missing checkout is closed at the scheduled checkout, or at check-in plus
    the standard daily hours, before break time is deducted.
    """

    def __init__(self, rates: Optional[PayrollRates] = None):
        self._rates = rates or PayrollRates()

    @property
    def rates(self) -> PayrollRates:
        return self._rates

    def break_hours(self, raw_hours: float) -> float:
        if raw_hours >= self._rates.full_day_hours:
            return self._rates.full_day_break_hours
        if raw_hours >= self._rates.half_day_hours:
            return self._rates.half_day_break_hours
        return 0.0

    def effective_checkout(self, record: AttendanceRecord, *, standard_hours: float) -> datetime:
        if record.scheduled_check_out is not None:
            return record.scheduled_check_out
        return record.actual_check_in + timedelta(hours=standard_hours)

    def normalize(self, record: AttendanceRecord, *, hourly_rate: float, standard_hours: float) -> AttendanceRecord:
        if record.actual_check_out is not None or record.actual_check_in is None:
            return record

        checkout = self.effective_checkout(record, standard_hours=standard_hours)
        raw_hours = max(0.0, (checkout - record.actual_check_in).total_seconds() / 3600)
        work_hours = max(0.0, raw_hours - self.break_hours(raw_hours))
        overtime_hours = max(0.0, work_hours - standard_hours)

        return replace(
            record,
            work_hours=work_hours,
            base_pay=min(work_hours, standard_hours) * hourly_rate,
            overtime_pay=overtime_hours * hourly_rate * self._rates.overtime_multiplier,
        )

    def deductions(self, gross_pay: float) -> Deductions:
        r = self._rates
        # Order matters: long-term care is levied on the health premium and
        # local income tax on income tax, both after rounding.
        national_pension = round_won(gross_pay * r.national_pension_rate)
        health_insurance = round_won(gross_pay * r.health_insurance_rate)
        long_term_care = round_won(health_insurance * r.long_term_care_rate)
        employment_insurance = round_won(gross_pay * r.employment_insurance_rate)
        income_tax = round_won(gross_pay * r.income_tax_rate)
        local_income_tax = round_won(income_tax * r.local_income_tax_rate)

        return Deductions(
            national_pension=national_pension,
            health_insurance=health_insurance,
            long_term_care=long_term_care,
            employment_insurance=employment_insurance,
            income_tax=income_tax,
            local_income_tax=local_income_tax,
        )
