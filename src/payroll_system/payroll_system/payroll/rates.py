from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

from ..core import constants as c
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class PayrollRates:
    """Statutory rates and working-time constants used by one payroll run.

    Passed explicitly to every calculation so a run can be reproduced with the
    rates of another year or jurisdiction.
    """

    minimum_wage: float = c.DEFAULT_MINIMUM_WAGE
    monthly_work_hours: float = c.MONTHLY_WORK_HOURS
    standard_daily_hours: float = c.DAILY_WORK_HOURS
    full_day_hours: float = c.FULL_DAY_HOURS
    half_day_hours: float = c.HALF_DAY_HOURS
    full_day_break_hours: float = c.FULL_DAY_BREAK_HOURS
    half_day_break_hours: float = c.HALF_DAY_BREAK_HOURS
    overtime_multiplier: float = c.OVERTIME_MULTIPLIER
    night_multiplier: float = c.NIGHT_MULTIPLIER
    national_pension_rate: float = c.NATIONAL_PENSION_RATE
    health_insurance_rate: float = c.HEALTH_INSURANCE_RATE
    long_term_care_rate: float = c.LONG_TERM_CARE_RATE
    employment_insurance_rate: float = c.EMPLOYMENT_INSURANCE_RATE
    income_tax_rate: float = c.INCOME_TAX_RATE
    local_income_tax_rate: float = c.LOCAL_INCOME_TAX_RATE

    def __post_init__(self):
        if self.monthly_work_hours <= 0 or self.standard_daily_hours <= 0:
            raise ValidationError("monthly_work_hours and standard_daily_hours must be positive")

    @classmethod
    def field_names(cls) -> frozenset[str]:
        return frozenset(f.name for f in fields(cls))

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any] | None, *, base: "PayrollRates" | None = None) -> "PayrollRates":
        """Overlay ``values`` on ``base`` (defaults when omitted).

        Unknown keys are rejected so a typo in settings does not silently fall
        back to a default rate.
        """

        base = base or cls()
        if not values:
            return base

        unknown = set(values) - cls.field_names()
        if unknown:
            raise ValidationError(f"Unknown payroll rate keys: {', '.join(sorted(unknown))}")

        try:
            overrides = {k: float(v) for k, v in values.items() if v is not None}
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Invalid payroll rate value: {e}")
        return replace(base, **overrides)
