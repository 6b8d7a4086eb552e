from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.money import round_won
from ..contracts.model import ContractRate
from ..core.enums import SalaryType
from .rates import PayrollRates


@dataclass(frozen=True)
class ResolvedRate:
    hourly_rate: float
    standard_hours: float
    from_contract: bool


@dataclass(frozen=True)
class MinimumWageCheck:
    is_compliant: bool
    difference: float


def standard_hours_for(contract: Optional[ContractRate], rates: PayrollRates) -> float:
    if contract and contract.standard_hours_per_day:
        return float(contract.standard_hours_per_day)
    return float(rates.standard_daily_hours)


def resolve_hourly_rate(contract: Optional[ContractRate], rates: PayrollRates) -> ResolvedRate:
    """Hourly rate from the staff member's contract, or minimum wage without one."""
    standard_hours = standard_hours_for(contract, rates)
    if contract is None:
        return ResolvedRate(hourly_rate=float(rates.minimum_wage), standard_hours=standard_hours, from_contract=False)

    amount = float(contract.base_salary_amount)
    if contract.base_salary_type == SalaryType.MONTHLY:
        hourly = float(round_won(amount / rates.monthly_work_hours))
    elif contract.base_salary_type == SalaryType.DAILY:
        hourly = float(round_won(amount / standard_hours))
    else:
        hourly = amount

    return ResolvedRate(hourly_rate=hourly, standard_hours=standard_hours, from_contract=True)


def check_minimum_wage(hourly_rate: float, rates: PayrollRates) -> MinimumWageCheck:
    difference = hourly_rate - rates.minimum_wage
    return MinimumWageCheck(is_compliant=difference >= 0, difference=difference)
