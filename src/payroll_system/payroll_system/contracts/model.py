from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import SalaryType


@dataclass(frozen=True)
class ContractRate:
    """Salary configuration of a staff member's active contract."""

    staff_id: int
    base_salary_type: SalaryType
    base_salary_amount: float
    standard_hours_per_day: Optional[float] = None
