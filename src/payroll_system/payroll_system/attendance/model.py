from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance row of a staff member for one work date.

    Pay/hour fields are ``None`` when upstream never computed them; the payroll
    fold treats ``None`` as 0 but keeps the distinction from an explicit 0.
    """

    attendance_id: int
    staff_id: int
    company_id: int
    work_date: date
    scheduled_check_out: Optional[datetime] = None
    actual_check_in: Optional[datetime] = None
    actual_check_out: Optional[datetime] = None
    work_hours: Optional[float] = None
    base_pay: Optional[float] = None
    overtime_pay: Optional[float] = None
    night_pay: Optional[float] = None
    status: AttendanceStatus = AttendanceStatus.NORMAL

    @property
    def attended(self) -> bool:
        return self.actual_check_in is not None or self.actual_check_out is not None
