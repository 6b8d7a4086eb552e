from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_company_period(
        self,
        *,
        company_id: Optional[int],
        start_date: date,
        end_date: date,
        staff_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        """Rows with ``start_date <= work_date <= end_date``.

        ``company_id=None`` means every company (platform admin runs).
        """

        raise NotImplementedError
