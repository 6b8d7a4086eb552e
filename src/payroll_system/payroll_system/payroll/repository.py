from __future__ import annotations

from datetime import date, datetime
from typing import Mapping, Optional, Protocol, Sequence

from ..core.enums import PayrollStatus
from .model import PayrollRecord


class PayrollRepository(Protocol):
    def get_by_key(self, *, staff_id: int, year: int, month: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def insert(self, record: PayrollRecord) -> int:
        """Insert and return the new payroll id."""

        raise NotImplementedError

    def update_computed(self, *, payroll_id: int, record: PayrollRecord) -> None:
        """Overwrite computed amounts and return the row to PENDING.

        ``confirmed_by``, ``confirmed_at`` and ``paid_at`` are cleared: changed
        amounts have to go through confirmation again.
        """

        raise NotImplementedError

    def update_status(
        self,
        *,
        payroll_id: int,
        expected: PayrollStatus,
        status: PayrollStatus,
        at: datetime,
        confirmed_by: Optional[int] = None,
    ) -> bool:
        """Compare-and-set on status; False when the row moved on meanwhile."""

        raise NotImplementedError

    def list_page(
        self,
        *,
        company_id: Optional[int] = None,
        staff_id: Optional[int] = None,
        year: Optional[int] = None,
        month: Optional[int] = None,
        status: Optional[PayrollStatus] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[Sequence[PayrollRecord], int]:
        """Rows newest period first, plus the total count before paging."""

        raise NotImplementedError


class LaborLawRepository(Protocol):
    def get_active_rate_values(self, *, as_of: date) -> Optional[Mapping[str, float]]:
        """``PayrollRates`` field values of the newest ACTIVE labor-law version
        effective on ``as_of``."""

        raise NotImplementedError
