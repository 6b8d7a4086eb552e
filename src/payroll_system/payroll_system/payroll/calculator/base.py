from __future__ import annotations

from abc import ABC, abstractmethod

from ...attendance.model import AttendanceRecord
from ..model import Deductions


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def normalize(self, record: AttendanceRecord, *, hourly_rate: float, standard_hours: float) -> AttendanceRecord:
        """Return the record with hours/pay usable for the monthly fold."""

        raise NotImplementedError

    @abstractmethod
    def deductions(self, gross_pay: float) -> Deductions:
        raise NotImplementedError
