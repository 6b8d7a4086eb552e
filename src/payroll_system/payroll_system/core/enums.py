from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles carried in the session by the external auth layer."""

    PLATFORM_ADMIN = "platform_admin"
    COMPANY_ADMIN = "company_admin"
    MANAGER = "manager"
    STAFF = "staff"


class AttendanceStatus(str, Enum):
    """Attendance status as stored in the attendances table."""

    NORMAL = "NORMAL"
    LATE = "LATE"
    EARLY_LEAVE = "EARLY_LEAVE"
    ABSENT = "ABSENT"
    UNSCHEDULED = "UNSCHEDULED"
    OVERTIME = "OVERTIME"
    UNKNOWN = "UNKNOWN"


class SalaryType(str, Enum):
    HOURLY = "HOURLY"
    DAILY = "DAILY"
    MONTHLY = "MONTHLY"


class PayrollStatus(str, Enum):
    """Payroll lifecycle: PENDING -> CONFIRMED -> PAID, no way back."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PAID = "PAID"


class WorkDayPolicy(str, Enum):
    """Which attendance rows count toward ``work_days``."""

    COUNT_ALL_RECORDS = "COUNT_ALL_RECORDS"
    COUNT_ATTENDED = "COUNT_ATTENDED"


PAYROLL_MANAGER_ROLES = frozenset({Role.PLATFORM_ADMIN, Role.COMPANY_ADMIN, Role.MANAGER})
