from __future__ import annotations

from typing import Iterable

from ..attendance.model import AttendanceRecord
from ..core.enums import WorkDayPolicy
from .model import StaffMonthlyTotals


def group_by_staff(records: Iterable[AttendanceRecord]) -> dict[int, list[AttendanceRecord]]:
    """Staff id -> records, in the order staff ids are first seen."""
    groups: dict[int, list[AttendanceRecord]] = {}
    for r in records:
        groups.setdefault(r.staff_id, []).append(r)
    return groups


def counts_as_work_day(record: AttendanceRecord, policy: WorkDayPolicy) -> bool:
    if policy == WorkDayPolicy.COUNT_ATTENDED:
        return record.attended
    return True


def fold_staff_month(
    staff_id: int,
    records: Iterable[AttendanceRecord],
    *,
    policy: WorkDayPolicy = WorkDayPolicy.COUNT_ALL_RECORDS,
) -> StaffMonthlyTotals:
    work_days = 0
    total_hours = 0.0
    base_pay = 0.0
    overtime_pay = 0.0
    night_pay = 0.0

    for r in records:
        if counts_as_work_day(r, policy):
            work_days += 1
        total_hours += r.work_hours or 0
        base_pay += r.base_pay or 0
        overtime_pay += r.overtime_pay or 0
        night_pay += r.night_pay or 0

    return StaffMonthlyTotals(
        staff_id=staff_id,
        work_days=work_days,
        total_hours=total_hours,
        base_pay=base_pay,
        overtime_pay=overtime_pay,
        night_pay=night_pay,
    )
