from __future__ import annotations

from datetime import date
from typing import Any, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, optional_float
from .model import AttendanceRecord
from .repository import AttendanceRepository


def _parse_status(value: Any) -> AttendanceStatus:
    try:
        return AttendanceStatus(value)
    except ValueError:
        return AttendanceStatus.UNKNOWN


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_company_period(
        self,
        *,
        company_id: Optional[int],
        start_date: date,
        end_date: date,
        staff_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]

        if company_id is not None:
            clauses.append("company_id=%s")
            params.append(int(company_id))
        if staff_id is not None:
            clauses.append("staff_id=%s")
            params.append(int(staff_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    attendance_id, staff_id, company_id, work_date,
                    scheduled_check_out, actual_check_in, actual_check_out,
                    work_hours, base_pay, overtime_pay, night_pay, status
                FROM attendances
                WHERE {where}
                ORDER BY staff_id ASC, work_date ASC
                """,
                tuple(params),
            )
            rows = fetchall(cur)

            return [
                AttendanceRecord(
                    attendance_id=int(r["attendance_id"]),
                    staff_id=int(r["staff_id"]),
                    company_id=int(r["company_id"]),
                    work_date=r["work_date"],
                    scheduled_check_out=r.get("scheduled_check_out"),
                    actual_check_in=r.get("actual_check_in"),
                    actual_check_out=r.get("actual_check_out"),
                    work_hours=optional_float(r.get("work_hours")),
                    base_pay=optional_float(r.get("base_pay")),
                    overtime_pay=optional_float(r.get("overtime_pay")),
                    night_pay=optional_float(r.get("night_pay")),
                    status=_parse_status(r.get("status")),
                )
                for r in rows
            ]
