from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional, Sequence

from ..core.enums import PayrollStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, optional_float
from .model import PayrollRecord
from .repository import LaborLawRepository, PayrollRepository

# Amount columns written on every (re)calculation, in statement order.
_COMPUTED_COLUMNS = (
    "company_id",
    "base_salary",
    "overtime_pay",
    "night_pay",
    "holiday_pay",
    "weekly_holiday_pay",
    "meal_allowance",
    "transport_allowance",
    "position_allowance",
    "total_gross_pay",
    "national_pension",
    "health_insurance",
    "long_term_care",
    "employment_insurance",
    "income_tax",
    "local_income_tax",
    "total_deductions",
    "net_pay",
    "work_days",
    "total_hours",
)

_SELECT = f"""
    SELECT payroll_id, staff_id, year, month, {", ".join(_COMPUTED_COLUMNS)},
           status, confirmed_by, confirmed_at, paid_at
    FROM payrolls
"""


def _computed_values(record: PayrollRecord) -> list[Any]:
    return [getattr(record, col) for col in _COMPUTED_COLUMNS]


def _to_record(r: Dict[str, Any]) -> PayrollRecord:
    return PayrollRecord(
        payroll_id=int(r["payroll_id"]),
        staff_id=int(r["staff_id"]),
        company_id=int(r["company_id"]) if r.get("company_id") is not None else None,
        year=int(r["year"]),
        month=int(r["month"]),
        base_salary=optional_float(r["base_salary"]) or 0.0,
        overtime_pay=optional_float(r["overtime_pay"]) or 0.0,
        night_pay=optional_float(r["night_pay"]) or 0.0,
        holiday_pay=optional_float(r["holiday_pay"]) or 0.0,
        weekly_holiday_pay=optional_float(r["weekly_holiday_pay"]) or 0.0,
        meal_allowance=optional_float(r["meal_allowance"]) or 0.0,
        transport_allowance=optional_float(r["transport_allowance"]) or 0.0,
        position_allowance=optional_float(r["position_allowance"]) or 0.0,
        total_gross_pay=optional_float(r["total_gross_pay"]) or 0.0,
        national_pension=int(r["national_pension"] or 0),
        health_insurance=int(r["health_insurance"] or 0),
        long_term_care=int(r["long_term_care"] or 0),
        employment_insurance=int(r["employment_insurance"] or 0),
        income_tax=int(r["income_tax"] or 0),
        local_income_tax=int(r["local_income_tax"] or 0),
        total_deductions=int(r["total_deductions"] or 0),
        net_pay=optional_float(r["net_pay"]) or 0.0,
        work_days=int(r["work_days"] or 0),
        total_hours=optional_float(r["total_hours"]) or 0.0,
        status=PayrollStatus(r["status"]),
        confirmed_by=int(r["confirmed_by"]) if r.get("confirmed_by") is not None else None,
        confirmed_at=r.get("confirmed_at"),
        paid_at=r.get("paid_at"),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_key(self, *, staff_id: int, year: int, month: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE staff_id=%s AND year=%s AND month=%s",
                (int(staff_id), int(year), int(month)),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE payroll_id=%s", (int(payroll_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def insert(self, record: PayrollRecord) -> int:
        columns = ("staff_id", "year", "month", *_COMPUTED_COLUMNS, "status")
        values = [record.staff_id, record.year, record.month, *_computed_values(record), record.status.value]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO payrolls({', '.join(columns)}) VALUES({', '.join(['%s'] * len(columns))})",
                tuple(values),
            )
            return int(cur.lastrowid)

    def update_computed(self, *, payroll_id: int, record: PayrollRecord) -> None:
        assignments = ", ".join(f"{col}=%s" for col in _COMPUTED_COLUMNS)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE payrolls SET {assignments}, status=%s, confirmed_by=NULL, confirmed_at=NULL, paid_at=NULL "
                "WHERE payroll_id=%s",
                (*_computed_values(record), PayrollStatus.PENDING.value, int(payroll_id)),
            )

    def update_status(
        self,
        *,
        payroll_id: int,
        expected: PayrollStatus,
        status: PayrollStatus,
        at: datetime,
        confirmed_by: Optional[int] = None,
    ) -> bool:
        if status == PayrollStatus.CONFIRMED:
            sql = "UPDATE payrolls SET status=%s, confirmed_by=%s, confirmed_at=%s WHERE payroll_id=%s AND status=%s"
            params: tuple = (status.value, confirmed_by, at, int(payroll_id), expected.value)
        else:
            sql = "UPDATE payrolls SET status=%s, paid_at=%s WHERE payroll_id=%s AND status=%s"
            params = (status.value, at, int(payroll_id), expected.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return cur.rowcount > 0

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
        clauses = ["1=1"]
        params: list[object] = []

        if company_id is not None:
            clauses.append("company_id=%s")
            params.append(int(company_id))
        if staff_id is not None:
            clauses.append("staff_id=%s")
            params.append(int(staff_id))
        if year is not None:
            clauses.append("year=%s")
            params.append(int(year))
        if month is not None:
            clauses.append("month=%s")
            params.append(int(month))
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM payrolls WHERE {where}", tuple(params))
            total = int((fetchone(cur) or {}).get("total") or 0)

            cur.execute(
                _SELECT + f" WHERE {where} ORDER BY year DESC, month DESC, staff_id ASC LIMIT %s OFFSET %s",
                (*params, int(limit), int(offset)),
            )
            rows = fetchall(cur)

        return [_to_record(r) for r in rows], total


class MySQLLaborLawRepository(LaborLawRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_active_rate_values(self, *, as_of: date) -> Optional[Mapping[str, float]]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT minimum_wage_hourly, overtime_rate, night_rate,
                       national_pension_rate, health_insurance_rate,
                       long_term_care_rate, employment_insurance_rate
                FROM labor_law_versions
                WHERE status='ACTIVE' AND effective_date <= %s
                ORDER BY effective_date DESC
                LIMIT 1
                """,
                (as_of,),
            )
            r = fetchone(cur)

        if not r:
            return None
        return {
            "minimum_wage": r["minimum_wage_hourly"],
            "overtime_multiplier": r["overtime_rate"],
            "night_multiplier": r["night_rate"],
            "national_pension_rate": r["national_pension_rate"],
            "health_insurance_rate": r["health_insurance_rate"],
            "long_term_care_rate": r["long_term_care_rate"],
            "employment_insurance_rate": r["employment_insurance_rate"],
        }
