from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional

from src.payroll_system.payroll_system.attendance.model import AttendanceRecord
from src.payroll_system.payroll_system.contracts.model import ContractRate
from src.payroll_system.payroll_system.core.enums import PayrollStatus
from src.payroll_system.payroll_system.payroll.model import PayrollRecord


class FakeAttendanceRepo:
    def __init__(self, rows):
        self._rows = list(rows)
        self.last_args = None

    def get_for_company_period(self, *, company_id, start_date: date, end_date: date, staff_id=None):
        self.last_args = {
            "company_id": company_id,
            "start_date": start_date,
            "end_date": end_date,
            "staff_id": staff_id,
        }
        return [
            r
            for r in self._rows
            if start_date <= r.work_date <= end_date
            and (company_id is None or r.company_id == company_id)
            and (staff_id is None or r.staff_id == staff_id)
        ]


class FakeContractRepo:
    def __init__(self, contracts: Optional[dict[int, ContractRate]] = None):
        self._contracts = contracts or {}

    def get_active_for_staff(self, staff_ids):
        return {sid: self._contracts[sid] for sid in staff_ids if sid in self._contracts}


class InMemoryPayrolls:
    def __init__(self, *, fail_for: tuple[int, ...] = ()):
        self._by_id: dict[int, PayrollRecord] = {}
        self._id = 0
        self._fail_for = set(fail_for)
        self.inserts = 0
        self.updates = 0

    def all(self) -> list[PayrollRecord]:
        return list(self._by_id.values())

    def get_by_key(self, *, staff_id: int, year: int, month: int) -> Optional[PayrollRecord]:
        for r in self._by_id.values():
            if r.key == (staff_id, year, month):
                return r
        return None

    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        return self._by_id.get(int(payroll_id))

    def insert(self, record: PayrollRecord) -> int:
        if record.staff_id in self._fail_for:
            raise RuntimeError("connection lost")
        self._id += 1
        self.inserts += 1
        self._by_id[self._id] = replace(record, payroll_id=self._id)
        return self._id

    def update_computed(self, *, payroll_id: int, record: PayrollRecord) -> None:
        if record.staff_id in self._fail_for:
            raise RuntimeError("connection lost")
        self.updates += 1
        self._by_id[payroll_id] = replace(
            record,
            payroll_id=payroll_id,
            status=PayrollStatus.PENDING,
            confirmed_by=None,
            confirmed_at=None,
            paid_at=None,
        )

    def update_status(self, *, payroll_id, expected, status, at, confirmed_by=None) -> bool:
        current = self._by_id.get(int(payroll_id))
        if not current or current.status != expected:
            return False
        if status == PayrollStatus.CONFIRMED:
            self._by_id[current.payroll_id] = replace(current, status=status, confirmed_by=confirmed_by, confirmed_at=at)
        else:
            self._by_id[current.payroll_id] = replace(current, status=status, paid_at=at)
        return True

    def list_page(self, *, company_id=None, staff_id=None, year=None, month=None, status=None, offset=0, limit=20):
        rows = [
            r
            for r in self._by_id.values()
            if (company_id is None or r.company_id == company_id)
            and (staff_id is None or r.staff_id == staff_id)
            and (year is None or r.year == year)
            and (month is None or r.month == month)
            and (status is None or r.status == status)
        ]
        rows.sort(key=lambda r: (-r.year, -r.month, r.staff_id))
        return rows[offset : offset + limit], len(rows)


def make_attendance(
    attendance_id: int,
    staff_id: int,
    work_date: date,
    *,
    company_id: int = 1,
    **fields,
) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=attendance_id,
        staff_id=staff_id,
        company_id=company_id,
        work_date=work_date,
        **fields,
    )


def make_payroll(staff_id: int, *, company_id: int = 1, year: int = 2025, month: int = 1, **fields) -> PayrollRecord:
    values = dict(
        staff_id=staff_id,
        company_id=company_id,
        year=year,
        month=month,
        base_salary=80000,
        overtime_pay=0,
        night_pay=0,
        total_gross_pay=80000,
        national_pension=0,
        health_insurance=0,
        long_term_care=0,
        employment_insurance=0,
        income_tax=0,
        local_income_tax=0,
        total_deductions=0,
        net_pay=80000,
        work_days=1,
        total_hours=8,
    )
    values.update(fields)
    return PayrollRecord(**values)


class FakeCursor:
    """Records statements and answers fetches from queued results."""

    def __init__(self, *, one=(), many=(), rowcount: int = 1, lastrowid: int = 0):
        self._one = list(one)
        self._many = list(many)
        self.rowcount = rowcount
        self.lastrowid = lastrowid
        self.executed = []

    def execute(self, sql, params=()):
        self.executed.append((sql, params))

    def fetchone(self):
        return self._one.pop(0) if self._one else None

    def fetchall(self):
        return self._many.pop(0) if self._many else []

    def close(self):
        pass


class FakeConn:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False

    def cursor(self, dictionary=False):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        pass


class FakeConnFactory:
    def __init__(self, cursor: FakeCursor):
        self.cursor = cursor
        self.conn = FakeConn(cursor)

    def connect(self):
        return self.conn
