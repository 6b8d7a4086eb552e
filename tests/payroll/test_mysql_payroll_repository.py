from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from src.payroll_system.payroll_system.core.enums import PayrollStatus
from src.payroll_system.payroll_system.payroll.mysql_payroll_repository import (
    MySQLLaborLawRepository,
    MySQLPayrollRepository,
)
from tests.helpers import FakeConnFactory, FakeCursor, make_payroll


def _record():
    return make_payroll(
        7,
        company_id=3,
        base_salary=80000,
        overtime_pay=15000,
        night_pay=2000,
        total_gross_pay=97000,
        national_pension=4365,
        health_insurance=3439,
        long_term_care=445,
        employment_insurance=873,
        income_tax=2910,
        local_income_tax=291,
        total_deductions=12323,
        net_pay=84677,
        work_days=2,
        total_hours=17.5,
    )


def _row(**overrides):
    row = {
        "payroll_id": 11,
        "staff_id": 7,
        "company_id": 3,
        "year": 2025,
        "month": 1,
        "base_salary": Decimal("80000.00"),
        "overtime_pay": Decimal("15000.00"),
        "night_pay": Decimal("2000.00"),
        "holiday_pay": None,
        "weekly_holiday_pay": Decimal("0.00"),
        "meal_allowance": Decimal("0.00"),
        "transport_allowance": Decimal("0.00"),
        "position_allowance": Decimal("0.00"),
        "total_gross_pay": Decimal("97000.00"),
        "national_pension": 4365,
        "health_insurance": 3439,
        "long_term_care": 445,
        "employment_insurance": 873,
        "income_tax": 2910,
        "local_income_tax": 291,
        "total_deductions": 12323,
        "net_pay": Decimal("84677.00"),
        "work_days": 2,
        "total_hours": Decimal("17.50"),
        "status": "PAID",
        "confirmed_by": 1,
        "confirmed_at": datetime(2025, 2, 1, 9, 0),
        "paid_at": datetime(2025, 2, 5, 9, 0),
    }
    row.update(overrides)
    return row


def _bound_assignments(sql: str, params) -> dict:
    set_part = sql.split(" SET ", 1)[1].split(" WHERE ", 1)[0]
    pairs = [a.strip().split("=", 1) for a in set_part.split(",")]
    bound = [col for col, value in pairs if value == "%s"]
    return dict(zip(bound, params))


def test_insert_binds_every_column_to_its_value():
    factory = FakeConnFactory(FakeCursor(lastrowid=42))
    record = _record()

    new_id = MySQLPayrollRepository(factory).insert(record)

    assert new_id == 42
    sql, params = factory.cursor.executed[0]
    columns = sql[sql.index("(") + 1 : sql.index(")")].split(", ")
    assert sql.count("%s") == len(columns) == len(params)
    values = dict(zip(columns, params))
    assert values["staff_id"] == 7
    assert values["company_id"] == 3
    assert values["overtime_pay"] == 15000
    assert values["long_term_care"] == 445
    assert values["total_deductions"] == 12323
    assert values["net_pay"] == 84677
    assert values["total_hours"] == 17.5
    assert values["status"] == "PENDING"
    assert factory.conn.committed


def test_update_overwrites_amounts_and_reopens_the_row():
    factory = FakeConnFactory(FakeCursor())

    MySQLPayrollRepository(factory).update_computed(payroll_id=11, record=_record())

    sql, params = factory.cursor.executed[0]
    values = _bound_assignments(sql, params)
    assert values["net_pay"] == 84677
    assert values["income_tax"] == 2910
    assert values["work_days"] == 2
    assert values["status"] == "PENDING"
    for column in ("confirmed_by", "confirmed_at", "paid_at"):
        assert f"{column}=NULL" in sql
    assert sql.rstrip().endswith("WHERE payroll_id=%s")
    assert params[-1] == 11
    assert len(params) == sql.count("%s")


def test_get_by_key_maps_decimals_and_audit_fields():
    factory = FakeConnFactory(FakeCursor(one=[_row()]))

    rec = MySQLPayrollRepository(factory).get_by_key(staff_id=7, year=2025, month=1)

    assert rec.payroll_id == 11
    assert rec.key == (7, 2025, 1)
    assert rec.base_salary == 80000.0
    assert rec.holiday_pay == 0.0
    assert rec.total_hours == 17.5
    assert rec.net_pay == rec.total_gross_pay - rec.total_deductions
    assert rec.status == PayrollStatus.PAID
    assert rec.confirmed_by == 1
    assert rec.paid_at == datetime(2025, 2, 5, 9, 0)
    sql, params = factory.cursor.executed[0]
    assert "staff_id=%s AND year=%s AND month=%s" in sql
    assert params == (7, 2025, 1)


def test_get_by_id_missing_row_is_none():
    factory = FakeConnFactory(FakeCursor())

    assert MySQLPayrollRepository(factory).get_by_id(99) is None
    assert factory.cursor.executed[0][1] == (99,)


def test_confirm_is_guarded_by_expected_status():
    at = datetime(2025, 2, 1, 9, 0)
    factory = FakeConnFactory(FakeCursor(rowcount=1))

    ok = MySQLPayrollRepository(factory).update_status(
        payroll_id=11, expected=PayrollStatus.PENDING, status=PayrollStatus.CONFIRMED, at=at, confirmed_by=5
    )

    assert ok is True
    sql, params = factory.cursor.executed[0]
    assert "confirmed_by=%s" in sql and "AND status=%s" in sql
    assert params == ("CONFIRMED", 5, at, 11, "PENDING")


def test_status_change_reports_lost_race():
    at = datetime(2025, 2, 5, 9, 0)
    factory = FakeConnFactory(FakeCursor(rowcount=0))

    ok = MySQLPayrollRepository(factory).update_status(
        payroll_id=11, expected=PayrollStatus.CONFIRMED, status=PayrollStatus.PAID, at=at
    )

    assert ok is False
    sql, params = factory.cursor.executed[0]
    assert "paid_at=%s" in sql
    assert params == ("PAID", at, 11, "CONFIRMED")


def test_list_page_filters_counts_and_pages():
    factory = FakeConnFactory(FakeCursor(one=[{"total": 23}], many=[[_row()]]))

    rows, total = MySQLPayrollRepository(factory).list_page(
        company_id=3, status=PayrollStatus.PAID, offset=20, limit=10
    )

    assert total == 23
    assert [r.payroll_id for r in rows] == [11]
    (count_sql, count_params), (page_sql, page_params) = factory.cursor.executed
    assert "COUNT(*)" in count_sql
    assert "company_id=%s AND status=%s" in count_sql
    assert "staff_id=%s" not in count_sql
    assert count_params == (3, "PAID")
    assert "LIMIT %s OFFSET %s" in page_sql
    assert page_params == (3, "PAID", 10, 20)


def test_list_page_without_filters():
    factory = FakeConnFactory(FakeCursor(one=[{"total": 0}]))

    rows, total = MySQLPayrollRepository(factory).list_page()

    assert (list(rows), total) == ([], 0)
    count_sql, count_params = factory.cursor.executed[0]
    assert count_sql.rstrip().endswith("WHERE 1=1")
    assert count_params == ()


def test_labor_law_row_maps_to_rate_fields():
    factory = FakeConnFactory(
        FakeCursor(
            one=[
                {
                    "minimum_wage_hourly": Decimal("10320"),
                    "overtime_rate": Decimal("1.5"),
                    "night_rate": Decimal("0.5"),
                    "national_pension_rate": Decimal("0.0475"),
                    "health_insurance_rate": Decimal("0.03595"),
                    "long_term_care_rate": Decimal("0.1314"),
                    "employment_insurance_rate": Decimal("0.009"),
                }
            ]
        )
    )

    values = MySQLLaborLawRepository(factory).get_active_rate_values(as_of=date(2026, 1, 5))

    assert values["minimum_wage"] == Decimal("10320")
    assert values["overtime_multiplier"] == Decimal("1.5")
    assert values["long_term_care_rate"] == Decimal("0.1314")
    sql, params = factory.cursor.executed[0]
    assert "status='ACTIVE'" in sql and "effective_date <= %s" in sql
    assert params == (date(2026, 1, 5),)


def test_no_active_labor_law_is_none():
    factory = FakeConnFactory(FakeCursor())

    assert MySQLLaborLawRepository(factory).get_active_rate_values(as_of=date(2026, 1, 5)) is None
