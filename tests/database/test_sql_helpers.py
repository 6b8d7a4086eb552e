from __future__ import annotations

from decimal import Decimal

import pytest

from src.payroll_system.payroll_system.database.bootstrap import (
    SCHEMA_PATH,
    SEED_PATH,
    _strip_create_db_and_use,
    iter_sql_statements,
)
from src.payroll_system.payroll_system.database.connection import DBConfig
from src.payroll_system.payroll_system.database.mysql_base import optional_float
from src.payroll_system.payroll_system.payroll.mysql_payroll_repository import _COMPUTED_COLUMNS


def test_statements_split_outside_quotes():
    sql = "INSERT INTO t VALUES ('a;b'); SELECT \"x;y\";\nSELECT 1"

    assert list(iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        'SELECT "x;y"',
        "SELECT 1",
    ]


def test_create_database_use_and_comments_are_stripped():
    sql = "CREATE DATABASE IF NOT EXISTS foo;\nUSE foo;\n-- note\nCREATE TABLE t (id INT);"

    assert list(iter_sql_statements(_strip_create_db_and_use(sql))) == ["CREATE TABLE t (id INT)"]


@pytest.mark.parametrize(
    "value, expected",
    [(None, None), (Decimal("12.50"), 12.5), (3, 3.0), ("7.25", 7.25), ("  ", None)],
)
def test_optional_float(value, expected):
    assert optional_float(value) == expected


def test_optional_float_rejects_other_types():
    with pytest.raises(TypeError):
        optional_float(object())


def test_db_config_from_mapping_defaults():
    cfg = DBConfig.from_mapping({"host": "db", "password": "pw"})

    assert cfg == DBConfig(host="db", port=3306, user="root", password="pw", database="payroll_db")
    assert cfg.describe() == "root@db:3306/payroll_db"


def test_sql_files_ship_beside_bootstrap():
    assert SCHEMA_PATH.parent == SEED_PATH.parent
    assert SCHEMA_PATH.parent.name == "database"
    assert SEED_PATH.is_file()

    statements = list(iter_sql_statements(_strip_create_db_and_use(SCHEMA_PATH.read_text(encoding="utf-8"))))
    payrolls = next(s for s in statements if "CREATE TABLE IF NOT EXISTS payrolls" in s)

    assert len([s for s in statements if s.lstrip().upper().startswith("CREATE TABLE")]) == 4
    assert "UNIQUE KEY uq_payrolls_staff_period (staff_id, year, month)" in payrolls
    for column in (*_COMPUTED_COLUMNS, "status", "confirmed_by", "confirmed_at", "paid_at"):
        assert f"\n    {column} " in payrolls
