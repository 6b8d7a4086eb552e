from __future__ import annotations

from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, List, Optional

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def optional_float(value: Any) -> Optional[float]:
    """Normalize MySQL DECIMAL/NULL columns.

    mysql-connector returns DECIMAL as ``decimal.Decimal``; NULL stays ``None``
    so callers can tell "absent" from "zero".
    """

    if value is None:
        return None
    if isinstance(value, (Decimal, int, float)):
        return float(value)
    if isinstance(value, str):
        v = value.strip()
        return float(v) if v else None
    raise TypeError(f"Unsupported numeric value type: {type(value)!r}")
