from __future__ import annotations

import logging
from typing import Iterable, Mapping

from ..core.enums import SalaryType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, optional_float
from .model import ContractRate
from .repository import ContractRepository

logger = logging.getLogger(__name__)


class MySQLContractRepository(ContractRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_active_for_staff(self, staff_ids: Iterable[int]) -> Mapping[int, ContractRate]:
        ids = sorted({int(s) for s in staff_ids})
        if not ids:
            return {}

        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT staff_id, base_salary_type, base_salary_amount, standard_hours_per_day
                FROM contracts
                WHERE status='ACTIVE' AND staff_id IN ({placeholders})
                ORDER BY staff_id ASC, created_at DESC
                """,
                tuple(ids),
            )
            rows = fetchall(cur)

        out: dict[int, ContractRate] = {}
        for r in rows:
            staff_id = int(r["staff_id"])
            if staff_id in out:
                continue
            try:
                salary_type = SalaryType(str(r["base_salary_type"]).upper())
            except ValueError:
                # Unknown pay basis: leave the staff on the minimum-wage fallback.
                logger.warning("staff %s has unknown salary type %r", staff_id, r["base_salary_type"])
                continue
            out[staff_id] = ContractRate(
                staff_id=staff_id,
                base_salary_type=salary_type,
                base_salary_amount=float(r["base_salary_amount"] or 0),
                standard_hours_per_day=optional_float(r.get("standard_hours_per_day")),
            )
        return out
