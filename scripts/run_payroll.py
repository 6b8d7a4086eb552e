"""Run a monthly payroll calculation without Flask.

Usage: python scripts/run_payroll.py <company_id> <year> <month> [staff_id]
"""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.payroll_system.payroll_system.container import build_container
from src.payroll_system.payroll_system.core.enums import Role
from src.payroll_system.payroll_system.core.exceptions import DomainError
from src.payroll_system.payroll_system.payroll.service import Viewer


def main(argv: list[str]) -> int:
    if len(argv) not in (3, 4):
        print(__doc__.strip().splitlines()[-1])
        return 2

    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s [%(name)s] %(message)s")

    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=settings.DB_CONFIG,
        rates=getattr(settings, "PAYROLL_RATES", None),
        work_day_policy=getattr(settings, "PAYROLL_WORK_DAY_POLICY", "COUNT_ALL_RECORDS"),
    )

    company_id, year, month = (int(a) for a in argv[:3])
    staff_id = int(argv[3]) if len(argv) == 4 else None

    # Runs with platform-admin scope so the company id given on the command line is used.
    viewer = Viewer(user_id=0, role=Role.PLATFORM_ADMIN, company_id=company_id)
    try:
        result = container.payroll_service.calculate_monthly(
            viewer=viewer, year=year, month=month, staff_id=staff_id, company_id=company_id
        )
    except DomainError as e:
        print(f"ERROR: {e}")
        return 1

    print(result.message)
    for r in result.records:
        print(f"  staff={r.staff_id} gross={r.total_gross_pay:,.0f} deductions={r.total_deductions:,} net={r.net_pay:,.0f}")
    for f in result.failures:
        print(f"  FAILED staff={f.staff_id}: {f.error}")
    return 1 if result.failures else 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
