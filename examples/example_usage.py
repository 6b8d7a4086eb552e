"""Example: use the service layer directly (no Flask).

Previews January 2025 payroll for company 1 without storing anything.
"""

import importlib

from config import get_settings_module

from src.payroll_system.payroll_system.container import build_container
from src.payroll_system.payroll_system.core.enums import Role
from src.payroll_system.payroll_system.payroll.service import Viewer


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, rates=settings.PAYROLL_RATES)
    viewer = Viewer(user_id=1, role=Role.COMPANY_ADMIN, company_id=1)
    for record in container.payroll_service.preview_monthly(viewer=viewer, year=2025, month=1):
        print(record.to_dict())


if __name__ == "__main__":
    main()
