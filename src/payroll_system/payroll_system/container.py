from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .contracts.mysql_contract_repository import MySQLContractRepository
from .contracts.repository import ContractRepository
from .core.constants import DEFAULT_PAGE_LIMIT
from .core.enums import WorkDayPolicy
from .database.connection import DatabaseConnection, DBConfig
from .payroll.mysql_payroll_repository import MySQLLaborLawRepository, MySQLPayrollRepository
from .payroll.rates import PayrollRates
from .payroll.rates_provider import LaborLawRatesProvider
from .payroll.repository import PayrollRepository
from .payroll.service import PayrollService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    attendance_repo: AttendanceRepository
    contracts_repo: ContractRepository
    payrolls_repo: PayrollRepository

    rates_provider: LaborLawRatesProvider
    payroll_service: PayrollService

    page_limit: int = DEFAULT_PAGE_LIMIT


def build_container(
    *,
    db_config: Mapping[str, Any],
    rates: Optional[Mapping[str, Any]] = None,
    work_day_policy: str | WorkDayPolicy = WorkDayPolicy.COUNT_ALL_RECORDS,
    page_limit: int = DEFAULT_PAGE_LIMIT,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    attendance_repo = MySQLAttendanceRepository(conn)
    contracts_repo = MySQLContractRepository(conn)
    payrolls_repo = MySQLPayrollRepository(conn)

    rates_provider = LaborLawRatesProvider(
        MySQLLaborLawRepository(conn),
        defaults=PayrollRates.from_mapping(rates),
    )
    payroll_service = PayrollService(
        payrolls_repo,
        attendance_repo,
        contracts_repo,
        rates=rates_provider,
        work_day_policy=WorkDayPolicy(work_day_policy),
    )

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        contracts_repo=contracts_repo,
        payrolls_repo=payrolls_repo,
        rates_provider=rates_provider,
        payroll_service=payroll_service,
        page_limit=int(page_limit),
    )
