from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable, Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_range, now_local
from ..common.validators import require_int, require_year_month
from ..contracts.repository import ContractRepository
from ..core.constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from ..core.enums import PAYROLL_MANAGER_ROLES, PayrollStatus, Role, WorkDayPolicy
from ..core.exceptions import AuthorizationError, InvalidTransitionError, NotFoundError, ValidationError
from .aggregator import fold_staff_month, group_by_staff
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PayrollFailure, PayrollPage, PayrollRecord, PayrollRunResult
from .rate_resolver import check_minimum_wage, resolve_hourly_rate
from .rates import PayrollRates
from .rates_provider import LaborLawRatesProvider
from .repository import PayrollRepository

logger = logging.getLogger(__name__)

NO_ATTENDANCE_MESSAGE = "해당 월의 출퇴근 기록이 없습니다."
PAYROLL_NOT_FOUND_MESSAGE = "급여 정보를 찾을 수 없습니다."


@dataclass(frozen=True)
class Viewer:
    """Acting user as put into the session by the auth layer."""

    user_id: int
    role: Role
    company_id: Optional[int] = None

    @property
    def manages_payroll(self) -> bool:
        return self.role in PAYROLL_MANAGER_ROLES


class PayrollService:
    """Use cases: monthly payroll calculation, listing and status changes."""

    def __init__(
        self,
        payrolls: PayrollRepository,
        attendance: AttendanceRepository,
        contracts: ContractRepository,
        *,
        rates: Optional[LaborLawRatesProvider] = None,
        calculator_factory: Callable[[PayrollRates], PayrollCalculator] = StandardPayrollCalculator,
        work_day_policy: WorkDayPolicy = WorkDayPolicy.COUNT_ALL_RECORDS,
    ):
        self._payrolls = payrolls
        self._attendance = attendance
        self._contracts = contracts
        self._rates = rates or LaborLawRatesProvider(None)
        self._calculator_factory = calculator_factory
        self._work_day_policy = work_day_policy

    @staticmethod
    def _require_manager(viewer: Viewer) -> None:
        if not viewer.manages_payroll:
            raise AuthorizationError("급여를 관리할 권한이 없습니다.")

    @staticmethod
    def _scope_company(viewer: Viewer, company_id: Optional[int]) -> Optional[int]:
        # Only platform admins may act on another company (or on all of them).
        if viewer.role == Role.PLATFORM_ADMIN:
            return company_id if company_id is not None else viewer.company_id
        return viewer.company_id

    def compute_monthly(
        self,
        *,
        company_id: Optional[int],
        year: int,
        month: int,
        staff_id: Optional[int] = None,
    ) -> list[PayrollRecord]:
        """Pure part of a run: attendance in, payroll candidates out (nothing stored)."""
        start, end = month_range(year, month)
        attendances = self._attendance.get_for_company_period(
            company_id=company_id, start_date=start, end_date=end, staff_id=staff_id
        )
        if not attendances:
            raise ValidationError(NO_ATTENDANCE_MESSAGE)

        groups = group_by_staff(attendances)
        contracts = self._contracts.get_active_for_staff(groups.keys())
        rates = self._rates.get()
        calculator = self._calculator_factory(rates)

        candidates: list[PayrollRecord] = []
        for sid, records in groups.items():
            resolved = resolve_hourly_rate(contracts.get(sid), rates)
            if resolved.from_contract:
                wage_check = check_minimum_wage(resolved.hourly_rate, rates)
                if not wage_check.is_compliant:
                    logger.warning(
                        "staff %s hourly rate %.0f is %.0f below minimum wage",
                        sid,
                        resolved.hourly_rate,
                        -wage_check.difference,
                    )

            normalized = [
                calculator.normalize(r, hourly_rate=resolved.hourly_rate, standard_hours=resolved.standard_hours)
                for r in records
            ]
            totals = fold_staff_month(sid, normalized, policy=self._work_day_policy)
            gross_pay = totals.gross_pay
            deductions = calculator.deductions(gross_pay)

            candidates.append(
                PayrollRecord(
                    staff_id=sid,
                    company_id=company_id if company_id is not None else records[0].company_id,
                    year=year,
                    month=month,
                    base_salary=totals.base_pay,
                    overtime_pay=totals.overtime_pay,
                    night_pay=totals.night_pay,
                    total_gross_pay=gross_pay,
                    national_pension=deductions.national_pension,
                    health_insurance=deductions.health_insurance,
                    long_term_care=deductions.long_term_care,
                    employment_insurance=deductions.employment_insurance,
                    income_tax=deductions.income_tax,
                    local_income_tax=deductions.local_income_tax,
                    total_deductions=deductions.total,
                    net_pay=gross_pay - deductions.total,
                    work_days=totals.work_days,
                    total_hours=totals.total_hours,
                )
            )
        return candidates

    def upsert(self, candidate: PayrollRecord) -> PayrollRecord:
        """Insert or overwrite the payroll of (staff, year, month).

        Recalculation replaces the amounts, keeps the id and sends the row
        back to PENDING with the confirm/pay audit fields cleared.
        """

        fresh = replace(
            candidate,
            status=PayrollStatus.PENDING,
            payroll_id=None,
            confirmed_by=None,
            confirmed_at=None,
            paid_at=None,
        )
        existing = self._payrolls.get_by_key(staff_id=candidate.staff_id, year=candidate.year, month=candidate.month)
        if existing:
            if existing.status != PayrollStatus.PENDING:
                logger.warning(
                    "payroll %s was %s; recalculation returns it to PENDING", existing.payroll_id, existing.status.value
                )
            self._payrolls.update_computed(payroll_id=existing.payroll_id, record=fresh)
            return replace(fresh, payroll_id=existing.payroll_id)

        payroll_id = self._payrolls.insert(fresh)
        return replace(fresh, payroll_id=payroll_id)

    def preview_monthly(
        self,
        *,
        viewer: Viewer,
        year,
        month,
        staff_id: Optional[int] = None,
        company_id: Optional[int] = None,
    ) -> list[PayrollRecord]:
        self._require_manager(viewer)
        y, m = require_year_month(year, month)
        return self.compute_monthly(
            company_id=self._scope_company(viewer, company_id), year=y, month=m, staff_id=staff_id
        )

    def calculate_monthly(
        self,
        *,
        viewer: Viewer,
        year,
        month,
        staff_id: Optional[int] = None,
        company_id: Optional[int] = None,
    ) -> PayrollRunResult:
        self._require_manager(viewer)
        y, m = require_year_month(year, month)
        candidates = self.compute_monthly(
            company_id=self._scope_company(viewer, company_id), year=y, month=m, staff_id=staff_id
        )

        records: list[PayrollRecord] = []
        failures: list[PayrollFailure] = []
        for candidate in candidates:
            try:
                records.append(self.upsert(candidate))
            except Exception as e:
                # One staff member's write must not abort the rest of the run.
                logger.exception("payroll upsert failed for staff %s (%s-%02d)", candidate.staff_id, y, m)
                failures.append(PayrollFailure(staff_id=candidate.staff_id, error=str(e)))

        logger.info("payroll %s-%02d: %s saved, %s failed", y, m, len(records), len(failures))
        return PayrollRunResult(year=y, month=m, records=records, failures=failures)

    def list_payrolls(
        self,
        *,
        viewer: Viewer,
        staff_id: Optional[int] = None,
        year: Optional[int] = None,
        month: Optional[int] = None,
        status: Optional[str] = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_LIMIT,
    ) -> PayrollPage:
        page = max(1, int(page))
        limit = min(max(1, int(limit)), MAX_PAGE_LIMIT)

        try:
            status_filter = PayrollStatus(status.upper()) if status else None
        except ValueError:
            raise ValidationError("급여 상태 값이 올바르지 않습니다.")

        company_id: Optional[int] = None
        if viewer.role == Role.PLATFORM_ADMIN:
            pass
        elif viewer.manages_payroll:
            company_id = viewer.company_id
        else:
            if staff_id is not None and int(staff_id) != viewer.user_id:
                return PayrollPage(data=[], page=page, limit=limit, total=0)
            staff_id = viewer.user_id

        rows, total = self._payrolls.list_page(
            company_id=company_id,
            staff_id=staff_id,
            year=year,
            month=month,
            status=status_filter,
            offset=(page - 1) * limit,
            limit=limit,
        )
        return PayrollPage(data=list(rows), page=page, limit=limit, total=total)

    def _load_for_change(self, viewer: Viewer, payroll_id) -> PayrollRecord:
        self._require_manager(viewer)
        record = self._payrolls.get_by_id(require_int(payroll_id, "payroll_id"))
        if not record:
            raise NotFoundError(PAYROLL_NOT_FOUND_MESSAGE)
        if viewer.role != Role.PLATFORM_ADMIN and record.company_id != viewer.company_id:
            raise NotFoundError(PAYROLL_NOT_FOUND_MESSAGE)
        return record

    def _transition(
        self,
        record: PayrollRecord,
        *,
        expected: PayrollStatus,
        status: PayrollStatus,
        at: datetime,
        confirmed_by: Optional[int] = None,
    ) -> None:
        if record.status != expected:
            raise InvalidTransitionError(
                f"{record.status.value} 상태의 급여는 {status.value}(으)로 변경할 수 없습니다."
            )
        ok = self._payrolls.update_status(
            payroll_id=record.payroll_id, expected=expected, status=status, at=at, confirmed_by=confirmed_by
        )
        if not ok:
            raise InvalidTransitionError("급여 상태가 이미 변경되었습니다.")

    def confirm(self, *, viewer: Viewer, payroll_id, now: Optional[datetime] = None) -> PayrollRecord:
        now = now or now_local()
        record = self._load_for_change(viewer, payroll_id)
        self._transition(
            record,
            expected=PayrollStatus.PENDING,
            status=PayrollStatus.CONFIRMED,
            at=now,
            confirmed_by=viewer.user_id,
        )
        logger.info("payroll %s confirmed by %s", record.payroll_id, viewer.user_id)
        return replace(record, status=PayrollStatus.CONFIRMED, confirmed_by=viewer.user_id, confirmed_at=now)

    def mark_paid(self, *, viewer: Viewer, payroll_id, now: Optional[datetime] = None) -> PayrollRecord:
        now = now or now_local()
        record = self._load_for_change(viewer, payroll_id)
        self._transition(record, expected=PayrollStatus.CONFIRMED, status=PayrollStatus.PAID, at=now)
        logger.info("payroll %s marked paid", record.payroll_id)
        return replace(record, status=PayrollStatus.PAID, paid_at=now)

