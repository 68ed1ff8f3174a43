from __future__ import annotations

import calendar
import io
import logging
from datetime import date, timedelta
from typing import Any, Iterable, Optional, Sequence

import pandas as pd

from ..attendance.service import AttendanceService
from ..businesses.model import Business
from ..businesses.service import BusinessService
from ..common.datetime_utils import now_local, parse_iso_date
from ..common.money import format_inr, parse_amount
from ..common.validators import optional_choice, require_uuid
from ..core.constants import STANDARD_DAYS_IN_MONTH, WEEKDAY_NAMES
from ..core.enums import (
    AdjustmentType,
    CalculationMethod,
    EntryFilter,
    EntryStatus,
    PaymentStatus,
    PaymentType,
    PayoutChannel,
    PayrollBasis,
    PayrollTab,
    WageType,
)
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..payments.model import Payment
from ..payments.service import PaymentService
from .calculator.factory import PayrollCalculatorFactory
from .model import PayrollAdjustment, PayrollContext, PayrollEntry, PayrollTotals

logger = logging.getLogger(__name__)


def net_pay(base_amount: float, adjustments: Iterable[PayrollAdjustment]) -> float:
    """base + additions - deductions, never below zero."""
    total = base_amount
    for a in adjustments:
        if a.adjustment_type is AdjustmentType.ADDITION:
            total += a.amount
        else:
            total -= a.amount
    return max(0.0, total)


def payout_channel(employee: Employee) -> tuple[PayoutChannel, EntryStatus]:
    details = employee.payment_details
    if details is not None and details.is_cash:
        return PayoutChannel.CASH, EntryStatus.READY
    if details is not None and details.upi_id:
        return PayoutChannel.UPI, EntryStatus.READY
    if details is not None and details.account_number:
        return PayoutChannel.BANK, EntryStatus.READY
    return PayoutChannel.CASH, EntryStatus.MISSING_DETAILS


def days_in_cycle(method: CalculationMethod, period_end: date, weekly_offs: Sequence[str] = ()) -> int:
    if method is CalculationMethod.FIXED_30_DAYS:
        return STANDARD_DAYS_IN_MONTH

    month_days = calendar.monthrange(period_end.year, period_end.month)[1]
    if method is CalculationMethod.CALENDAR_MONTH:
        return month_days

    offs = set(weekly_offs)
    working = sum(
        1
        for day in range(1, month_days + 1)
        if WEEKDAY_NAMES[date(period_end.year, period_end.month, day).weekday()] not in offs
    )
    return max(working, 1)


def period_start(method: CalculationMethod, period_end: date) -> date:
    if method is CalculationMethod.FIXED_30_DAYS:
        return period_end - timedelta(days=STANDARD_DAYS_IN_MONTH - 1)
    return period_end.replace(day=1)


def _in_tab(entry: PayrollEntry, tab: Optional[PayrollTab]) -> bool:
    if tab is None:
        return True
    if tab is PayrollTab.MONTHLY:
        return entry.wage_type is WageType.MONTHLY
    return entry.wage_type.is_daily


def _id_set(value: Any, field_name: str) -> set[str]:
    if value is None:
        return set()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValidationError(f"{field_name} must be a list of ids")
    return set(value)


def _entries(value: Any) -> list[PayrollEntry]:
    if not isinstance(value, list):
        raise ValidationError("entries must be a list")
    return [PayrollEntry.from_dict(e) for e in value]


def _is_cash_paid(entry: PayrollEntry, cash_paid_ids: set[str]) -> bool:
    return entry.payment_mode is PayoutChannel.CASH and entry.employee_id in cash_paid_ids


class PayrollService:
    """Use cases: payroll drafts, totals and finalization into salary payments."""

    def __init__(
        self,
        employees: EmployeeRepository,
        business_service: BusinessService,
        attendance_service: AttendanceService,
        payment_service: PaymentService,
        *,
        calculator_factory: Optional[PayrollCalculatorFactory] = None,
    ):
        self._employees = employees
        self._business_service = business_service
        self._attendance = attendance_service
        self._payments = payment_service
        self._factory = calculator_factory or PayrollCalculatorFactory()

    def build_draft(
        self,
        business_id: Any,
        *,
        basis: Optional[str] = None,
        period_end: Optional[str] = None,
        tab: Optional[str] = None,
        today: Optional[date] = None,
    ) -> list[PayrollEntry]:
        business = self._business_service.get(require_uuid(business_id, "businessId"))
        basis_value = optional_choice(basis, PayrollBasis, "basis") or PayrollBasis.FLAT
        tab_value = optional_choice(tab, PayrollTab, "tab")
        end = parse_iso_date(period_end) if period_end else (today or now_local().date())

        calculator = self._factory.for_basis(basis_value)
        entries = [
            self._entry(business, employee, calculator, end, load_records=basis_value is PayrollBasis.ATTENDANCE)
            for employee in self._employees.list(business_id=business.business_id)
        ]
        logger.info(
            "payroll draft for business %s: %d entries (basis=%s, period_end=%s)",
            business.business_id,
            len(entries),
            basis_value.value,
            end,
        )
        return [e for e in entries if _in_tab(e, tab_value)]

    def _entry(self, business: Business, employee: Employee, calculator, end: date, *, load_records: bool) -> PayrollEntry:
        method = (
            business.salary_config.calculation_method if business.salary_config else CalculationMethod.FIXED_30_DAYS
        )
        start = period_start(method, end)
        shift = self._attendance.effective_shift(employee, business)
        ctx = PayrollContext(
            employee=employee,
            shift=shift,
            has_assigned_shift=shift.shift_id is not None,
            records=self._attendance.records(employee.employee_id, start, end) if load_records else [],
            period_start=start,
            period_end=end,
            days_in_cycle=days_in_cycle(method, end, employee.weekly_offs),
        )
        result = calculator.calculate(ctx)

        adjustments = list(result.additions)
        advances = sum(p.amount for p in self._payments.completed_advances(employee.employee_id, start, end))
        result.stats.pending_advance = advances
        if advances > 0:
            adjustments.append(
                PayrollAdjustment(
                    adjustment_id="auto-advance-deduction",
                    adjustment_type=AdjustmentType.DEDUCTION,
                    label="Less Advance",
                    amount=advances,
                )
            )

        channel, status = payout_channel(employee)
        return PayrollEntry(
            employee_id=employee.employee_id,
            employee_name=employee.full_name,
            wage_type=employee.effective_wage_type,
            base_amount=result.base_amount,
            adjustments=adjustments,
            net_pay=net_pay(result.base_amount, adjustments),
            payment_mode=channel,
            status=status,
            stats=result.stats,
        )

    def recompute_net_pay(self, payload: dict) -> dict:
        adjustments = payload.get("adjustments") or []
        if not isinstance(adjustments, list):
            raise ValidationError("adjustments must be a list of objects")
        parsed = [PayrollAdjustment.from_dict(a) for a in adjustments]
        net = net_pay(parse_amount(payload.get("baseAmount")), parsed)
        return {"netPay": net, "netPayLabel": format_inr(net)}

    def totals(self, payload: dict) -> PayrollTotals:
        entries = _entries(payload.get("entries"))
        included = _id_set(payload.get("includedIds"), "includedIds")
        cash_paid = _id_set(payload.get("cashPaidIds"), "cashPaidIds")
        entry_filter = optional_choice(payload.get("filter"), EntryFilter, "filter") or EntryFilter.ALL
        tab = optional_choice(payload.get("tab"), PayrollTab, "tab")

        visible = [e for e in entries if _in_tab(e, tab)]
        if entry_filter is EntryFilter.SELECTED:
            visible = [e for e in visible if e.employee_id in included]
        elif entry_filter is EntryFilter.NOT_SELECTED:
            visible = [e for e in visible if e.employee_id not in included]

        payable = [e for e in visible if e.employee_id in included and not _is_cash_paid(e, cash_paid)]
        return PayrollTotals(
            total_payout=sum(e.net_pay for e in payable),
            count=sum(1 for e in visible if e.employee_id in included),
        )

    def _payable_entries(
        self, business: Business, entries: list[PayrollEntry], included: set[str]
    ) -> list[PayrollEntry]:
        """Included entries with something to pay, all checked before any payment is written."""
        payable = [e for e in entries if e.employee_id in included and e.net_pay > 0]
        ids = list(dict.fromkeys(e.employee_id for e in payable))
        found = {e.employee_id: e for e in self._employees.list_by_ids(ids)}

        missing = [i for i in ids if i not in found]
        if missing:
            raise NotFoundError("Employee not found", details=missing)
        foreign = [i for i in ids if found[i].business_id != business.business_id]
        if foreign:
            raise ValidationError("Employees do not belong to this business", details=foreign)
        return payable

    def finalize(self, payload: dict) -> list[Payment]:
        business = self._business_service.get(require_uuid(payload.get("businessId"), "businessId"))
        entries = _entries(payload.get("entries"))
        included = _id_set(payload.get("includedIds"), "includedIds")
        cash_paid = _id_set(payload.get("cashPaidIds"), "cashPaidIds")
        pay_date = payload.get("date") or now_local().date().isoformat()
        parse_iso_date(pay_date)

        self._business_service.verify_payout_pin(business, payload.get("pin"))

        payments = []
        for entry in self._payable_entries(business, entries, included):
            status = PaymentStatus.COMPLETED if _is_cash_paid(entry, cash_paid) else PaymentStatus.PENDING
            payments.append(
                self._payments.create(
                    {
                        "type": PaymentType.SALARY.value,
                        "amount": entry.net_pay,
                        "paymentMode": entry.payment_mode.to_payment_mode().value,
                        "status": status.value,
                        "employeeId": entry.employee_id,
                        "businessId": business.business_id,
                        "date": pay_date,
                        "narration": f"Salary ({entry.wage_type.value})",
                    }
                )
            )

        logger.info(
            "payroll finalized for business %s: %d payments, total %s",
            business.business_id,
            len(payments),
            format_inr(sum(p.amount for p in payments)),
        )
        return payments

    def export_xlsx(self, entries: Sequence[PayrollEntry]) -> bytes:
        rows = [
            {
                "Employee": e.employee_name,
                "Wage Type": e.wage_type.value,
                "Base Amount": e.base_amount,
                "Additions": e.total_additions,
                "Deductions": e.total_deductions,
                "Net Pay": e.net_pay,
                "Payment Mode": e.payment_mode.value,
                "Status": e.status.value,
            }
            for e in entries
        ]
        df = pd.DataFrame(
            rows,
            columns=["Employee", "Wage Type", "Base Amount", "Additions", "Deductions", "Net Pay", "Payment Mode", "Status"],
        )

        output = io.BytesIO()
        with pd.ExcelWriter(output, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name="Payroll")
        return output.getvalue()
