from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import date
from typing import Any, Optional

from ..attendance.model import AttendanceRecord, EffectiveShift
from ..common.money import parse_amount
from ..common.validators import require_choice
from ..core.enums import AdjustmentType, EntryStatus, PayoutChannel, WageType
from ..core.exceptions import ValidationError
from ..employees.model import Employee


@dataclass(frozen=True)
class PayrollAdjustment:
    adjustment_id: str
    adjustment_type: AdjustmentType
    label: str
    amount: float

    @classmethod
    def from_dict(cls, data: Any) -> "PayrollAdjustment":
        if not isinstance(data, dict):
            raise ValidationError("adjustments must be a list of objects")
        return cls(
            adjustment_id=str(data.get("id") or ""),
            adjustment_type=require_choice(data.get("type"), AdjustmentType, "adjustment type"),
            label=str(data.get("label") or ""),
            amount=parse_amount(data.get("amount")),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.adjustment_id,
            "type": self.adjustment_type.value,
            "label": self.label,
            "amount": self.amount,
        }


_STATS_KEYS = {
    "working_days": "workingDays",
    "total_days": "totalDays",
    "present_shifts": "presentShifts",
    "total_shifts": "totalShifts",
    "overtime_hours": "overtimeHours",
    "overtime_amount": "overtimeAmount",
    "pending_advance": "pendingAdvance",
    "shift_hours": "shiftHours",
    "pay_per_day": "payPerDay",
    "total_hours_worked": "totalHoursWorked",
    "regular_hours": "regularHours",
    "hourly_rate": "hourlyRate",
}


@dataclass
class CalculationStats:
    """Figures shown next to an entry to explain how the base was reached."""

    working_days: Optional[float] = None
    total_days: Optional[int] = None
    present_shifts: Optional[int] = None
    total_shifts: Optional[int] = None
    overtime_hours: Optional[int] = None
    overtime_amount: Optional[int] = None
    pending_advance: Optional[float] = None
    shift_hours: Optional[float] = None
    pay_per_day: Optional[int] = None
    total_hours_worked: Optional[float] = None
    regular_hours: Optional[float] = None
    hourly_rate: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            _STATS_KEYS[f.name]: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


@dataclass(frozen=True)
class PayrollContext:
    """Everything a calculator may look at for one employee and one period."""

    employee: Employee
    shift: EffectiveShift
    has_assigned_shift: bool
    records: list[AttendanceRecord]
    period_start: date
    period_end: date
    days_in_cycle: int


@dataclass(frozen=True)
class CalculationResult:
    base_amount: int
    additions: list[PayrollAdjustment] = field(default_factory=list)
    stats: CalculationStats = field(default_factory=CalculationStats)


@dataclass(frozen=True)
class PayrollEntry:
    employee_id: str
    employee_name: str
    wage_type: WageType
    base_amount: float
    adjustments: list[PayrollAdjustment]
    net_pay: float
    payment_mode: PayoutChannel
    status: EntryStatus
    stats: Optional[CalculationStats] = None

    @property
    def total_additions(self) -> float:
        return sum(a.amount for a in self.adjustments if a.adjustment_type is AdjustmentType.ADDITION)

    @property
    def total_deductions(self) -> float:
        return sum(a.amount for a in self.adjustments if a.adjustment_type is AdjustmentType.DEDUCTION)

    @classmethod
    def from_dict(cls, data: Any) -> "PayrollEntry":
        """Entry as echoed back by the app; only the fields totals and finalize need are checked."""
        if not isinstance(data, dict) or not data.get("employeeId"):
            raise ValidationError("entries must be objects with an employeeId")
        adjustments = data.get("adjustments") or []
        if not isinstance(adjustments, list):
            raise ValidationError("adjustments must be a list of objects")
        return cls(
            employee_id=str(data["employeeId"]),
            employee_name=str(data.get("employeeName") or ""),
            wage_type=require_choice(data.get("wageType") or WageType.MONTHLY.value, WageType, "wageType"),
            base_amount=parse_amount(data.get("baseAmount")),
            adjustments=[PayrollAdjustment.from_dict(a) for a in adjustments],
            net_pay=parse_amount(data.get("netPay")),
            payment_mode=require_choice(data.get("paymentMode") or PayoutChannel.CASH.value, PayoutChannel, "paymentMode"),
            status=require_choice(data.get("status") or EntryStatus.READY.value, EntryStatus, "status"),
        )

    def to_dict(self) -> dict:
        data = {
            "employeeId": self.employee_id,
            "employeeName": self.employee_name,
            "wageType": self.wage_type.value,
            "baseAmount": self.base_amount,
            "adjustments": [a.to_dict() for a in self.adjustments],
            "netPay": self.net_pay,
            "paymentMode": self.payment_mode.value,
            "status": self.status.value,
        }
        if self.stats is not None:
            data["calculationStats"] = self.stats.to_dict()
        return data


@dataclass(frozen=True)
class PayrollTotals:
    total_payout: float
    count: int

    def to_dict(self) -> dict:
        return {"totalPayout": self.total_payout, "count": self.count}
