from __future__ import annotations

from enum import Enum


class StaffType(str, Enum):
    FULL_TIME = "full_time"
    CONTRACT = "contract"


class WageType(str, Enum):
    """Basis used to scale the salary input into a per-cycle base amount."""

    MONTHLY = "Monthly"
    DAILY = "Daily"
    HOURLY = "Hourly"

    @classmethod
    def _missing_(cls, value):
        # Older onboarding builds sent the long label.
        if value == "Per Hour Basis":
            return cls.HOURLY
        return None

    @property
    def is_daily(self) -> bool:
        return self in (WageType.DAILY, WageType.HOURLY)


class CalculationMethod(str, Enum):
    CALENDAR_MONTH = "calendar_month"
    FIXED_30_DAYS = "fixed_30_days"
    EXCLUDE_WEEKLY_OFFS = "exclude_weekly_offs"


class PayrollUsageType(str, Enum):
    CALCULATE_ONLY = "calculate_only"
    CALCULATE_AND_PAY = "calculate_and_pay"


class ShiftType(str, Enum):
    FIXED = "fixed"
    OPEN = "open"
    ROTATIONAL = "rotational"


class PaymentType(str, Enum):
    ONE_TIME = "one-time"
    ADVANCE = "advance"
    SALARY = "salary"


class PaymentMode(str, Enum):
    CASH = "Cash"
    UPI = "UPI"
    PHONE = "Phone"
    BANK_TRANSFER = "Bank Transfer"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class AttendanceStatus(str, Enum):
    """Day status stored per employee and date."""

    PRESENT = "present"
    ABSENT = "absent"
    LEAVE = "leave"
    HOLIDAY = "holiday"
    WEEK_OFF = "week_off"


class AdjustmentType(str, Enum):
    ADDITION = "addition"
    DEDUCTION = "deduction"


class PayoutChannel(str, Enum):
    UPI = "UPI"
    BANK = "Bank"
    CASH = "Cash"

    def to_payment_mode(self) -> PaymentMode:
        return {
            PayoutChannel.UPI: PaymentMode.UPI,
            PayoutChannel.BANK: PaymentMode.BANK_TRANSFER,
            PayoutChannel.CASH: PaymentMode.CASH,
        }[self]


class EntryStatus(str, Enum):
    PENDING = "pending"
    READY = "ready"
    MISSING_DETAILS = "missing_details"


class PayrollBasis(str, Enum):
    """How a payroll draft derives each employee's base amount."""

    FLAT = "flat"
    ATTENDANCE = "attendance"


class PayrollTab(str, Enum):
    MONTHLY = "Monthly"
    DAILY = "Daily"


class EntryFilter(str, Enum):
    ALL = "all"
    SELECTED = "selected"
    NOT_SELECTED = "not_selected"
