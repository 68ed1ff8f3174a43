from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.money import format_payable_hours
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar day."""

    attendance_id: str
    employee_id: str
    work_date: date
    status: AttendanceStatus
    punch_in: Optional[str] = None
    punch_out: Optional[str] = None
    working_minutes: int = 0
    overtime_minutes: int = 0
    note: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.punch_in is not None and self.punch_out is None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "employeeId": self.employee_id,
            "date": self.work_date.isoformat(),
            "status": self.status.value,
            "punchIn": self.punch_in,
            "punchOut": self.punch_out,
            "workingMinutes": self.working_minutes,
            "workingHours": format_payable_hours(self.working_minutes),
            "overtimeMinutes": self.overtime_minutes,
            "note": self.note,
        }


@dataclass(frozen=True)
class EffectiveShift:
    """Shift length used to judge a day: assigned shift, business default, or the app default."""

    total_minutes: int
    break_minutes: int = 0
    shift_id: Optional[str] = None

    @property
    def payable_minutes(self) -> int:
        return max(self.total_minutes - self.break_minutes, 0)

    @property
    def payable_hours(self) -> float:
        return self.payable_minutes / 60
