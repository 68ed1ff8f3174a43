from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import minutes_between, parse_clock_time, to_epoch_ms
from ..common.money import format_payable_hours
from ..core.enums import ShiftType


@dataclass(frozen=True)
class Shift:
    """Domain entity: a work shift. Times are clock strings such as "09:00 AM"."""

    shift_id: str
    name: str
    shift_type: ShiftType
    start_time: str
    end_time: str
    created_at: datetime
    break_minutes: int = 0
    business_id: Optional[str] = None

    @property
    def start_minutes(self) -> int:
        return parse_clock_time(self.start_time)

    @property
    def end_minutes(self) -> int:
        return parse_clock_time(self.end_time)

    @property
    def span_minutes(self) -> int:
        return minutes_between(self.start_minutes, self.end_minutes)

    @property
    def payable_minutes(self) -> int:
        """Shift length minus the unpaid break, never below zero."""
        return max(self.span_minutes - int(self.break_minutes or 0), 0)

    def to_dict(self) -> dict:
        return {
            "id": self.shift_id,
            "businessId": self.business_id,
            "name": self.name,
            "type": self.shift_type.value,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "breakMinutes": self.break_minutes,
            "payableMinutes": self.payable_minutes,
            "payableHours": format_payable_hours(self.payable_minutes),
            "createdAt": to_epoch_ms(self.created_at),
        }


@dataclass(frozen=True)
class ShiftSummary:
    """Read-model for shift lists: the shift plus who works it."""

    shift: Shift
    staff_count: int
    employees: list[dict] = field(default_factory=list)

    def to_dict(self, *, with_employees: bool = False) -> dict:
        data = self.shift.to_dict()
        data["staffCount"] = self.staff_count
        if with_employees:
            data["employees"] = list(self.employees)
        return data
