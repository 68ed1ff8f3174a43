from __future__ import annotations

import dataclasses
import logging
import uuid
from typing import Any, Optional, Sequence

from ..businesses.repository import BusinessRepository
from ..common.datetime_utils import now_local, parse_clock_time
from ..common.validators import require_choice, require_int_range, require_non_empty, require_uuid
from ..core.enums import ShiftType
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import Shift, ShiftSummary
from .repository import ShiftRepository

logger = logging.getLogger(__name__)


def _clock(value: Any, field_name: str) -> str:
    value = require_non_empty(value, field_name)
    parse_clock_time(value)
    return value


def _employee_ids(payload: dict) -> list[str]:
    ids = payload.get("employeeIds")
    if not isinstance(ids, list):
        raise ValidationError("employeeIds must be a list")
    return [require_uuid(i, "employeeIds") for i in ids]


class ShiftService:
    """Use cases: shift CRUD and staff assignment."""

    def __init__(self, shifts: ShiftRepository, employees: EmployeeRepository, businesses: BusinessRepository):
        self._shifts = shifts
        self._employees = employees
        self._businesses = businesses

    def create(self, payload: dict) -> Shift:
        business_id = payload.get("businessId")
        if business_id:
            business_id = require_uuid(business_id, "businessId")
            if not self._businesses.get_by_id(business_id):
                raise NotFoundError("Business not found")
        shift = Shift(
            shift_id=str(uuid.uuid4()),
            business_id=business_id or None,
            name=require_non_empty(payload.get("name"), "name"),
            shift_type=require_choice(payload.get("type"), ShiftType, "type"),
            start_time=_clock(payload.get("startTime"), "startTime"),
            end_time=_clock(payload.get("endTime"), "endTime"),
            break_minutes=require_int_range(payload.get("breakMinutes", 0), "breakMinutes", min_value=0),
            created_at=now_local().replace(microsecond=0),
        )
        self._shifts.create(shift)
        logger.info("shift created: %s (%s-%s)", shift.name, shift.start_time, shift.end_time)
        return shift

    def list(self, *, business_id: Optional[str] = None) -> Sequence[ShiftSummary]:
        return self._shifts.list_summaries(business_id=business_id or None)

    def get(self, shift_id: str) -> Shift:
        shift = self._shifts.get_by_id(shift_id)
        if not shift:
            raise NotFoundError("Shift not found")
        return shift

    def get_summary(self, shift_id: str) -> ShiftSummary:
        shift = self.get(shift_id)
        staff = self._employees.list_by_shift(shift_id)
        return ShiftSummary(
            shift=shift,
            staff_count=len(staff),
            employees=[
                {
                    "id": e.employee_id,
                    "fullName": e.full_name,
                    "wageType": e.wage_type.value if e.wage_type else None,
                }
                for e in staff
            ],
        )

    def update(self, shift_id: str, payload: dict) -> Shift:
        current = self.get(shift_id)
        changes: dict[str, Any] = {}
        if "name" in payload:
            changes["name"] = require_non_empty(payload["name"], "name")
        if "type" in payload:
            changes["shift_type"] = require_choice(payload["type"], ShiftType, "type")
        if "startTime" in payload:
            changes["start_time"] = _clock(payload["startTime"], "startTime")
        if "endTime" in payload:
            changes["end_time"] = _clock(payload["endTime"], "endTime")
        if "breakMinutes" in payload:
            changes["break_minutes"] = require_int_range(payload["breakMinutes"], "breakMinutes", min_value=0)

        if not changes:
            return current

        updated = dataclasses.replace(current, **changes)
        self._shifts.update(updated)
        return updated

    def delete(self, shift_id: str) -> None:
        self.get(shift_id)
        self._employees.clear_shift(shift_id)
        self._shifts.delete_by_id(shift_id)
        logger.info("shift %s deleted", shift_id)

    def _known_employee_ids(self, payload: dict) -> list[str]:
        employee_ids = _employee_ids(payload)
        found = {e.employee_id for e in self._employees.list_by_ids(employee_ids)}
        missing = [i for i in employee_ids if i not in found]
        if missing:
            raise NotFoundError("Employee not found", details=missing)
        return employee_ids

    def assign(self, shift_id: str, payload: dict) -> int:
        """Move the given employees onto this shift; other holders keep it."""
        self.get(shift_id)
        employee_ids = self._known_employee_ids(payload)
        self._employees.set_shift(employee_ids, shift_id)
        return len(employee_ids)

    def replace_assignment(self, shift_id: str, payload: dict) -> int:
        """Make the given employees the exact set of holders of this shift."""
        self.get(shift_id)
        employee_ids = self._known_employee_ids(payload)
        self._employees.replace_shift_holders(shift_id, employee_ids)
        return len(employee_ids)
