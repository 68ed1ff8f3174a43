from __future__ import annotations

import logging
import uuid
from datetime import date, datetime, timedelta
from typing import Any, Optional

from ..businesses.model import Business
from ..businesses.repository import BusinessRepository
from ..common.datetime_utils import minutes_between, now_local, parse_clock_time, parse_iso_date
from ..common.validators import require_choice, require_non_empty, require_uuid
from ..core.constants import DEFAULT_HISTORY_DAYS, DEFAULT_SHIFT_MINUTES
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..shifts.repository import ShiftRepository
from .model import AttendanceRecord, EffectiveShift
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def _clock(value: Any, field_name: str) -> str:
    value = require_non_empty(value, field_name)
    parse_clock_time(value)
    return value


def _note(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError("note must be a string")
    return value.strip() or None


class AttendanceService:
    """Use cases: day marking, punch in/out and history."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        shifts: ShiftRepository,
        businesses: BusinessRepository,
    ):
        self._attendance = attendance
        self._employees = employees
        self._shifts = shifts
        self._businesses = businesses

    def effective_shift(self, employee: Employee, business: Optional[Business] = None) -> EffectiveShift:
        """Assigned shift, else the business salary config hours, else the default.

        Callers that already hold the employee's business pass it to skip the lookup.
        """
        if employee.shift_id:
            shift = self._shifts.get_by_id(employee.shift_id)
            if shift:
                return EffectiveShift(
                    total_minutes=shift.span_minutes,
                    break_minutes=int(shift.break_minutes or 0),
                    shift_id=shift.shift_id,
                )

        if business is None:
            business = self._businesses.get_by_id(employee.business_id)
        if business and business.salary_config and business.salary_config.shift_total_minutes > 0:
            return EffectiveShift(total_minutes=business.salary_config.shift_total_minutes)

        return EffectiveShift(total_minutes=DEFAULT_SHIFT_MINUTES)

    def _employee(self, employee_id: Any) -> Employee:
        employee = self._employees.get_by_id(require_uuid(employee_id, "employeeId"))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    @staticmethod
    def _minutes(shift: EffectiveShift, punch_in: str, punch_out: str) -> tuple[int, int]:
        span = minutes_between(parse_clock_time(punch_in), parse_clock_time(punch_out))
        working = max(span - shift.break_minutes, 0)
        overtime = max(working - shift.payable_minutes, 0)
        return working, overtime

    def record_day(self, payload: dict) -> AttendanceRecord:
        """Set one day's status; a present day needs both punches."""
        employee = self._employee(payload.get("employeeId"))
        work_date = parse_iso_date(payload.get("date"))
        status = require_choice(payload.get("status"), AttendanceStatus, "status")

        punch_in = punch_out = None
        working = overtime = 0
        if status is AttendanceStatus.PRESENT:
            punch_in = _clock(payload.get("punchIn"), "punchIn")
            punch_out = _clock(payload.get("punchOut"), "punchOut")
            working, overtime = self._minutes(self.effective_shift(employee), punch_in, punch_out)

        existing = self._attendance.get_for_employee_and_date(employee.employee_id, work_date)
        record = AttendanceRecord(
            attendance_id=existing.attendance_id if existing else str(uuid.uuid4()),
            employee_id=employee.employee_id,
            work_date=work_date,
            status=status,
            punch_in=punch_in,
            punch_out=punch_out,
            working_minutes=working,
            overtime_minutes=overtime,
            note=_note(payload.get("note")),
        )
        self._attendance.upsert(record)
        logger.info("attendance %s for %s on %s", status.value, employee.employee_id, work_date)
        return record

    def punch_in(self, employee_id: str, *, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or now_local()
        today = now.date()
        employee = self._employee(employee_id)

        existing = self._attendance.get_for_employee_and_date(employee.employee_id, today)
        if existing and existing.punch_in:
            raise ValidationError("Already punched in today")

        record = AttendanceRecord(
            attendance_id=existing.attendance_id if existing else str(uuid.uuid4()),
            employee_id=employee.employee_id,
            work_date=today,
            status=AttendanceStatus.PRESENT,
            punch_in=now.strftime("%H:%M"),
        )
        self._attendance.upsert(record)
        return record

    def punch_out(self, employee_id: str, *, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or now_local()
        employee = self._employee(employee_id)

        record = self._attendance.get_for_employee_and_date(employee.employee_id, now.date())
        if record is None or record.punch_in is None:
            # overnight shift: the open record belongs to yesterday
            yesterday = self._attendance.get_for_employee_and_date(
                employee.employee_id, now.date() - timedelta(days=1)
            )
            if yesterday is not None and yesterday.is_open:
                record = yesterday
        if record is None or record.punch_in is None:
            raise ValidationError("Not punched in today")
        if record.punch_out is not None:
            raise ValidationError("Already punched out today")

        punch_out = now.strftime("%H:%M")
        working, overtime = self._minutes(self.effective_shift(employee), record.punch_in, punch_out)
        closed = AttendanceRecord(
            attendance_id=record.attendance_id,
            employee_id=record.employee_id,
            work_date=record.work_date,
            status=AttendanceStatus.PRESENT,
            punch_in=record.punch_in,
            punch_out=punch_out,
            working_minutes=working,
            overtime_minutes=overtime,
            note=record.note,
        )
        self._attendance.upsert(closed)
        return closed

    def records(self, employee_id: str, start: date, end: date) -> list[AttendanceRecord]:
        return list(self._attendance.list_for_employee(employee_id, start, end))

    def history(
        self,
        employee_id: Any,
        *,
        start: Optional[str] = None,
        end: Optional[str] = None,
        today: Optional[date] = None,
    ) -> dict:
        employee = self._employee(employee_id)
        end_date = parse_iso_date(end) if end else (today or now_local().date())
        start_date = parse_iso_date(start) if start else end_date - timedelta(days=DEFAULT_HISTORY_DAYS - 1)
        if start_date > end_date:
            raise ValidationError("start must not be after end")

        rows = self.records(employee.employee_id, start_date, end_date)
        counts = {s.value: 0 for s in AttendanceStatus}
        for r in rows:
            counts[r.status.value] += 1

        return {
            "employeeId": employee.employee_id,
            "start": start_date.isoformat(),
            "end": end_date.isoformat(),
            "records": [r.to_dict() for r in rows],
            "counts": counts,
        }
