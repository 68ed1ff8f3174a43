from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: str, start: date, end: date) -> Sequence[AttendanceRecord]:
        """Records with start <= work_date <= end, oldest first."""

        raise NotImplementedError

    def upsert(self, record: AttendanceRecord) -> None:
        """Insert, or replace the row for the same (employee, date)."""

        raise NotImplementedError
