from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = (
    "attendance_id, employee_id, work_date, status, punch_in, punch_out, "
    "working_minutes, overtime_minutes, note"
)


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=r["attendance_id"],
        employee_id=r["employee_id"],
        work_date=r["work_date"],
        status=AttendanceStatus(r["status"]),
        punch_in=r.get("punch_in"),
        punch_out=r.get("punch_out"),
        working_minutes=int(r.get("working_minutes") or 0),
        overtime_minutes=int(r.get("overtime_minutes") or 0),
        note=r.get("note"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance WHERE employee_id=%s AND work_date=%s",
                (employee_id, work_date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def list_for_employee(self, employee_id: str, start: date, end: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE employee_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date ASC
                """,
                (employee_id, start, end),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def upsert(self, record: AttendanceRecord) -> None:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                f"""
                INSERT INTO attendance({_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    status=VALUES(status),
                    punch_in=VALUES(punch_in),
                    punch_out=VALUES(punch_out),
                    working_minutes=VALUES(working_minutes),
                    overtime_minutes=VALUES(overtime_minutes),
                    note=VALUES(note)
                """,
                (
                    record.attendance_id,
                    record.employee_id,
                    record.work_date,
                    record.status.value,
                    record.punch_in,
                    record.punch_out,
                    record.working_minutes,
                    record.overtime_minutes,
                    record.note,
                ),
            )
