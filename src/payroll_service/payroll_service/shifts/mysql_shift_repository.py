from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import ShiftType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Shift, ShiftSummary
from .repository import ShiftRepository


def _row_to_shift(r: dict) -> Shift:
    return Shift(
        shift_id=r["shift_id"],
        business_id=r.get("business_id"),
        name=r["name"],
        shift_type=ShiftType(r["shift_type"]),
        start_time=r["start_time"],
        end_time=r["end_time"],
        break_minutes=int(r.get("break_minutes") or 0),
        created_at=r["created_at"],
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, shift: Shift) -> None:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                INSERT INTO shifts(shift_id, business_id, name, shift_type, start_time, end_time, break_minutes, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    shift.shift_id,
                    shift.business_id,
                    shift.name,
                    shift.shift_type.value,
                    shift.start_time,
                    shift.end_time,
                    shift.break_minutes,
                    shift.created_at,
                ),
            )

    def get_by_id(self, shift_id: str) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                SELECT shift_id, business_id, name, shift_type, start_time, end_time, break_minutes, created_at
                FROM shifts
                WHERE shift_id=%s
                """,
                (shift_id,),
            )
            r = fetchone(cur)
            return _row_to_shift(r) if r else None

    def list_summaries(self, *, business_id: Optional[str] = None) -> Sequence[ShiftSummary]:
        where = "WHERE s.business_id=%s" if business_id else ""
        params = (business_id,) if business_id else ()
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                f"""
                SELECT s.shift_id, s.business_id, s.name, s.shift_type, s.start_time, s.end_time,
                       s.break_minutes, s.created_at, COUNT(e.employee_id) AS staff_count
                FROM shifts s
                LEFT JOIN employees e ON e.shift_id = s.shift_id
                {where}
                GROUP BY s.shift_id, s.business_id, s.name, s.shift_type, s.start_time, s.end_time,
                         s.break_minutes, s.created_at
                ORDER BY s.created_at DESC
                """,
                params,
            )
            return [
                ShiftSummary(shift=_row_to_shift(r), staff_count=int(r["staff_count"] or 0))
                for r in fetchall(cur)
            ]

    def update(self, shift: Shift) -> None:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                UPDATE shifts
                SET name=%s, shift_type=%s, start_time=%s, end_time=%s, break_minutes=%s
                WHERE shift_id=%s
                """,
                (shift.name, shift.shift_type.value, shift.start_time, shift.end_time, shift.break_minutes, shift.shift_id),
            )

    def delete_by_id(self, shift_id: str) -> bool:
        with db_cursor(self._conn_factory) as cur:
            cur.execute("DELETE FROM shifts WHERE shift_id=%s", (shift_id,))
            return cur.rowcount > 0
