from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import PaymentMode, PaymentStatus, PaymentType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import EmployeeBrief, Payment, PaymentFilter
from .repository import PaymentRepository

_SELECT = """
    SELECT p.payment_id, p.payment_type, p.amount, p.payment_mode, p.phone_number, p.upi_id, p.narration,
           p.status, p.payment_date, p.payout_reference, p.employee_id, p.business_id,
           p.created_at, p.updated_at,
           e.full_name AS employee_full_name, e.phone_number AS employee_phone
    FROM payments p
    LEFT JOIN employees e ON e.employee_id = p.employee_id
"""


def _row_to_payment(r: dict) -> Payment:
    employee = None
    if r.get("employee_full_name") is not None:
        employee = EmployeeBrief(
            employee_id=r["employee_id"],
            full_name=r["employee_full_name"],
            phone_number=r.get("employee_phone") or "",
        )
    return Payment(
        payment_id=r["payment_id"],
        payment_type=PaymentType(r["payment_type"]),
        amount=float(r["amount"]),
        payment_mode=PaymentMode(r["payment_mode"]),
        status=PaymentStatus(r["status"]),
        date=r["payment_date"],
        employee_id=r["employee_id"],
        business_id=r["business_id"],
        created_at=r["created_at"],
        updated_at=r["updated_at"],
        phone_number=r.get("phone_number"),
        upi_id=r.get("upi_id"),
        narration=r.get("narration"),
        payout_reference=r.get("payout_reference"),
        employee=employee,
    )


class MySQLPaymentRepository(PaymentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, payment: Payment) -> None:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                INSERT INTO payments(
                    payment_id, payment_type, amount, payment_mode, phone_number, upi_id, narration, status,
                    payment_date, payout_reference, employee_id, business_id, created_at, updated_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    payment.payment_id,
                    payment.payment_type.value,
                    payment.amount,
                    payment.payment_mode.value,
                    payment.phone_number,
                    payment.upi_id,
                    payment.narration,
                    payment.status.value,
                    payment.date,
                    payment.payout_reference,
                    payment.employee_id,
                    payment.business_id,
                    payment.created_at,
                    payment.updated_at,
                ),
            )

    def get_by_id(self, payment_id: str) -> Optional[Payment]:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(_SELECT + " WHERE p.payment_id=%s", (payment_id,))
            r = fetchone(cur)
            return _row_to_payment(r) if r else None

    def list(self, filters: PaymentFilter) -> Sequence[Payment]:
        clauses: list[str] = []
        params: list[object] = []
        if filters.business_id:
            clauses.append("p.business_id=%s")
            params.append(filters.business_id)
        if filters.employee_id:
            clauses.append("p.employee_id=%s")
            params.append(filters.employee_id)
        if filters.payment_type:
            clauses.append("p.payment_type=%s")
            params.append(filters.payment_type.value)
        if filters.status:
            clauses.append("p.status=%s")
            params.append(filters.status.value)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        with db_cursor(self._conn_factory) as cur:
            cur.execute(f"{_SELECT} {where} ORDER BY p.created_at DESC", tuple(params))
            return [_row_to_payment(r) for r in fetchall(cur)]

    def update(self, payment: Payment) -> None:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                UPDATE payments
                SET amount=%s, payment_mode=%s, phone_number=%s, narration=%s, status=%s, payment_date=%s,
                    updated_at=%s
                WHERE payment_id=%s
                """,
                (
                    payment.amount,
                    payment.payment_mode.value,
                    payment.phone_number,
                    payment.narration,
                    payment.status.value,
                    payment.date,
                    payment.updated_at,
                    payment.payment_id,
                ),
            )

    def delete_by_id(self, payment_id: str) -> bool:
        with db_cursor(self._conn_factory) as cur:
            cur.execute("DELETE FROM payments WHERE payment_id=%s", (payment_id,))
            return cur.rowcount > 0
