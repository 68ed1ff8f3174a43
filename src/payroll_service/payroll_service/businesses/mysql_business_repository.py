from __future__ import annotations

import uuid
from typing import Optional

from ..core.enums import CalculationMethod, PayrollUsageType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, db_now, fetchone
from .model import Business, SalaryConfig
from .repository import BusinessRepository

_SELECT = """
    SELECT b.business_id, b.name, b.business_name, b.business_email, b.payroll_usage_type,
           b.payout_pin_hash, b.created_at,
           sc.calculation_method, sc.shift_hours, sc.shift_minutes
    FROM businesses b
    LEFT JOIN salary_configs sc ON sc.business_id = b.business_id
"""


def _row_to_business(r: dict) -> Business:
    salary_config = None
    if r.get("calculation_method"):
        salary_config = SalaryConfig(
            calculation_method=CalculationMethod(r["calculation_method"]),
            shift_hours=int(r["shift_hours"]),
            shift_minutes=int(r["shift_minutes"]),
        )
    return Business(
        business_id=r["business_id"],
        name=r["name"],
        business_name=r["business_name"],
        business_email=r["business_email"],
        created_at=r["created_at"],
        payroll_usage_type=PayrollUsageType(r["payroll_usage_type"]) if r.get("payroll_usage_type") else None,
        salary_config=salary_config,
        payout_pin_hash=r.get("payout_pin_hash"),
    )


class MySQLBusinessRepository(BusinessRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, name: str, business_name: str, business_email: str) -> Business:
        business_id = str(uuid.uuid4())
        created_at = db_now()
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                INSERT INTO businesses(business_id, name, business_name, business_email, created_at)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (business_id, name, business_name, business_email, created_at),
            )
        return Business(
            business_id=business_id,
            name=name,
            business_name=business_name,
            business_email=business_email,
            created_at=created_at,
        )

    def get_by_id(self, business_id: str) -> Optional[Business]:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(_SELECT + " WHERE b.business_id=%s", (business_id,))
            r = fetchone(cur)
            return _row_to_business(r) if r else None

    def get_latest(self) -> Optional[Business]:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(_SELECT + " ORDER BY b.created_at DESC LIMIT 1")
            r = fetchone(cur)
            return _row_to_business(r) if r else None

    def upsert_salary_config(self, business_id: str, config: SalaryConfig) -> None:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                INSERT INTO salary_configs(business_id, calculation_method, shift_hours, shift_minutes)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    calculation_method=VALUES(calculation_method),
                    shift_hours=VALUES(shift_hours),
                    shift_minutes=VALUES(shift_minutes)
                """,
                (business_id, config.calculation_method.value, config.shift_hours, config.shift_minutes),
            )

    def set_usage_type(self, business_id: str, usage_type: PayrollUsageType) -> None:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                "UPDATE businesses SET payroll_usage_type=%s WHERE business_id=%s",
                (usage_type.value, business_id),
            )

    def set_payout_pin_hash(self, business_id: str, pin_hash: str) -> None:
        with db_cursor(self._conn_factory) as cur:
            cur.execute("UPDATE businesses SET payout_pin_hash=%s WHERE business_id=%s", (pin_hash, business_id))

    def count(self) -> int:
        with db_cursor(self._conn_factory) as cur:
            cur.execute("SELECT COUNT(*) AS n FROM businesses")
            r = fetchone(cur)
            return int(r["n"]) if r else 0
