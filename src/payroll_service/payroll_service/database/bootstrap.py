from __future__ import annotations

import json
import logging
import re
import uuid
from pathlib import Path
from typing import Optional

from .connection import DatabaseConnection
from .mysql_base import db_now

logger = logging.getLogger(__name__)

DEMO_BUSINESS_EMAIL = "amit.sharma@techflow.com"


_SKIPPED = re.compile(r"^(CREATE\s+DATABASE|USE)\b", re.IGNORECASE)


def schema_statements(sql: str) -> list[str]:
    """Split schema.sql into executable statements.

    The database name comes from settings, so the file's own
    ``CREATE DATABASE`` / ``USE`` lines are dropped. schema.sql holds no
    string literals containing ``;``.
    """
    statements = (s.strip() for s in sql.split(";"))
    return [s for s in statements if s and not _SKIPPED.match(s)]


def ensure_database_exists(db_config: dict) -> None:
    factory = DatabaseConnection.from_settings(db_config)
    conn = factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{factory.config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    factory = DatabaseConnection.from_settings(db_config)
    ensure_database_exists(db_config)

    statements = schema_statements(Path(schema_path).read_text(encoding="utf-8"))

    conn = factory.connect()
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("schema applied to %s", factory.describe())


def ensure_demo_business(db_config: dict) -> Optional[str]:
    """Insert the demo business with its shifts and staff unless it already exists.

    Returns the new business id, or None when the demo data was already there.
    """
    conn = DatabaseConnection.from_settings(db_config).connect()
    try:
        cur = conn.cursor(dictionary=True)
        cur.execute("SELECT business_id FROM businesses WHERE business_email=%s", (DEMO_BUSINESS_EMAIL,))
        if cur.fetchone():
            return None

        now = db_now()
        business_id = str(uuid.uuid4())
        cur.execute(
            """
            INSERT INTO businesses(business_id, name, business_name, business_email, payroll_usage_type, created_at)
            VALUES(%s,%s,%s,%s,%s,%s)
            """,
            (business_id, "Amit Sharma", "TechFlow Solutions", DEMO_BUSINESS_EMAIL, "calculate_and_pay", now),
        )
        cur.execute(
            """
            INSERT INTO salary_configs(business_id, calculation_method, shift_hours, shift_minutes)
            VALUES(%s,%s,%s,%s)
            """,
            (business_id, "calendar_month", 9, 0),
        )

        general_shift = str(uuid.uuid4())
        night_shift = str(uuid.uuid4())
        for shift_id, name, start, end, break_minutes in (
            (general_shift, "General Shift", "09:00 AM", "06:00 PM", 60),
            (night_shift, "Night Shift", "10:00 PM", "06:00 AM", 30),
        ):
            cur.execute(
                """
                INSERT INTO shifts(shift_id, business_id, name, shift_type, start_time, end_time, break_minutes, created_at)
                VALUES(%s,%s,%s,'fixed',%s,%s,%s,%s)
                """,
                (shift_id, business_id, name, start, end, break_minutes, now),
            )

        staff = (
            ("Priya Verma", "EMP001", "9876543210", "Female", "Monthly", "30000", general_shift, {"upiId": "priya@okaxis"}),
            ("Rahul Das", "EMP002", "9876543211", "Male", "Daily", "900", night_shift, {"paymentMode": "Cash"}),
            ("Sunil Kumar", "EMP003", "9876543212", "Male", "Hourly", "120", general_shift, None),
        )
        for full_name, company_id, phone, gender, wage_type, salary, shift_id, payment_details in staff:
            cur.execute(
                """
                INSERT INTO employees(
                    employee_id, business_id, staff_type, full_name, company_id, phone_number, dob, gender,
                    salary_cycle_date, salary_access, wage_type, salary_amount, weekly_offs, shift_id,
                    payment_details, created_at
                )
                VALUES(%s,%s,'full_time',%s,%s,%s,'1990-01-01',%s,1,'allow',%s,%s,%s,%s,%s,%s)
                """,
                (
                    str(uuid.uuid4()),
                    business_id,
                    full_name,
                    company_id,
                    phone,
                    gender,
                    wage_type,
                    salary,
                    json.dumps(["Sunday"]),
                    shift_id,
                    json.dumps(payment_details) if payment_details else None,
                    now,
                ),
            )

        conn.commit()
        logger.info("demo business seeded: %s", business_id)
        return business_id
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = DatabaseConnection.from_settings(db_config).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
