from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import StaffType, WageType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, load_json, placeholders
from .model import Employee, PaymentDetails
from .repository import EmployeeRepository

_COLUMNS = """
    employee_id, business_id, staff_type, full_name, company_id, phone_number, dob, gender,
    salary_cycle_date, salary_access, wage_type, salary_amount, weekly_offs, shift_id,
    payment_details, created_at
"""


def _row_to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=r["employee_id"],
        business_id=r["business_id"],
        staff_type=StaffType(r["staff_type"]),
        full_name=r["full_name"],
        company_id=r["company_id"],
        phone_number=r["phone_number"],
        dob=r["dob"],
        gender=r["gender"],
        salary_cycle_date=int(r["salary_cycle_date"]),
        salary_access=r["salary_access"],
        created_at=r["created_at"],
        wage_type=WageType(r["wage_type"]) if r.get("wage_type") else None,
        salary_amount=r.get("salary_amount"),
        weekly_offs=list(load_json(r.get("weekly_offs"), default=[])),
        shift_id=r.get("shift_id"),
        payment_details=PaymentDetails.from_dict(load_json(r.get("payment_details"))),
    )


def _params(e: Employee) -> tuple:
    return (
        e.business_id,
        e.staff_type.value,
        e.full_name,
        e.company_id,
        e.phone_number,
        e.dob,
        e.gender,
        e.salary_cycle_date,
        e.salary_access,
        e.wage_type.value if e.wage_type else None,
        e.salary_amount,
        dump_json(list(e.weekly_offs)),
        e.shift_id,
        dump_json(e.payment_details.to_dict()) if e.payment_details else None,
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, employee: Employee) -> None:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                f"""
                INSERT INTO employees({_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (employee.employee_id, *_params(employee), employee.created_at),
            )

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (employee_id,))
            r = fetchone(cur)
            return _row_to_employee(r) if r else None

    def list(self, *, business_id: Optional[str] = None) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as cur:
            if business_id:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM employees WHERE business_id=%s ORDER BY created_at DESC",
                    (business_id,),
                )
            else:
                cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY created_at DESC")
            return [_row_to_employee(r) for r in fetchall(cur)]

    def list_by_ids(self, employee_ids: Sequence[str]) -> Sequence[Employee]:
        if not employee_ids:
            return []
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                f"SELECT {_COLUMNS} FROM employees WHERE employee_id IN ({placeholders(employee_ids)})",
                tuple(employee_ids),
            )
            return [_row_to_employee(r) for r in fetchall(cur)]

    def update(self, employee: Employee) -> None:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                UPDATE employees
                SET business_id=%s, staff_type=%s, full_name=%s, company_id=%s, phone_number=%s, dob=%s,
                    gender=%s, salary_cycle_date=%s, salary_access=%s, wage_type=%s, salary_amount=%s,
                    weekly_offs=%s, shift_id=%s, payment_details=%s
                WHERE employee_id=%s
                """,
                (*_params(employee), employee.employee_id),
            )

    def delete_by_id(self, employee_id: str) -> bool:
        with db_cursor(self._conn_factory) as cur:
            cur.execute("DELETE FROM employees WHERE employee_id=%s", (employee_id,))
            return cur.rowcount > 0

    def set_shift(self, employee_ids: Sequence[str], shift_id: Optional[str]) -> int:
        if not employee_ids:
            return 0
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                f"UPDATE employees SET shift_id=%s WHERE employee_id IN ({placeholders(employee_ids)})",
                (shift_id, *employee_ids),
            )
            return cur.rowcount

    def clear_shift(self, shift_id: str) -> int:
        with db_cursor(self._conn_factory) as cur:
            cur.execute("UPDATE employees SET shift_id=NULL WHERE shift_id=%s", (shift_id,))
            return cur.rowcount

    def replace_shift_holders(self, shift_id: str, employee_ids: Sequence[str]) -> int:
        with db_cursor(self._conn_factory) as cur:
            cur.execute("UPDATE employees SET shift_id=NULL WHERE shift_id=%s", (shift_id,))
            if not employee_ids:
                return 0
            cur.execute(
                f"UPDATE employees SET shift_id=%s WHERE employee_id IN ({placeholders(employee_ids)})",
                (shift_id, *employee_ids),
            )
            return cur.rowcount

    def list_by_shift(self, shift_id: str) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                f"SELECT {_COLUMNS} FROM employees WHERE shift_id=%s ORDER BY created_at DESC",
                (shift_id,),
            )
            return [_row_to_employee(r) for r in fetchall(cur)]
