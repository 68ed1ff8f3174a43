from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .businesses.mysql_business_repository import MySQLBusinessRepository
from .businesses.repository import BusinessRepository
from .businesses.service import BusinessService
from .database.connection import DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .payments.mysql_payment_repository import MySQLPaymentRepository
from .payments.repository import PaymentRepository
from .payments.service import PaymentService
from .payroll.calculator.factory import PayrollCalculatorFactory
from .payroll.service import PayrollService
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftRepository
from .shifts.service import ShiftService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    businesses_repo: BusinessRepository
    employees_repo: EmployeeRepository
    shifts_repo: ShiftRepository
    payments_repo: PaymentRepository
    attendance_repo: AttendanceRepository

    business_service: BusinessService
    employee_service: EmployeeService
    shift_service: ShiftService
    payment_service: PaymentService
    attendance_service: AttendanceService
    payroll_service: PayrollService


def wire_services(
    *,
    conn: Optional[DatabaseConnection],
    businesses_repo: BusinessRepository,
    employees_repo: EmployeeRepository,
    shifts_repo: ShiftRepository,
    payments_repo: PaymentRepository,
    attendance_repo: AttendanceRepository,
) -> Container:
    """Build every service over the given repositories (MySQL in the app, in-memory in tests)."""
    business_service = BusinessService(businesses_repo)
    employee_service = EmployeeService(employees_repo, businesses_repo, shifts_repo)
    shift_service = ShiftService(shifts_repo, employees_repo, businesses_repo)
    payment_service = PaymentService(payments_repo, employees_repo, businesses_repo)
    attendance_service = AttendanceService(attendance_repo, employees_repo, shifts_repo, businesses_repo)
    payroll_service = PayrollService(
        employees_repo,
        business_service,
        attendance_service,
        payment_service,
        calculator_factory=PayrollCalculatorFactory(),
    )

    return Container(
        conn=conn,
        businesses_repo=businesses_repo,
        employees_repo=employees_repo,
        shifts_repo=shifts_repo,
        payments_repo=payments_repo,
        attendance_repo=attendance_repo,
        business_service=business_service,
        employee_service=employee_service,
        shift_service=shift_service,
        payment_service=payment_service,
        attendance_service=attendance_service,
        payroll_service=payroll_service,
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.from_settings(db_config)
    return wire_services(
        conn=conn,
        businesses_repo=MySQLBusinessRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        shifts_repo=MySQLShiftRepository(conn),
        payments_repo=MySQLPaymentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
    )
