from __future__ import annotations

import dataclasses
import importlib
import uuid
from datetime import date, datetime
from typing import Optional, Sequence

import pytest

from payroll_service.attendance.model import AttendanceRecord
from payroll_service.businesses.model import Business, SalaryConfig
from payroll_service.container import wire_services
from payroll_service.core.enums import PayrollUsageType
from payroll_service.employees.model import Employee
from payroll_service.main import create_app
from payroll_service.payments.model import EmployeeBrief, Payment, PaymentFilter
from payroll_service.shifts.model import Shift, ShiftSummary


class InMemoryBusinesses:
    def __init__(self):
        self.items: dict[str, Business] = {}

    def create(self, *, name: str, business_name: str, business_email: str) -> Business:
        business = Business(
            business_id=str(uuid.uuid4()),
            name=name,
            business_name=business_name,
            business_email=business_email,
            created_at=datetime(2025, 1, 1, 9, len(self.items)),
        )
        self.items[business.business_id] = business
        return business

    def get_by_id(self, business_id: str) -> Optional[Business]:
        return self.items.get(business_id)

    def get_latest(self) -> Optional[Business]:
        if not self.items:
            return None
        return max(self.items.values(), key=lambda b: b.created_at)

    def upsert_salary_config(self, business_id: str, config: SalaryConfig) -> None:
        self.items[business_id] = dataclasses.replace(self.items[business_id], salary_config=config)

    def set_usage_type(self, business_id: str, usage_type: PayrollUsageType) -> None:
        self.items[business_id] = dataclasses.replace(self.items[business_id], payroll_usage_type=usage_type)

    def set_payout_pin_hash(self, business_id: str, pin_hash: str) -> None:
        self.items[business_id] = dataclasses.replace(self.items[business_id], payout_pin_hash=pin_hash)

    def count(self) -> int:
        return len(self.items)


class InMemoryEmployees:
    def __init__(self):
        self.items: dict[str, Employee] = {}

    def create(self, employee: Employee) -> None:
        self.items[employee.employee_id] = employee

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        return self.items.get(employee_id)

    def list(self, *, business_id: Optional[str] = None) -> Sequence[Employee]:
        items = [e for e in self.items.values() if business_id is None or e.business_id == business_id]
        return list(reversed(items))

    def list_by_ids(self, employee_ids: Sequence[str]) -> Sequence[Employee]:
        return [self.items[i] for i in employee_ids if i in self.items]

    def update(self, employee: Employee) -> None:
        self.items[employee.employee_id] = employee

    def delete_by_id(self, employee_id: str) -> bool:
        return self.items.pop(employee_id, None) is not None

    def set_shift(self, employee_ids: Sequence[str], shift_id: Optional[str]) -> int:
        changed = 0
        for i in employee_ids:
            if i in self.items:
                self.items[i] = dataclasses.replace(self.items[i], shift_id=shift_id)
                changed += 1
        return changed

    def clear_shift(self, shift_id: str) -> int:
        holders = [e.employee_id for e in self.items.values() if e.shift_id == shift_id]
        return self.set_shift(holders, None)

    def replace_shift_holders(self, shift_id: str, employee_ids: Sequence[str]) -> int:
        self.clear_shift(shift_id)
        return self.set_shift(employee_ids, shift_id)

    def list_by_shift(self, shift_id: str) -> Sequence[Employee]:
        return [e for e in self.items.values() if e.shift_id == shift_id]


class InMemoryShifts:
    def __init__(self, employees: InMemoryEmployees):
        self.items: dict[str, Shift] = {}
        self._employees = employees

    def create(self, shift: Shift) -> None:
        self.items[shift.shift_id] = shift

    def get_by_id(self, shift_id: str) -> Optional[Shift]:
        return self.items.get(shift_id)

    def list_summaries(self, *, business_id: Optional[str] = None) -> Sequence[ShiftSummary]:
        shifts = [s for s in self.items.values() if business_id is None or s.business_id == business_id]
        return [
            ShiftSummary(shift=s, staff_count=len(self._employees.list_by_shift(s.shift_id)))
            for s in reversed(shifts)
        ]

    def update(self, shift: Shift) -> None:
        self.items[shift.shift_id] = shift

    def delete_by_id(self, shift_id: str) -> bool:
        return self.items.pop(shift_id, None) is not None


class InMemoryPayments:
    def __init__(self, employees: InMemoryEmployees):
        self.items: dict[str, Payment] = {}
        self._employees = employees

    def _with_brief(self, payment: Payment) -> Payment:
        employee = self._employees.get_by_id(payment.employee_id)
        if not employee:
            return payment
        brief = EmployeeBrief(employee.employee_id, employee.full_name, employee.phone_number)
        return dataclasses.replace(payment, employee=brief)

    def create(self, payment: Payment) -> None:
        self.items[payment.payment_id] = payment

    def get_by_id(self, payment_id: str) -> Optional[Payment]:
        payment = self.items.get(payment_id)
        return self._with_brief(payment) if payment else None

    def list(self, filters: PaymentFilter) -> Sequence[Payment]:
        result = []
        for p in reversed(list(self.items.values())):
            if filters.business_id and p.business_id != filters.business_id:
                continue
            if filters.employee_id and p.employee_id != filters.employee_id:
                continue
            if filters.payment_type and p.payment_type is not filters.payment_type:
                continue
            if filters.status and p.status is not filters.status:
                continue
            result.append(self._with_brief(p))
        return result

    def update(self, payment: Payment) -> None:
        self.items[payment.payment_id] = payment

    def delete_by_id(self, payment_id: str) -> bool:
        return self.items.pop(payment_id, None) is not None


class InMemoryAttendance:
    def __init__(self):
        self.items: dict[tuple[str, date], AttendanceRecord] = {}

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        return self.items.get((employee_id, work_date))

    def list_for_employee(self, employee_id: str, start: date, end: date) -> Sequence[AttendanceRecord]:
        rows = [r for (eid, d), r in self.items.items() if eid == employee_id and start <= d <= end]
        return sorted(rows, key=lambda r: r.work_date)

    def upsert(self, record: AttendanceRecord) -> None:
        self.items[(record.employee_id, record.work_date)] = record


@pytest.fixture
def repos():
    employees = InMemoryEmployees()
    return {
        "businesses_repo": InMemoryBusinesses(),
        "employees_repo": employees,
        "shifts_repo": InMemoryShifts(employees),
        "payments_repo": InMemoryPayments(employees),
        "attendance_repo": InMemoryAttendance(),
    }


@pytest.fixture
def container(repos):
    return wire_services(conn=None, **repos)


@pytest.fixture
def app(container):
    settings = importlib.import_module("payroll_service.config.testing")
    return create_app(container=container, settings=settings)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def business(container):
    return container.business_service.create(
        name="Amit Sharma",
        business_name="TechFlow Solutions",
        business_email="amit@techflow.example",
    )


@pytest.fixture
def make_employee(container, business):
    def _make(**overrides) -> Employee:
        payload = {
            "businessId": business.business_id,
            "type": "full_time",
            "fullName": "Priya Verma",
            "companyId": "EMP001",
            "phoneNumber": "9876543210",
            "dob": "1990-01-01",
            "gender": "Female",
            "salaryCycleDate": 1,
            "salaryAccess": "allow",
            "wageType": "Monthly",
            "salaryAmount": "30000",
        }
        payload.update(overrides)
        return container.employee_service.create(payload)

    return _make


@pytest.fixture
def make_shift(container, business):
    def _make(**overrides) -> Shift:
        payload = {
            "businessId": business.business_id,
            "name": "General Shift",
            "type": "fixed",
            "startTime": "09:00 AM",
            "endTime": "06:00 PM",
            "breakMinutes": 60,
        }
        payload.update(overrides)
        return container.shift_service.create(payload)

    return _make
