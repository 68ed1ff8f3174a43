from __future__ import annotations

import dataclasses
import logging
import uuid
from typing import Any, Optional, Sequence

from ..businesses.repository import BusinessRepository
from ..common.datetime_utils import now_local
from ..common.validators import (
    optional_choice,
    require_choice,
    require_int_range,
    require_non_empty,
    require_non_negative_number,
    require_string,
    require_string_list,
    require_uuid,
)
from ..core.constants import WEEKDAY_NAMES
from ..core.enums import PaymentMode, StaffType, WageType
from ..core.exceptions import NotFoundError, ValidationError
from ..shifts.repository import ShiftRepository
from .model import Employee, PaymentDetails
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

_PAYOUT_MODES = {"NEFT", "IMPS", PaymentMode.CASH.value, PaymentMode.UPI.value}


def _salary_amount(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    require_non_negative_number(value, "salaryAmount")
    return str(value)


def _weekly_offs(value: Any) -> list[str]:
    if value is None:
        return []
    offs = require_string_list(value, "weeklyOffs")
    unknown = [d for d in offs if d not in WEEKDAY_NAMES]
    if unknown:
        raise ValidationError(f"weeklyOffs has unknown days: {', '.join(unknown)}")
    # de-duplicate, keep caller order
    return list(dict.fromkeys(offs))


def _payment_details(value: Any) -> Optional[PaymentDetails]:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValidationError("paymentDetails must be an object")
    mode = value.get("paymentMode")
    if mode and mode not in _PAYOUT_MODES:
        raise ValidationError(f"Invalid paymentDetails.paymentMode. Must be one of: {', '.join(sorted(_PAYOUT_MODES))}")
    return PaymentDetails.from_dict(value)


class EmployeeService:
    """Use cases: staff onboarding and profile edits."""

    def __init__(
        self,
        employees: EmployeeRepository,
        businesses: BusinessRepository,
        shifts: Optional[ShiftRepository] = None,
    ):
        self._employees = employees
        self._businesses = businesses
        self._shifts = shifts

    def create(self, payload: dict) -> Employee:
        business_id = require_uuid(payload.get("businessId"), "businessId")
        employee = Employee(
            employee_id=str(uuid.uuid4()),
            business_id=business_id,
            staff_type=require_choice(payload.get("type"), StaffType, "type"),
            full_name=require_non_empty(payload.get("fullName"), "fullName"),
            company_id=require_non_empty(payload.get("companyId"), "companyId"),
            phone_number=require_non_empty(payload.get("phoneNumber"), "phoneNumber"),
            dob=require_string(payload.get("dob"), "dob"),
            gender=require_non_empty(payload.get("gender"), "gender"),
            salary_cycle_date=require_int_range(payload.get("salaryCycleDate"), "salaryCycleDate", min_value=1, max_value=31),
            salary_access=require_string(payload.get("salaryAccess"), "salaryAccess"),
            created_at=now_local().replace(microsecond=0),
            wage_type=optional_choice(payload.get("wageType"), WageType, "wageType"),
            salary_amount=_salary_amount(payload.get("salaryAmount")),
            weekly_offs=_weekly_offs(payload.get("weeklyOffs")),
            payment_details=_payment_details(payload.get("paymentDetails")),
        )

        if not self._businesses.get_by_id(business_id):
            raise NotFoundError("Business not found")

        self._employees.create(employee)
        logger.info("employee %s onboarded for business %s", employee.employee_id, business_id)
        return employee

    def list(self, *, business_id: Optional[str] = None) -> Sequence[Employee]:
        return self._employees.list(business_id=business_id or None)

    def get(self, employee_id: str) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def update(self, employee_id: str, payload: dict) -> Employee:
        """Partial update; keys absent from the payload keep their stored values."""
        current = self.get(employee_id)
        changes: dict[str, Any] = {}

        if "type" in payload:
            changes["staff_type"] = require_choice(payload["type"], StaffType, "type")
        for key, attr in (("fullName", "full_name"), ("companyId", "company_id"), ("phoneNumber", "phone_number"), ("gender", "gender")):
            if key in payload:
                changes[attr] = require_non_empty(payload[key], key)
        if "dob" in payload:
            changes["dob"] = require_string(payload["dob"], "dob")
        if "salaryAccess" in payload:
            changes["salary_access"] = require_string(payload["salaryAccess"], "salaryAccess")
        if "salaryCycleDate" in payload:
            changes["salary_cycle_date"] = require_int_range(
                payload["salaryCycleDate"], "salaryCycleDate", min_value=1, max_value=31
            )
        if "wageType" in payload:
            changes["wage_type"] = optional_choice(payload["wageType"], WageType, "wageType")
        if "salaryAmount" in payload:
            changes["salary_amount"] = _salary_amount(payload["salaryAmount"])
        if "weeklyOffs" in payload:
            changes["weekly_offs"] = _weekly_offs(payload["weeklyOffs"])
        if "paymentDetails" in payload:
            changes["payment_details"] = _payment_details(payload["paymentDetails"])
        if "shiftId" in payload:
            changes["shift_id"] = self._resolve_shift(payload["shiftId"])

        if not changes:
            return current

        updated = dataclasses.replace(current, **changes)
        self._employees.update(updated)
        return updated

    def delete(self, employee_id: str) -> None:
        self.get(employee_id)
        if not self._employees.delete_by_id(employee_id):
            raise NotFoundError("Employee not found")
        logger.info("employee %s deleted", employee_id)

    def _resolve_shift(self, shift_id: Any) -> Optional[str]:
        if shift_id in (None, ""):
            return None
        shift_id = require_uuid(shift_id, "shiftId")
        if self._shifts is not None and not self._shifts.get_by_id(shift_id):
            raise NotFoundError("Shift not found")
        return shift_id
