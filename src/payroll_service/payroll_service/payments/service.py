from __future__ import annotations

import dataclasses
import logging
import uuid
from datetime import date
from typing import Any, Optional, Sequence

from ..businesses.repository import BusinessRepository
from ..common.datetime_utils import now_local, parse_iso_date
from ..common.validators import optional_choice, require_choice, require_non_negative_number
from ..core.enums import PaymentMode, PaymentStatus, PaymentType
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import Payment, PaymentFilter
from .repository import PaymentRepository

logger = logging.getLogger(__name__)

_REQUIRED = ("type", "amount", "paymentMode", "employeeId", "businessId", "date")


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError("Expected a string value")
    return value or None


def _amount(value: Any) -> float:
    return require_non_negative_number(value, "amount")


def _date(value: Any) -> str:
    parse_iso_date(value)
    return value


class PaymentService:
    """Use cases: payment ledger CRUD and per-employee summaries."""

    def __init__(self, payments: PaymentRepository, employees: EmployeeRepository, businesses: BusinessRepository):
        self._payments = payments
        self._employees = employees
        self._businesses = businesses

    def list(
        self,
        *,
        business_id: Optional[str] = None,
        employee_id: Optional[str] = None,
        payment_type: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Sequence[Payment]:
        filters = PaymentFilter(
            business_id=business_id or None,
            employee_id=employee_id or None,
            payment_type=optional_choice(payment_type, PaymentType, "payment type"),
            status=optional_choice(status, PaymentStatus, "status"),
        )
        return self._payments.list(filters)

    def get(self, payment_id: str) -> Payment:
        payment = self._payments.get_by_id(payment_id)
        if not payment:
            raise NotFoundError("Payment not found")
        return payment

    def create(self, payload: dict) -> Payment:
        # 0 and "" count as missing, like every other falsy value
        if any(not payload.get(key) for key in _REQUIRED):
            raise ValidationError(f"Missing required fields: {', '.join(_REQUIRED)}")

        payment_type = require_choice(payload["type"], PaymentType, "payment type")
        payment_mode = require_choice(payload["paymentMode"], PaymentMode, "payment mode")
        status = require_choice(payload.get("status") or PaymentStatus.COMPLETED.value, PaymentStatus, "status")
        amount = _amount(payload["amount"])
        payment_date = _date(payload["date"])

        employee_id, business_id = payload["employeeId"], payload["businessId"]
        if not self._employees.get_by_id(employee_id):
            raise NotFoundError("Employee not found")
        if not self._businesses.get_by_id(business_id):
            raise NotFoundError("Business not found")

        now = now_local().replace(microsecond=0)
        payment = Payment(
            payment_id=str(uuid.uuid4()),
            payment_type=payment_type,
            amount=amount,
            payment_mode=payment_mode,
            status=status,
            date=payment_date,
            employee_id=employee_id,
            business_id=business_id,
            created_at=now,
            updated_at=now,
            phone_number=_optional_text(payload.get("phoneNumber")),
            upi_id=_optional_text(payload.get("upiId")),
            narration=_optional_text(payload.get("narration")),
            payout_reference=_optional_text(payload.get("payoutReference")),
        )
        self._payments.create(payment)
        logger.info(
            "payment %s recorded: %s %.2f via %s for employee %s",
            payment.payment_id,
            payment_type.value,
            amount,
            payment_mode.value,
            employee_id,
        )
        # re-read so the response carries the employee brief
        return self._payments.get_by_id(payment.payment_id) or payment

    def update(self, payment_id: str, payload: dict) -> Payment:
        current = self.get(payment_id)
        changes: dict[str, Any] = {}
        if "amount" in payload:
            changes["amount"] = _amount(payload["amount"])
        if "paymentMode" in payload:
            changes["payment_mode"] = require_choice(payload["paymentMode"], PaymentMode, "payment mode")
        if "phoneNumber" in payload:
            changes["phone_number"] = _optional_text(payload["phoneNumber"])
        if "narration" in payload:
            changes["narration"] = _optional_text(payload["narration"])
        if "status" in payload:
            changes["status"] = require_choice(payload["status"], PaymentStatus, "status")
        if "date" in payload:
            changes["date"] = _date(payload["date"])

        if not changes:
            return current

        updated = dataclasses.replace(current, updated_at=now_local().replace(microsecond=0), **changes)
        self._payments.update(updated)
        return updated

    def delete(self, payment_id: str) -> None:
        self.get(payment_id)
        self._payments.delete_by_id(payment_id)
        logger.info("payment %s deleted", payment_id)

    def employee_summary(self, employee_id: str) -> dict:
        if not self._employees.get_by_id(employee_id):
            raise NotFoundError("Employee not found")
        payments = self._payments.list(PaymentFilter(employee_id=employee_id))

        by_type = {t.value: {"count": 0, "amount": 0.0} for t in PaymentType}
        by_status = {s.value: 0 for s in PaymentStatus}
        for p in payments:
            by_type[p.payment_type.value]["count"] += 1
            by_type[p.payment_type.value]["amount"] += p.amount
            by_status[p.status.value] += 1

        return {
            "totalPayments": len(payments),
            "totalAmount": sum(p.amount for p in payments),
            "byType": by_type,
            "byStatus": by_status,
        }

    def completed_advances(self, employee_id: str, start: date, end: date) -> list[Payment]:
        """Completed advance payments dated within [start, end]."""
        payments = self._payments.list(
            PaymentFilter(employee_id=employee_id, payment_type=PaymentType.ADVANCE, status=PaymentStatus.COMPLETED)
        )
        result = []
        for p in payments:
            try:
                paid_on = parse_iso_date(p.date)
            except ValidationError:
                logger.warning("payment %s has unparseable date %r; skipped", p.payment_id, p.date)
                continue
            if start <= paid_on <= end:
                result.append(p)
        return result
