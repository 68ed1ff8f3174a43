from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import to_epoch_ms
from ..core.enums import PaymentMode, PaymentStatus, PaymentType


@dataclass(frozen=True)
class EmployeeBrief:
    employee_id: str
    full_name: str
    phone_number: str

    def to_dict(self) -> dict:
        return {"id": self.employee_id, "fullName": self.full_name, "phoneNumber": self.phone_number}


@dataclass(frozen=True)
class Payment:
    """Domain entity: money paid (or to be paid) to an employee."""

    payment_id: str
    payment_type: PaymentType
    amount: float
    payment_mode: PaymentMode
    status: PaymentStatus
    date: str
    employee_id: str
    business_id: str
    created_at: datetime
    updated_at: datetime
    phone_number: Optional[str] = None
    upi_id: Optional[str] = None
    narration: Optional[str] = None
    payout_reference: Optional[str] = None
    employee: Optional[EmployeeBrief] = None

    def to_dict(self) -> dict:
        return {
            "id": self.payment_id,
            "type": self.payment_type.value,
            "amount": self.amount,
            "paymentMode": self.payment_mode.value,
            "phoneNumber": self.phone_number,
            "upiId": self.upi_id,
            "narration": self.narration,
            "status": self.status.value,
            "date": self.date,
            "payoutReference": self.payout_reference,
            "employeeId": self.employee_id,
            "businessId": self.business_id,
            "createdAt": to_epoch_ms(self.created_at),
            "updatedAt": to_epoch_ms(self.updated_at),
            "employee": self.employee.to_dict() if self.employee else None,
        }


@dataclass(frozen=True)
class PaymentFilter:
    business_id: Optional[str] = None
    employee_id: Optional[str] = None
    payment_type: Optional[PaymentType] = None
    status: Optional[PaymentStatus] = None
