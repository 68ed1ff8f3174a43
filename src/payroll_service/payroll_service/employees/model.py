from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import to_epoch_ms
from ..core.enums import PaymentMode, StaffType, WageType


@dataclass(frozen=True)
class PaymentDetails:
    upi_id: Optional[str] = None
    account_holder_name: Optional[str] = None
    ifsc: Optional[str] = None
    account_number: Optional[str] = None
    payment_mode: Optional[str] = None

    @property
    def is_cash(self) -> bool:
        return self.payment_mode == PaymentMode.CASH.value

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Optional["PaymentDetails"]:
        if not data:
            return None
        return cls(
            upi_id=data.get("upiId") or None,
            account_holder_name=data.get("accountHolderName") or None,
            ifsc=data.get("ifsc") or None,
            account_number=data.get("accountNumber") or None,
            payment_mode=data.get("paymentMode") or None,
        )

    def to_dict(self) -> dict:
        data = {
            "upiId": self.upi_id,
            "accountHolderName": self.account_holder_name,
            "ifsc": self.ifsc,
            "accountNumber": self.account_number,
            "paymentMode": self.payment_mode,
        }
        return {k: v for k, v in data.items() if v is not None}


@dataclass(frozen=True)
class Employee:
    """Domain entity: a staff member onboarded under a business."""

    employee_id: str
    business_id: str
    staff_type: StaffType
    full_name: str
    company_id: str
    phone_number: str
    dob: str
    gender: str
    salary_cycle_date: int
    salary_access: str
    created_at: datetime
    wage_type: Optional[WageType] = None
    salary_amount: Optional[str] = None
    weekly_offs: list[str] = field(default_factory=list)
    shift_id: Optional[str] = None
    payment_details: Optional[PaymentDetails] = None

    @property
    def effective_wage_type(self) -> WageType:
        return self.wage_type or WageType.MONTHLY

    def to_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "businessId": self.business_id,
            "type": self.staff_type.value,
            "fullName": self.full_name,
            "companyId": self.company_id,
            "phoneNumber": self.phone_number,
            "dob": self.dob,
            "gender": self.gender,
            "salaryCycleDate": self.salary_cycle_date,
            "salaryAccess": self.salary_access,
            "wageType": self.wage_type.value if self.wage_type else None,
            "salaryAmount": self.salary_amount,
            "weeklyOffs": list(self.weekly_offs),
            "shiftId": self.shift_id,
            "paymentDetails": self.payment_details.to_dict() if self.payment_details else None,
            "createdAt": to_epoch_ms(self.created_at),
        }
