from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import to_epoch_ms
from ..core.enums import CalculationMethod, PayrollUsageType


@dataclass(frozen=True)
class SalaryConfig:
    calculation_method: CalculationMethod
    shift_hours: int
    shift_minutes: int

    @property
    def shift_total_minutes(self) -> int:
        return self.shift_hours * 60 + self.shift_minutes

    def to_dict(self) -> dict:
        return {
            "calculationMethod": self.calculation_method.value,
            "shiftHours": {"hours": self.shift_hours, "minutes": self.shift_minutes},
        }


@dataclass(frozen=True)
class Business:
    """Domain entity: the business that runs payroll.

    Note: pure data object, no DB access here.
    """

    business_id: str
    name: str
    business_name: str
    business_email: str
    created_at: datetime
    payroll_usage_type: Optional[PayrollUsageType] = None
    salary_config: Optional[SalaryConfig] = None
    payout_pin_hash: Optional[str] = None

    @property
    def has_payout_pin(self) -> bool:
        return bool(self.payout_pin_hash)

    def to_dict(self) -> dict:
        data = {
            "id": self.business_id,
            "name": self.name,
            "businessName": self.business_name,
            "businessEmail": self.business_email,
            "payrollUsageType": self.payroll_usage_type.value if self.payroll_usage_type else None,
            "hasPayoutPin": self.has_payout_pin,
            "createdAt": to_epoch_ms(self.created_at),
        }
        if self.salary_config:
            data["salaryConfig"] = self.salary_config.to_dict()
        return data
