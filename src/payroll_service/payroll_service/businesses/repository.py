from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import PayrollUsageType
from .model import Business, SalaryConfig


class BusinessRepository(Protocol):
    """Repository interface for Business.

    Note (DIP): services depend on this interface, never on a concrete database.
    """

    def create(self, *, name: str, business_name: str, business_email: str) -> Business:
        raise NotImplementedError

    def get_by_id(self, business_id: str) -> Optional[Business]:
        raise NotImplementedError

    def get_latest(self) -> Optional[Business]:
        raise NotImplementedError

    def upsert_salary_config(self, business_id: str, config: SalaryConfig) -> None:
        raise NotImplementedError

    def set_usage_type(self, business_id: str, usage_type: PayrollUsageType) -> None:
        raise NotImplementedError

    def set_payout_pin_hash(self, business_id: str, pin_hash: str) -> None:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
