from __future__ import annotations

import logging
from typing import Any, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_choice, require_email, require_int_range, require_non_empty
from ..core.constants import PAYOUT_PIN_LENGTH
from ..core.enums import CalculationMethod, PayrollUsageType
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import Business, SalaryConfig
from .repository import BusinessRepository

logger = logging.getLogger(__name__)


class BusinessService:
    """Use cases: business onboarding, salary config and payout PIN."""

    def __init__(self, businesses: BusinessRepository):
        self._businesses = businesses

    def create(self, *, name: Any, business_name: Any, business_email: Any) -> Business:
        name = require_non_empty(name, "name")
        business_name = require_non_empty(business_name, "businessName")
        business_email = require_email(business_email, "businessEmail")

        business = self._businesses.create(name=name, business_name=business_name, business_email=business_email)
        logger.info("business created: %s (%s)", business.business_id, business.business_email)
        return business

    def get(self, business_id: str) -> Business:
        business = self._businesses.get_by_id(business_id)
        if not business:
            raise NotFoundError("Business not found")
        return business

    def latest(self) -> Optional[Business]:
        return self._businesses.get_latest()

    def update_salary_config(self, business_id: str, payload: dict) -> SalaryConfig:
        method = require_choice(payload.get("calculationMethod"), CalculationMethod, "calculationMethod")
        shift_hours = payload.get("shiftHours")
        if not isinstance(shift_hours, dict):
            raise ValidationError("shiftHours is required")

        config = SalaryConfig(
            calculation_method=method,
            shift_hours=require_int_range(shift_hours.get("hours"), "shiftHours.hours", min_value=0, max_value=24),
            shift_minutes=require_int_range(shift_hours.get("minutes"), "shiftHours.minutes", min_value=0, max_value=59),
        )

        self.get(business_id)
        self._businesses.upsert_salary_config(business_id, config)
        return config

    def update_usage_type(self, business_id: str, usage_type: Any) -> PayrollUsageType:
        usage = require_choice(usage_type, PayrollUsageType, "payrollUsageType")
        self.get(business_id)
        self._businesses.set_usage_type(business_id, usage)
        return usage

    def set_payout_pin(self, business_id: str, pin: Any) -> None:
        if not isinstance(pin, str) or len(pin) != PAYOUT_PIN_LENGTH or not (pin.isascii() and pin.isdigit()):
            raise ValidationError(f"pin must be exactly {PAYOUT_PIN_LENGTH} digits")

        self.get(business_id)
        self._businesses.set_payout_pin_hash(business_id, generate_password_hash(pin))
        logger.info("payout PIN updated for business %s", business_id)

    def verify_payout_pin(self, business: Business, pin: Any) -> None:
        """Businesses without a PIN authorize every payout."""
        if not business.has_payout_pin:
            return

        try:
            ok = isinstance(pin, str) and bool(pin) and check_password_hash(business.payout_pin_hash, pin)
        except ValueError:
            # e.g. a corrupted hash value in the column
            ok = False

        if not ok:
            raise AuthorizationError("Invalid payout PIN")
