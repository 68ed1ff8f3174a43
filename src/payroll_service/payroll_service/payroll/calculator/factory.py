from __future__ import annotations

from dataclasses import dataclass

from ...core.enums import PayrollBasis
from .attendance_calculator import AttendancePayrollCalculator
from .base import PayrollCalculator
from .flat_calculator import FlatPayrollCalculator


@dataclass
class PayrollCalculatorFactory:
    """Factory Pattern: choose the calculator for the requested basis."""

    def for_basis(self, basis: PayrollBasis) -> PayrollCalculator:
        if basis is PayrollBasis.ATTENDANCE:
            return AttendancePayrollCalculator()
        return FlatPayrollCalculator()
