from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import CalculationResult, PayrollContext


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(self, ctx: PayrollContext) -> CalculationResult:
        """Base amount plus automatic additions; advances are handled by the caller."""
        raise NotImplementedError
