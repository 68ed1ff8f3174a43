from __future__ import annotations

from ...common.money import parse_amount, round_half_up
from ...core.constants import DEFAULT_HOURLY_SHIFT_HOURS
from ...core.enums import WageType
from ..model import CalculationResult, CalculationStats, PayrollContext
from .base import PayrollCalculator


class FlatPayrollCalculator(PayrollCalculator):
    """Salary as entered: one cycle for Monthly, one day for Daily, one shift for Hourly."""

    def calculate(self, ctx: PayrollContext) -> CalculationResult:
        salary = parse_amount(ctx.employee.salary_amount)
        wage_type = ctx.employee.effective_wage_type
        shift_hours = ctx.shift.payable_hours if ctx.has_assigned_shift else DEFAULT_HOURLY_SHIFT_HOURS

        if wage_type is WageType.HOURLY:
            base = salary * shift_hours
        else:
            base = salary

        stats = CalculationStats(
            total_days=1 if wage_type.is_daily else ctx.days_in_cycle,
            shift_hours=round(shift_hours, 2),
        )
        return CalculationResult(base_amount=round_half_up(base), stats=stats)
