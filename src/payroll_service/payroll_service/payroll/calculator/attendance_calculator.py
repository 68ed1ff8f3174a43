from __future__ import annotations

from ...common.money import parse_amount, round_half_up
from ...core.constants import BUFFER_MINUTES, MIN_OT_MINUTES, OT_MULTIPLIER
from ...core.enums import AdjustmentType, AttendanceStatus, WageType
from ..model import CalculationResult, CalculationStats, PayrollAdjustment, PayrollContext
from .base import PayrollCalculator


class AttendancePayrollCalculator(PayrollCalculator):
    """Pays for recorded attendance: full/half days, regular hours and overtime at 1.5x.

    Monthly staff are paid over the whole period; Daily and Hourly staff only for
    the period's last day.
    """

    def calculate(self, ctx: PayrollContext) -> CalculationResult:
        employee = ctx.employee
        wage_type = employee.effective_wage_type
        salary = parse_amount(employee.salary_amount)

        shift_minutes = ctx.shift.payable_minutes
        shift_hours = round(shift_minutes / 60, 2)

        if wage_type.is_daily:
            records = [r for r in ctx.records if r.work_date == ctx.period_end]
        else:
            records = list(ctx.records)

        present_days = 0.0
        regular_minutes = 0
        ot_hours = 0
        for r in records:
            if r.status is not AttendanceStatus.PRESENT:
                continue
            if r.working_minutes >= shift_minutes - BUFFER_MINUTES:
                present_days += 1
            elif r.working_minutes >= shift_minutes / 2:
                present_days += 0.5

            day_ot = r.overtime_minutes // 60 if r.overtime_minutes >= MIN_OT_MINUTES else 0
            regular_minutes += max(0, r.working_minutes - day_ot * 60)
            ot_hours += day_ot

        stats = CalculationStats(
            total_days=1 if wage_type.is_daily else ctx.days_in_cycle,
            shift_hours=shift_hours,
            overtime_hours=ot_hours,
            total_hours_worked=round((regular_minutes + ot_hours * 60) / 60, 1),
        )

        if wage_type is WageType.MONTHLY:
            days = max(ctx.days_in_cycle, 1)
            per_day = salary / days
            hourly_rate = per_day / shift_hours if shift_hours else 0.0
            base = round_half_up(per_day * present_days)
            stats.working_days = present_days
            stats.pay_per_day = round_half_up(per_day)
        else:
            if wage_type is WageType.DAILY:
                hourly_rate = salary / shift_hours if shift_hours else 0.0
                stats.pay_per_day = round_half_up(salary)
            else:
                hourly_rate = salary
            base = round_half_up(regular_minutes / 60 * hourly_rate)
            stats.present_shifts = sum(1 for r in records if r.status is AttendanceStatus.PRESENT)
            stats.total_shifts = max(len(records), 1)
            stats.regular_hours = round(regular_minutes / 60, 1)
        stats.hourly_rate = round_half_up(hourly_rate)

        overtime_pay = round_half_up(ot_hours * hourly_rate * OT_MULTIPLIER)
        stats.overtime_amount = overtime_pay

        additions = []
        if overtime_pay > 0:
            additions.append(
                PayrollAdjustment(
                    adjustment_id="auto-overtime",
                    adjustment_type=AdjustmentType.ADDITION,
                    label=f"Overtime ({ot_hours} hrs)",
                    amount=overtime_pay,
                )
            )
        return CalculationResult(base_amount=base, additions=additions, stats=stats)
