import pytest

from payroll_service.common.validators import require_choice, require_int_range, require_non_negative_number
from payroll_service.core.enums import PaymentType, WageType
from payroll_service.core.exceptions import ValidationError


def test_require_choice_lists_allowed_values():
    with pytest.raises(ValidationError) as exc:
        require_choice("bonus", PaymentType, "payment type")
    assert exc.value.message == "Invalid payment type. Must be one of: one-time, advance, salary"


def test_wage_type_accepts_long_hourly_label():
    assert require_choice("Per Hour Basis", WageType, "wageType") is WageType.HOURLY


def test_require_int_range_rejects_bools_and_fractions():
    with pytest.raises(ValidationError):
        require_int_range(True, "salaryCycleDate", min_value=1, max_value=31)
    with pytest.raises(ValidationError):
        require_int_range(1.5, "salaryCycleDate", min_value=1, max_value=31)
    with pytest.raises(ValidationError):
        require_int_range(32, "salaryCycleDate", min_value=1, max_value=31)
    assert require_int_range(31.0, "salaryCycleDate", min_value=1, max_value=31) == 31


def test_require_non_negative_number():
    assert require_non_negative_number("12.5", "amount") == 12.5
    with pytest.raises(ValidationError):
        require_non_negative_number(-1, "amount")
    with pytest.raises(ValidationError):
        require_non_negative_number("x", "amount")


@pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
def test_non_finite_numbers_are_rejected(value):
    with pytest.raises(ValidationError):
        require_int_range(value, "hours", min_value=0, max_value=24)
    with pytest.raises(ValidationError):
        require_non_negative_number(value, "amount")
    with pytest.raises(ValidationError):
        require_non_negative_number(str(value), "amount")
