from datetime import date

import pytest

from payroll_service.common.datetime_utils import minutes_between, parse_clock_time, parse_iso_date
from payroll_service.core.exceptions import ValidationError


@pytest.mark.parametrize(
    "value, minutes",
    [
        ("09:00", 540),
        ("9:00 AM", 540),
        ("06:30 PM", 1110),
        ("12:00 AM", 0),
        ("12:15 PM", 735),
        ("23:59", 1439),
    ],
)
def test_parse_clock_time(value, minutes):
    assert parse_clock_time(value) == minutes


@pytest.mark.parametrize("value", ["", "25:00", "13:00 PM", "9:75", "noon"])
def test_parse_clock_time_rejects_garbage(value):
    with pytest.raises(ValidationError):
        parse_clock_time(value)


def test_minutes_between_wraps_overnight():
    assert minutes_between(540, 1080) == 540
    assert minutes_between(1320, 360) == 480


def test_parse_iso_date():
    assert parse_iso_date("2025-02-28") == date(2025, 2, 28)
    with pytest.raises(ValidationError):
        parse_iso_date("28/02/2025")
