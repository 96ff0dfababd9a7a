import pytest

from focusclock.utils.time_conversions import (
    convert_to_seconds,
    format_seconds_to_ms,
)


def test_convert_to_seconds():
    assert convert_to_seconds(0, 25, 0) == 1500
    assert convert_to_seconds(1, 0, 5) == 3605
    with pytest.raises(ValueError):
        convert_to_seconds(0, -1, 0)


@pytest.mark.parametrize(
    "seconds, expected",
    [(1500, "25:00"), (59, "00:59"), (0, "00:00"), (3600, "60:00")],
)
def test_format_seconds_to_ms(seconds, expected):
    assert format_seconds_to_ms(seconds) == expected
