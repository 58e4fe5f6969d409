import math

import pytest

from ecorun.utils import round_float, round_half_up


@pytest.mark.parametrize(
    "value, expected",
    [
        (2.5, 3),
        (0.5, 1),
        (-2.5, -2),
        (1.4, 1),
        (2.6, 3),
    ],
)
def test_round_half_up_whole_numbers(value, expected):
    result = round_half_up(value)
    assert result == expected
    assert isinstance(result, int)


def test_round_half_up_decimals():
    assert round_half_up(12.25, 1) == 12.3
    assert round_half_up(12.3456, 1) == 12.3
    assert round_half_up(48.85661234567, 6) == 48.856612


def test_round_half_up_is_idempotent():
    once = round_half_up(2.352212499, 6)
    assert round_half_up(once, 6) == once


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_values_pass_through(value):
    result = round_half_up(value)
    if math.isnan(value):
        assert math.isnan(result)
    else:
        assert result == value


def test_round_float_returns_float():
    assert round_float(2.5, 0) == 3.0
    assert isinstance(round_float(2.5, 0), float)
