import math

import numpy as np
import pytest

from ecorun import constants
from ecorun.metrics import (
    calculate_co2_savings,
    calculate_distance,
    calculate_life_gained,
    calculate_pace,
    filter_speed,
    haversine_m,
    haversine_series_m,
    max_speed_kmh,
)
from ecorun.models import ActivityKind, RawPosition


def pos(lat, lon, timestamp=0, speed=None):
    return RawPosition(latitude=lat, longitude=lon, timestamp=timestamp, speed=speed)


class TestDistance:
    def test_identical_points_are_zero(self):
        p = pos(48.8566, 2.3522)
        assert calculate_distance(p, p) == 0

    def test_is_symmetric(self):
        a = pos(48.8566, 2.3522)
        b = pos(51.5074, -0.1278)
        assert calculate_distance(a, b) == calculate_distance(b, a)

    def test_paris_points(self):
        a = pos(48.8566, 2.3522)
        b = pos(48.8576, 2.3532)
        assert calculate_distance(a, b) == pytest.approx(133.1, abs=1.0)

    def test_pole_to_pole(self):
        assert haversine_m(90, 0, -90, 0) == pytest.approx(20_015_000, abs=1000)

    def test_out_of_range_angles_do_not_raise(self):
        result = haversine_m(200, 400, -95, -190)
        assert math.isfinite(result)
        assert result >= 0

    def test_nan_does_not_raise(self):
        assert math.isnan(haversine_m(float("nan"), 0, 0, 0))

    def test_series_matches_pairwise(self):
        lats = [48.8566, 48.8576, 48.8586]
        lons = [2.3522, 2.3532, 2.3522]
        series = haversine_series_m(lats, lons)

        assert series[0] == 0
        assert series[1] == pytest.approx(haversine_m(lats[0], lons[0], lats[1], lons[1]))
        assert series[2] == pytest.approx(haversine_m(lats[1], lons[1], lats[2], lons[2]))

    def test_series_empty(self):
        assert haversine_series_m([], []).size == 0
        assert np.array_equal(haversine_series_m([1.0], [2.0]), [0.0])


class TestEcoMetrics:
    def test_co2_savings(self):
        assert calculate_co2_savings(10) == pytest.approx(1.2)
        assert calculate_co2_savings(0) == 0

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_co2_savings_clamps_invalid(self, value):
        assert calculate_co2_savings(value) == 0

    def test_co2_savings_passes_negatives_through(self):
        assert calculate_co2_savings(-10) == pytest.approx(-1.2)

    def test_life_gained(self):
        assert calculate_life_gained(1) == 7
        assert calculate_life_gained(0) == 0
        assert calculate_life_gained(float("nan")) == 0
        assert calculate_life_gained(float("inf")) == 0
        assert calculate_life_gained(-2) == -14

    def test_pace(self):
        assert calculate_pace(5, 1500) == 5

    def test_pace_without_distance_is_zero(self):
        assert calculate_pace(0, 1500) == 0
        assert calculate_pace(0, 0) == 0


class TestSpeedFilter:
    def test_running_limits(self):
        assert filter_speed(100, ActivityKind.RUNNING) == 0
        assert filter_speed(15, ActivityKind.RUNNING) == 15
        assert filter_speed(60, ActivityKind.RUNNING) == 0
        assert filter_speed(50, ActivityKind.RUNNING) == 50

    def test_biking_limits(self):
        assert filter_speed(60, ActivityKind.BIKING) == 60
        assert filter_speed(80, ActivityKind.BIKING) == 80
        assert filter_speed(80.1, ActivityKind.BIKING) == 0

    def test_accepts_string_kind(self):
        assert filter_speed(60, "biking") == 60
        assert filter_speed(60, "running") == 0

    def test_negative_and_nan_are_zeroed(self):
        assert filter_speed(-5, ActivityKind.RUNNING) == 0
        assert filter_speed(float("nan"), ActivityKind.BIKING) == 0

    def test_max_speed_lookup_covers_every_kind(self):
        for kind in ActivityKind:
            assert max_speed_kmh(kind) > 0

    def test_unknown_kind_is_rejected(self):
        with pytest.raises(ValueError, match="swimming"):
            max_speed_kmh("swimming")


def test_rounding_resolution_is_finer_than_redundancy_threshold():
    assert constants.COORD_RESOLUTION_M < constants.REDUNDANT_DISTANCE_M
    assert constants.COORD_RESOLUTION_M == pytest.approx(0.111, abs=0.001)
