import math

import pytest

from n2k_weather_mcp.config import RangeLimits
from n2k_weather_mcp.validation import validate_ranges


def test_temperature_fields_are_clamped():
    validated = validate_ranges(
        {"temperature": 400.0, "dew_point": 100.0, "wind_chill": 200.0, "heat_index": 360.0}
    )
    assert validated["temperature"] == 358.15
    assert validated["dew_point"] == 233.15
    assert validated["wind_chill"] == 233.15
    assert validated["heat_index"] == 358.15


def test_pressure_humidity_and_speed_are_clamped():
    validated = validate_ranges(
        {"pressure": 150000.0, "humidity": 1.4, "wind_speed": 150.0, "apparent_wind_speed": -2.0}
    )
    assert validated["pressure"] == 120000.0
    assert validated["humidity"] == 1.0
    assert validated["wind_speed"] == 102.3
    assert validated["apparent_wind_speed"] == 0.0


def test_directions_wrap_instead_of_saturating():
    validated = validate_ranges({"wind_direction": 2 * math.pi + 0.5, "apparent_wind_angle": 3 * math.pi / 2})
    assert validated["wind_direction"] == pytest.approx(0.5)
    assert validated["apparent_wind_angle"] == pytest.approx(-math.pi / 2)


def test_negative_wind_direction_wraps_to_positive():
    validated = validate_ranges({"wind_direction": -math.pi / 2})
    assert validated["wind_direction"] == pytest.approx(3 * math.pi / 2)


def test_in_range_values_are_untouched():
    candidates = {
        "temperature": 288.15,
        "pressure": 101325.0,
        "humidity": 0.65,
        "wind_speed": 5.14,
        "wind_direction": 1.5708,
        "apparent_wind_angle": -1.0,
    }
    assert validate_ranges(candidates) == candidates


def test_missing_and_invalid_values_are_left_alone():
    candidates = {"temperature": None, "pressure": "high", "humidity": float("nan"), "description": "Fog"}
    validated = validate_ranges(candidates)
    assert validated["temperature"] is None
    assert validated["pressure"] == "high"
    assert math.isnan(validated["humidity"])
    assert validated["description"] == "Fog"
    assert "wind_speed" not in validated


def test_zero_values_are_still_validated():
    validated = validate_ranges({"temperature": 0.0, "pressure": 0.0})
    assert validated["temperature"] == 233.15
    assert validated["pressure"] == 80000.0


def test_input_is_not_mutated():
    candidates = {"temperature": 400.0}
    validate_ranges(candidates)
    assert candidates["temperature"] == 400.0


def test_empty_input():
    assert validate_ranges({}) == {}
    assert validate_ranges(None) == {}


def test_custom_limits():
    limits = RangeLimits(wind_speed_max=50.0)
    assert validate_ranges({"wind_speed": 60.0}, limits)["wind_speed"] == 50.0


@pytest.mark.parametrize(
    "candidates",
    [
        {"temperature": 500.0, "wind_direction": -7.0, "apparent_wind_angle": 9.0},
        {"humidity": -0.2, "pressure": 10.0, "apparent_wind_speed": 1000.0},
        {"wind_direction": -1e-20, "apparent_wind_angle": -math.pi},
        {"temperature": 288.15, "wind_direction": 6.2, "apparent_wind_angle": math.pi},
    ],
)
def test_validation_is_idempotent(candidates):
    once = validate_ranges(candidates)
    assert validate_ranges(once) == once


def test_oversized_integers_saturate():
    validated = validate_ranges({"pressure": 10**400, "wind_speed": -(10**400), "wind_direction": 10**400})
    assert validated["pressure"] == 120000.0
    assert validated["wind_speed"] == 0.0
    assert 0 <= validated["wind_direction"] < 2 * math.pi
