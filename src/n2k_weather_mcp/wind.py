"""
Apparent wind and comfort indices.

Wind and vessel motion are projected onto Cartesian axes and the apparent
wind is the true wind vector minus the vessel velocity vector. The comfort
formulas only apply inside their meteorological envelope; outside it, or when
an input is missing, they return the input temperature unchanged.
"""

import logging
import math
from typing import Any, NamedTuple, Optional, Tuple

from n2k_weather_mcp.units import (
    MAGNUS_A,
    MAGNUS_B,
    celsius_to_kelvin,
    clamp,
    fahrenheit_to_kelvin,
    is_valid_number,
    kelvin_to_celsius,
    kelvin_to_fahrenheit,
    ms_to_kmh,
    normalize_angle,
)

logger = logging.getLogger("n2k_weather.wind")

# Wind chill envelope (Environment Canada / US NWS)
WIND_CHILL_MAX_CELSIUS = 10.0
WIND_CHILL_MIN_KMH = 4.8

# Heat index envelope and Rothfusz regression coefficients
HEAT_INDEX_MIN_FAHRENHEIT = 80.0
HEAT_INDEX_MIN_HUMIDITY_PERCENT = 40.0
ROTHFUSZ_COEFFICIENTS = (
    -42.379,
    2.04901523,
    10.14333127,
    -0.22475541,
    -0.00683783,
    -0.05481717,
    0.00122874,
    0.00085282,
    -0.00000199,
)


class FormulaResult(NamedTuple):
    """Value of a comfort formula and whether the formula actually applied"""

    value: Optional[float]
    computed: bool


def _vector(speed: float, angle: float) -> Tuple[float, float]:
    return speed * math.cos(angle), speed * math.sin(angle)


def _apparent_vector(
    true_wind_speed: float, true_wind_direction: float, vessel_speed: float, vessel_heading: float
) -> Tuple[float, float]:
    wind_x, wind_y = _vector(true_wind_speed, true_wind_direction)
    vessel_x, vessel_y = _vector(vessel_speed, vessel_heading)
    return wind_x - vessel_x, wind_y - vessel_y


def _apparent_angle(
    x: float, y: float, vessel_speed: float, vessel_heading: float, true_wind_direction: float
) -> float:
    # atan2 of a zero vector is meaningless, and a stationary vessel sees the true wind
    if vessel_speed == 0 or (x == 0 and y == 0):
        return normalize_angle(true_wind_direction - vessel_heading)
    return normalize_angle(math.atan2(y, x) - vessel_heading)


def validate_wind_inputs(true_wind_speed: Any, vessel_speed: Any, vessel_heading: Any, true_wind_direction: Any) -> bool:
    """Check that both speeds are non-negative numbers and both angles are numbers"""
    return (
        is_valid_number(true_wind_speed, minimum=0)
        and is_valid_number(vessel_speed, minimum=0)
        and is_valid_number(vessel_heading)
        and is_valid_number(true_wind_direction)
    )


def _degraded_speed(true_wind_speed: Any) -> float:
    return float(true_wind_speed) if is_valid_number(true_wind_speed) else 0.0


def _degraded_angle(true_wind_direction: Any, vessel_heading: Any) -> Optional[float]:
    if is_valid_number(true_wind_direction) and is_valid_number(vessel_heading):
        return true_wind_direction - vessel_heading
    return None


def calculate_apparent_wind_speed(
    true_wind_speed: Any, vessel_speed: Any, vessel_heading: Any, true_wind_direction: Any
) -> float:
    """Apparent wind speed in m/s"""
    if not validate_wind_inputs(true_wind_speed, vessel_speed, vessel_heading, true_wind_direction):
        logger.debug("Apparent wind speed inputs incomplete, falling back to true wind speed")
        return _degraded_speed(true_wind_speed)

    x, y = _apparent_vector(true_wind_speed, true_wind_direction, vessel_speed, vessel_heading)
    return math.hypot(x, y)


def calculate_apparent_wind_angle(
    true_wind_speed: Any, vessel_speed: Any, vessel_heading: Any, true_wind_direction: Any
) -> Optional[float]:
    """
    Apparent wind angle in radians relative to the vessel reference, in (-pi, pi].

    In degraded mode the result is the raw difference between wind direction
    and vessel reference, not normalized, or None when either is missing.
    """
    if not validate_wind_inputs(true_wind_speed, vessel_speed, vessel_heading, true_wind_direction):
        logger.debug("Apparent wind angle inputs incomplete, falling back to direction difference")
        return _degraded_angle(true_wind_direction, vessel_heading)

    x, y = _apparent_vector(true_wind_speed, true_wind_direction, vessel_speed, vessel_heading)
    return _apparent_angle(x, y, vessel_speed, vessel_heading, true_wind_direction)


def calculate_apparent_wind(
    true_wind_speed: Any, vessel_speed: Any, vessel_heading: Any, true_wind_direction: Any
) -> Tuple[float, Optional[float]]:
    """Apparent wind (speed, angle) from one vector subtraction"""
    if not validate_wind_inputs(true_wind_speed, vessel_speed, vessel_heading, true_wind_direction):
        logger.debug(
            f"Apparent wind degraded: wind_speed={true_wind_speed}, vessel_speed={vessel_speed}, "
            f"heading={vessel_heading}, wind_direction={true_wind_direction}"
        )
        return _degraded_speed(true_wind_speed), _degraded_angle(true_wind_direction, vessel_heading)

    x, y = _apparent_vector(true_wind_speed, true_wind_direction, vessel_speed, vessel_heading)
    return math.hypot(x, y), _apparent_angle(x, y, vessel_speed, vessel_heading, true_wind_direction)


def evaluate_wind_chill(temperature_k: Any, wind_speed_ms: Any) -> FormulaResult:
    if not is_valid_number(temperature_k) or not is_valid_number(wind_speed_ms):
        return FormulaResult(temperature_k if is_valid_number(temperature_k) else None, False)

    temp_c = kelvin_to_celsius(temperature_k)
    wind_kmh = ms_to_kmh(wind_speed_ms)
    if temp_c >= WIND_CHILL_MAX_CELSIUS or wind_kmh < WIND_CHILL_MIN_KMH:
        return FormulaResult(temperature_k, False)

    wind_factor = wind_kmh**0.16
    chill_c = 13.12 + 0.6215 * temp_c - 11.37 * wind_factor + 0.3965 * temp_c * wind_factor
    return FormulaResult(celsius_to_kelvin(chill_c), True)


def calculate_wind_chill(temperature_k: Any, wind_speed_ms: Any) -> Optional[float]:
    """Wind chill temperature in Kelvin"""
    return evaluate_wind_chill(temperature_k, wind_speed_ms).value


def evaluate_heat_index(temperature_k: Any, relative_humidity: Any) -> FormulaResult:
    if not is_valid_number(temperature_k) or not is_valid_number(relative_humidity):
        return FormulaResult(temperature_k if is_valid_number(temperature_k) else None, False)

    t = kelvin_to_fahrenheit(temperature_k)
    r = relative_humidity * 100
    if t < HEAT_INDEX_MIN_FAHRENHEIT or r < HEAT_INDEX_MIN_HUMIDITY_PERCENT:
        return FormulaResult(temperature_k, False)

    c1, c2, c3, c4, c5, c6, c7, c8, c9 = ROTHFUSZ_COEFFICIENTS
    heat_index = (
        c1
        + c2 * t
        + c3 * r
        + c4 * t * r
        + c5 * t * t
        + c6 * r * r
        + c7 * t * t * r
        + c8 * t * r * r
        + c9 * t * t * r * r
    )

    # NWS boundary adjustments
    if r < 13 and 80 <= t <= 112:
        heat_index -= ((13 - r) / 4) * math.sqrt((17 - abs(t - 95)) / 17)
    elif r > 85 and 80 <= t <= 87:
        heat_index += ((r - 85) / 10) * ((87 - t) / 5)

    return FormulaResult(fahrenheit_to_kelvin(heat_index), True)


def calculate_heat_index(temperature_k: Any, relative_humidity: Any) -> Optional[float]:
    """Heat index (apparent temperature) in Kelvin"""
    return evaluate_heat_index(temperature_k, relative_humidity).value


def evaluate_dew_point(temperature_k: Any, relative_humidity: Any) -> FormulaResult:
    if not is_valid_number(temperature_k) or not is_valid_number(relative_humidity):
        return FormulaResult(temperature_k if is_valid_number(temperature_k) else None, False)

    temp_c = kelvin_to_celsius(temperature_k)
    # keep the logarithm defined
    rh = clamp(relative_humidity, 0.01, 0.99)
    try:
        gamma = (MAGNUS_A * temp_c) / (MAGNUS_B + temp_c) + math.log(rh)
        dew_point = celsius_to_kelvin((MAGNUS_B * gamma) / (MAGNUS_A - gamma))
    except ZeroDivisionError:
        logger.debug(f"Dew point undefined at {temperature_k} K, passing temperature through")
        return FormulaResult(temperature_k, False)
    if not math.isfinite(dew_point):
        return FormulaResult(temperature_k, False)
    return FormulaResult(dew_point, True)


def calculate_dew_point(temperature_k: Any, relative_humidity: Any) -> Optional[float]:
    """Dew point temperature in Kelvin (Magnus approximation)"""
    return evaluate_dew_point(temperature_k, relative_humidity).value
