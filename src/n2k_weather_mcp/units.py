"""Unit conversions and angle helpers shared by every calculation module"""

import math
import sys
from typing import Any, Optional

TWO_PI = 2 * math.pi
KELVIN_OFFSET = 273.15
KMH_PER_MS = 3.6
MS_PER_KNOT = 1852.0 / 3600.0

# Magnus formula constants
MAGNUS_A = 17.27
MAGNUS_B = 237.7


def is_valid_number(value: Any, minimum: Optional[float] = None, maximum: Optional[float] = None) -> bool:
    """Check that value is a finite int/float (bools excluded), optionally within bounds"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        number = float(value)
    except OverflowError:
        return False
    if not math.isfinite(number):
        return False
    if minimum is not None and number < minimum:
        return False
    if maximum is not None and number > maximum:
        return False
    return True


def as_finite_float(value: Any) -> Optional[float]:
    """
    Convert numeric input to a finite float, None for anything else.

    Integers beyond the float range saturate at +/-sys.float_info.max so the
    range validator can still clamp them.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return sys.float_info.max if value > 0 else -sys.float_info.max
    return number if math.isfinite(number) else None


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Saturate value into [minimum, maximum]"""
    return max(minimum, min(maximum, value))


# Temperature


def kelvin_to_celsius(kelvin: float) -> float:
    return kelvin - KELVIN_OFFSET


def celsius_to_kelvin(celsius: float) -> float:
    return celsius + KELVIN_OFFSET


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 9 / 5 + 32


def fahrenheit_to_celsius(fahrenheit: float) -> float:
    return (fahrenheit - 32) * 5 / 9


def kelvin_to_fahrenheit(kelvin: float) -> float:
    return celsius_to_fahrenheit(kelvin_to_celsius(kelvin))


def fahrenheit_to_kelvin(fahrenheit: float) -> float:
    return celsius_to_kelvin(fahrenheit_to_celsius(fahrenheit))


# Pressure and humidity


def millibar_to_pascal(millibar: float) -> float:
    return millibar * 100


def percentage_to_ratio(percentage: float) -> float:
    return percentage / 100


def normalize_humidity(humidity: float) -> float:
    """
    Return humidity as a 0-1 ratio.

    Providers report either a ratio or a percentage. Values whose magnitude is
    at most 1.0 are taken as a ratio, anything larger as a percentage. A 0.5%
    reading sent as a percentage is indistinguishable from a 0.5 ratio.
    """
    if abs(humidity) <= 1.0:
        return humidity
    return percentage_to_ratio(humidity)


# Speed


def kmh_to_ms(kmh: float) -> float:
    return kmh / KMH_PER_MS


def ms_to_kmh(ms: float) -> float:
    return ms * KMH_PER_MS


def knots_to_ms(knots: float) -> float:
    return knots * MS_PER_KNOT


def ms_to_knots(ms: float) -> float:
    return ms / MS_PER_KNOT


# Angles


def degrees_to_radians(degrees: float) -> float:
    return degrees * math.pi / 180


def radians_to_degrees(radians: float) -> float:
    return radians * 180 / math.pi


def normalize_angle(radians: float) -> float:
    """Fold a relative angle into (-pi, pi]"""
    if not math.isfinite(radians):
        return radians
    angle = math.fmod(radians, TWO_PI)
    while angle > math.pi:
        angle -= TWO_PI
    while angle <= -math.pi:
        angle += TWO_PI
    return angle


def wrap_direction(radians: float) -> float:
    """Fold a compass direction into [0, 2*pi)"""
    if not math.isfinite(radians):
        return radians
    angle = math.fmod(radians, TWO_PI)
    if angle < 0:
        angle += TWO_PI
    # fmod of a tiny negative value can round back up to exactly 2*pi
    if angle >= TWO_PI:
        angle = 0.0
    return angle
