"""Psychrometric quantities derived from temperature, pressure and humidity"""

import logging
import math
from typing import Any

from n2k_weather_mcp.units import MAGNUS_A, MAGNUS_B, is_valid_number, kelvin_to_celsius

logger = logging.getLogger("n2k_weather.physics")

R_DRY_AIR = 287.0531  # J/(kg*K)
R_WATER_VAPOR = 461.4964  # J/(kg*K)
STANDARD_AIR_DENSITY = 1.225  # kg/m3, ISA sea level
ABSOLUTE_HUMIDITY_FACTOR = 0.002166  # kg*K/(m3*hPa)


def saturation_vapor_pressure(temperature_k: float) -> float:
    """Saturation vapor pressure over water in hPa (Magnus approximation)"""
    temp_c = kelvin_to_celsius(temperature_k)
    return 6.112 * math.exp((MAGNUS_A * temp_c) / (MAGNUS_B + temp_c))


def calculate_absolute_humidity(temperature_k: Any, relative_humidity: Any) -> float:
    """Absolute humidity in kg/m3, 0 when it cannot be computed"""
    if not is_valid_number(temperature_k) or not is_valid_number(relative_humidity):
        return 0.0
    if temperature_k <= 0 or relative_humidity < 0:
        return 0.0

    try:
        vapor_pressure = relative_humidity * saturation_vapor_pressure(temperature_k)
        absolute_humidity = ABSOLUTE_HUMIDITY_FACTOR * vapor_pressure / temperature_k
    except (OverflowError, ZeroDivisionError) as e:
        logger.debug(f"Error calculating absolute humidity: {e}")
        return 0.0

    if not math.isfinite(absolute_humidity) or absolute_humidity < 0:
        return 0.0
    return absolute_humidity


def calculate_air_density(temperature_k: Any, pressure_pa: Any, relative_humidity: Any = None) -> float:
    """
    Density of moist air in kg/m3.

    Treats air as an ideal mixture of dry air and water vapor. Missing humidity
    is taken as dry air. Falls back to the ISA sea level density whenever the
    result is not a positive finite number.
    """
    if not is_valid_number(temperature_k) or not is_valid_number(pressure_pa):
        return STANDARD_AIR_DENSITY
    if temperature_k <= 0 or pressure_pa <= 0:
        return STANDARD_AIR_DENSITY

    humidity = relative_humidity if is_valid_number(relative_humidity) else 0.0
    try:
        vapor_pressure = humidity * saturation_vapor_pressure(temperature_k) * 100  # Pa
        dry_pressure = pressure_pa - vapor_pressure
        density = dry_pressure / (R_DRY_AIR * temperature_k) + vapor_pressure / (R_WATER_VAPOR * temperature_k)
    except (OverflowError, ZeroDivisionError) as e:
        logger.debug(f"Error calculating air density: {e}")
        return STANDARD_AIR_DENSITY

    if not math.isfinite(density) or density <= 0:
        return STANDARD_AIR_DENSITY
    return density
