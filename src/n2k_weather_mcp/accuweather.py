"""Convert AccuWeather current-conditions records into SI observations"""

import logging
from typing import Any, Mapping, Optional

from n2k_weather_mcp.models import Observation
from n2k_weather_mcp.units import (
    celsius_to_kelvin,
    degrees_to_radians,
    is_valid_number,
    kmh_to_ms,
    millibar_to_pascal,
)

logger = logging.getLogger("n2k_weather.accuweather")


def _metric_value(data: Any) -> Optional[float]:
    """Pull Metric.Value out of an AccuWeather measurement object"""
    if not isinstance(data, Mapping):
        return None
    metric = data.get("Metric")
    if not isinstance(metric, Mapping):
        return None
    value = metric.get("Value")
    return value if is_valid_number(value) else None


def convert_temperature(data: Any) -> Optional[float]:
    value = _metric_value(data)
    return celsius_to_kelvin(value) if value is not None else None


def convert_pressure(data: Any) -> Optional[float]:
    value = _metric_value(data)
    return millibar_to_pascal(value) if value is not None else None


def convert_wind_speed(data: Any) -> Optional[float]:
    value = _metric_value(data)
    return kmh_to_ms(value) if value is not None else None


def convert_wind_direction(data: Any) -> Optional[float]:
    if not isinstance(data, Mapping) or not is_valid_number(data.get("Degrees")):
        logger.debug("AccuWeather wind direction invalid or missing")
        return None
    return degrees_to_radians(data["Degrees"])


def observation_from_accuweather(payload: Optional[Mapping[str, Any]]) -> Observation:
    """
    Build an Observation from one AccuWeather current-conditions record.

    AccuWeather reports Celsius, millibar, percent, km/h and degrees. The API
    returns a list; pass a single element. Missing sections give None fields.
    """
    if not payload:
        return Observation()
    if not isinstance(payload, Mapping):
        raise TypeError(f"AccuWeather record must be a mapping, got {type(payload).__name__}")

    wind = payload.get("Wind")
    wind = wind if isinstance(wind, Mapping) else {}

    observation = Observation(
        temperature=convert_temperature(payload.get("Temperature")),
        pressure=convert_pressure(payload.get("Pressure")),
        humidity=payload.get("RelativeHumidity"),  # Observation turns percent into a ratio
        wind_speed=convert_wind_speed(wind.get("Speed")),
        wind_direction=convert_wind_direction(wind.get("Direction")),
        description=payload.get("WeatherText"),
    )
    logger.debug(f"Converted AccuWeather record: {observation}")
    return observation
