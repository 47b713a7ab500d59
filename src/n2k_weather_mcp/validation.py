import logging
from typing import Any, Callable, Dict, Mapping, Optional

from n2k_weather_mcp.config import RangeLimits
from n2k_weather_mcp.units import as_finite_float, clamp, normalize_angle, wrap_direction

logger = logging.getLogger("n2k_weather.validation")

TEMPERATURE_FIELDS = ("temperature", "dew_point", "wind_chill", "heat_index")
WIND_SPEED_FIELDS = ("wind_speed", "apparent_wind_speed")


def _rules(limits: RangeLimits) -> Dict[str, Callable[[float], float]]:
    """Per-field constraint: magnitudes saturate, directions wrap"""
    rules: Dict[str, Callable[[float], float]] = {}
    for field in TEMPERATURE_FIELDS:
        rules[field] = lambda v: clamp(v, limits.temperature_min, limits.temperature_max)
    for field in WIND_SPEED_FIELDS:
        rules[field] = lambda v: clamp(v, limits.wind_speed_min, limits.wind_speed_max)
    rules["pressure"] = lambda v: clamp(v, limits.pressure_min, limits.pressure_max)
    rules["humidity"] = lambda v: clamp(v, limits.humidity_min, limits.humidity_max)
    rules["wind_direction"] = wrap_direction
    rules["apparent_wind_angle"] = normalize_angle
    return rules


def validate_ranges(candidates: Optional[Mapping[str, Any]], limits: Optional[RangeLimits] = None) -> Dict[str, Any]:
    """
    Constrain a candidate parameter set to the bus envelope.

    Returns a new dict. Only fields holding a finite number are touched;
    missing or invalid values are left for the mapper to default.
    """
    if not candidates:
        return {}
    limits = limits or RangeLimits()

    validated = dict(candidates)
    for field, rule in _rules(limits).items():
        value = validated.get(field)
        number = as_finite_float(value)
        if number is None:
            continue
        constrained = rule(number)
        if constrained != value:
            logger.debug(f"Constrained {field} from {value} to {constrained}")
        validated[field] = constrained
    return validated
