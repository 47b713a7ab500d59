"""
Weather to instrumentation transformation.

    observation + vessel motion
        -> derive (apparent wind, comfort indices, psychrometrics)
        -> merge_candidates
        -> validate_ranges
        -> map_measurements
        -> MeasurementBatch

Every step is pure and synchronous. The only shared state is the frozen
Config, which is read and never written.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Union

from n2k_weather_mcp.config import Config, config as default_config
from n2k_weather_mcp.mapper import map_measurements
from n2k_weather_mcp.models import DerivedSet, MeasurementBatch, Observation, VesselMotion
from n2k_weather_mcp.physics import calculate_absolute_humidity, calculate_air_density
from n2k_weather_mcp.validation import validate_ranges
from n2k_weather_mcp.wind import (
    calculate_apparent_wind,
    evaluate_dew_point,
    evaluate_heat_index,
    evaluate_wind_chill,
)

logger = logging.getLogger("n2k_weather.engine")

ObservationInput = Union[Observation, Mapping[str, Any], None]
MotionInput = Union[VesselMotion, Mapping[str, Any], None]


def _as_observation(observation: ObservationInput) -> Observation:
    if isinstance(observation, Observation):
        return observation
    return Observation.from_mapping(observation)


def _as_motion(motion: MotionInput) -> VesselMotion:
    if isinstance(motion, VesselMotion):
        return motion
    return VesselMotion.from_mapping(motion)


def derive(observation: ObservationInput, motion: MotionInput = None) -> DerivedSet:
    """Compute apparent wind, comfort indices and psychrometric quantities"""
    observation = _as_observation(observation)
    motion = _as_motion(motion)

    if motion.complete:
        apparent_speed, apparent_angle = calculate_apparent_wind(
            observation.wind_speed,
            motion.speed_over_ground,
            motion.course_or_heading,
            observation.wind_direction,
        )
    else:
        # Without a vessel reference the wind is reported as if the vessel were stationary, bow into it
        logger.debug("Vessel motion incomplete, apparent wind = true wind speed at 0 rad")
        apparent_speed, apparent_angle = observation.wind_speed, 0.0

    wind_chill = evaluate_wind_chill(observation.temperature, observation.wind_speed)
    heat_index = evaluate_heat_index(observation.temperature, observation.humidity)
    dew_point = evaluate_dew_point(observation.temperature, observation.humidity)
    logger.debug(
        f"Comfort formulas applied: wind_chill={wind_chill.computed}, "
        f"heat_index={heat_index.computed}, dew_point={dew_point.computed}"
    )

    return DerivedSet(
        apparent_wind_speed=apparent_speed,
        apparent_wind_angle=apparent_angle,
        wind_chill=wind_chill.value,
        heat_index=heat_index.value,
        dew_point=dew_point.value,
        absolute_humidity=calculate_absolute_humidity(observation.temperature, observation.humidity),
        air_density=calculate_air_density(observation.temperature, observation.pressure, observation.humidity),
    )


def merge_candidates(observation: Observation, derived: DerivedSet) -> Dict[str, Any]:
    """Flatten observation and derived values into one candidate set"""
    candidates = observation.model_dump()
    candidates.update(derived.model_dump())
    return candidates


def transform(
    observation: ObservationInput,
    motion: MotionInput = None,
    settings: Optional[Config] = None,
    timestamp: Optional[datetime] = None,
) -> MeasurementBatch:
    """Turn one observation and vessel motion snapshot into a complete measurement batch"""
    settings = settings or default_config
    observation = _as_observation(observation)
    derived = derive(observation, motion)
    validated = validate_ranges(merge_candidates(observation, derived), settings.limits)
    return map_measurements(validated, settings.defaults, timestamp, settings.source_label)


class WeatherTransformEngine:
    """Binds the transformation to one immutable Config"""

    def __init__(self, settings: Optional[Config] = None):
        self.settings = settings or default_config

    def derive(self, observation: ObservationInput, motion: MotionInput = None) -> DerivedSet:
        return derive(observation, motion)

    def transform(
        self, observation: ObservationInput, motion: MotionInput = None, timestamp: Optional[datetime] = None
    ) -> MeasurementBatch:
        return transform(observation, motion, self.settings, timestamp)
