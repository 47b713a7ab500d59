import logging
from datetime import datetime, timezone
from typing import Any, List, Mapping, NamedTuple, Optional, Tuple

from n2k_weather_mcp.config import ParameterDefaults, config
from n2k_weather_mcp.models import Measurement, MeasurementBatch
from n2k_weather_mcp.units import is_valid_number

logger = logging.getLogger("n2k_weather.mapper")


class Parameter(NamedTuple):
    """One published parameter and where its value comes from"""

    name: str
    path: str
    unit: str
    source: str  # key in the validated candidate set
    default: str  # key in ParameterDefaults
    display_name: str
    description: str


# Publication order. Aliases read the same source field so they cannot diverge.
PARAMETERS: Tuple[Parameter, ...] = (
    Parameter(
        "outside-temperature",
        "environment.outside.temperature",
        "K",
        "temperature",
        "temperature",
        "Outside Temperature",
        "Current outside air temperature",
    ),
    Parameter(
        "dew-point-temperature",
        "environment.outside.dewPointTemperature",
        "K",
        "dew_point",
        "dew_point",
        "Dew Point Temperature",
        "Dew point temperature",
    ),
    Parameter(
        "apparent-temperature",
        "environment.outside.apparentTemperature",
        "K",
        "heat_index",
        "heat_index",
        "Apparent Temperature",
        "Heat index, how hot it feels when relative humidity is factored in",
    ),
    Parameter(
        "wind-chill-temperature",
        "environment.outside.windChillTemperature",
        "K",
        "wind_chill",
        "wind_chill",
        "Wind Chill Temperature",
        "How cold it feels when wind speed is factored in",
    ),
    Parameter(
        "theoretical-wind-chill-temperature",
        "environment.outside.theoreticalWindChillTemperature",
        "K",
        "wind_chill",
        "wind_chill",
        "Theoretical Wind Chill Temperature",
        "Alias of the wind chill temperature",
    ),
    Parameter(
        "heat-index-temperature",
        "environment.outside.heatIndexTemperature",
        "K",
        "heat_index",
        "heat_index",
        "Heat Index Temperature",
        "Heat index temperature, how hot it feels with humidity factored in",
    ),
    Parameter(
        "atmospheric-pressure",
        "environment.outside.pressure",
        "Pa",
        "pressure",
        "pressure",
        "Atmospheric Pressure",
        "Atmospheric pressure",
    ),
    Parameter(
        "relative-humidity",
        "environment.outside.relativeHumidity",
        "ratio",
        "humidity",
        "humidity",
        "Relative Humidity",
        "Relative humidity as a ratio (0.0 = 0%, 1.0 = 100%)",
    ),
    Parameter(
        "true-wind-speed",
        "environment.wind.speedTrue",
        "m/s",
        "wind_speed",
        "wind_speed",
        "True Wind Speed",
        "True wind speed",
    ),
    Parameter(
        "true-wind-direction",
        "environment.wind.directionTrue",
        "rad",
        "wind_direction",
        "wind_direction",
        "True Wind Direction",
        "True wind direction",
    ),
    Parameter(
        "apparent-wind-speed",
        "environment.wind.speedApparent",
        "m/s",
        "apparent_wind_speed",
        "wind_speed",
        "Apparent Wind Speed",
        "Apparent wind speed relative to vessel movement",
    ),
    Parameter(
        "apparent-wind-angle",
        "environment.wind.angleApparent",
        "rad",
        "apparent_wind_angle",
        "wind_direction",
        "Apparent Wind Angle",
        "Apparent wind angle relative to the vessel reference",
    ),
    Parameter(
        "wind-speed-over-ground",
        "environment.wind.speedOverGround",
        "m/s",
        "wind_speed",
        "wind_speed",
        "Wind Speed Over Ground",
        "Alias of the true wind speed",
    ),
    Parameter(
        "true-wind-angle-to-water",
        "environment.wind.angleTrueWater",
        "rad",
        "wind_direction",
        "wind_direction",
        "True Wind Angle to Water",
        "Alias of the true wind direction",
    ),
    Parameter(
        "absolute-humidity",
        "environment.outside.absoluteHumidity",
        "kg/m3",
        "absolute_humidity",
        "absolute_humidity",
        "Absolute Humidity",
        "Absolute humidity",
    ),
    Parameter(
        "air-density",
        "environment.outside.airDensity",
        "kg/m3",
        "air_density",
        "air_density",
        "Air Density",
        "Air density accounting for temperature, pressure and humidity",
    ),
)

DESCRIPTION_NAME = "weather-description"
DESCRIPTION_PATH = "environment.outside.weatherDescription"


def parameter_paths() -> List[str]:
    """Signal K paths this mapper can publish, description included"""
    return [p.path for p in PARAMETERS] + [DESCRIPTION_PATH]


def value_or_default(value: Any, default_key: str, defaults: ParameterDefaults, context: str = "") -> float:
    """Return value if it is a finite number, else the documented default"""
    if is_valid_number(value):
        return float(value)
    default = getattr(defaults, default_key)
    suffix = f" ({context})" if context else ""
    logger.debug(f"Using default value for {default_key}{suffix}: {default}")
    return default


def map_measurements(
    validated: Optional[Mapping[str, Any]],
    defaults: Optional[ParameterDefaults] = None,
    timestamp: Optional[datetime] = None,
    source_label: Optional[str] = None,
) -> MeasurementBatch:
    """Build the fixed-shape batch, one measurement per parameter"""
    if not validated:
        logger.debug("No weather data provided, using defaults")
        validated = {}
    defaults = defaults or ParameterDefaults()
    timestamp = timestamp or datetime.now(timezone.utc)
    source_label = source_label or config.source_label

    measurements = [
        Measurement(
            name=p.name,
            path=p.path,
            value=value_or_default(validated.get(p.source), p.default, defaults, p.name),
            unit=p.unit,
            timestamp=timestamp,
            display_name=p.display_name,
            description=p.description,
        )
        for p in PARAMETERS
    ]

    description = validated.get("description")
    if isinstance(description, str) and description.strip():
        measurements.append(
            Measurement(
                name=DESCRIPTION_NAME,
                path=DESCRIPTION_PATH,
                value=description,
                timestamp=timestamp,
                display_name="Weather Description",
            )
        )

    return MeasurementBatch(source_label=source_label, timestamp=timestamp, measurements=measurements)
