"""NMEA 2000 weather transformation engine and MCP server package."""

__version__ = "0.1.0"

from n2k_weather_mcp.engine import WeatherTransformEngine, derive, transform
from n2k_weather_mcp.models import DerivedSet, Measurement, MeasurementBatch, Observation, VesselMotion

__all__ = [
    "WeatherTransformEngine",
    "derive",
    "transform",
    "DerivedSet",
    "Measurement",
    "MeasurementBatch",
    "Observation",
    "VesselMotion",
]
