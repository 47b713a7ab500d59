from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from n2k_weather_mcp.units import as_finite_float, normalize_humidity

# camelCase keys used by Signal K hosts and the AccuWeather-derived records
_OBSERVATION_ALIASES = {
    "windSpeed": "wind_speed",
    "windDirection": "wind_direction",
}
_MOTION_ALIASES = {
    "speedOverGround": "speed_over_ground",
    "courseOrHeading": "course_or_heading",
    "courseOverGround": "course_or_heading",
    "isComplete": "complete",
}


def _number_or_none(value: Any) -> Optional[float]:
    """Keep finite numbers, drop everything else"""
    return as_finite_float(value)


def _rename(data: Mapping[str, Any], aliases: Dict[str, str]) -> Dict[str, Any]:
    renamed = {}
    for key, value in data.items():
        renamed[aliases.get(key, key)] = value
    return renamed


class Observation(BaseModel):
    """Point-in-time weather observation, already in SI units"""

    model_config = ConfigDict(extra="ignore")

    temperature: Optional[float] = None  # K
    pressure: Optional[float] = None  # Pa
    humidity: Optional[float] = None  # ratio 0-1
    wind_speed: Optional[float] = None  # m/s, true
    wind_direction: Optional[float] = None  # rad, true
    description: Optional[str] = None

    @field_validator("temperature", "pressure", "wind_speed", "wind_direction", mode="before")
    @classmethod
    def drop_invalid(cls, value: Any) -> Optional[float]:
        return _number_or_none(value)

    @field_validator("humidity", mode="before")
    @classmethod
    def humidity_as_ratio(cls, value: Any) -> Optional[float]:
        number = _number_or_none(value)
        if number is None:
            return None
        return normalize_humidity(number)

    @field_validator("description", mode="before")
    @classmethod
    def text_or_none(cls, value: Any) -> Optional[str]:
        if isinstance(value, str) and value.strip():
            return value
        return None

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "Observation":
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise TypeError(f"Observation must be a mapping, got {type(data).__name__}")
        return cls(**_rename(data, _OBSERVATION_ALIASES))


class VesselMotion(BaseModel):
    """Vessel motion snapshot supplied by the navigation source"""

    model_config = ConfigDict(extra="ignore")

    speed_over_ground: Optional[float] = None  # m/s
    course_or_heading: Optional[float] = None  # rad
    complete: bool = False

    @field_validator("speed_over_ground", mode="before")
    @classmethod
    def non_negative_speed(cls, value: Any) -> Optional[float]:
        number = _number_or_none(value)
        if number is None or number < 0:
            return None
        return number

    @field_validator("course_or_heading", mode="before")
    @classmethod
    def drop_invalid(cls, value: Any) -> Optional[float]:
        return _number_or_none(value)

    @field_validator("complete", mode="before")
    @classmethod
    def strict_flag(cls, value: Any) -> bool:
        return value is True

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "VesselMotion":
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise TypeError(f"VesselMotion must be a mapping, got {type(data).__name__}")
        return cls(**_rename(data, _MOTION_ALIASES))


class DerivedSet(BaseModel):
    """Values computed from one observation and vessel motion snapshot"""

    apparent_wind_speed: Optional[float] = None  # m/s
    apparent_wind_angle: Optional[float] = None  # rad, relative to bow
    wind_chill: Optional[float] = None  # K
    heat_index: Optional[float] = None  # K
    dew_point: Optional[float] = None  # K
    absolute_humidity: float = 0.0  # kg/m3
    air_density: float = 1.225  # kg/m3


class Measurement(BaseModel):
    """A single named parameter ready for the bus encoder"""

    name: str
    path: str
    value: Union[float, str]
    unit: Optional[str] = None
    timestamp: datetime
    display_name: Optional[str] = None
    description: Optional[str] = None


class MeasurementBatch(BaseModel):
    """Ordered, fixed-shape set of measurements for one observation cycle"""

    context: str = "vessels.self"
    source_label: str
    timestamp: datetime
    measurements: List[Measurement] = Field(default_factory=list)

    def names(self) -> List[str]:
        return [m.name for m in self.measurements]

    def get(self, name: str) -> Optional[Measurement]:
        for measurement in self.measurements:
            if measurement.name == name:
                return measurement
        return None

    def as_dict(self) -> Dict[str, Union[float, str]]:
        return {m.name: m.value for m in self.measurements}

    def to_delta(self) -> Dict[str, Any]:
        """Render the batch as a Signal K delta document"""
        timestamp = self.timestamp.isoformat()
        return {
            "context": self.context,
            "updates": [
                {
                    "source": {"label": self.source_label},
                    "timestamp": timestamp,
                    "values": [{"path": m.path, "value": m.value} for m in self.measurements],
                }
            ],
        }
