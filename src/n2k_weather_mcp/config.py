from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict


class ParameterDefaults(BaseModel):
    """Values published when a parameter is missing or not a finite number"""

    model_config = ConfigDict(frozen=True)

    temperature: float = 273.15  # 0 degC, data unavailable
    pressure: float = 101325.0  # standard atmosphere
    humidity: float = 0.5
    wind_speed: float = 0.0
    wind_direction: float = 0.0  # north
    dew_point: float = 273.15
    wind_chill: float = 273.15
    heat_index: float = 273.15
    absolute_humidity: float = 0.0
    air_density: float = 1.225  # sea level standard


class RangeLimits(BaseModel):
    """Legal numeric envelope of the instrumentation bus"""

    model_config = ConfigDict(frozen=True)

    temperature_min: float = 233.15  # -40 degC
    temperature_max: float = 358.15  # +85 degC
    pressure_min: float = 80000.0
    pressure_max: float = 120000.0
    humidity_min: float = 0.0
    humidity_max: float = 1.0
    wind_speed_min: float = 0.0
    wind_speed_max: float = 102.3  # ~200 kn


class Config(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="N2K_WEATHER_",
        env_nested_delimiter="__",
        extra="ignore",
        frozen=True,
    )
    source_label: str = "signalk-n2k-weather-provider"
    log_level: str = "INFO"
    log_dir: str = "logs"
    port: int = 8001
    defaults: ParameterDefaults = ParameterDefaults()
    limits: RangeLimits = RangeLimits()


config = Config()
