import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP

from n2k_weather_mcp.accuweather import observation_from_accuweather
from n2k_weather_mcp.config import config
from n2k_weather_mcp.engine import WeatherTransformEngine
from n2k_weather_mcp.mapper import PARAMETERS, DESCRIPTION_NAME, DESCRIPTION_PATH

load_dotenv()

# Set up logging
log_dir = Path(config.log_dir)
log_dir.mkdir(exist_ok=True)
log_file = log_dir / "n2k_weather.log"

logging.basicConfig(
    level=config.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.FileHandler(log_file),
        logging.StreamHandler(),
    ],
)

logger = logging.getLogger("n2k_weather")

mcp = FastMCP(
    "N2K Weather",
    instructions="Turns weather observations and vessel motion into validated NMEA 2000 environment parameters",
)

engine = WeatherTransformEngine(config)


# Tools
@mcp.tool()
async def transform_weather(
    observation: Dict[str, Any], vessel_motion: Optional[Dict[str, Any]] = None
) -> Union[Dict[str, Any], str]:
    """
    Convert an SI weather observation into a Signal K delta of instrument parameters

    Args:
        observation: temperature (K), pressure (Pa), humidity (ratio or %), wind_speed (m/s),
            wind_direction (rad) and an optional description
        vessel_motion: speed_over_ground (m/s), course_or_heading (rad) and complete (bool)
    """
    logger.info("Transforming weather observation")
    try:
        batch = engine.transform(observation, vessel_motion)
        logger.debug(f"Produced {len(batch.measurements)} measurements")
        return batch.to_delta()
    except Exception as e:
        logger.error(f"Error transforming observation: {str(e)}")
        return f"Error: Unable to transform weather observation. {str(e)}"


@mcp.tool()
async def transform_accuweather_conditions(
    conditions: Dict[str, Any], vessel_motion: Optional[Dict[str, Any]] = None
) -> Union[Dict[str, Any], str]:
    """
    Convert one AccuWeather current-conditions record into a Signal K delta

    Args:
        conditions: A single element of the AccuWeather currentconditions response
        vessel_motion: speed_over_ground (m/s), course_or_heading (rad) and complete (bool)
    """
    logger.info("Transforming AccuWeather conditions")
    try:
        observation = observation_from_accuweather(conditions)
        return engine.transform(observation, vessel_motion).to_delta()
    except Exception as e:
        logger.error(f"Error transforming AccuWeather conditions: {str(e)}")
        return f"Error: Unable to transform AccuWeather conditions. {str(e)}"


@mcp.tool()
async def list_measurement_paths() -> List[Dict[str, str]]:
    """List every parameter this server publishes with its Signal K path and unit"""
    paths = [{"name": p.name, "path": p.path, "unit": p.unit} for p in PARAMETERS]
    paths.append({"name": DESCRIPTION_NAME, "path": DESCRIPTION_PATH, "unit": ""})
    return paths


# Prompts
@mcp.prompt()
def measurement_summary(delta: Dict[str, Any]) -> str:
    """Help interpret a Signal K delta produced by transform_weather"""
    try:
        update = delta["updates"][0]
        values = {v["path"]: v["value"] for v in update["values"]}

        def celsius(path: str) -> str:
            value = values.get(path)
            return f"{value - 273.15:.1f}" if isinstance(value, (int, float)) else "N/A"

        return f"""Please summarize these marine instrument readings and point out anything notable
        for the crew (strong apparent wind, low dew point spread, extreme comfort indices).

        Source: {update["source"]["label"]} at {update["timestamp"]}

        - Temperature: {celsius("environment.outside.temperature")}°C
        - Dew point: {celsius("environment.outside.dewPointTemperature")}°C
        - Wind chill: {celsius("environment.outside.windChillTemperature")}°C
        - Heat index: {celsius("environment.outside.heatIndexTemperature")}°C
        - Pressure: {values.get("environment.outside.pressure", "N/A")} Pa
        - Relative humidity: {values.get("environment.outside.relativeHumidity", "N/A")}
        - True wind: {values.get("environment.wind.speedTrue", "N/A")} m/s
          from {values.get("environment.wind.directionTrue", "N/A")} rad
        - Apparent wind: {values.get("environment.wind.speedApparent", "N/A")} m/s
          at {values.get("environment.wind.angleApparent", "N/A")} rad
        - Air density: {values.get("environment.outside.airDensity", "N/A")} kg/m3
        - Conditions: {values.get(DESCRIPTION_PATH, "N/A")}
        """
    except (KeyError, IndexError, TypeError) as e:
        logger.error(f"Error formatting measurement summary: {str(e)}")
        return "Error: Unable to summarize measurements due to missing or invalid data."


def main() -> None:
    mcp.run()


if __name__ == "__main__":
    main()
