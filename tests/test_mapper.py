import math
from datetime import datetime, timezone

import pytest

from n2k_weather_mcp.config import ParameterDefaults, config
from n2k_weather_mcp.mapper import (
    DESCRIPTION_NAME,
    DESCRIPTION_PATH,
    PARAMETERS,
    map_measurements,
    parameter_paths,
    value_or_default,
)

TIMESTAMP = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)

EXPECTED_NAMES = [
    "outside-temperature",
    "dew-point-temperature",
    "apparent-temperature",
    "wind-chill-temperature",
    "theoretical-wind-chill-temperature",
    "heat-index-temperature",
    "atmospheric-pressure",
    "relative-humidity",
    "true-wind-speed",
    "true-wind-direction",
    "apparent-wind-speed",
    "apparent-wind-angle",
    "wind-speed-over-ground",
    "true-wind-angle-to-water",
    "absolute-humidity",
    "air-density",
]


def test_empty_input_yields_fully_defaulted_batch():
    batch = map_measurements({}, timestamp=TIMESTAMP)
    assert batch.names() == EXPECTED_NAMES
    values = batch.as_dict()
    for name in (
        "outside-temperature",
        "dew-point-temperature",
        "apparent-temperature",
        "wind-chill-temperature",
        "theoretical-wind-chill-temperature",
        "heat-index-temperature",
    ):
        assert values[name] == 273.15
    assert values["atmospheric-pressure"] == 101325.0
    assert values["relative-humidity"] == 0.5
    assert values["true-wind-speed"] == 0.0
    assert values["true-wind-direction"] == 0.0
    assert values["apparent-wind-speed"] == 0.0
    assert values["apparent-wind-angle"] == 0.0
    assert values["absolute-humidity"] == 0.0
    assert values["air-density"] == 1.225


def test_none_input_is_treated_as_empty():
    assert map_measurements(None, timestamp=TIMESTAMP).as_dict() == map_measurements({}, timestamp=TIMESTAMP).as_dict()


def test_every_value_is_finite():
    batch = map_measurements({"temperature": float("nan"), "pressure": float("inf"), "humidity": "x"})
    for measurement in batch.measurements:
        assert math.isfinite(measurement.value)


def test_parameters_default_independently():
    batch = map_measurements({"temperature": None, "pressure": 99000.0}, timestamp=TIMESTAMP)
    assert batch.get("outside-temperature").value == 273.15
    assert batch.get("atmospheric-pressure").value == 99000.0


def test_aliases_share_one_source():
    batch = map_measurements(
        {"wind_chill": 260.0, "wind_speed": 7.0, "wind_direction": 2.0, "heat_index": 305.0}, timestamp=TIMESTAMP
    )
    values = batch.as_dict()
    assert values["theoretical-wind-chill-temperature"] == values["wind-chill-temperature"] == 260.0
    assert values["wind-speed-over-ground"] == values["true-wind-speed"] == 7.0
    assert values["true-wind-angle-to-water"] == values["true-wind-direction"] == 2.0
    assert values["apparent-temperature"] == values["heat-index-temperature"] == 305.0


def test_units_and_timestamps():
    batch = map_measurements({}, timestamp=TIMESTAMP)
    units = {m.name: m.unit for m in batch.measurements}
    assert units["outside-temperature"] == "K"
    assert units["atmospheric-pressure"] == "Pa"
    assert units["relative-humidity"] == "ratio"
    assert units["apparent-wind-angle"] == "rad"
    assert units["air-density"] == "kg/m3"
    assert all(m.timestamp == TIMESTAMP for m in batch.measurements)


def test_default_timestamp_is_utc_now():
    batch = map_measurements({})
    assert batch.timestamp.tzinfo is not None


def test_description_included_only_when_present():
    assert DESCRIPTION_NAME not in map_measurements({"description": ""}, timestamp=TIMESTAMP).names()
    assert DESCRIPTION_NAME not in map_measurements({"description": "   "}, timestamp=TIMESTAMP).names()
    assert DESCRIPTION_NAME not in map_measurements({"description": 42}, timestamp=TIMESTAMP).names()

    batch = map_measurements({"description": "Partly sunny"}, timestamp=TIMESTAMP)
    assert batch.names()[-1] == DESCRIPTION_NAME
    assert batch.get(DESCRIPTION_NAME).value == "Partly sunny"
    assert batch.get(DESCRIPTION_NAME).path == DESCRIPTION_PATH


def test_custom_defaults():
    defaults = ParameterDefaults(pressure=100000.0)
    assert map_measurements({}, defaults).get("atmospheric-pressure").value == 100000.0


def test_value_or_default():
    defaults = ParameterDefaults()
    assert value_or_default(3, "wind_speed", defaults) == 3.0
    assert value_or_default(True, "wind_speed", defaults) == 0.0
    assert value_or_default(None, "humidity", defaults) == 0.5


def test_parameter_paths():
    paths = parameter_paths()
    assert len(paths) == len(PARAMETERS) + 1
    assert paths[0] == "environment.outside.temperature"
    assert paths[-1] == DESCRIPTION_PATH
    assert len(set(paths)) == len(paths)


def test_to_delta_shape():
    batch = map_measurements({"temperature": 290.0}, timestamp=TIMESTAMP, source_label="test-source")
    delta = batch.to_delta()
    assert delta["context"] == "vessels.self"
    update = delta["updates"][0]
    assert update["source"] == {"label": "test-source"}
    assert update["timestamp"] == TIMESTAMP.isoformat()
    assert update["values"][0] == {"path": "environment.outside.temperature", "value": 290.0}
    assert len(update["values"]) == len(PARAMETERS)


def test_defaults_table_is_immutable():
    defaults = ParameterDefaults()
    with pytest.raises(Exception):
        defaults.pressure = 1.0


def test_oversized_integer_is_defaulted():
    batch = map_measurements({"temperature": 10**400}, timestamp=TIMESTAMP)
    assert batch.get("outside-temperature").value == 273.15
    assert value_or_default(10**400, "pressure", ParameterDefaults()) == 101325.0


def test_source_label_defaults_to_config():
    batch = map_measurements({}, timestamp=TIMESTAMP)
    assert batch.source_label == config.source_label
