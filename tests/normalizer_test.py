from __future__ import annotations

import pytest

from forecast.errors import DecodeFailure, NoData
from forecast.normalizer import (
    decode_county_payload,
    decode_township_payload,
    observation_from_county,
    observation_from_township,
)
from payloads import county_location, county_payload, township_location, township_payload


def test_county_normalization_takes_first_period():
    payload = county_payload(county_location("臺北市", MinT="18", MaxT="22", PoP="30", Wx="多雲時晴", CI="舒適"))

    observation = observation_from_county(decode_county_payload(payload)[0])

    assert observation.region_name == "臺北市"
    assert observation.min_temperature == "18"
    assert observation.max_temperature == "22"
    assert observation.rain_probability == "30"
    assert observation.condition == "多雲時晴"
    assert observation.comfort_index == "舒適"
    assert observation.sub_region_name is None
    assert observation.humidity is None
    assert observation.wind_speed is None


@pytest.mark.parametrize("missing", ["MinT", "MaxT", "PoP", "Wx", "CI"])
def test_county_missing_element_maps_to_none(missing):
    elements = {"MinT": "18", "MaxT": "22", "PoP": "30", "Wx": "陰", "CI": "舒適"}
    elements.pop(missing)
    payload = county_payload(county_location("新北市", **elements))

    observation = observation_from_county(decode_county_payload(payload)[0])

    field = {
        "MinT": "min_temperature",
        "MaxT": "max_temperature",
        "PoP": "rain_probability",
        "Wx": "condition",
        "CI": "comfort_index",
    }[missing]
    assert getattr(observation, field) is None


def test_county_empty_time_list_and_missing_parameter():
    location = {
        "locationName": "基隆市",
        "weatherElement": [
            {"elementName": "MinT", "time": []},
            {"elementName": "MaxT", "time": [{"startTime": "a", "endTime": "b"}]},
            {"elementName": "PoP", "time": [{"startTime": "a", "endTime": "b", "parameter": {}}]},
        ],
    }

    observation = observation_from_county(decode_county_payload(county_payload(location))[0])

    assert observation.min_temperature is None
    assert observation.max_temperature is None
    assert observation.rain_probability is None


def test_county_first_matching_element_wins():
    location = county_location("臺中市", MinT="20")
    location["weatherElement"].append(county_location("x", MinT="99")["weatherElement"][0])

    observation = observation_from_county(decode_county_payload(county_payload(location))[0])

    assert observation.min_temperature == "20"


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"records": {}},
        {"records": {"location": {}}},
        {"records": {"location": [{"weatherElement": []}]}},
        {"records": {"location": [{"locationName": "臺北市"}]}},
        {"records": {"location": [{"locationName": "臺北市", "weatherElement": [{"time": []}]}]}},
        {"records": {"location": [{"locationName": "", "weatherElement": []}]}},
        {"records": {"location": [{"locationName": "臺北市", "weatherElement": [{"elementName": "MinT", "time": [None]}]}]}},
        {"records": {"location": [{"locationName": "臺北市", "weatherElement": [{"elementName": "MinT", "time": ["x"]}]}]}},
        {"records": {"location": [{"locationName": "臺北市", "weatherElement": [{"elementName": "MinT", "time": [1]}]}]}},
        {"records": {"location": [{"locationName": "臺北市", "weatherElement": [{"elementName": "MinT", "time": [[]]}]}]}},
        [],
    ],
)
def test_county_malformed_structure_raises_decode_failure(payload):
    with pytest.raises(DecodeFailure):
        decode_county_payload(payload)


def test_township_normalization_duplicates_temperature():
    payload = township_payload(township_location("中正區", temperature="24", humidity="80", wind_speed="3"))

    observation = observation_from_township(decode_township_payload(payload)[0], "臺北市")

    assert observation.region_name == "臺北市"
    assert observation.sub_region_name == "中正區"
    assert observation.min_temperature == observation.max_temperature == "24"
    assert observation.rain_probability == "20"
    assert observation.condition == "多雲"
    assert observation.comfort_index == "舒適"
    assert observation.humidity == "80"
    assert observation.wind_speed == "3"
    assert observation.full_location_name == "臺北市中正區"


@pytest.mark.parametrize("temperature", ["24", None])
def test_township_min_equals_max(temperature):
    payload = township_payload(township_location("大安區", temperature=temperature))

    observation = observation_from_township(decode_township_payload(payload)[0], "臺北市")

    assert observation.min_temperature == observation.max_temperature
    assert observation.min_temperature == temperature


def test_township_missing_elements_and_values_map_to_none():
    location = township_location("萬華區", temperature=None, pop=None, weather=None, comfort=None)
    location["WeatherElement"].append({"ElementName": "溫度", "Time": [{"ElementValue": []}]})

    observation = observation_from_township(decode_township_payload(township_payload(location))[0], "臺北市")

    assert observation.min_temperature is None
    assert observation.rain_probability is None
    assert observation.condition is None
    assert observation.comfort_index is None
    assert observation.humidity == "75"
    assert observation.temperature_display == "--"


def test_township_numeric_values_are_rendered_as_strings():
    location = {
        "LocationName": "北投區",
        "WeatherElement": [{"ElementName": "溫度", "Time": [{"DataTime": "t", "ElementValue": [{"Temperature": 21}]}]}],
    }

    observation = observation_from_township(decode_township_payload(township_payload(location))[0], "臺北市")

    assert observation.min_temperature == "21"


def test_township_empty_groups_is_no_data():
    with pytest.raises(NoData):
        decode_township_payload({"records": {"Locations": []}})


@pytest.mark.parametrize(
    "payload",
    [
        {"records": {"locations": []}},
        {"records": {"Locations": [{}]}},
        {"records": {"Locations": [{"Location": [{"WeatherElement": []}]}]}},
        {"records": {"Locations": [{"Location": [{"LocationName": "中正區", "WeatherElement": [{"ElementName": "溫度"}]}]}]}},
        {"records": {"Locations": [{"Location": [{"LocationName": "中正區", "WeatherElement": [{"ElementName": "溫度", "Time": [{}]}]}]}]}},
        {"records": {"Locations": [{"Location": [{"LocationName": "中正區", "WeatherElement": [{"ElementName": "溫度", "Time": [{"ElementValue": ["24"]}]}]}]}]}},
        {"records": {"Locations": [{"Location": [{"LocationName": "中正區", "WeatherElement": [{"ElementName": "溫度", "Time": [{"ElementValue": [{"Temperature": ["24"]}]}]}]}]}]}},
    ],
)
def test_township_malformed_structure_raises_decode_failure(payload):
    with pytest.raises(DecodeFailure):
        decode_township_payload(payload)
