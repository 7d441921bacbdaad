"""Decoders and mappers for the two CWA forecast payload shapes.

County forecasts (dataset ``F-C0032-001``) list one record per county or city
with a flat ``parameterName`` per time period::

    {"records": {"location": [{"locationName": ..., "weatherElement": [
        {"elementName": "MinT", "time": [{"startTime": ..., "endTime": ...,
                                           "parameter": {"parameterName": "18"}}]}]}]}}

Township forecasts (datasets ``F-D0047-XXX``) nest the districts under a
dataset group and key their elements by localized names, each time period
holding a list of multi-field ``ElementValue`` objects::

    {"records": {"Locations": [{"Location": [{"LocationName": ..., "WeatherElement": [
        {"ElementName": "溫度", "Time": [{"DataTime": ...,
                                          "ElementValue": [{"Temperature": "24"}]}]}]}]}]}}

Decoding validates the structural nodes and raises :class:`DecodeFailure` when
one is missing. Element lookups are lenient: the first matching element, its
first time period and its first value win, and anything absent maps to ``None``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .entities import WeatherObservation
from .errors import DecodeFailure, NoData


# County element names
MIN_TEMPERATURE = "MinT"
MAX_TEMPERATURE = "MaxT"
PRECIPITATION_PROBABILITY = "PoP"
PHENOMENON = "Wx"
COMFORT_INDEX = "CI"

# Township element names and the ElementValue key each one is read from
TOWNSHIP_TEMPERATURE = ("溫度", "Temperature")
TOWNSHIP_PRECIPITATION = ("3小時降雨機率", "ProbabilityOfPrecipitation")
TOWNSHIP_PHENOMENON = ("天氣現象", "Weather")
TOWNSHIP_COMFORT = ("舒適度指數", "ComfortIndexDescription")
TOWNSHIP_HUMIDITY = ("相對濕度", "RelativeHumidity")
TOWNSHIP_WIND_SPEED = ("風速", "WindSpeed")


@dataclass(frozen=True)
class CountyPeriod:
    start_time: str
    end_time: str
    parameter_name: Optional[str]


@dataclass(frozen=True)
class CountyElement:
    name: str
    periods: Sequence[CountyPeriod]


@dataclass(frozen=True)
class CountyLocation:
    name: str
    elements: Sequence[CountyElement]


@dataclass(frozen=True)
class TownshipPeriod:
    values: Sequence[Mapping[str, Optional[str]]]
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    data_time: Optional[str] = None


@dataclass(frozen=True)
class TownshipElement:
    name: str
    periods: Sequence[TownshipPeriod]


@dataclass(frozen=True)
class TownshipLocation:
    name: str
    elements: Sequence[TownshipElement]
    geocode: Optional[str] = None
    latitude: Optional[str] = None
    longitude: Optional[str] = None


# County format ---------------------------------------------------------------
def decode_county_payload(payload: Any) -> List[CountyLocation]:
    records = _node(payload, "records", dict, "payload")
    locations = _node(records, "location", list, "records")
    return [_decode_county_location(item) for item in locations]


def _decode_county_location(raw: Any) -> CountyLocation:
    name = _node(raw, "locationName", str, "location")
    elements = []
    for raw_element in _node(raw, "weatherElement", list, "location"):
        periods = []
        for raw_period in _node(raw_element, "time", list, "weatherElement"):
            parameter = _optional_node(raw_period, "parameter", dict, "time")
            periods.append(
                CountyPeriod(
                    start_time=_node(raw_period, "startTime", str, "time"),
                    end_time=_node(raw_period, "endTime", str, "time"),
                    parameter_name=_leaf(parameter, "parameterName") if parameter else None,
                )
            )
        elements.append(CountyElement(name=_node(raw_element, "elementName", str, "weatherElement"), periods=periods))
    if not name:
        raise DecodeFailure("location.locationName is empty")
    return CountyLocation(name=name, elements=elements)


def observation_from_county(location: CountyLocation) -> WeatherObservation:
    """Map a county record; sub-region, humidity and wind stay empty."""

    def value(element_name: str) -> Optional[str]:
        element = _first_element(location.elements, element_name)
        if element is None or not element.periods:
            return None
        return element.periods[0].parameter_name

    return WeatherObservation(
        region_name=location.name,
        sub_region_name=None,
        min_temperature=value(MIN_TEMPERATURE),
        max_temperature=value(MAX_TEMPERATURE),
        rain_probability=value(PRECIPITATION_PROBABILITY),
        condition=value(PHENOMENON),
        comfort_index=value(COMFORT_INDEX),
        humidity=None,
        wind_speed=None,
    )


# Township format -------------------------------------------------------------
def decode_township_payload(payload: Any) -> List[TownshipLocation]:
    """Return the districts of the first dataset group in ``payload``."""
    records = _node(payload, "records", dict, "payload")
    groups = _node(records, "Locations", list, "records")
    if not groups:
        raise NoData("township payload has no location groups")
    locations = _node(groups[0], "Location", list, "Locations")
    return [_decode_township_location(item) for item in locations]


def _decode_township_location(raw: Any) -> TownshipLocation:
    elements = []
    for raw_element in _node(raw, "WeatherElement", list, "Location"):
        periods = []
        for raw_period in _node(raw_element, "Time", list, "WeatherElement"):
            values = []
            for raw_value in _node(raw_period, "ElementValue", list, "Time"):
                if not isinstance(raw_value, dict):
                    raise DecodeFailure("Time.ElementValue entries must be objects")
                values.append({key: _leaf(raw_value, key) for key in raw_value})
            periods.append(
                TownshipPeriod(
                    values=values,
                    start_time=_leaf(raw_period, "StartTime"),
                    end_time=_leaf(raw_period, "EndTime"),
                    data_time=_leaf(raw_period, "DataTime"),
                )
            )
        elements.append(TownshipElement(name=_node(raw_element, "ElementName", str, "WeatherElement"), periods=periods))
    return TownshipLocation(
        name=_node(raw, "LocationName", str, "Location"),
        elements=elements,
        geocode=_leaf(raw, "Geocode"),
        latitude=_leaf(raw, "Latitude"),
        longitude=_leaf(raw, "Longitude"),
    )


def observation_from_township(location: TownshipLocation, region_name: str) -> WeatherObservation:
    """Map a township record under ``region_name``.

    The township datasets only publish an instantaneous temperature, which is
    used for both the minimum and the maximum.
    """

    def value(lookup: tuple) -> Optional[str]:
        element_name, value_key = lookup
        element = _first_element(location.elements, element_name)
        if element is None or not element.periods:
            return None
        values = element.periods[0].values
        if not values:
            return None
        return values[0].get(value_key)

    temperature = value(TOWNSHIP_TEMPERATURE)
    return WeatherObservation(
        region_name=region_name,
        sub_region_name=location.name,
        min_temperature=temperature,
        max_temperature=temperature,
        rain_probability=value(TOWNSHIP_PRECIPITATION),
        condition=value(TOWNSHIP_PHENOMENON),
        comfort_index=value(TOWNSHIP_COMFORT),
        humidity=value(TOWNSHIP_HUMIDITY),
        wind_speed=value(TOWNSHIP_WIND_SPEED),
    )


# helpers ------------------------------------------------------------
def _first_element(elements, name: str):
    for element in elements:
        if element.name == name:
            return element
    return None


def _node(container: Any, key: str, kind: type, where: str) -> Any:
    if not isinstance(container, dict):
        raise DecodeFailure(f"{where} is not an object")
    if key not in container:
        raise DecodeFailure(f"{where}.{key} is missing")
    value = container[key]
    if not isinstance(value, kind):
        raise DecodeFailure(f"{where}.{key} must be {kind.__name__}")
    return value


def _optional_node(container: Any, key: str, kind: type, where: str) -> Any:
    if not isinstance(container, dict):
        raise DecodeFailure(f"{where} is not an object")
    value = container.get(key)
    if value is None:
        return None
    if not isinstance(value, kind):
        raise DecodeFailure(f"{where}.{key} must be {kind.__name__}")
    return value


def _leaf(container: Dict[str, Any], key: str) -> Optional[str]:
    value = container.get(key)
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise DecodeFailure(f"{key} must be a string")


__all__ = [
    "CountyLocation",
    "CountyElement",
    "CountyPeriod",
    "TownshipLocation",
    "TownshipElement",
    "TownshipPeriod",
    "decode_county_payload",
    "decode_township_payload",
    "observation_from_county",
    "observation_from_township",
]
