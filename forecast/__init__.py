"""Normalize CWA forecasts and derive daily life advisories."""
from __future__ import annotations

from .entities import Advisory, WeatherObservation
from .errors import (
    DecodeFailure,
    ForecastError,
    InvalidRequest,
    NoData,
    TransportFailure,
    UnsupportedArea,
)

__all__ = [
    "Advisory",
    "WeatherObservation",
    "ForecastError",
    "InvalidRequest",
    "TransportFailure",
    "DecodeFailure",
    "NoData",
    "UnsupportedArea",
]
