from __future__ import annotations

import logging
from typing import List, Optional

from .base import ForecastProvider
from ..errors import DecodeFailure, InvalidRequest
from ..normalizer import (
    CountyLocation,
    TownshipLocation,
    decode_county_payload,
    decode_township_payload,
)


COUNTY_DATASET = "F-C0032-001"


class CwaForecastProvider(ForecastProvider):
    """Client for the Central Weather Administration open-data datastore."""

    base_url = "https://opendata.cwa.gov.tw/api/v1/rest/datastore"

    def __init__(self, api_key: str, base_url: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.api_key = api_key
        self.base_url = (base_url or self.base_url).rstrip("/")
        self._log = logging.getLogger(self.__class__.__name__)

    def county_forecast(self, area_name: str) -> List[CountyLocation]:
        if not area_name or not area_name.strip():
            raise InvalidRequest("area name is required")
        params = self._params(locationName=area_name)
        url = f"{self.base_url}/{COUNTY_DATASET}"
        self._log.debug("Fetching county forecast for %s", area_name)
        data = self._json(self._request("GET", url, params=params))
        return self._decode(decode_county_payload, data)

    def township_forecast(self, dataset_id: str, sub_area_name: Optional[str] = None) -> List[TownshipLocation]:
        if not dataset_id:
            raise InvalidRequest("dataset id is required")
        params = self._params()
        if sub_area_name:
            params["locationName"] = sub_area_name
        url = f"{self.base_url}/{dataset_id}"
        self._log.debug("Fetching township forecast %s (sub-area=%s)", dataset_id, sub_area_name)
        data = self._json(self._request("GET", url, params=params))
        locations = self._decode(decode_township_payload, data)
        self._log.debug("Dataset %s returned %d locations", dataset_id, len(locations))
        return locations

    # helpers ------------------------------------------------------------
    def _params(self, **extra: str) -> dict:
        if not self.api_key:
            raise InvalidRequest("CWA API key is not configured")
        params = {"Authorization": self.api_key, "format": "JSON"}
        params.update(extra)
        return params

    def _decode(self, decoder, data):
        try:
            return decoder(data)
        except DecodeFailure as exc:
            self._log.error("Unexpected payload shape: %s (%.500r)", exc, data)
            raise


__all__ = ["CwaForecastProvider", "COUNTY_DATASET"]
