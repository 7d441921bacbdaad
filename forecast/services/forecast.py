from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..entities import WeatherObservation
from ..errors import NoData
from ..normalizer import TownshipLocation, observation_from_county, observation_from_township
from ..providers.cwa import CwaForecastProvider
from ..registry import DatasetRegistry


class ForecastCoordinator:
    """Pick the dataset for an area, fetch it and normalize the records."""

    def __init__(
        self,
        *,
        provider: CwaForecastProvider,
        registry: Optional[DatasetRegistry] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.provider = provider
        self.registry = registry or DatasetRegistry()
        self._log = logger or logging.getLogger(self.__class__.__name__)

    # Public API ---------------------------------------------------------
    def fetch_by_area(self, area_name: str) -> WeatherObservation:
        locations = self.provider.county_forecast(area_name)
        if not locations:
            raise NoData(f"no county forecast for {area_name!r}")
        return observation_from_county(locations[0])

    def fetch_township_forecast(self, area_name: str, sub_area_name: Optional[str] = None) -> WeatherObservation:
        dataset_id = self.registry.dataset_for(area_name)
        locations = self.provider.township_forecast(dataset_id, sub_area_name)
        location = self._select(locations, area_name, sub_area_name)
        return observation_from_township(location, area_name)

    def fetch_all_sub_areas(self, area_name: str) -> List[WeatherObservation]:
        dataset_id = self.registry.dataset_for(area_name)
        locations = self.provider.township_forecast(dataset_id)
        self._log.info("Found %d sub-areas for %s", len(locations), area_name)
        return [observation_from_township(location, area_name) for location in locations]

    def list_sub_area_names(self, area_name: str) -> List[str]:
        return [
            observation.sub_region_name
            for observation in self.fetch_all_sub_areas(area_name)
            if observation.sub_region_name is not None
        ]

    def fetch(self, area_name: str, sub_area_name: Optional[str] = None, detailed: bool = True) -> WeatherObservation:
        if detailed:
            return self.fetch_township_forecast(area_name, sub_area_name)
        return self.fetch_by_area(area_name)

    def supported_areas(self) -> List[str]:
        return self.registry.supported_areas()

    def popular_areas(self) -> List[str]:
        return self.registry.popular_areas()

    # Helpers ------------------------------------------------------------
    def _select(
        self,
        locations: Sequence[TownshipLocation],
        area_name: str,
        sub_area_name: Optional[str],
    ) -> TownshipLocation:
        if not locations:
            raise NoData(f"no township forecast for {area_name!r}")
        if sub_area_name is None:
            return locations[0]
        for location in locations:
            if location.name == sub_area_name:
                return location
        self._log.warning("Sub-area %s not found in %s, using %s", sub_area_name, area_name, locations[0].name)
        return locations[0]


__all__ = ["ForecastCoordinator"]
