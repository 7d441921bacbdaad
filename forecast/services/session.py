"""Consumer-side forecast state with a latest-request-wins policy.

Each refresh takes a ticket from a monotonically increasing counter. When the
fetch (and then the advisory) completes, the result is applied only if no newer
ticket has been issued in the meantime; otherwise it is dropped. A failed
refresh keeps the last good observation and advisory and records the error
message for display.
"""
from __future__ import annotations

import logging
from threading import Lock
from typing import List, Optional

from ..advisory.service import AdvisoryService
from ..entities import Advisory, WeatherObservation
from ..errors import ForecastError
from .forecast import ForecastCoordinator


logger = logging.getLogger(__name__)

DEFAULT_AREA = "臺北市"


class ForecastSession:
    def __init__(
        self,
        coordinator: ForecastCoordinator,
        advisory_service: AdvisoryService,
        *,
        area: str = DEFAULT_AREA,
        detailed: bool = True,
    ) -> None:
        self.coordinator = coordinator
        self.advisory_service = advisory_service
        self.selected_area = area
        self.selected_sub_area: Optional[str] = None
        self.available_sub_areas: List[str] = []
        self.detailed = detailed
        self.observation: Optional[WeatherObservation] = None
        self.advisory: Optional[Advisory] = None
        self.error_message: Optional[str] = None
        self._lock = Lock()
        self._fetch_ticket = 0
        self._sub_area_ticket = 0

    def refresh(self) -> bool:
        """Fetch the selected area; return ``True`` if the result was applied."""
        with self._lock:
            self._fetch_ticket += 1
            ticket = self._fetch_ticket
            area, sub_area, detailed = self.selected_area, self.selected_sub_area, self.detailed
            self.error_message = None

        logger.info("Refresh #%d for %s (sub-area=%s)", ticket, area, sub_area)
        try:
            observation = self.coordinator.fetch(area, sub_area, detailed=detailed)
        except ForecastError as exc:
            logger.error("Refresh #%d failed: %s", ticket, exc)
            with self._lock:
                if ticket == self._fetch_ticket:
                    self.error_message = exc.user_message
            return False

        with self._lock:
            if ticket != self._fetch_ticket:
                logger.info("Dropping stale observation from refresh #%d", ticket)
                return False
            self.observation = observation
            self.advisory = None

        advisory = self.advisory_service.generate(observation)
        with self._lock:
            if ticket != self._fetch_ticket:
                logger.info("Dropping stale advisory from refresh #%d", ticket)
                return False
            self.advisory = advisory
        return True

    def load_sub_areas(self, area: str) -> List[str]:
        with self._lock:
            self._sub_area_ticket += 1
            ticket = self._sub_area_ticket
        try:
            names = self.coordinator.list_sub_area_names(area)
        except ForecastError as exc:
            logger.error("Failed to load sub-areas for %s: %s", area, exc)
            names = []
        with self._lock:
            if ticket != self._sub_area_ticket:
                return names
            self.available_sub_areas = names
            if self.selected_sub_area not in names:
                self.selected_sub_area = names[0] if names else None
        return names

    def change_area(self, area: str) -> bool:
        with self._lock:
            self.selected_area = area
            self.selected_sub_area = None
        self.load_sub_areas(area)
        return self.refresh()

    def change_sub_area(self, sub_area: Optional[str]) -> bool:
        with self._lock:
            self.selected_sub_area = sub_area
        return self.refresh()


__all__ = ["ForecastSession", "DEFAULT_AREA"]
