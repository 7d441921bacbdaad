"""REST API views exposing normalized forecasts and advisories."""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from django.conf import settings
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from forecast.advisory.llm import build_text_generator
from forecast.advisory.service import AdvisoryService
from forecast.errors import ForecastError, InvalidRequest, NoData, UnsupportedArea
from forecast.providers.base import RequestConfig
from forecast.providers.cwa import CwaForecastProvider
from forecast.services.forecast import ForecastCoordinator


logger = logging.getLogger(__name__)

ERROR_STATUS = {
    InvalidRequest: status.HTTP_400_BAD_REQUEST,
    UnsupportedArea: status.HTTP_404_NOT_FOUND,
    NoData: status.HTTP_404_NOT_FOUND,
}


@lru_cache(maxsize=1)
def get_forecast_coordinator() -> ForecastCoordinator:
    provider = CwaForecastProvider(
        api_key=settings.CWA_API_KEY,
        base_url=settings.CWA_BASE_URL,
        request_config=RequestConfig(timeout=settings.CWA_TIMEOUT),
    )
    return ForecastCoordinator(provider=provider)


@lru_cache(maxsize=1)
def get_advisory_service() -> AdvisoryService:
    generator = build_text_generator(
        settings.OPENROUTER_API_KEY,
        settings.OPENROUTER_MODEL,
        url=settings.OPENROUTER_URL,
        app_name=settings.OPENROUTER_APP_NAME,
        app_url=settings.OPENROUTER_APP_URL,
    )
    return AdvisoryService(generator)


def build_forecast_payload(area: str, sub_area: Optional[str] = None, detailed: bool = True) -> Dict[str, Any]:
    """Fetch, advise and serialize; ``ForecastError`` propagates to the caller."""
    observation = get_forecast_coordinator().fetch(area, sub_area, detailed=detailed)
    advisory = get_advisory_service().generate(observation)
    return {"observation": observation.as_dict(), "advisory": advisory.as_dict()}


def _error_response(exc: ForecastError) -> Response:
    code = ERROR_STATUS.get(type(exc), status.HTTP_502_BAD_GATEWAY)
    return Response({"detail": exc.user_message}, status=code)


def _parse_flag(raw_value: Optional[str], default: bool = True) -> bool:
    if raw_value is None:
        return default
    return raw_value.strip().lower() not in {"0", "false", "no", "off"}


class AreaListView(APIView):
    """List the areas with township datasets."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        coordinator = get_forecast_coordinator()
        return Response(
            {"areas": coordinator.supported_areas(), "popular": coordinator.popular_areas()},
            status=status.HTTP_200_OK,
        )


class SubAreaListView(APIView):
    permission_classes = [AllowAny]

    def get(self, request, area: str, *args, **kwargs):  # noqa: D401
        try:
            names = get_forecast_coordinator().list_sub_area_names(area)
        except ForecastError as exc:
            logger.warning("Sub-area lookup for %s failed: %s", area, exc)
            return _error_response(exc)
        return Response({"area": area, "sub_areas": names}, status=status.HTTP_200_OK)


class ForecastView(APIView):
    """Provide the normalized forecast and advisory for an area."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        """Return the observation and advisory for the requested area."""
        area = (request.query_params.get("area") or "").strip()
        if not area:
            return Response({"detail": "area query parameter is required"}, status=status.HTTP_400_BAD_REQUEST)
        sub_area = request.query_params.get("sub_area") or None
        detailed = _parse_flag(request.query_params.get("detailed"))

        try:
            payload = build_forecast_payload(area, sub_area, detailed=detailed)
        except ForecastError as exc:
            logger.warning("Forecast for %s failed: %s", area, exc)
            return _error_response(exc)
        return Response(payload, status=status.HTTP_200_OK)
