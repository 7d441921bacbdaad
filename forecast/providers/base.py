from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests
from requests import Response

from ..errors import DecodeFailure, InvalidRequest, TransportFailure


@dataclass
class RequestConfig:
    timeout: float = 10.0


class ForecastProvider:
    """Base class for HTTP forecast sources; one attempt per request, no retries."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.request_config = request_config or RequestConfig()
        self.session = session or requests.Session()
        self._log = logging.getLogger(self.__class__.__name__)

    def _handle_response(self, response: Response) -> Response:
        if response.status_code != 200:
            self._log.error("Provider returned %s: %s", response.status_code, response.text[:500])
            raise TransportFailure(f"HTTP {response.status_code}")
        return response

    def _request(self, method: str, url: str, **kwargs) -> Response:
        try:
            response = self.session.request(
                method,
                url,
                timeout=self.request_config.timeout,
                **kwargs,
            )
        except (requests.exceptions.InvalidURL, requests.exceptions.MissingSchema, requests.exceptions.InvalidSchema) as exc:
            self._log.error("Invalid request URL %s", url, exc_info=exc)
            raise InvalidRequest(f"invalid url: {url}") from exc
        except requests.Timeout as exc:
            self._log.error("Request timed out", exc_info=exc)
            raise TransportFailure("timeout") from exc
        except requests.RequestException as exc:
            self._log.error("Request failed", exc_info=exc)
            raise TransportFailure("request failed") from exc
        return self._handle_response(response)

    def _json(self, response: Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            self._log.error("Failed to decode JSON", exc_info=exc)
            raise DecodeFailure("invalid json") from exc


__all__ = ["ForecastProvider", "RequestConfig"]
