"""Error kinds raised along the forecast fetch path."""
from __future__ import annotations


class ForecastError(RuntimeError):
    """Base forecast error."""

    user_message = "無法取得天氣資料"


class InvalidRequest(ForecastError):
    """Raised when a request URL cannot be constructed."""

    user_message = "無效的 URL"


class TransportFailure(ForecastError):
    """Raised on network errors or any non-200 upstream status."""

    user_message = "無效的服務器響應"


class DecodeFailure(ForecastError):
    """Raised when a payload is missing required structural nodes."""

    user_message = "解碼天氣數據失敗"


class NoData(ForecastError):
    """Raised when a well-formed payload carries no locations."""

    user_message = "未找到天氣數據"


class UnsupportedArea(ForecastError):
    """Raised when an area has no township dataset."""

    user_message = "不支援此縣市的鄉鎮預報"


__all__ = [
    "ForecastError",
    "InvalidRequest",
    "TransportFailure",
    "DecodeFailure",
    "NoData",
    "UnsupportedArea",
]
