from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


TEMPERATURE_PLACEHOLDER = "--"


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


@dataclass(frozen=True)
class WeatherObservation:
    """Normalized forecast snapshot for an area or sub-area.

    Values are kept as the upstream strings so the presentation layer can show
    them verbatim. Both upstream formats are funnelled into this type:
    - county records never carry sub-region, humidity or wind speed
    - township records carry a single temperature reading, stored as both
      ``min_temperature`` and ``max_temperature``

    Equality only looks at the region, temperatures and condition so that a
    refresh with unchanged headline values compares equal.
    """

    region_name: str
    sub_region_name: Optional[str] = None
    min_temperature: Optional[str] = None
    max_temperature: Optional[str] = None
    rain_probability: Optional[str] = field(default=None, compare=False)
    condition: Optional[str] = None
    comfort_index: Optional[str] = field(default=None, compare=False)
    humidity: Optional[str] = field(default=None, compare=False)
    wind_speed: Optional[str] = field(default=None, compare=False)
    observed_at: datetime = field(default_factory=_utcnow, compare=False)

    def __post_init__(self) -> None:
        if not self.region_name:
            raise ValueError("region_name must not be empty")

    @property
    def temperature_display(self) -> str:
        if self.min_temperature is not None and self.max_temperature is not None:
            return f"{self.min_temperature} - {self.max_temperature}"
        if self.min_temperature is not None:
            return self.min_temperature
        if self.max_temperature is not None:
            return self.max_temperature
        return TEMPERATURE_PLACEHOLDER

    @property
    def full_location_name(self) -> str:
        if self.sub_region_name:
            return f"{self.region_name}{self.sub_region_name}"
        return self.region_name

    def as_dict(self) -> Dict[str, Any]:
        return {
            "region_name": self.region_name,
            "sub_region_name": self.sub_region_name,
            "full_location_name": self.full_location_name,
            "min_temperature": self.min_temperature,
            "max_temperature": self.max_temperature,
            "temperature_display": self.temperature_display,
            "rain_probability": self.rain_probability,
            "condition": self.condition,
            "comfort_index": self.comfort_index,
            "humidity": self.humidity,
            "wind_speed": self.wind_speed,
            "observed_at": _isoformat(self.observed_at),
        }


@dataclass(frozen=True)
class Advisory:
    """Life advice derived from a single observation."""

    summary: str
    recommendation: str
    clothing_advice: str
    activity_advice: str
    warning: Optional[str] = None
    is_model_generated: bool = False
    generated_at: datetime = field(default_factory=_utcnow, compare=False)

    def __post_init__(self) -> None:
        for name in ("summary", "recommendation", "clothing_advice", "activity_advice"):
            if not getattr(self, name):
                raise ValueError(f"{name} must not be empty")

    @property
    def source_label(self) -> str:
        return "🤖 AI 生成" if self.is_model_generated else "📋 規則式分析"

    def as_dict(self) -> Dict[str, Any]:
        return {
            "summary": self.summary,
            "recommendation": self.recommendation,
            "clothing_advice": self.clothing_advice,
            "activity_advice": self.activity_advice,
            "warning": self.warning,
            "is_model_generated": self.is_model_generated,
            "source_label": self.source_label,
            "generated_at": _isoformat(self.generated_at),
        }


def _isoformat(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


__all__ = ["WeatherObservation", "Advisory", "TEMPERATURE_PLACEHOLDER"]
