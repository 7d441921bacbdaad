"""Deterministic advisory rules.

Every threshold is a strict comparison unless noted; the walk suggestion is the
only inclusive range (20-28°C).
"""
from __future__ import annotations

import math
from typing import List, Optional, Tuple

from ..entities import Advisory, WeatherObservation


DEFAULT_TEMPERATURE = 25.0
DEFAULT_PROBABILITY = 0
DEFAULT_CONDITION = "晴朗"

RAIN_ICON = "🌧️"
CLOUD_ICON = "☁️"
SUN_ICON = "☀️"

SEVERE_WEATHER_KEYWORDS = ("颱風", "暴雨", "大雨")

UMBRELLA = "🌂 記得攜帶雨具"
HYDRATION = "💧 多補充水分"
SUNSCREEN = "🧴 做好防曬措施"
STAY_WARM = "🧥 注意保暖"
OUTDOOR_WALK = "🚶 適合外出散步"
ENJOY_DAY = "😊 享受美好的一天！"

CLOTHING_HOT = "👕 上衣：輕薄透氣短袖\n👖 下身：短褲或裙子\n👟 鞋子：涼鞋或透氣鞋"
CLOTHING_WARM = "👕 上衣：短袖 T-shirt\n👖 下身：長褲或短褲\n👟 鞋子：運動鞋"
CLOTHING_MILD = "👔 上衣：薄長袖\n👖 下身：長褲\n👟 鞋子：休閒鞋"
CLOTHING_COOL = "🧥 上衣：外套 + 長袖\n👖 下身：長褲\n👟 鞋子：包鞋"
CLOTHING_COLD = "🧥 上衣：厚外套 + 毛衣\n👖 下身：厚長褲\n🧣 配件：圍巾、手套"

ACTIVITY_INDOOR = "🏠 室內活動：看電影、逛商場\n📚 閱讀或學習新技能\n🎮 居家娛樂"
ACTIVITY_COOLING = "🏊 游泳消暑\n🛒 室內購物\n☕ 咖啡廳休憩"
ACTIVITY_OUTDOOR = "🚴 騎單車\n🥾 戶外健行\n📸 拍照打卡"
ACTIVITY_WARM = "♨️ 泡溫泉\n🍜 享用熱食\n🏃 室內運動"

HEAT_WARNING = "⚠️ 高溫警報：注意防曬補水，避免中暑"
COLD_WARNING = "⚠️ 低溫警報：注意保暖，預防感冒"
RAIN_WARNING = "⚠️ 降雨警報：外出請攜帶雨具"
EXTREME_WARNING = "⚠️ 極端天氣：建議減少外出"
ALL_CLEAR = "✅ 天氣狀況良好，無需特別注意"


def parse_temperature(value: Optional[str]) -> float:
    number = _to_float(value)
    return DEFAULT_TEMPERATURE if number is None else number


def parse_probability(value: Optional[str]) -> int:
    number = _to_float(value)
    return DEFAULT_PROBABILITY if number is None else int(number)


def advisory_inputs(observation: WeatherObservation) -> Tuple[float, str, int]:
    """Return ``(temperature, condition, rain_probability)`` with defaults applied."""
    raw_temperature = observation.min_temperature
    if raw_temperature is None:
        raw_temperature = observation.max_temperature
    return (
        parse_temperature(raw_temperature),
        DEFAULT_CONDITION if observation.condition is None else observation.condition,
        parse_probability(observation.rain_probability),
    )


def derive_advisory(temperature: float, condition: str, rain_probability: int) -> Advisory:
    return Advisory(
        summary=summary_for(temperature, condition, rain_probability),
        recommendation=recommendation_for(temperature, rain_probability),
        clothing_advice=clothing_for(temperature),
        activity_advice=activity_for(temperature, rain_probability),
        warning=warning_for(temperature, condition, rain_probability),
        is_model_generated=False,
    )


def advisory_for_observation(observation: WeatherObservation) -> Advisory:
    return derive_advisory(*advisory_inputs(observation))


def summary_for(temperature: float, condition: str, rain_probability: int) -> str:
    if "雨" in condition:
        icon = RAIN_ICON
    elif "雲" in condition or "陰" in condition:
        icon = CLOUD_ICON
    else:
        icon = SUN_ICON
    return f"{icon} 今日{condition}，氣溫 {int(temperature)}°C，降雨機率 {rain_probability}%"


def recommendation_for(temperature: float, rain_probability: int) -> str:
    lines: List[str] = []
    if rain_probability > 50:
        lines.append(UMBRELLA)
    if temperature > 30:
        lines.append(HYDRATION)
        lines.append(SUNSCREEN)
    elif temperature < 15:
        lines.append(STAY_WARM)
    if rain_probability < 30 and 20 <= temperature <= 28:
        lines.append(OUTDOOR_WALK)
    if not lines:
        lines.append(ENJOY_DAY)
    return "\n".join(lines)


def clothing_for(temperature: float) -> str:
    if temperature > 30:
        return CLOTHING_HOT
    if temperature > 25:
        return CLOTHING_WARM
    if temperature > 20:
        return CLOTHING_MILD
    if temperature > 15:
        return CLOTHING_COOL
    return CLOTHING_COLD


def activity_for(temperature: float, rain_probability: int) -> str:
    if rain_probability > 60:
        return ACTIVITY_INDOOR
    if temperature > 30:
        return ACTIVITY_COOLING
    if temperature > 20:
        return ACTIVITY_OUTDOOR
    return ACTIVITY_WARM


def warning_for(temperature: float, condition: str, rain_probability: int) -> str:
    warnings: List[str] = []
    if temperature > 35:
        warnings.append(HEAT_WARNING)
    if temperature < 10:
        warnings.append(COLD_WARNING)
    if rain_probability > 70:
        warnings.append(RAIN_WARNING)
    if any(keyword in condition for keyword in SEVERE_WEATHER_KEYWORDS):
        warnings.append(EXTREME_WARNING)
    if not warnings:
        return ALL_CLEAR
    return "\n".join(warnings)


def _to_float(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


__all__ = [
    "derive_advisory",
    "advisory_for_observation",
    "advisory_inputs",
    "parse_temperature",
    "parse_probability",
    "summary_for",
    "recommendation_for",
    "clothing_for",
    "activity_for",
    "warning_for",
]
