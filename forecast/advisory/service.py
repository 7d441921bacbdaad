from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Optional

from ..entities import Advisory, WeatherObservation
from .llm import TextGenerator
from .rules import advisory_inputs, derive_advisory


FIELDS = ("summary", "recommendation", "clothing_advice", "activity_advice", "warning")

FALLBACKS = {
    "recommendation": "享受美好的一天！",
    "clothing_advice": "請根據溫度適當穿著",
    "activity_advice": "適合各種活動",
    "warning": "⚠️ 暫時無法取得天氣警示，請留意氣象署最新公告",
}


def build_prompts(location: str, temperature: float, condition: str, rain_probability: int) -> Dict[str, str]:
    degrees = int(temperature)
    return {
        "summary": (
            f"你是專業天氣播報員。地點：{location}，天氣：{condition}，溫度：{degrees}°C，"
            f"降雨機率：{rain_probability}%。用一句話描述，不超過25字，開頭加emoji。"
        ),
        "recommendation": (
            f"你是生活顧問。天氣：{condition}，{degrees}°C，降雨{rain_probability}%。"
            "給2-3條建議，每條前加emoji。"
        ),
        "clothing_advice": (
            f"你是穿搭顧問。溫度：{degrees}°C，天氣：{condition}。分別建議上衣、下身、鞋子，每項前加emoji。"
        ),
        "activity_advice": (
            f"你是活動規劃師。溫度：{degrees}°C，天氣：{condition}，降雨{rain_probability}%。"
            "推薦2-3項活動，每項前加emoji。"
        ),
        "warning": (
            f"你是氣象安全專家。溫度：{degrees}°C，天氣：{condition}，降雨{rain_probability}%。"
            "如有極端天氣用警告符號警告，否則回答天氣良好。"
        ),
    }


class ModelAdvisoryGenerator:
    """Ask the text generator for each advisory field concurrently."""

    def __init__(self, generator: TextGenerator, logger: Optional[logging.Logger] = None) -> None:
        self.generator = generator
        self._log = logger or logging.getLogger(self.__class__.__name__)

    def generate(self, location: str, temperature: float, condition: str, rain_probability: int) -> Advisory:
        prompts = build_prompts(location, temperature, condition, rain_probability)
        fallbacks = dict(FALLBACKS, summary=f"今日{condition}，{int(temperature)}°C")
        with ThreadPoolExecutor(max_workers=len(FIELDS), thread_name_prefix="advisory") as executor:
            futures = {
                name: executor.submit(self._ask, name, prompts[name], fallbacks[name])
                for name in FIELDS
            }
            texts = {name: future.result() for name, future in futures.items()}
        return Advisory(is_model_generated=True, **texts)

    def _ask(self, name: str, prompt: str, fallback: str) -> str:
        try:
            text = self.generator.respond(prompt)
        except Exception as exc:  # noqa: BLE001 - each field recovers on its own
            self._log.warning("Generation for %s failed, using fallback: %s", name, exc)
            return fallback
        if not text or not text.strip():
            self._log.warning("Generation for %s returned no text, using fallback", name)
            return fallback
        return text.strip()


class AdvisoryService:
    """Choose between the model-backed generator and the rule engine per request."""

    def __init__(self, generator: TextGenerator, logger: Optional[logging.Logger] = None) -> None:
        self.generator = generator
        self.model_generator = ModelAdvisoryGenerator(generator)
        self._log = logger or logging.getLogger(self.__class__.__name__)

    def generate(self, observation: WeatherObservation) -> Advisory:
        temperature, condition, rain_probability = advisory_inputs(observation)
        availability = self.generator.check_availability()
        if availability.available:
            self._log.info("Using model-backed advisory for %s", observation.full_location_name)
            return self.model_generator.generate(
                observation.full_location_name, temperature, condition, rain_probability
            )
        self._log.info("Using rule-based advisory (%s)", availability.reason or "model unavailable")
        return derive_advisory(temperature, condition, rain_probability)


__all__ = ["AdvisoryService", "ModelAdvisoryGenerator", "build_prompts", "FALLBACKS"]
