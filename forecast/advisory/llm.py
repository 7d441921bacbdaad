"""Text-generation capability used by the model-backed advisory path."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

import requests
from requests import RequestException


logger = logging.getLogger(__name__)

OPENROUTER_URL = "https://openrouter.ai/api/v1/chat/completions"
SYSTEM_PROMPT = "你是熟悉臺灣天氣的生活助理，請使用繁體中文簡潔回答。"


class TextGenerationError(RuntimeError):
    """Raised when a single prompt cannot be answered."""


@dataclass(frozen=True)
class Availability:
    available: bool
    reason: str = ""


class TextGenerator(Protocol):
    """A prompt-in, text-out service that may be unavailable."""

    def check_availability(self) -> Availability:
        ...

    def respond(self, prompt: str) -> str:
        ...


class UnavailableTextGenerator:
    """Stand-in used when no text-generation backend is configured."""

    def __init__(self, reason: str = "text generation is not configured") -> None:
        self.reason = reason

    def check_availability(self) -> Availability:
        return Availability(available=False, reason=self.reason)

    def respond(self, prompt: str) -> str:
        raise TextGenerationError(self.reason)


class OpenRouterTextGenerator:
    """Chat-completions client for OpenRouter."""

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        url: str = OPENROUTER_URL,
        app_name: Optional[str] = None,
        app_url: Optional[str] = None,
        timeout: float = 15.0,
        max_tokens: int = 256,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.url = url
        self.app_name = app_name
        self.app_url = app_url
        self.timeout = timeout
        self.max_tokens = max_tokens
        self.session = session or requests.Session()

    def check_availability(self) -> Availability:
        if not self.api_key or not self.model:
            return Availability(available=False, reason="OpenRouter credentials are not configured")
        return Availability(available=True)

    def respond(self, prompt: str) -> str:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        if self.app_url:
            headers["HTTP-Referer"] = self.app_url
        if self.app_name:
            headers["X-Title"] = self.app_name

        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "temperature": 0.7,
            "max_tokens": self.max_tokens,
        }

        try:
            response = self.session.post(self.url, headers=headers, json=payload, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (RequestException, ValueError) as exc:
            raise TextGenerationError(f"OpenRouter request failed: {exc}") from exc
        try:
            return data["choices"][0]["message"]["content"].strip()
        except (KeyError, IndexError, TypeError, AttributeError) as exc:
            raise TextGenerationError("Unexpected OpenRouter response structure") from exc


def build_text_generator(
    api_key: Optional[str],
    model: Optional[str],
    **kwargs,
) -> TextGenerator:
    """Pick the OpenRouter client when credentials exist, else the unavailable stub."""
    if not api_key or not model:
        logger.info("OpenRouter credentials missing, model-backed advisories disabled")
        return UnavailableTextGenerator("OpenRouter credentials are not configured")
    return OpenRouterTextGenerator(api_key=api_key, model=model, **kwargs)


__all__ = [
    "Availability",
    "TextGenerator",
    "TextGenerationError",
    "UnavailableTextGenerator",
    "OpenRouterTextGenerator",
    "build_text_generator",
    "OPENROUTER_URL",
]
