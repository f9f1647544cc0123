# app/voice/nlp.py
"""Optional external NLP provider for voice commands.

The orchestrator only depends on ``NLPProvider``. When no provider is
configured, or the provider fails, local keyword rules take over.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import httpx
from pydantic import BaseModel, Field

from app.core.config import Settings
from app.core.errors import ExternalProviderError
from app.core.logging import logger


class NLPResult(BaseModel):
    success: bool
    intent: str | None = None
    entities: dict[str, Any] = Field(default_factory=dict)
    confidence: float | None = None
    processed_text: str | None = None
    error: str | None = None


class NLPProvider(ABC):
    """Something that can classify a command better than the local rules."""

    @abstractmethod
    def classify(self, text: str, context: dict[str, Any]) -> NLPResult:
        """Classify ``text``.

        Implementations may raise ExternalProviderError; callers treat it the
        same as an unsuccessful result.
        """


class HttpNLPProvider(NLPProvider):
    """Posts text to a hosted voice-AI NLP endpoint.

    Example:
        provider = HttpNLPProvider("https://api.example.com/v1/voice", api_key="key")
        result = provider.classify("my sink is leaking", {"userRole": "resident"})

    Attributes:
        _endpoint: Base URL; text classification lives under ``/text``
        _api_key: Bearer token sent with every request
        _timeout: Seconds before the request is abandoned
    """

    def __init__(self, endpoint: str, api_key: str, timeout: float = 3.0) -> None:
        self._endpoint = endpoint.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout

    def _get_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_key}",
        }

    def classify(self, text: str, context: dict[str, Any]) -> NLPResult:
        body = {
            "text": text,
            "userId": context.get("userId"),
            "context": {"userRole": context.get("userRole", "resident"), **context},
            "language": "en-US",
            "enableNLP": True,
            "enableIntentRecognition": True,
        }
        try:
            with httpx.Client(timeout=self._timeout) as client:
                resp = client.post(
                    f"{self._endpoint}/text", json=body, headers=self._get_headers()
                )
                resp.raise_for_status()
                data = resp.json()
        except httpx.TimeoutException as e:
            raise ExternalProviderError(f"NLP provider timed out after {self._timeout}s") from e
        except httpx.HTTPStatusError as e:
            raise ExternalProviderError(
                f"NLP provider error: {e.response.status_code} {e.response.reason_phrase}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise ExternalProviderError(f"NLP provider request failed: {e}") from e

        return NLPResult(
            success=True,
            intent=data.get("intent"),
            entities=data.get("entities") or {},
            confidence=data.get("confidence"),
            processed_text=data.get("processedText"),
        )


def build_nlp_provider(settings: Settings) -> NLPProvider | None:
    if not settings.NLP_API_KEY:
        return None
    logger.info(f"External NLP provider enabled at {settings.NLP_ENDPOINT}")
    return HttpNLPProvider(
        settings.NLP_ENDPOINT, settings.NLP_API_KEY, timeout=settings.NLP_TIMEOUT_SECONDS
    )
