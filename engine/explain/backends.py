"""
Text-generation backends used to explain cost anomalies.

Each backend is a strategy over one capability: turn a prompt into explanation
text or raise :class:`BackendError`. A backend built without an API key reports
itself unavailable and is never called.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from api.responses import Anomaly
from config import SYSTEM_PROMPT
from engine.enums import ExplanationSource
from engine.explain.exceptions import (
    BackendResponseError,
    BackendTimeout,
    BackendUnavailable,
)
from engine.explain.fallback import basic_explanation


@dataclass(frozen=True)
class BackendConfig:
    api_key: Optional[str]
    model: str
    url: str
    max_tokens: int = 200
    temperature: float = 0.7
    timeout: float = 15.0


class ExplanationBackend(ABC):
    source: ExplanationSource
    name: str = ""

    @property
    @abstractmethod
    def available(self) -> bool: ...

    @abstractmethod
    async def generate(self, prompt: str, anomaly: Anomaly) -> str: ...


class HttpBackend(ExplanationBackend):
    """Shared request/response handling for hosted text-generation APIs."""

    def __init__(self, config: BackendConfig):
        self.config = config

    @property
    def available(self) -> bool:
        return bool(self.config.api_key)

    def _headers(self) -> Dict[str, str]:
        return {"Content-Type": "application/json"}

    @abstractmethod
    def _payload(self, prompt: str) -> Dict[str, Any]: ...

    @abstractmethod
    def _extract(self, body: Any) -> Optional[str]: ...

    async def generate(self, prompt: str, anomaly: Anomaly) -> str:
        if not self.available:
            raise BackendUnavailable(f"{self.name} has no API key configured")

        url = self.config.url
        try:
            async with httpx.AsyncClient(timeout=self.config.timeout) as client:
                resp = await client.post(url, json=self._payload(prompt), headers=self._headers())
                resp.raise_for_status()
                body = resp.json()
        except httpx.HTTPStatusError as e:
            raise BackendResponseError(f"{self.name} API error [{e.response.status_code}]") from e
        except httpx.TimeoutException as e:
            raise BackendTimeout(f"{self.name} request timed out") from e
        except httpx.RequestError as e:
            raise BackendUnavailable(f"Cannot reach {self.name} at {url}") from e
        except ValueError as e:
            raise BackendResponseError(f"{self.name} returned a non-JSON body") from e

        try:
            text = self._extract(body)
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise BackendResponseError(f"{self.name} returned a malformed body") from e

        if not isinstance(text, str) or not text.strip():
            raise BackendResponseError(f"No explanation returned from {self.name}")
        return text.strip()


class OpenAIBackend(HttpBackend):
    source = ExplanationSource.openai
    name = "OpenAI"

    def _headers(self) -> Dict[str, str]:
        return {**super()._headers(), "Authorization": f"Bearer {self.config.api_key}"}

    def _payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "model": self.config.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "temperature": self.config.temperature,
            "max_tokens": self.config.max_tokens,
        }

    def _extract(self, body: Any) -> Optional[str]:
        choices = body["choices"]
        if not choices:
            return None
        return choices[0]["message"]["content"]


class AnthropicBackend(HttpBackend):
    source = ExplanationSource.anthropic
    name = "Anthropic"

    def __init__(self, config: BackendConfig, version: str = "2023-06-01"):
        super().__init__(config)
        self.version = version

    def _headers(self) -> Dict[str, str]:
        return {
            **super()._headers(),
            "x-api-key": str(self.config.api_key),
            "anthropic-version": self.version,
        }

    def _payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "model": self.config.model,
            "system": SYSTEM_PROMPT,
            "max_tokens": self.config.max_tokens,
            "temperature": self.config.temperature,
            "messages": [{"role": "user", "content": prompt}],
        }

    def _extract(self, body: Any) -> Optional[str]:
        content = body["content"]
        if not content:
            return None
        return content[0]["text"]


class RuleBasedBackend(ExplanationBackend):
    source = ExplanationSource.fallback
    name = "rule-based"

    @property
    def available(self) -> bool:
        return True

    async def generate(self, prompt: str, anomaly: Anomaly) -> str:
        return basic_explanation(anomaly)


def default_backends(cfg: Any = None) -> List[ExplanationBackend]:
    """Provider A then provider B, built from settings."""
    if cfg is None:
        from config import settings
        cfg = settings

    shared = {
        "max_tokens": cfg.explain_max_tokens,
        "temperature": cfg.explain_temperature,
        "timeout": cfg.explain_timeout_seconds,
    }
    return [
        OpenAIBackend(BackendConfig(
            api_key=cfg.openai_api_key,
            model=cfg.openai_model,
            url=cfg.openai_url,
            **shared,
        )),
        AnthropicBackend(
            BackendConfig(
                api_key=cfg.anthropic_api_key,
                model=cfg.anthropic_model,
                url=cfg.anthropic_url,
                **shared,
            ),
            version=cfg.anthropic_version,
        ),
    ]
