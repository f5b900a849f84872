"""
Explainer that walks an ordered list of text-generation backends and falls
back to the rule-based explanation when none of them answers.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, List, Optional

from api.responses import Anomaly, Explanation
from engine.explain.backends import ExplanationBackend, RuleBasedBackend, default_backends
from engine.explain.exceptions import BackendError
from engine.explain.prompt import build_prompt

log = logging.getLogger(__name__)


class Explainer:
    """Tries each backend in order, one at a time, and stops at the first success.

    ``fallback`` is always evaluated last and must not fail. ``attempt_timeout``
    bounds every backend attempt; a timeout counts as an ordinary failure.
    """

    def __init__(
        self,
        backends: Iterable[ExplanationBackend],
        fallback: Optional[ExplanationBackend] = None,
        attempt_timeout: Optional[float] = None,
    ):
        self.backends: List[ExplanationBackend] = list(backends)
        self.fallback = fallback or RuleBasedBackend()
        self.attempt_timeout = attempt_timeout

    @property
    def strategies(self) -> List[ExplanationBackend]:
        return [*self.backends, self.fallback]

    async def _attempt(self, backend: ExplanationBackend, prompt: str, anomaly: Anomaly) -> Optional[str]:
        try:
            if self.attempt_timeout:
                return await asyncio.wait_for(backend.generate(prompt, anomaly), self.attempt_timeout)
            return await backend.generate(prompt, anomaly)
        except asyncio.TimeoutError:
            log.warning("%s explanation timed out after %ss", backend.name, self.attempt_timeout)
        except BackendError as exc:
            log.warning("%s explanation failed: %s", backend.name, exc)
        except Exception:
            log.exception("%s explanation raised unexpectedly", backend.name)
        return None

    async def explain(self, anomaly: Anomaly) -> Explanation:
        prompt = build_prompt(anomaly)
        *candidates, last = self.strategies
        for backend in candidates:
            if not backend.available:
                log.debug("%s not configured, skipping", backend.name)
                continue
            text = await self._attempt(backend, prompt, anomaly)
            if text:
                return Explanation(text=text, source=backend.source)

        # the last strategy never fails
        text = await last.generate(prompt, anomaly)
        return Explanation(text=text, source=last.source)


_explainer: Optional[Explainer] = None


def get_explainer() -> Explainer:
    global _explainer
    if _explainer is None:
        from config import settings

        _explainer = Explainer(default_backends(settings), attempt_timeout=settings.explain_timeout_seconds)
    return _explainer

