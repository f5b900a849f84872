"""
Explanation subpackage for the costlens engine.

Re-exports the :class:`Explainer` and its backend strategies so consumers can
import everything needed to explain an anomaly from ``engine.explain``.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.explain.backends import (
    AnthropicBackend,
    BackendConfig,
    ExplanationBackend,
    OpenAIBackend,
    RuleBasedBackend,
    default_backends,
)
from engine.explain.explainer import Explainer, get_explainer
from engine.explain.fallback import basic_explanation
from engine.explain.prompt import build_prompt

__all__ = [
    "AnthropicBackend",
    "BackendConfig",
    "Explainer",
    "ExplanationBackend",
    "OpenAIBackend",
    "RuleBasedBackend",
    "basic_explanation",
    "build_prompt",
    "default_backends",
    "get_explainer",
]
