"""
Prompt construction for text-generation backends.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from api.responses import Anomaly
from config import SYSTEM_PROMPT
from engine.enums import AnomalyType


def direction_word(anomaly: Anomaly) -> str:
    return "higher" if anomaly.type == AnomalyType.spike else "lower"


def build_prompt(anomaly: Anomaly) -> str:
    """Render the user prompt for ``anomaly``; identical anomalies give identical prompts."""
    return (
        "You are a financial analyst explaining AWS cost anomalies. Be concise and actionable.\n"
        "\n"
        "Anomaly Details:\n"
        f"- Date: {anomaly.date}\n"
        f"- Actual Cost: ${anomaly.value:.2f}\n"
        f"- Average Cost: ${anomaly.mean:.2f}\n"
        f"- Deviation: {anomaly.deviation_percent:.1f}% {direction_word(anomaly)}\n"
        f"- Severity: {anomaly.severity.value}\n"
        f"- Z-Score: {anomaly.z_score:.2f}\n"
        "\n"
        "Provide a 2-3 sentence explanation covering:\n"
        "1. What this anomaly means\n"
        "2. Most likely causes\n"
        "3. Recommended action"
    )


__all__ = ["SYSTEM_PROMPT", "build_prompt", "direction_word"]
