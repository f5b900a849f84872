"""
Rule-based explanation used when no text-generation backend produces one.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from api.responses import Anomaly
from engine.enums import AnomalyType, Severity
from engine.explain.prompt import direction_word

SPIKE_CAUSES = "increased usage, new services, misconfiguration, or unusual traffic patterns"
DIP_CAUSES = "reduced usage, service shutdowns, cost optimizations, or billing adjustments"

_URGENCY = {
    Severity.critical: "This is a highly unusual deviation that warrants immediate investigation.",
    Severity.warning: "This is a significant deviation that should be reviewed.",
}
_DEFAULT_URGENCY = "This is a notable deviation worth monitoring."


def basic_explanation(anomaly: Anomaly) -> str:
    spike = anomaly.type == AnomalyType.spike
    direction = "spike" if spike else "dip"
    percent = abs(anomaly.deviation_percent)
    causes = SPIKE_CAUSES if spike else DIP_CAUSES

    return (
        f"Detected a {anomaly.severity.value.lower()} {direction} in AWS costs on {anomaly.date}. "
        f"The cost was ${anomaly.value:.2f}, which is {percent:.1f}% {direction_word(anomaly)} "
        f"than the average of ${anomaly.mean:.2f}. "
        f"{_URGENCY.get(anomaly.severity, _DEFAULT_URGENCY)} "
        f"Common causes: {causes}."
    )
