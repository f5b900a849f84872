"""
Enumerations for Anomaly Types, Severity tiers and Explanation Sources

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from enum import Enum

from config import SEVERITY_RANKS, SOURCE_LABELS


class AnomalyType(str, Enum):
    spike = "SPIKE"
    dip = "DIP"

    @classmethod
    def from_z(cls, z: float) -> AnomalyType:
        # zero falls through to dip
        return cls.spike if z > 0 else cls.dip


class Severity(str, Enum):
    critical = "CRITICAL"
    warning = "WARNING"
    info = "INFO"
    normal = "NORMAL"

    @classmethod
    def from_z(cls, abs_z: float) -> Severity:
        # breakpoints are configurable via settings so that deployments can
        # retune the tiers without modifying this logic.
        from config import settings

        for cutoff, label in settings.severity_breakpoints:
            if abs_z >= cutoff:
                return cls(label)
        return cls.normal

    def rank(self) -> int:
        return SEVERITY_RANKS[self.value]


class ExplanationSource(str, Enum):
    openai = "openai"
    anthropic = "anthropic"
    fallback = "fallback"

    def label(self) -> str:
        return SOURCE_LABELS[self.value]
