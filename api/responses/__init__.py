"""
Response models for API endpoints and internal data structures.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Any, List, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, computed_field, model_serializer
from pydantic.alias_generators import to_camel

from engine.enums import AnomalyType, ExplanationSource, Severity


def _coerce(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _coerce(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_coerce(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    return obj


class NpModel(BaseModel):
    """Frozen base model that serialises numpy scalars as plain Python numbers.

    Fields are exposed to dashboard consumers in camelCase and accepted in
    either camelCase or snake_case.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        serialize_by_alias=True,
    )

    @model_serializer(mode="wrap")
    def _serialize(self, handler: Any) -> Any:
        return _coerce(handler(self))


class TimeSeriesPoint(NpModel):

    date: str
    value: float


class Anomaly(NpModel):

    date: str
    value: float
    mean: float
    std_dev: float
    z_score: float
    type: AnomalyType
    severity: Severity
    deviation_percent: float


class Explanation(NpModel):

    text: str
    source: ExplanationSource

    @computed_field(alias="sourceLabel")
    @property
    def source_label(self) -> str:
        return self.source.label()


class ExplainedAnomaly(Anomaly):

    explanation: Optional[Explanation] = None

    @classmethod
    def from_anomaly(cls, anomaly: Anomaly, explanation: Optional[Explanation] = None) -> ExplainedAnomaly:
        data = anomaly.model_dump(by_alias=False, exclude={"explanation"})
        return cls(**data, explanation=explanation)


class AnomalyReport(NpModel):

    threshold: float
    point_count: int
    mean: Optional[float] = None
    std_dev: Optional[float] = None
    anomalies: List[ExplainedAnomaly] = Field(default_factory=list)
    explained: int = 0
