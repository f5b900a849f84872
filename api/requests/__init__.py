from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from api.responses import Anomaly, TimeSeriesPoint


class _Request(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DetectRequest(_Request):
    series: List[TimeSeriesPoint]
    threshold: Optional[float] = Field(default=None, gt=0.0)


class ExplainRequest(_Request):
    anomaly: Anomaly


class ReportRequest(_Request):
    series: List[TimeSeriesPoint]
    threshold: Optional[float] = Field(default=None, gt=0.0)
    explain_top: Optional[int] = Field(default=None, ge=0, le=50)
