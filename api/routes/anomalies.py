from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Query

from api.requests import DetectRequest, ExplainRequest, ReportRequest
from api.responses import Anomaly, AnomalyReport, Explanation
from api.routes.common import get_explainer, get_provider
from api.routes.exception import handle_exceptions
from config import settings
from engine import anomaly
from services.anomaly_service import build_report, cost_report, explain_anomaly

router = APIRouter(tags=["Anomalies"])


def _threshold(value: Optional[float]) -> float:
    return settings.anomaly_default_threshold if value is None else value


@router.post("/anomalies/detect", response_model=List[Anomaly])
@handle_exceptions
async def detect_anomalies(req: DetectRequest) -> List[Anomaly]:
    return anomaly.detect(req.series, _threshold(req.threshold))


@router.post("/anomalies/explain", response_model=Explanation)
@handle_exceptions
async def explain(req: ExplainRequest) -> Explanation:
    return await explain_anomaly(req.anomaly, get_explainer())


@router.post("/anomalies/report", response_model=AnomalyReport)
@handle_exceptions
async def report(req: ReportRequest) -> AnomalyReport:
    return await build_report(req.series, _threshold(req.threshold), get_explainer(), req.explain_top)


@router.get("/anomalies/costs", response_model=AnomalyReport, summary="Anomalies in the daily cost view")
@handle_exceptions
async def cost_anomalies(
    threshold: Optional[float] = Query(default=None, gt=0.0),
    explain_top: Optional[int] = Query(default=None, ge=0, le=50),
) -> AnomalyReport:
    return await cost_report(get_provider(), _threshold(threshold), get_explainer(), explain_top)
