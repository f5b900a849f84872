"""
Anomaly service that runs detection over the daily cost series and attaches explanations to the most severe anomalies.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""
from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Sequence

from api.responses import Anomaly, AnomalyReport, ExplainedAnomaly, Explanation, TimeSeriesPoint
from config import settings
from datasources.provider import CostSeriesProvider
from engine.anomaly import detect, series_stats
from engine.explain import Explainer, get_explainer

log = logging.getLogger(__name__)


async def detect_cost_anomalies(provider: CostSeriesProvider, threshold: Optional[float] = None) -> List[Anomaly]:
    if threshold is None:
        threshold = settings.anomaly_default_threshold
    return detect(await provider.fetch_series(), threshold)


async def explain_anomaly(anomaly: Anomaly, explainer: Optional[Explainer] = None) -> Explanation:
    return await (explainer or get_explainer()).explain(anomaly)


async def explain_top(
    anomalies: Sequence[Anomaly],
    explainer: Optional[Explainer] = None,
    top_n: Optional[int] = None,
) -> List[ExplainedAnomaly]:
    """Explain the first ``top_n`` anomalies concurrently; the rest pass through unexplained.

    ``anomalies`` is expected in ranked order, which is preserved.
    """
    if top_n is None:
        top_n = settings.explain_top_n
    top_n = max(0, top_n)
    explainer = explainer or get_explainer()

    head = list(anomalies[:top_n])
    tail = list(anomalies[top_n:])
    explanations = await asyncio.gather(*(explainer.explain(a) for a in head))

    explained = [ExplainedAnomaly.from_anomaly(a, e) for a, e in zip(head, explanations)]
    explained.extend(ExplainedAnomaly.from_anomaly(a) for a in tail)
    log.info("explained %d of %d anomalies", len(head), len(anomalies))
    return explained


async def build_report(
    series: Sequence[TimeSeriesPoint],
    threshold: Optional[float] = None,
    explainer: Optional[Explainer] = None,
    top_n: Optional[int] = None,
) -> AnomalyReport:
    if threshold is None:
        threshold = settings.anomaly_default_threshold

    anomalies = detect(series, threshold)
    explained = await explain_top(anomalies, explainer, top_n)

    mean: Optional[float] = None
    std: Optional[float] = None
    if anomalies:
        mean, std = anomalies[0].mean, anomalies[0].std_dev
    elif series:
        mean, std = series_stats(p.value for p in series)

    return AnomalyReport(
        threshold=threshold,
        point_count=len(series),
        mean=mean,
        std_dev=std,
        anomalies=explained,
        explained=sum(1 for a in explained if a.explanation is not None),
    )


async def cost_report(
    provider: CostSeriesProvider,
    threshold: Optional[float] = None,
    explainer: Optional[Explainer] = None,
    top_n: Optional[int] = None,
) -> AnomalyReport:
    series = await provider.fetch_series()
    return await build_report(series, threshold, explainer, top_n)
