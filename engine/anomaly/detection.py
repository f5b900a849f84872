"""
Detection logic for identifying spikes and dips in a daily cost time series using a single global z-score baseline, classifying each deviating point into a severity tier and ranking the result so the most severe deviations come first.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Tuple, Union

import numpy as np

from engine.enums import AnomalyType, Severity
from api.responses import Anomaly, TimeSeriesPoint

log = logging.getLogger(__name__)

# below this many points the statistics are meaningless
MIN_POINTS = 3
DEFAULT_THRESHOLD = 1.5

PointLike = Union[TimeSeriesPoint, Mapping[str, Any]]


def _as_point(point: PointLike) -> TimeSeriesPoint:
    if isinstance(point, TimeSeriesPoint):
        return point
    return TimeSeriesPoint(date=str(point["date"]), value=float(point["value"]))


def series_stats(values: Iterable[float]) -> Tuple[float, float]:
    """Mean and population standard deviation (ddof=0) of the finite ``values``."""
    arr = np.asarray(list(values), dtype=float)
    arr = arr[np.isfinite(arr)]
    if arr.size == 0:
        return 0.0, 0.0
    return float(arr.mean()), float(arr.std())


def _z_score(value: float, mean: float, std: float) -> float:
    if std == 0:
        return 0.0
    return (value - mean) / std


def _deviation_percent(value: float, mean: float) -> float:
    if mean == 0:
        return 0.0
    return ((value - mean) / mean) * 100


def _rank_key(anomaly: Anomaly) -> Tuple[int, float]:
    return anomaly.severity.rank(), -abs(anomaly.z_score)


def detect(series: Iterable[PointLike], threshold: float = DEFAULT_THRESHOLD) -> List[Anomaly]:
    points = [_as_point(p) for p in series]
    finite = [p for p in points if np.isfinite(p.value)]
    if len(finite) < len(points):
        log.debug("dropped %d non-finite points before detection", len(points) - len(finite))
    points = finite
    if len(points) < MIN_POINTS:
        return []

    mean, std = series_stats(p.value for p in points)

    anomalies: List[Anomaly] = []
    for point in points:
        z = _z_score(point.value, mean, std)
        az = abs(z)
        if not az >= threshold:
            continue
        anomalies.append(Anomaly(
            date=point.date,
            value=point.value,
            mean=mean,
            std_dev=std,
            z_score=z,
            type=AnomalyType.from_z(z),
            severity=Severity.from_z(az),
            deviation_percent=_deviation_percent(point.value, mean),
        ))

    # sorted() is stable, so exact ties keep input order
    return sorted(anomalies, key=_rank_key)
