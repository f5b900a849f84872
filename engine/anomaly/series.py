"""
Series conversion logic for turning raw daily cost rows returned by the cost store into time series points, skipping malformed rows rather than padding them, so that downstream anomaly detection only ever sees finite values.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Iterator

from api.responses import TimeSeriesPoint

log = logging.getLogger(__name__)


def _normalize_date(raw: Any) -> str:
    text = str(raw).strip()
    # "2025-01-04T00:00:00+00:00" and "2025-01-04 00:00:00" both collapse to the day
    for sep in ("T", " "):
        if sep in text:
            text = text.split(sep, 1)[0]
    return text


def iter_points(
    rows: Iterable[Any],
    date_field: str = "date",
    value_field: str = "total_cost",
) -> Iterator[TimeSeriesPoint]:
    if rows is None:
        return

    for row in rows:
        if not isinstance(row, dict):
            log.debug("iter_points skipping non-mapping row: %r", row)
            continue

        raw_date = row.get(date_field)
        raw_value = row.get(value_field)
        if raw_date is None or raw_value is None:
            log.debug("iter_points skipping row missing %s/%s: %r", date_field, value_field, row)
            continue

        date = _normalize_date(raw_date)
        if not date:
            continue

        try:
            value = float(raw_value)
        except (TypeError, ValueError):
            log.debug("iter_points skipping non-numeric value %r on %s", raw_value, date)
            continue
        if not math.isfinite(value):
            continue

        yield TimeSeriesPoint(date=date, value=value)
