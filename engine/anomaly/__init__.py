"""
Anomaly detection logic for daily cost time series, using a global mean and population standard deviation baseline to score every point by z-score, classify it as a spike or a dip, and bucket it into a severity tier.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.anomaly.detection import detect, series_stats
from engine.anomaly.series import iter_points

__all__ = ["detect", "iter_points", "series_stats"]
