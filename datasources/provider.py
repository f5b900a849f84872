"""
Provider for the daily cost time series consumed by anomaly detection.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from typing import List, Optional

from api.responses import TimeSeriesPoint
from connectors.postgrest import PostgrestConnector
from datasources.base import CostSeriesConnector
from datasources.data_config import CostStoreSettings
from datasources.exceptions import DataSourceUnavailable
from engine.anomaly.series import iter_points


class CostSeriesProvider:
    def __init__(self, settings: CostStoreSettings, connector: Optional[CostSeriesConnector] = None):
        self.settings = settings
        if connector is None and settings.configured:
            connector = PostgrestConnector(
                settings.cost_store_url,
                settings.cost_store_key,
                settings.cost_view,
                date_field=settings.cost_date_field,
                value_field=settings.cost_value_field,
                timeout=settings.connector_timeout,
            )
        self.connector = connector

    async def fetch_series(self) -> List[TimeSeriesPoint]:
        if self.connector is None:
            raise DataSourceUnavailable("Cost store URL is not configured (set COSTLENS_COST_STORE_URL)")
        rows = await self.connector.fetch_rows()
        return list(iter_points(
            rows,
            date_field=self.settings.cost_date_field,
            value_field=self.settings.cost_value_field,
        ))

    async def aclose(self) -> None:
        if self.connector is not None:
            await self.connector.aclose()
