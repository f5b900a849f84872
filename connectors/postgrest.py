"""
PostgREST Connector for the hosted cost store (the REST surface of a managed
Postgres service) that exposes a daily total cost view.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""
from typing import Any, Dict, List, Optional

from datasources.retry import retry

from datasources.base import CostSeriesConnector
from datasources.helpers import fetch_json
from datasources.exceptions import DataSourceUnavailable, MalformedResponse, QueryTimeout
from config import DATASOURCE_TIMEOUT


class PostgrestConnector(CostSeriesConnector):
    def __init__(
        self,
        base_url: str,
        api_key: Optional[str],
        view: str,
        date_field: str = "date",
        value_field: str = "total_cost",
        timeout: int = DATASOURCE_TIMEOUT,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(base_url, timeout, headers)
        self.api_key = api_key
        self.view = view
        self.date_field = date_field
        self.value_field = value_field

    def _headers(self) -> Dict[str, str]:
        hdrs = {**self.headers, "Accept": "application/json"}
        if self.api_key:
            hdrs["apikey"] = self.api_key
            hdrs["Authorization"] = f"Bearer {self.api_key}"
        return hdrs

    def _params(self) -> Dict[str, str]:
        return {
            "select": f"{self.date_field},{self.value_field}",
            "order": f"{self.date_field}.asc",
        }

    @retry(attempts=3, delay=0.5, backoff=2.0, exceptions=(DataSourceUnavailable, QueryTimeout))
    async def fetch_rows(self) -> List[Dict[str, Any]]:
        url = f"{self.base_url}/rest/v1/{self.view}"
        rows = await fetch_json(
            url,
            params=self._params(),
            headers=self._headers(),
            timeout=self.timeout,
            invalid_msg=f"Failed to fetch time-series data from {self.view}",
            timeout_msg="Cost store query timed out",
            unavailable_msg="Cannot reach cost store at",
        )
        if not isinstance(rows, list):
            raise MalformedResponse(f"Expected a list of rows from {self.view}, got {type(rows).__name__}")
        return rows
