"""
Tests for the PostgREST cost store connector and the cost series provider.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest

import connectors.postgrest as postgrest
from connectors.postgrest import PostgrestConnector
from datasources.data_config import CostStoreSettings
from datasources.exceptions import DataSourceUnavailable, MalformedResponse
from datasources.provider import CostSeriesProvider


@pytest.mark.asyncio
async def test_connector_queries_view_ordered_by_date(monkeypatch):
    captured = {}

    async def fake_fetch_json(url, params=None, headers=None, timeout=30, **kwargs):
        captured.update(url=url, params=params, headers=headers, timeout=timeout)
        return [{"date": "2025-01-01", "total_cost": 100}]

    monkeypatch.setattr(postgrest, "fetch_json", fake_fetch_json)
    conn = PostgrestConnector("https://store.example/", "svc-key", "v_aws_costs_timeseries", timeout=7)
    rows = await conn.fetch_rows()

    assert rows == [{"date": "2025-01-01", "total_cost": 100}]
    assert captured["url"] == "https://store.example/rest/v1/v_aws_costs_timeseries"
    assert captured["params"] == {"select": "date,total_cost", "order": "date.asc"}
    assert captured["headers"]["apikey"] == "svc-key"
    assert captured["headers"]["Authorization"] == "Bearer svc-key"
    assert captured["timeout"] == 7


@pytest.mark.asyncio
async def test_connector_rejects_non_list_body(monkeypatch):
    async def fake_fetch_json(*args, **kwargs):
        return {"message": "oops"}

    monkeypatch.setattr(postgrest, "fetch_json", fake_fetch_json)
    with pytest.raises(MalformedResponse):
        await PostgrestConnector("https://store.example", None, "v").fetch_rows()


@pytest.mark.asyncio
async def test_connector_retries_transient_unavailability(monkeypatch):
    calls = []

    async def flaky(*args, **kwargs):
        calls.append(1)
        if len(calls) < 2:
            raise DataSourceUnavailable("down")
        return []

    async def no_sleep(_):
        return None

    monkeypatch.setattr(postgrest, "fetch_json", flaky)
    monkeypatch.setattr("datasources.retry.asyncio.sleep", no_sleep)
    assert await PostgrestConnector("https://store.example", None, "v").fetch_rows() == []
    assert len(calls) == 2


class DummyConnector:
    def __init__(self, rows):
        self.rows = rows
        self.closed = False

    async def fetch_rows(self):
        return self.rows

    async def aclose(self):
        self.closed = True


@pytest.mark.asyncio
async def test_provider_converts_rows_to_points():
    settings = CostStoreSettings(cost_store_url="https://store.example")
    connector = DummyConnector([
        {"date": "2025-01-01", "total_cost": 100},
        {"date": "2025-01-02", "total_cost": "bad"},
        {"date": "2025-01-03", "total_cost": 102.5},
    ])
    provider = CostSeriesProvider(settings, connector=connector)
    series = await provider.fetch_series()
    assert [(p.date, p.value) for p in series] == [("2025-01-01", 100.0), ("2025-01-03", 102.5)]
    await provider.aclose()
    assert connector.closed


@pytest.mark.asyncio
async def test_provider_without_store_url_is_unavailable():
    provider = CostSeriesProvider(CostStoreSettings(cost_store_url=""))
    assert provider.connector is None
    with pytest.raises(DataSourceUnavailable):
        await provider.fetch_series()


def test_settings_strip_trailing_slash_and_build_connector():
    settings = CostStoreSettings(cost_store_url="https://store.example///", cost_view="v_costs")
    provider = CostSeriesProvider(settings)
    assert settings.cost_store_url == "https://store.example"
    assert isinstance(provider.connector, PostgrestConnector)
    assert provider.connector.view == "v_costs"


def test_settings_reject_blank_view():
    with pytest.raises(ValueError):
        CostStoreSettings(cost_view="  ")
