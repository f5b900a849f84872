"""
Shared utilities and dependencies for API route modules.

Provides a single place for creating the cost series provider and the
explainer used by the routers, so individual route files stay thin.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Optional

from datasources.data_config import CostStoreSettings
from datasources.provider import CostSeriesProvider
from engine.explain import Explainer, get_explainer as _engine_explainer


_provider: Optional[CostSeriesProvider] = None


def get_provider() -> CostSeriesProvider:
    global _provider
    if _provider is None:
        _provider = CostSeriesProvider(settings=CostStoreSettings())
    return _provider


def get_explainer() -> Explainer:
    return _engine_explainer()


async def close_providers() -> None:
    global _provider
    provider, _provider = _provider, None
    if provider is not None:
        await provider.aclose()
