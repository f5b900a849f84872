"""
Entry point for the costlens anomaly API server.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import sys
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Optional

import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.responses import JSONResponse

from api.routes import router
from api.routes.common import close_providers
from datasources.data_config import CostStoreSettings
from datasources.exceptions import BackendStartupTimeout
from config import HEALTH_PATH

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    stream=sys.stdout,
)
log = logging.getLogger(__name__)

COST_STORE = "cost_store"

_backend_ready = False
_backend_status: Dict[str, str] = {}


async def wait_for(
    name: str,
    url: str,
    timeout: float,
    headers: Optional[Dict[str, str]] = None,
    accept_status: tuple = (200, 204, 404),
) -> None:
    deadline = time.monotonic() + timeout
    attempt = 0
    async with httpx.AsyncClient() as client:
        while time.monotonic() < deadline:
            attempt += 1
            try:
                resp = await client.get(url, headers=headers or {}, timeout=3.0)
                if resp.status_code in accept_status:
                    log.info("%s ready (attempt %d, status %d)", name, attempt, resp.status_code)
                    return
                log.debug("%s probe returned %d (attempt %d)", name, resp.status_code, attempt)
            except httpx.HTTPError as exc:
                log.debug("%s not reachable (attempt %d): %s", name, attempt, exc)
            await asyncio.sleep(2)
    raise BackendStartupTimeout(f"{name} did not become ready within {timeout}s")


async def _wait_for_store_bg(settings: CostStoreSettings) -> None:
    global _backend_ready, _backend_status

    if not settings.cost_store_url:
        log.warning("No cost store configured; only series-in-request endpoints are usable")
        _backend_status[COST_STORE] = "not configured"
        _backend_ready = True
        return

    headers = {"apikey": settings.cost_store_key} if settings.cost_store_key else {}
    _backend_status[COST_STORE] = "waiting"
    log.info("Cost store readiness check starting (timeout=%ds) ...", settings.startup_timeout)

    try:
        await wait_for(
            COST_STORE,
            f"{settings.cost_store_url}{HEALTH_PATH}",
            settings.startup_timeout,
            headers=headers,
            accept_status=(200,),
        )
    except Exception as exc:
        log.error("%s failed readiness: %s", COST_STORE, exc)
        _backend_status[COST_STORE] = f"failed: {exc}"
        _backend_ready = False
        return

    _backend_status[COST_STORE] = "ready"
    _backend_ready = True
    log.info("Cost store ready, engine fully operational")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    readiness_task = asyncio.create_task(_wait_for_store_bg(CostStoreSettings()))
    try:
        yield
    finally:
        readiness_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await readiness_task
        await close_providers()


app = FastAPI(
    title="costlens Anomaly API",
    description="Z-score anomaly detection over daily cloud cost with provider-backed explanations.",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(router, prefix="/api/v1")


@app.get("/api/v1/ready", tags=["health"], summary="Cost store readiness probe")
async def ready() -> JSONResponse:
    code = 200 if _backend_ready else 503
    return JSONResponse(
        status_code=code,
        content={"ready": _backend_ready, "backends": _backend_status},
    )


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=4322,
        log_level="info",
        access_log=True,
    )
