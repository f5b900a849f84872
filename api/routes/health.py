"""
Health check route reporting service status and which explanation providers are configured.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter

from api.routes.common import get_explainer
from api.routes.exception import handle_exceptions

router = APIRouter(tags=["Health"])


@router.get("/health")
@handle_exceptions
async def health() -> Dict[str, Any]:
    explainer = get_explainer()
    return {
        "status": "ok",
        "providers": {b.source.value: b.available for b in explainer.backends},
    }
