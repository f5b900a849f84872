"""
Base connector for the cost store that supplies daily cost rows.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class CostSeriesConnector(ABC):
    def __init__(self, base_url: str, timeout: int = 30, headers: Optional[Dict[str, str]] = None):
        self.base_url = str(base_url).rstrip("/")
        self.timeout = timeout
        self.headers = headers or {}

    def _headers(self) -> Dict[str, str]:
        return dict(self.headers)

    @abstractmethod
    async def fetch_rows(self) -> List[Dict[str, Any]]:
        """Return raw daily rows ordered by date ascending."""

    async def aclose(self) -> None:
        return None
