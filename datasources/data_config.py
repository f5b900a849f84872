"""
Connection settings for the cost store that supplies the daily cost series

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""
from typing import Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings
from config import (
    COSTLENS_COST_STORE_URL,
    COSTLENS_COST_STORE_KEY,
    COSTLENS_COST_VIEW,
    COSTLENS_COST_DATE_FIELD,
    COSTLENS_COST_VALUE_FIELD,
    COSTLENS_CONNECTOR_TIMEOUT,
    COSTLENS_STARTUP_TIMEOUT,
)


class CostStoreSettings(BaseSettings):
    cost_store_url: str = COSTLENS_COST_STORE_URL
    cost_store_key: Optional[str] = COSTLENS_COST_STORE_KEY
    cost_view: str = COSTLENS_COST_VIEW
    cost_date_field: str = COSTLENS_COST_DATE_FIELD
    cost_value_field: str = COSTLENS_COST_VALUE_FIELD
    connector_timeout: int = COSTLENS_CONNECTOR_TIMEOUT
    startup_timeout: int = COSTLENS_STARTUP_TIMEOUT

    @field_validator("cost_store_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: Optional[str]) -> str:
        return str(v or "").rstrip("/")

    @field_validator("cost_view", "cost_date_field", "cost_value_field", mode="before")
    @classmethod
    def require_identifier(cls, v: str) -> str:
        value = str(v or "").strip()
        if not value:
            raise ValueError("cost store view and field names must not be empty")
        return value

    @property
    def configured(self) -> bool:
        return bool(self.cost_store_url)

    model_config = {"env_prefix": "COSTLENS_", "extra": "ignore"}
