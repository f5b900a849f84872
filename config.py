"""
Constants and configuration for costlens.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import os
from typing import List, Optional, Tuple

from pydantic import field_validator
from pydantic_settings import BaseSettings


def _env_key(*names: str) -> Optional[str]:
    for name in names:
        value = os.getenv(name, "").strip()
        if value:
            return value
    return None


COSTLENS_OPENAI_API_KEY = _env_key("COSTLENS_OPENAI_API_KEY", "OPENAI_API_KEY")
COSTLENS_OPENAI_URL = os.getenv("COSTLENS_OPENAI_URL", "https://api.openai.com/v1/chat/completions")
COSTLENS_OPENAI_MODEL = os.getenv("COSTLENS_OPENAI_MODEL", "gpt-3.5-turbo")

COSTLENS_ANTHROPIC_API_KEY = _env_key("COSTLENS_ANTHROPIC_API_KEY", "ANTHROPIC_API_KEY")
COSTLENS_ANTHROPIC_URL = os.getenv("COSTLENS_ANTHROPIC_URL", "https://api.anthropic.com/v1/messages")
COSTLENS_ANTHROPIC_MODEL = os.getenv("COSTLENS_ANTHROPIC_MODEL", "claude-3-haiku-20240307")
COSTLENS_ANTHROPIC_VERSION = os.getenv("COSTLENS_ANTHROPIC_VERSION", "2023-06-01")

COSTLENS_COST_STORE_URL = os.getenv("COSTLENS_COST_STORE_URL", "").rstrip("/")
COSTLENS_COST_STORE_KEY = _env_key("COSTLENS_COST_STORE_KEY", "SUPABASE_SERVICE_ROLE_KEY")
COSTLENS_COST_VIEW = os.getenv("COSTLENS_COST_VIEW", "v_aws_costs_timeseries")
COSTLENS_COST_DATE_FIELD = os.getenv("COSTLENS_COST_DATE_FIELD", "date")
COSTLENS_COST_VALUE_FIELD = os.getenv("COSTLENS_COST_VALUE_FIELD", "total_cost")

COSTLENS_CONNECTOR_TIMEOUT = int(os.getenv("COSTLENS_CONNECTOR_TIMEOUT", "30"))
COSTLENS_STARTUP_TIMEOUT = int(os.getenv("COSTLENS_STARTUP_TIMEOUT", "60"))

DATASOURCE_TIMEOUT = 30
HEALTH_PATH = "/rest/v1/"

# user-facing labels for explanation sources
SOURCE_LABELS: dict[str, str] = {
    "openai": "OpenAI",
    "anthropic": "Claude",
    "fallback": "Rule-based analysis",
}

# ascending rank, most severe first
SEVERITY_RANKS: dict[str, int] = {
    "CRITICAL": 0,
    "WARNING": 1,
    "INFO": 2,
    "NORMAL": 3,
}

SYSTEM_PROMPT = "You are a helpful financial analyst specializing in cloud cost optimization."


class Settings(BaseSettings):
    openai_api_key: Optional[str] = COSTLENS_OPENAI_API_KEY
    openai_url: str = COSTLENS_OPENAI_URL
    openai_model: str = COSTLENS_OPENAI_MODEL

    anthropic_api_key: Optional[str] = COSTLENS_ANTHROPIC_API_KEY
    anthropic_url: str = COSTLENS_ANTHROPIC_URL
    anthropic_model: str = COSTLENS_ANTHROPIC_MODEL
    anthropic_version: str = COSTLENS_ANTHROPIC_VERSION

    # shared generation parameters for every text backend
    explain_max_tokens: int = 200
    explain_temperature: float = 0.7
    explain_timeout_seconds: float = float(os.getenv("COSTLENS_EXPLAIN_TIMEOUT_SECONDS", "15"))
    # only the most severe anomalies of a batch get an explanation
    explain_top_n: int = 5

    # detection
    anomaly_default_threshold: float = 1.5
    severity_breakpoints: List[Tuple[float, str]] = [
        (3.0, "CRITICAL"),
        (2.0, "WARNING"),
        (1.5, "INFO"),
    ]

    cost_store_url: str = COSTLENS_COST_STORE_URL
    cost_store_key: Optional[str] = COSTLENS_COST_STORE_KEY
    cost_view: str = COSTLENS_COST_VIEW
    cost_date_field: str = COSTLENS_COST_DATE_FIELD
    cost_value_field: str = COSTLENS_COST_VALUE_FIELD

    connector_timeout: int = COSTLENS_CONNECTOR_TIMEOUT
    startup_timeout: int = COSTLENS_STARTUP_TIMEOUT

    @field_validator("severity_breakpoints")
    @classmethod
    def check_breakpoints(cls, v: List[Tuple[float, str]]) -> List[Tuple[float, str]]:
        tiers = []
        for cutoff, label in v:
            name = str(label).strip().upper()
            # NORMAL is the residual tier below every cutoff
            if name not in SEVERITY_RANKS or name == "NORMAL":
                raise ValueError(f"unknown severity label in breakpoints: {label!r}")
            if not cutoff >= 0:
                raise ValueError(f"severity cutoff must not be negative: {cutoff}")
            tiers.append((float(cutoff), name))
        return sorted(tiers, key=lambda t: t[0], reverse=True)

    @field_validator("openai_api_key", "anthropic_api_key", "cost_store_key", mode="before")
    @classmethod
    def blank_is_absent(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        text = str(v).strip()
        return text or None

    model_config = {
        "env_prefix": "COSTLENS_",
        "extra": "ignore",
    }


settings = Settings()
