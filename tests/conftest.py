import os
import sys
import pytest

# ensure workspace root is on sys.path so our application packages can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from api.responses import Anomaly
from engine.enums import AnomalyType, ExplanationSource, Severity
from engine.explain.backends import ExplanationBackend


class FakeBackend(ExplanationBackend):
    """Scripted backend that records every call it receives."""

    def __init__(self, source=ExplanationSource.openai, text="explained", error=None, available=True, delay=0.0):
        self.source = source
        self.name = f"fake-{source.value}"
        self.text = text
        self.error = error
        self._available = available
        self.delay = delay
        self.calls = []

    @property
    def available(self):
        return self._available

    async def generate(self, prompt, anomaly):
        self.calls.append(prompt)
        if self.delay:
            import asyncio
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.text


def make_anomaly(**overrides) -> Anomaly:
    fields = dict(
        date="2025-01-04",
        value=180.0,
        mean=120.0,
        std_dev=20.0,
        z_score=3.0,
        type=AnomalyType.spike,
        severity=Severity.critical,
        deviation_percent=50.0,
    )
    fields.update(overrides)
    return Anomaly(**fields)


@pytest.fixture
def spike():
    return make_anomaly()


@pytest.fixture
def dip():
    return make_anomaly(
        date="2025-01-09",
        value=60.0,
        z_score=-2.5,
        type=AnomalyType.dip,
        severity=Severity.warning,
        deviation_percent=-50.0,
    )


@pytest.fixture(autouse=True)
def reset_singletons(monkeypatch):
    """Drop cached explainer/provider so each test builds its own from settings."""
    import engine.explain.explainer as explainer_mod
    import api.routes.common as common

    monkeypatch.setattr(explainer_mod, "_explainer", None)
    monkeypatch.setattr(common, "_provider", None)
    yield
