import pytest

from config import Settings
from datasources.data_config import CostStoreSettings


def test_settings_defaults_match_detection_constants(monkeypatch):
    monkeypatch.delenv("COSTLENS_ANOMALY_DEFAULT_THRESHOLD", raising=False)
    monkeypatch.delenv("COSTLENS_SEVERITY_BREAKPOINTS", raising=False)
    s = Settings()
    assert s.anomaly_default_threshold == 1.5
    assert s.severity_breakpoints == [(3.0, "CRITICAL"), (2.0, "WARNING"), (1.5, "INFO")]
    assert s.explain_top_n == 5
    assert s.explain_max_tokens == 200
    assert s.explain_temperature == pytest.approx(0.7)


def test_settings_env_prefix_overrides(monkeypatch):
    monkeypatch.setenv("COSTLENS_EXPLAIN_TOP_N", "2")
    monkeypatch.setenv("COSTLENS_OPENAI_MODEL", "gpt-4o-mini")
    monkeypatch.setenv("COSTLENS_SEVERITY_BREAKPOINTS", '[[4.0, "CRITICAL"], [2.5, "WARNING"], [1.0, "INFO"]]')
    s = Settings()
    assert s.explain_top_n == 2
    assert s.openai_model == "gpt-4o-mini"
    assert s.severity_breakpoints[0] == (4.0, "CRITICAL")


def test_blank_api_keys_are_absent(monkeypatch):
    monkeypatch.setenv("COSTLENS_OPENAI_API_KEY", "   ")
    monkeypatch.setenv("COSTLENS_ANTHROPIC_API_KEY", "")
    s = Settings()
    assert s.openai_api_key is None
    assert s.anthropic_api_key is None


def test_api_key_is_stripped(monkeypatch):
    monkeypatch.setenv("COSTLENS_OPENAI_API_KEY", "  sk-test  ")
    assert Settings().openai_api_key == "sk-test"


def test_cost_store_url_trailing_slash_stripped(monkeypatch):
    monkeypatch.setenv("COSTLENS_COST_STORE_URL", "https://db.example.com/")
    s = CostStoreSettings()
    assert s.cost_store_url == "https://db.example.com"
    assert s.configured


def test_cost_store_unconfigured_by_blank_url(monkeypatch):
    monkeypatch.setenv("COSTLENS_COST_STORE_URL", "")
    assert not CostStoreSettings().configured


def test_cost_store_rejects_empty_field_name(monkeypatch):
    monkeypatch.setenv("COSTLENS_COST_VALUE_FIELD", "  ")
    with pytest.raises(ValueError):
        CostStoreSettings()


def test_severity_breakpoints_are_sorted_descending(monkeypatch):
    monkeypatch.setenv("COSTLENS_SEVERITY_BREAKPOINTS", '[[1.0, "info"], [4.0, "CRITICAL"], [2.5, " warning "]]')
    s = Settings()
    assert s.severity_breakpoints == [(4.0, "CRITICAL"), (2.5, "WARNING"), (1.0, "INFO")]


@pytest.mark.parametrize(
    "raw",
    [
        '[[3.0, "URGENT"], [2.0, "WARNING"]]',
        '[[3.0, "CRITICAL"], [0.0, "NORMAL"]]',
        '[[-1.0, "INFO"]]',
    ],
)
def test_severity_breakpoints_reject_bad_entries(monkeypatch, raw):
    monkeypatch.setenv("COSTLENS_SEVERITY_BREAKPOINTS", raw)
    with pytest.raises(ValueError):
        Settings()


def test_validated_breakpoints_classify_in_order(monkeypatch):
    from engine.enums import Severity

    monkeypatch.setenv("COSTLENS_SEVERITY_BREAKPOINTS", '[[1.0, "INFO"], [4.0, "CRITICAL"], [2.5, "WARNING"]]')
    monkeypatch.setattr("config.settings", Settings())
    assert Severity.from_z(4.2) == Severity.critical
    assert Severity.from_z(3.0) == Severity.warning
    assert Severity.from_z(1.2) == Severity.info
    assert Severity.from_z(0.5) == Severity.normal
