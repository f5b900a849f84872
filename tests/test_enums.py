"""
Test cases for enums used in the anomaly engine, including AnomalyType, Severity and ExplanationSource, validating their properties and relationships.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest

from engine.enums import AnomalyType, ExplanationSource, Severity


def test_severity_from_z_breakpoints():
    assert Severity.from_z(3.0) == Severity.critical
    assert Severity.from_z(2.999) == Severity.warning
    assert Severity.from_z(2.0) == Severity.warning
    assert Severity.from_z(1.5) == Severity.info
    assert Severity.from_z(1.49) == Severity.normal
    assert Severity.from_z(0.0) == Severity.normal


def test_severity_rank_orders_most_severe_first():
    assert [s.rank() for s in Severity] == [0, 1, 2, 3]
    assert Severity.critical.rank() < Severity.warning.rank() < Severity.info.rank() < Severity.normal.rank()


def test_severity_breakpoints_follow_settings(monkeypatch):
    monkeypatch.setattr("config.settings.severity_breakpoints", [(5.0, "CRITICAL"), (1.0, "INFO")])
    assert Severity.from_z(4.0) == Severity.info
    assert Severity.from_z(5.0) == Severity.critical


@pytest.mark.parametrize("z, expected", [(0.1, AnomalyType.spike), (0.0, AnomalyType.dip), (-0.1, AnomalyType.dip)])
def test_anomaly_type_from_z(z, expected):
    assert AnomalyType.from_z(z) == expected


def test_explanation_source_labels():
    assert ExplanationSource.openai.label() == "OpenAI"
    assert ExplanationSource.anthropic.label() == "Claude"
    assert ExplanationSource.fallback.label() == "Rule-based analysis"
    assert AnomalyType.spike.value == "SPIKE"
    assert Severity.warning.value == "WARNING"
