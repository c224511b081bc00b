"""Tests for AnalyzerRegistry and static analyzer configuration."""

import pytest

from verification_system.agents.registry import (
    AnalyzerRegistry,
    build_default_registry,
    load_descriptors,
)
from verification_system.agents.simulated_analyzer import SimulatedAnalyzer
from verification_system.exceptions import ConfigurationError

from tests.conftest import FixedAnalyzer, make_descriptor


class TestRegistry:
    def test_preserves_declaration_order(self):
        registry = AnalyzerRegistry(FixedAnalyzer(make_descriptor(i)) for i in ["c", "a", "b"])
        assert registry.ids() == ["c", "a", "b"]
        assert [d.id for d in registry.descriptors()] == ["c", "a", "b"]

    def test_duplicate_id_rejected(self):
        with pytest.raises(ConfigurationError):
            AnalyzerRegistry([FixedAnalyzer(make_descriptor("news")), FixedAnalyzer(make_descriptor("news"))])

    def test_lookup(self):
        analyzer = FixedAnalyzer(make_descriptor("news"))
        registry = AnalyzerRegistry([analyzer])
        assert registry["news"] is analyzer
        assert registry.get("missing") is None
        assert "news" in registry
        assert len(registry) == 1


class TestDefaultRegistry:
    def test_six_analyzers_in_order(self, default_registry):
        assert default_registry.ids() == ["news", "fact", "scam", "phishing", "image", "video"]
        assert all(isinstance(default_registry[i], SimulatedAnalyzer) for i in default_registry.ids())

    def test_statistics(self, default_registry):
        stats = default_registry.get_statistics()
        assert stats["total_analyzers"] == 6
        assert "fraud detection" in stats["capabilities"]

    def test_settings_flow_into_analyzers(self, fast_settings):
        registry = build_default_registry(fast_settings)
        assert registry["news"].latency_scale == 0.0
        assert registry["news"].delay_seconds() == 0.0

    def test_invalid_config_raises(self):
        with pytest.raises(ConfigurationError):
            load_descriptors({"broken": {"display_name": "Broken", "trigger_keywords": []}})
