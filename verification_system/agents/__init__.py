"""Verification analyzers."""

from verification_system.agents.base_analyzer import BaseAnalyzer
from verification_system.agents.simulated_analyzer import SimulatedAnalyzer
from verification_system.agents.registry import AnalyzerRegistry, build_default_registry

__all__ = ["BaseAnalyzer", "SimulatedAnalyzer", "AnalyzerRegistry", "build_default_registry"]
