"""Orchestration: agent selection, concurrent dispatch and verdict aggregation."""

from verification_system.orchestration.aggregator import VerdictAggregator
from verification_system.orchestration.orchestrator import VerificationOrchestrator
from verification_system.orchestration.selector import AgentSelector, SelectionReport

__all__ = [
    "AgentSelector",
    "SelectionReport",
    "VerdictAggregator",
    "VerificationOrchestrator",
]
