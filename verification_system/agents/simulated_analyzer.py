"""Stub analyzer that fakes specialist analysis with canned answers and delays.

Answers come from two places:
- Demo scenarios: an exact (case-insensitive) content match returns the
  scenario's verdict and confidence, decorated with this analyzer's own
  evidence line and recommendation.
- Heuristic: fraud/link-oriented analyzers flag known suspicious phrases as
  SUSPICIOUS with confidence in [85, 95); everything else is UNVERIFIED with
  confidence in [50, 80).

Confidence in the heuristic path is random. Pass a seeded
random.Random to make it reproducible.
"""

import asyncio
import random
import time
from typing import Optional, Sequence

from verification_system.agents.base_analyzer import BaseAnalyzer
from verification_system.config.analyzers import FRAUD_ORIENTED_IDS, SUSPICIOUS_PHRASES
from verification_system.data_management.schemas import (
    AnalyzerDescriptor,
    AnalyzerResult,
    AnalyzerVerdict,
    DemoScenario,
    RequestContext,
)


class SimulatedAnalyzer(BaseAnalyzer):
    """
    Keyword and lookup-table analyzer used for demos.

    Sleeps for the descriptor's simulated latency (scaled, plus jitter)
    before answering, without blocking concurrently running analyzers.
    """

    def __init__(
        self,
        descriptor: AnalyzerDescriptor,
        scenarios: Sequence[DemoScenario] = (),
        rng: Optional[random.Random] = None,
        latency_scale: float = 1.0,
        jitter_seconds: float = 1.0,
        suspicious_phrases: Sequence[str] = SUSPICIOUS_PHRASES,
        fraud_oriented: Optional[bool] = None,
    ):
        """
        Initialize simulated analyzer.

        Args:
            descriptor: Analyzer identity, keywords and latency
            scenarios: Canned scenarios answered verbatim
            rng: Random source for jitter and heuristic confidence
            latency_scale: Multiplier on simulated latency (0 = answer immediately)
            jitter_seconds: Maximum random extra latency before scaling
            suspicious_phrases: Phrases that mark content as likely fraud
            fraud_oriented: Whether heuristic SUSPICIOUS verdicts apply;
                defaults to membership in FRAUD_ORIENTED_IDS
        """
        super().__init__(descriptor)
        self.scenarios = list(scenarios)
        self.rng = rng or random.Random()
        self.latency_scale = latency_scale
        self.jitter_seconds = jitter_seconds
        self.suspicious_phrases = [p.lower() for p in suspicious_phrases]
        self.fraud_oriented = (
            descriptor.id in FRAUD_ORIENTED_IDS if fraud_oriented is None else fraud_oriented
        )

    def delay_seconds(self) -> float:
        """Latency for one run: (configured latency + jitter) * scale."""
        jitter = self.rng.random() * self.jitter_seconds
        return (self.descriptor.simulated_latency + jitter) * self.latency_scale

    async def analyze(self, content: str, context: RequestContext) -> AnalyzerResult:
        start = time.perf_counter()
        self.logger.debug(
            f"Analyzing content for verification {context.verification_id}",
            requester_id=context.requester_id,
        )

        delay = self.delay_seconds()
        if delay > 0:
            await asyncio.sleep(delay)

        verdict, confidence, evidence, recommendations = self._respond(content)

        elapsed = time.perf_counter() - start
        self.logger.debug(
            f"Analysis complete: {verdict.value} ({confidence:.0f}%)",
            verification_id=context.verification_id,
            elapsed=round(elapsed, 3),
        )

        return AnalyzerResult(
            analyzer_id=self.id,
            verdict=verdict,
            confidence=confidence,
            evidence=evidence,
            recommendations=recommendations,
            elapsed_time=elapsed,
        )

    def find_scenario(self, content: str) -> Optional[DemoScenario]:
        for scenario in self.scenarios:
            if scenario.matches(content):
                return scenario
        return None

    def _respond(
        self, content: str
    ) -> tuple[AnalyzerVerdict, float, list[str], list[str]]:
        scenario = self.find_scenario(content)
        if scenario is not None:
            evidence = [scenario.explanation]
            recommendations = []
            if self.descriptor.scenario_evidence:
                evidence.append(self.descriptor.scenario_evidence)
            if self.descriptor.scenario_recommendation:
                recommendations.append(self.descriptor.scenario_recommendation)
            return scenario.expected_result, scenario.confidence, evidence, recommendations

        return self._heuristic(content)

    def _heuristic(
        self, content: str
    ) -> tuple[AnalyzerVerdict, float, list[str], list[str]]:
        content_lower = content.lower()
        has_suspicious_phrase = any(p in content_lower for p in self.suspicious_phrases)

        if has_suspicious_phrase and self.fraud_oriented:
            return (
                AnalyzerVerdict.SUSPICIOUS,
                85 + self.rng.random() * 10,
                ["Contains patterns commonly found in fraudulent content"],
                ["Exercise extreme caution", "Verify through official channels"],
            )

        return (
            AnalyzerVerdict.UNVERIFIED,
            50 + self.rng.random() * 30,
            ["Insufficient information for definitive analysis"],
            ["Seek additional sources", "Apply critical thinking"],
        )
