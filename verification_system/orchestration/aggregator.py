"""Folds per-analyzer verdicts into one overall verdict, confidence and risk level.

Verdict precedence (first match wins):
1. Any MALICIOUS or SCAM                -> DANGEROUS
2. Any FALSE                            -> FALSE
3. Any TRUE and mean confidence > 80    -> VERIFIED
4. Any SUSPICIOUS                       -> SUSPICIOUS
5. Otherwise                            -> UNVERIFIED

Confidence is the mean rounded half up (84.5 -> 85). Risk level depends only on the
overall verdict and the unrounded mean:
- DANGEROUS                  -> CRITICAL
- FALSE with mean > 90       -> HIGH
- SUSPICIOUS                 -> MEDIUM
- UNVERIFIED                 -> LOW
- anything else              -> MINIMAL

Usage:
    from verification_system.orchestration.aggregator import VerdictAggregator

    overall = VerdictAggregator().aggregate(results)
"""

import math
from statistics import fmean
from typing import Sequence

from verification_system.data_management.schemas import (
    AnalyzerResult,
    AnalyzerVerdict,
    OverallResult,
    OverallVerdict,
    RiskLevel,
)

DANGEROUS_VERDICTS = frozenset({AnalyzerVerdict.MALICIOUS, AnalyzerVerdict.SCAM})

SUMMARY_TEMPLATES: dict[OverallVerdict, str] = {
    OverallVerdict.DANGEROUS: "🚨 DANGEROUS: {count} agents detected significant threats. Avoid interaction.",
    OverallVerdict.FALSE: "❌ FALSE: Content appears to be misinformation based on {count} agent analysis.",
    OverallVerdict.VERIFIED: "✅ VERIFIED: Content appears legitimate according to {count} agents.",
    OverallVerdict.SUSPICIOUS: "⚠️ SUSPICIOUS: Some concerning patterns detected by {count} agents. Exercise caution.",
    OverallVerdict.UNVERIFIED: "❓ UNVERIFIED: Unable to determine authenticity. {count} agents need more information.",
}


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class VerdictAggregator:
    """Pure, deterministic aggregation of analyzer results.

    Thresholds are constructor arguments so they can be tuned without
    touching the precedence rules.
    """

    VERIFIED_CONFIDENCE_THRESHOLD = 80.0
    HIGH_RISK_FALSE_THRESHOLD = 90.0

    def __init__(
        self,
        verified_threshold: float = VERIFIED_CONFIDENCE_THRESHOLD,
        high_risk_false_threshold: float = HIGH_RISK_FALSE_THRESHOLD,
    ) -> None:
        self.verified_threshold = verified_threshold
        self.high_risk_false_threshold = high_risk_false_threshold

    def aggregate(self, results: Sequence[AnalyzerResult]) -> OverallResult:
        """Combine analyzer results into an OverallResult.

        Args:
            results: Non-empty collection of analyzer results.

        Returns:
            OverallResult with verdict, rounded mean confidence, risk and summary.

        Raises:
            ValueError: If results is empty.
        """
        results = list(results)
        if not results:
            raise ValueError("Cannot aggregate an empty set of analyzer results")

        mean_confidence = fmean(r.confidence for r in results)
        verdict = self.derive_verdict([r.verdict for r in results], mean_confidence)

        return OverallResult(
            verdict=verdict,
            confidence=round_half_up(mean_confidence),
            risk_level=self.derive_risk_level(verdict, mean_confidence),
            summary=self.summarize(verdict, len(results)),
            analyzer_count=len(results),
        )

    def derive_verdict(
        self, verdicts: Sequence[AnalyzerVerdict], mean_confidence: float
    ) -> OverallVerdict:
        present = set(verdicts)

        if present & DANGEROUS_VERDICTS:
            return OverallVerdict.DANGEROUS
        if AnalyzerVerdict.FALSE in present:
            return OverallVerdict.FALSE
        if AnalyzerVerdict.TRUE in present and mean_confidence > self.verified_threshold:
            return OverallVerdict.VERIFIED
        if AnalyzerVerdict.SUSPICIOUS in present:
            return OverallVerdict.SUSPICIOUS
        return OverallVerdict.UNVERIFIED

    def derive_risk_level(self, verdict: OverallVerdict, mean_confidence: float) -> RiskLevel:
        if verdict == OverallVerdict.DANGEROUS:
            return RiskLevel.CRITICAL
        if verdict == OverallVerdict.FALSE and mean_confidence > self.high_risk_false_threshold:
            return RiskLevel.HIGH
        if verdict == OverallVerdict.SUSPICIOUS:
            return RiskLevel.MEDIUM
        if verdict == OverallVerdict.UNVERIFIED:
            return RiskLevel.LOW
        return RiskLevel.MINIMAL

    @staticmethod
    def summarize(verdict: OverallVerdict, analyzer_count: int) -> str:
        return SUMMARY_TEMPLATES[verdict].format(count=analyzer_count)
