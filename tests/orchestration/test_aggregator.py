"""Tests for VerdictAggregator precedence, confidence and risk derivation.

Each precedence branch is hit with inputs that cannot match any earlier rule.
"""

import pytest

from verification_system.data_management.schemas import (
    AnalyzerVerdict as V,
    OverallVerdict,
    RiskLevel,
)
from verification_system.orchestration.aggregator import VerdictAggregator

from tests.conftest import make_result


@pytest.fixture
def aggregator() -> VerdictAggregator:
    return VerdictAggregator()


class TestVerdictPrecedence:
    def test_malicious_is_dangerous(self, aggregator):
        results = [make_result(V.MALICIOUS, 96), make_result(V.TRUE, 90), make_result(V.FALSE, 80)]
        assert aggregator.aggregate(results).verdict == OverallVerdict.DANGEROUS

    def test_scam_is_dangerous(self, aggregator):
        results = [make_result(V.SCAM, 99)]
        assert aggregator.aggregate(results).verdict == OverallVerdict.DANGEROUS

    def test_false_beats_true_and_suspicious(self, aggregator):
        results = [make_result(V.FALSE, 70), make_result(V.TRUE, 95), make_result(V.SUSPICIOUS, 90)]
        assert aggregator.aggregate(results).verdict == OverallVerdict.FALSE

    def test_true_with_high_mean_is_verified(self, aggregator):
        results = [make_result(V.TRUE, 87), make_result(V.SUSPICIOUS, 85)]
        assert aggregator.aggregate(results).verdict == OverallVerdict.VERIFIED

    def test_true_with_low_mean_falls_through_to_suspicious(self, aggregator):
        results = [make_result(V.TRUE, 90), make_result(V.SUSPICIOUS, 60)]
        assert aggregator.aggregate(results).verdict == OverallVerdict.SUSPICIOUS

    def test_true_at_threshold_is_not_verified(self, aggregator):
        results = [make_result(V.TRUE, 80)]
        assert aggregator.aggregate(results).verdict == OverallVerdict.UNVERIFIED

    def test_suspicious(self, aggregator):
        results = [make_result(V.SUSPICIOUS, 88), make_result(V.UNVERIFIED, 60)]
        assert aggregator.aggregate(results).verdict == OverallVerdict.SUSPICIOUS

    def test_unverified_default(self, aggregator):
        results = [make_result(V.UNVERIFIED, 65), make_result(V.VERIFIED, 99)]
        assert aggregator.aggregate(results).verdict == OverallVerdict.UNVERIFIED


class TestConfidence:
    def test_mean_rounded(self, aggregator):
        results = [make_result(V.UNVERIFIED, 50), make_result(V.UNVERIFIED, 61)]
        assert aggregator.aggregate(results).confidence == 56

    def test_fractional_confidences(self, aggregator):
        values = [52.4, 77.9, 63.3]
        results = [make_result(V.UNVERIFIED, c) for c in values]
        assert aggregator.aggregate(results).confidence == 65

    @pytest.mark.parametrize("values, expected", [
        ([84, 85], 85),
        ([86, 87], 87),
        ([0.5], 1),
        ([2.5], 3),
    ])
    def test_half_rounds_up(self, aggregator, values, expected):
        overall = aggregator.aggregate([make_result(V.UNVERIFIED, c) for c in values])
        assert overall.confidence == expected

    @pytest.mark.parametrize("values", [[0], [100], [0, 100], [100, 100, 100]])
    def test_bounds(self, aggregator, values):
        overall = aggregator.aggregate([make_result(V.UNVERIFIED, c) for c in values])
        assert 0 <= overall.confidence <= 100

    def test_empty_input_rejected(self, aggregator):
        with pytest.raises(ValueError):
            aggregator.aggregate([])


class TestRiskLevel:
    def test_dangerous_is_critical(self, aggregator):
        assert aggregator.aggregate([make_result(V.SCAM, 10)]).risk_level == RiskLevel.CRITICAL

    def test_confident_false_is_high(self, aggregator):
        assert aggregator.aggregate([make_result(V.FALSE, 95)]).risk_level == RiskLevel.HIGH

    def test_false_at_ninety_is_minimal(self, aggregator):
        assert aggregator.aggregate([make_result(V.FALSE, 90)]).risk_level == RiskLevel.MINIMAL

    def test_suspicious_is_medium(self, aggregator):
        assert aggregator.aggregate([make_result(V.SUSPICIOUS, 90)]).risk_level == RiskLevel.MEDIUM

    def test_unverified_is_low(self, aggregator):
        assert aggregator.aggregate([make_result(V.UNVERIFIED, 70)]).risk_level == RiskLevel.LOW

    def test_verified_is_minimal(self, aggregator):
        assert aggregator.aggregate([make_result(V.TRUE, 87)]).risk_level == RiskLevel.MINIMAL

    def test_risk_uses_unrounded_mean(self, aggregator):
        # mean 90.4 rounds to 90 but is still above the HIGH threshold
        results = [make_result(V.FALSE, 90.4)]
        overall = aggregator.aggregate(results)
        assert overall.confidence == 90
        assert overall.risk_level == RiskLevel.HIGH


class TestSummary:
    def test_summary_mentions_count(self, aggregator):
        results = [make_result(V.FALSE, 95), make_result(V.FALSE, 95, analyzer_id="fact")]
        overall = aggregator.aggregate(results)
        assert overall.summary.startswith("❌ FALSE")
        assert "2 agent" in overall.summary
        assert overall.analyzer_count == 2

    @pytest.mark.parametrize("verdict", list(OverallVerdict))
    def test_every_verdict_has_summary(self, verdict):
        assert verdict.value in VerdictAggregator.summarize(verdict, 3)


class TestPurity:
    def test_idempotent(self, aggregator):
        results = [make_result(V.SUSPICIOUS, 88.2), make_result(V.UNVERIFIED, 61.7)]
        assert aggregator.aggregate(results) == aggregator.aggregate(results)

    def test_custom_threshold(self):
        aggregator = VerdictAggregator(verified_threshold=60)
        assert aggregator.aggregate([make_result(V.TRUE, 70)]).verdict == OverallVerdict.VERIFIED
