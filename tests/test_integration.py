"""End-to-end verification of the demo scenarios through the default wiring."""

import pytest

from verification_system.config.scenarios import DEMO_SCENARIOS
from verification_system.data_management.schemas import (
    AnalyzerVerdict,
    OverallVerdict,
    RiskLevel,
    SessionStatus,
)
from verification_system.orchestration.orchestrator import VerificationOrchestrator

SCENARIO_CONTENT = {s["id"]: s["content"] for s in DEMO_SCENARIOS}


@pytest.fixture
def orchestrator(default_registry, fast_settings) -> VerificationOrchestrator:
    return VerificationOrchestrator(default_registry, app_settings=fast_settings)


@pytest.mark.asyncio
@pytest.mark.parametrize("scenario_id, analyzers, verdict, confidence, risk", [
    ("medical_misinformation", ("news", "fact"), OverallVerdict.FALSE, 95, RiskLevel.HIGH),
    ("phishing_attempt", ("phishing",), OverallVerdict.DANGEROUS, 96, RiskLevel.CRITICAL),
    ("legitimate_news", ("news", "fact"), OverallVerdict.VERIFIED, 87, RiskLevel.MINIMAL),
    ("mixed_content", ("phishing",), OverallVerdict.UNVERIFIED, 65, RiskLevel.LOW),
    ("advance_fee_fraud", ("scam",), OverallVerdict.DANGEROUS, 99, RiskLevel.CRITICAL),
])
async def test_demo_scenarios(orchestrator, scenario_id, analyzers, verdict, confidence, risk):
    outcome = await orchestrator.verify(SCENARIO_CONTENT[scenario_id], "demo-user")

    assert outcome.selected_analyzers == analyzers
    assert outcome.overall_result.verdict == verdict
    assert outcome.overall_result.confidence == confidence
    assert outcome.overall_result.risk_level == risk
    assert outcome.overall_result.analyzer_count == len(analyzers)


@pytest.mark.asyncio
async def test_scam_scenario_end_to_end(orchestrator):
    outcome = await orchestrator.verify(SCENARIO_CONTENT["advance_fee_fraud"], "demo-user", session_id="v-scam")

    [result] = outcome.analyzer_results
    assert result.verdict == AnalyzerVerdict.SCAM
    assert result.recommendations == ["Report to relevant authorities"]
    assert outcome.overall_result.summary.startswith("🚨 DANGEROUS")

    session = await orchestrator.get_session("v-scam")
    assert session.status == SessionStatus.COMPLETED
    assert orchestrator.get_total_count() == 1


@pytest.mark.asyncio
async def test_free_text_uses_heuristics(orchestrator):
    outcome = await orchestrator.verify("Click here to claim your lottery winnings", "u")

    assert outcome.selected_analyzers == ("scam", "phishing")
    assert {r.verdict for r in outcome.analyzer_results} == {AnalyzerVerdict.SUSPICIOUS}
    assert outcome.overall_result.verdict == OverallVerdict.SUSPICIOUS
    assert outcome.overall_result.risk_level == RiskLevel.MEDIUM
