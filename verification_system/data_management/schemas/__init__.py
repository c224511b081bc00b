"""Schema package for analyzer descriptors, results and verification sessions.

Primary exports:
- AnalyzerDescriptor: immutable analyzer configuration
- AnalyzerResult: one analyzer's verdict for one request
- VerificationSession: mutable session record kept by the SessionStore
- OverallResult: aggregated verdict, confidence and risk level

Usage:
    from verification_system.data_management.schemas import AnalyzerResult, AnalyzerVerdict
    result = AnalyzerResult(analyzer_id="scam", verdict=AnalyzerVerdict.SCAM, confidence=99)
"""

from verification_system.data_management.schemas.verification_schema import (
    ALLOWED_TRANSITIONS,
    AnalyzerResult,
    AnalyzerVerdict,
    OverallResult,
    OverallVerdict,
    RequestContext,
    RiskLevel,
    SessionStatus,
    VerificationOutcome,
    VerificationSession,
    utc_now,
)
from verification_system.data_management.schemas.analyzer_schema import (
    AnalyzerDescriptor,
    DemoScenario,
)

__all__ = [
    "ALLOWED_TRANSITIONS",
    "AnalyzerDescriptor",
    "AnalyzerResult",
    "AnalyzerVerdict",
    "DemoScenario",
    "OverallResult",
    "OverallVerdict",
    "RequestContext",
    "RiskLevel",
    "SessionStatus",
    "VerificationOutcome",
    "VerificationSession",
    "utc_now",
]
