"""Verification domain schemas.

Defines analyzer verdicts, per-analyzer results, the aggregated overall
result and the mutable session record tracked by the SessionStore.

Session lifecycle:
    PENDING -> RUNNING -> COMPLETED
                       -> FAILED
Status never moves backward; results and overall_result are populated only
once the session is COMPLETED.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from verification_system.exceptions import InvalidTransition


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AnalyzerVerdict(str, Enum):
    """Closed set of labels a single analyzer may return."""

    VERIFIED = "VERIFIED"
    TRUE = "TRUE"
    FALSE = "FALSE"
    MALICIOUS = "MALICIOUS"
    SCAM = "SCAM"
    SUSPICIOUS = "SUSPICIOUS"
    UNVERIFIED = "UNVERIFIED"


class OverallVerdict(str, Enum):
    """Aggregated verdict across all analyzers of a session."""

    VERIFIED = "VERIFIED"
    DANGEROUS = "DANGEROUS"
    FALSE = "FALSE"
    SUSPICIOUS = "SUSPICIOUS"
    UNVERIFIED = "UNVERIFIED"


class RiskLevel(str, Enum):
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"
    MINIMAL = "MINIMAL"


class SessionStatus(str, Enum):
    """Verification session status.

    PENDING: Session recorded with its analyzers, nothing dispatched yet.
    RUNNING: Analyzers dispatched and in flight.
    COMPLETED: All analyzers returned and results aggregated.
    FAILED: At least one analyzer raised or timed out.
    """

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


ALLOWED_TRANSITIONS: dict[SessionStatus, frozenset[SessionStatus]] = {
    SessionStatus.PENDING: frozenset({SessionStatus.RUNNING}),
    SessionStatus.RUNNING: frozenset({SessionStatus.COMPLETED, SessionStatus.FAILED}),
    SessionStatus.COMPLETED: frozenset(),
    SessionStatus.FAILED: frozenset(),
}


class RequestContext(BaseModel):
    """Per-request information handed to every analyzer."""

    verification_id: str
    requester_id: str

    model_config = {"frozen": True}


class AnalyzerResult(BaseModel):
    """Output of one analyzer for one request."""

    analyzer_id: str = Field(..., description="Id of the analyzer that produced this result")
    verdict: AnalyzerVerdict
    confidence: float = Field(..., ge=0.0, le=100.0, description="Confidence 0-100")
    evidence: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    elapsed_time: float = Field(default=0.0, ge=0.0, description="Seconds spent analyzing")
    completed_at: datetime = Field(default_factory=utc_now)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "analyzer_id": "scam",
                    "verdict": "SCAM",
                    "confidence": 99,
                    "evidence": [
                        "Classic 419 scam pattern, no legitimate lottery requires upfront payment",
                        "Analyzed against known fraud patterns",
                    ],
                    "recommendations": ["Report to relevant authorities"],
                    "elapsed_time": 2.84,
                }
            ]
        }
    }


class OverallResult(BaseModel):
    """Aggregated verdict derived from every analyzer result of a session."""

    verdict: OverallVerdict
    confidence: int = Field(..., ge=0, le=100, description="round(mean(confidences))")
    risk_level: RiskLevel
    summary: str
    analyzer_count: int = Field(..., ge=1)

    model_config = {"frozen": True}


class VerificationSession(BaseModel):
    """One user-submitted verification request and its evolving state."""

    id: str
    requester_id: str
    content: str
    selected_analyzers: tuple[str, ...] = Field(
        ..., min_length=1, description="Analyzer ids chosen by the selector, in order"
    )
    status: SessionStatus = SessionStatus.PENDING
    created_at: datetime = Field(default_factory=utc_now)
    completed_at: Optional[datetime] = None
    results: dict[str, AnalyzerResult] = Field(default_factory=dict)
    overall_result: Optional[OverallResult] = None
    error: Optional[str] = None
    processing_time: Optional[float] = None

    def transition_to(self, status: SessionStatus) -> None:
        """Move to a new status, refusing backward or skipped transitions.

        Raises:
            InvalidTransition: If status is not reachable from the current one.
        """
        if status not in ALLOWED_TRANSITIONS[self.status]:
            raise InvalidTransition(self.id, self.status.value, status.value)
        self.status = status

    @property
    def is_terminal(self) -> bool:
        return self.status in (SessionStatus.COMPLETED, SessionStatus.FAILED)

    def age_seconds(self, now: Optional[datetime] = None) -> float:
        return ((now or utc_now()) - self.created_at).total_seconds()


class VerificationOutcome(BaseModel):
    """What a successful verify() hands back to web or bot callers."""

    verification_id: str
    requester_id: str
    content: str
    selected_analyzers: tuple[str, ...]
    analyzer_results: list[AnalyzerResult]
    overall_result: OverallResult
    processing_time: float = Field(..., ge=0.0, description="Wall-clock seconds")
    completed_at: datetime

    @classmethod
    def from_session(cls, session: VerificationSession) -> "VerificationOutcome":
        """Build the caller-facing view of a completed session."""
        if session.status != SessionStatus.COMPLETED or session.overall_result is None:
            raise ValueError(f"Session {session.id} is not completed")
        return cls(
            verification_id=session.id,
            requester_id=session.requester_id,
            content=session.content,
            selected_analyzers=session.selected_analyzers,
            analyzer_results=[session.results[a] for a in session.selected_analyzers],
            overall_result=session.overall_result,
            processing_time=session.processing_time or 0.0,
            completed_at=session.completed_at or utc_now(),
        )
