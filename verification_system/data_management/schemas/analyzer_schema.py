"""Analyzer descriptor and demo scenario schemas.

Descriptors are built once from static configuration and never change
afterwards, so the models are frozen.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from verification_system.data_management.schemas.verification_schema import AnalyzerVerdict


class AnalyzerDescriptor(BaseModel):
    """Identity and dispatch metadata for one analyzer."""

    id: str = Field(..., min_length=1, description="Short unique token, e.g. 'news'")
    display_name: str = Field(..., description="Human-readable analyzer name")
    icon: str = Field(default="", description="Presentation-only icon")
    description: str = Field(default="", description="One-line purpose")
    trigger_keywords: tuple[str, ...] = Field(
        ...,
        min_length=1,
        description="Case-insensitive substrings that select this analyzer",
    )
    simulated_latency: float = Field(
        default=0.0,
        ge=0.0,
        description="Seconds the stub waits before answering",
    )
    capabilities: tuple[str, ...] = Field(default_factory=tuple)
    scenario_evidence: Optional[str] = Field(
        default=None,
        description="Evidence line appended to canned scenario answers",
    )
    scenario_recommendation: Optional[str] = Field(
        default=None,
        description="Recommendation appended to canned scenario answers",
    )

    model_config = {"frozen": True}

    @field_validator("trigger_keywords")
    @classmethod
    def normalize_keywords(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Lower-case keywords and reject blanks."""
        keywords = tuple(k.strip().lower() for k in v)
        if not all(keywords):
            raise ValueError("Trigger keywords must be non-empty strings")
        return keywords


class DemoScenario(BaseModel):
    """Canned input with a precomputed verdict."""

    id: str
    title: str
    content: str
    expected_result: AnalyzerVerdict
    confidence: float = Field(..., ge=0.0, le=100.0)
    explanation: str

    model_config = {"frozen": True}

    def matches(self, content: str) -> bool:
        """Whole-content, case-insensitive comparison."""
        return self.content.strip().lower() == content.strip().lower()
