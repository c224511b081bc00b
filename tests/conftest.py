"""Shared fixtures and test analyzers."""

import asyncio
import random
from typing import Optional

import pytest
import structlog

from verification_system.agents.base_analyzer import BaseAnalyzer
from verification_system.agents.registry import AnalyzerRegistry, build_default_registry
from verification_system.config.settings import Settings
from verification_system.data_management.schemas import (
    AnalyzerDescriptor,
    AnalyzerResult,
    AnalyzerVerdict,
    RequestContext,
)


def make_descriptor(analyzer_id: str, keywords=None, latency: float = 0.0) -> AnalyzerDescriptor:
    return AnalyzerDescriptor(
        id=analyzer_id,
        display_name=f"{analyzer_id.title()} Agent",
        trigger_keywords=tuple(keywords or [analyzer_id]),
        simulated_latency=latency,
    )


def make_result(
    verdict: AnalyzerVerdict,
    confidence: float,
    analyzer_id: str = "news",
) -> AnalyzerResult:
    return AnalyzerResult(analyzer_id=analyzer_id, verdict=verdict, confidence=confidence)


class FixedAnalyzer(BaseAnalyzer):
    """Answers with a fixed verdict after sleeping for its descriptor latency."""

    def __init__(
        self,
        descriptor: AnalyzerDescriptor,
        verdict: AnalyzerVerdict = AnalyzerVerdict.UNVERIFIED,
        confidence: float = 60.0,
    ):
        super().__init__(descriptor)
        self.verdict = verdict
        self.confidence = confidence
        self.calls: list[RequestContext] = []
        self.cancelled = False

    async def analyze(self, content: str, context: RequestContext) -> AnalyzerResult:
        self.calls.append(context)
        try:
            await asyncio.sleep(self.descriptor.simulated_latency)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return AnalyzerResult(
            analyzer_id=self.id,
            verdict=self.verdict,
            confidence=self.confidence,
            elapsed_time=self.descriptor.simulated_latency,
        )


class FailingAnalyzer(BaseAnalyzer):
    """Raises after an optional delay."""

    def __init__(self, descriptor: AnalyzerDescriptor, error: Optional[Exception] = None):
        super().__init__(descriptor)
        self.error = error or RuntimeError("model backend unavailable")

    async def analyze(self, content: str, context: RequestContext) -> AnalyzerResult:
        await asyncio.sleep(self.descriptor.simulated_latency)
        raise self.error


class BlockingAnalyzer(BaseAnalyzer):
    """Waits on an event before answering; lets tests observe the RUNNING state."""

    def __init__(self, descriptor: AnalyzerDescriptor):
        super().__init__(descriptor)
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def analyze(self, content: str, context: RequestContext) -> AnalyzerResult:
        self.started.set()
        await self.release.wait()
        return AnalyzerResult(analyzer_id=self.id, verdict=AnalyzerVerdict.TRUE, confidence=90)


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo structlog.configure() calls so no test keeps a closed capture stream."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def fast_settings() -> Settings:
    return Settings(latency_scale=0.0, latency_jitter_seconds=0.0, random_seed=1234)


@pytest.fixture
def default_registry(fast_settings: Settings) -> AnalyzerRegistry:
    return build_default_registry(fast_settings, rng=random.Random(1234))
