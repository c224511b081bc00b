"""Verification orchestrator: selection, concurrent analyzer dispatch and session bookkeeping."""

import asyncio
import time
import uuid
from datetime import timedelta
from typing import Any, Dict, List, Optional, Sequence

from loguru import logger

from verification_system.agents.base_analyzer import BaseAnalyzer
from verification_system.agents.registry import (
    AnalyzerRegistry,
    build_default_registry,
    load_scenarios,
)
from verification_system.config.settings import Settings, settings as default_settings
from verification_system.data_management.schemas import (
    AnalyzerDescriptor,
    AnalyzerResult,
    DemoScenario,
    RequestContext,
    SessionStatus,
    VerificationOutcome,
    VerificationSession,
)
from verification_system.data_management.session_store import SessionStore
from verification_system.exceptions import (
    AnalyzerFailure,
    ConfigurationError,
    InvalidRequest,
    NotFound,
)
from verification_system.orchestration.aggregator import VerdictAggregator
from verification_system.orchestration.selector import AgentSelector
from verification_system.utils.logging import request_context


class VerificationOrchestrator:
    """
    Drives one verification request from content to overall verdict.

    Lifecycle of verify():
        1. Reject empty or non-string content (InvalidRequest).
        2. Select analyzers and record a PENDING session; a reused id that
           is pending, running or completed is rejected (DuplicateSession).
        3. Move to RUNNING and start every analyzer before awaiting any.
        4. If any analyzer raises or times out, mark the session FAILED and
           raise AnalyzerFailure. No partial aggregation.
        5. Otherwise aggregate, mark COMPLETED and return the outcome.

    Registry, store, selector and aggregator are injected so tests and
    multiple orchestrators can run side by side.
    """

    def __init__(
        self,
        registry: AnalyzerRegistry,
        store: Optional[SessionStore] = None,
        selector: Optional[AgentSelector] = None,
        aggregator: Optional[VerdictAggregator] = None,
        app_settings: Optional[Settings] = None,
        scenarios: Optional[Sequence[DemoScenario]] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            registry: Analyzers available for dispatch
            store: Session store (new in-memory store if None)
            selector: Agent selector (built from the registry if None)
            aggregator: Verdict aggregator (default thresholds if None)
            app_settings: Settings override (module singleton if None)
            scenarios: Demo scenarios exposed to callers (static config if None)

        Raises:
            ConfigurationError: If the registry is empty or the selector can
                pick analyzers the registry does not have
        """
        if len(registry) == 0:
            raise ConfigurationError("VerificationOrchestrator needs at least one analyzer")

        self.settings = app_settings or default_settings
        self.registry = registry
        self.store = store or SessionStore(
            retention=timedelta(seconds=self.settings.retention_seconds)
        )
        self.selector = selector or AgentSelector(
            registry.descriptors(),
            max_analyzers=self.settings.max_selected_analyzers,
        )
        self.aggregator = aggregator or VerdictAggregator()
        self.analyzer_timeout = self.settings.analyzer_timeout_seconds
        self._scenarios = list(scenarios) if scenarios is not None else load_scenarios()
        self.logger = logger.bind(component="VerificationOrchestrator")

        unknown = [d.id for d in self.selector.descriptors if d.id not in registry]
        if unknown:
            raise ConfigurationError(
                f"Selector references unregistered analyzers: {unknown}",
                context={"unknown": unknown},
            )

        self.logger.info("VerificationOrchestrator initialized",
                         analyzers=registry.ids(),
                         analyzer_timeout=self.analyzer_timeout)

    async def verify(
        self,
        content: str,
        requester_id: str,
        session_id: Optional[str] = None,
    ) -> VerificationOutcome:
        """
        Run every applicable analyzer over content and aggregate the verdicts.

        Args:
            content: Pre-validated user content
            requester_id: Who asked (web user id, chat id, ...)
            session_id: Optional caller-chosen id; generated if None

        Returns:
            VerificationOutcome with per-analyzer results and the overall result

        Raises:
            InvalidRequest: Content is empty or not a string
            DuplicateSession: session_id is pending, running or completed
            AnalyzerFailure: An analyzer raised or timed out
        """
        if not isinstance(content, str):
            raise InvalidRequest("content must be a string", content_type=type(content).__name__)
        if not content.strip():
            raise InvalidRequest("content must not be empty")

        verification_id = session_id or str(uuid.uuid4())
        selected = self.selector.select(content)

        session = VerificationSession(
            id=verification_id,
            requester_id=str(requester_id),
            content=content,
            selected_analyzers=selected,
            created_at=self.store.now(),
        )
        await self.store.add(session)

        with request_context(verification_id, requester_id=session.requester_id):
            return await self._run_session(session)

    async def _run_session(self, session: VerificationSession) -> VerificationOutcome:
        """Drive an accepted PENDING session to COMPLETED or FAILED."""
        verification_id = session.id
        selected = session.selected_analyzers
        content = session.content

        start = time.perf_counter()
        session.transition_to(SessionStatus.RUNNING)
        await self.store.update(session)

        self.logger.info(f"Starting verification {verification_id}",
                         requester_id=session.requester_id,
                         analyzers=list(selected))

        context = RequestContext(verification_id=verification_id, requester_id=session.requester_id)

        try:
            results = await self._dispatch(selected, content, context)
        except AnalyzerFailure as failure:
            await self._fail(session, failure.message, start)
            self.logger.error(f"Verification {verification_id} failed",
                              analyzer_id=failure.analyzer_id,
                              error=failure.context.get("original_error"))
            raise
        except asyncio.CancelledError:
            await self._fail(session, "verification cancelled", start)
            self.logger.warning(f"Verification {verification_id} cancelled")
            raise

        overall = self.aggregator.aggregate(results)

        session.results = {r.analyzer_id: r for r in results}
        session.overall_result = overall
        session.completed_at = self.store.now()
        session.processing_time = time.perf_counter() - start
        session.transition_to(SessionStatus.COMPLETED)
        await self.store.update(session)

        self.logger.info(f"Verification {verification_id} completed in {session.processing_time:.2f}s",
                         verdict=overall.verdict.value,
                         confidence=overall.confidence,
                         risk_level=overall.risk_level.value)

        return VerificationOutcome.from_session(session)

    async def _dispatch(
        self,
        analyzer_ids: Sequence[str],
        content: str,
        context: RequestContext,
    ) -> List[AnalyzerResult]:
        """Fan out to all analyzers, then fan in; first failure cancels the rest."""
        tasks = [
            asyncio.create_task(
                self._run_analyzer(self.registry[analyzer_id], content, context),
                name=f"{context.verification_id}:{analyzer_id}",
            )
            for analyzer_id in analyzer_ids
        ]

        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def _run_analyzer(
        self,
        analyzer: BaseAnalyzer,
        content: str,
        context: RequestContext,
    ) -> AnalyzerResult:
        try:
            if self.analyzer_timeout is not None:
                result = await asyncio.wait_for(
                    analyzer.analyze(content, context), timeout=self.analyzer_timeout
                )
            else:
                result = await analyzer.analyze(content, context)
        except asyncio.TimeoutError as e:
            reason = TimeoutError(f"no result within {self.analyzer_timeout}s") if self.analyzer_timeout else e
            raise AnalyzerFailure(context.verification_id, analyzer.id, reason) from e
        except Exception as e:
            raise AnalyzerFailure(context.verification_id, analyzer.id, e) from e

        if not isinstance(result, AnalyzerResult) or result.analyzer_id != analyzer.id:
            raise AnalyzerFailure(
                context.verification_id,
                analyzer.id,
                TypeError(f"analyzer returned a malformed result: {result!r}"),
            )
        return result

    async def _fail(self, session: VerificationSession, error: str, start: float) -> None:
        session.error = error
        session.completed_at = self.store.now()
        session.processing_time = time.perf_counter() - start
        session.transition_to(SessionStatus.FAILED)
        await self.store.update(session)

    async def get_session(self, session_id: str) -> VerificationSession:
        """
        Look up a session for detail rendering.

        Raises:
            NotFound: Id never existed or was evicted by the retention sweep
        """
        session = await self.store.get(session_id)
        if session is None:
            raise NotFound(session_id)
        return session

    async def get_active_count(self) -> int:
        """Number of sessions currently running."""
        return await self.store.active_count()

    def get_total_count(self) -> int:
        """Lifetime number of accepted verification requests."""
        return self.store.total_created

    async def cleanup_expired(self, retention: Optional[timedelta] = None) -> int:
        """Evict sessions older than the retention horizon; returns how many."""
        return await self.store.sweep_expired(retention)

    def list_analyzers(self) -> List[AnalyzerDescriptor]:
        return self.registry.descriptors()

    def list_scenarios(self) -> List[DemoScenario]:
        return list(self._scenarios)

    async def get_statistics(self) -> Dict[str, Any]:
        """
        Get orchestrator statistics for status pages and /stats commands.

        Returns:
            Dictionary with verification counts and analyzer info
        """
        counts = await self.store.count_by_status()
        return {
            "total_verifications": self.get_total_count(),
            "active_verifications": counts[SessionStatus.RUNNING.value],
            "stored_sessions": sum(counts.values()),
            "status_counts": counts,
            "analyzers": self.registry.get_statistics(),
        }

    async def start(self) -> None:
        """Start periodic retention sweeps."""
        await self.store.start_cleanup_monitoring(self.settings.cleanup_interval_seconds)

    async def stop(self) -> None:
        await self.store.stop_cleanup_monitoring()

    async def __aenter__(self):
        """Async context manager entry - starts background cleanup."""
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit - stops background cleanup."""
        await self.stop()


def create_orchestrator(app_settings: Optional[Settings] = None) -> VerificationOrchestrator:
    """Wire the default registry, store and selector from settings."""
    cfg = app_settings or default_settings
    return VerificationOrchestrator(build_default_registry(cfg), app_settings=cfg)
