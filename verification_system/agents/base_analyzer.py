"""Abstract base class for all verification analyzers."""

from abc import ABC, abstractmethod
from datetime import datetime

from loguru import logger

from verification_system.data_management.schemas import (
    AnalyzerDescriptor,
    AnalyzerResult,
    RequestContext,
    utc_now,
)


class BaseAnalyzer(ABC):
    """
    Abstract base class defining the common interface for all analyzers.

    An analyzer is a named capability that, given content, produces a verdict,
    a confidence score, evidence and recommendations. The orchestrator only
    depends on this contract; how the answer is produced is up to the
    subclass.

    Attributes:
        descriptor: Immutable identity and dispatch metadata
        logger: Loguru logger bound with analyzer context
        created_at: UTC timestamp of analyzer instantiation
    """

    def __init__(self, descriptor: AnalyzerDescriptor):
        """
        Initialize base analyzer.

        Args:
            descriptor: Static configuration for this analyzer
        """
        self.descriptor = descriptor
        self.logger = logger.bind(component="analyzer", analyzer_id=descriptor.id)
        self.created_at: datetime = utc_now()

        self.logger.debug(f"Analyzer {descriptor.display_name} initialized")

    @property
    def id(self) -> str:
        return self.descriptor.id

    @property
    def name(self) -> str:
        return self.descriptor.display_name

    @abstractmethod
    async def analyze(self, content: str, context: RequestContext) -> AnalyzerResult:
        """
        Analyze content and return this analyzer's verdict.

        Must not block the event loop: long-running work has to be awaited
        so that other analyzers of the same request keep making progress.

        Args:
            content: Pre-validated user content
            context: Verification and requester identifiers

        Returns:
            AnalyzerResult whose analyzer_id equals this analyzer's id
        """
        pass

    def get_capabilities(self) -> list[str]:
        """
        Return list of analyzer capabilities.

        Returns:
            List of capability identifiers
        """
        return list(self.descriptor.capabilities)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"
