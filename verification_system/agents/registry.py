"""Analyzer registry: the ordered, immutable set of analyzers available to the core."""

import random
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from loguru import logger

from verification_system.agents.base_analyzer import BaseAnalyzer
from verification_system.agents.simulated_analyzer import SimulatedAnalyzer
from verification_system.config.analyzers import ANALYZERS
from verification_system.config.scenarios import DEMO_SCENARIOS
from verification_system.config.settings import Settings, settings as default_settings
from verification_system.data_management.schemas import AnalyzerDescriptor, DemoScenario
from verification_system.exceptions import ConfigurationError


class AnalyzerRegistry:
    """
    Registry of analyzers in declaration order.

    Declaration order matters: the agent selector walks analyzers in this
    order and truncates to the first N matches. The registry is filled once
    at startup and then only read.

    Features:
    - Unique analyzer ids (duplicates rejected)
    - Lookup by id
    - Descriptor listing for selection and rendering
    """

    def __init__(self, analyzers: Iterable[BaseAnalyzer] = ()):
        """
        Initialize the registry.

        Args:
            analyzers: Analyzers to register, in declaration order

        Raises:
            ConfigurationError: If two analyzers share an id
        """
        self._analyzers: Dict[str, BaseAnalyzer] = {}
        self.logger = logger.bind(component="AnalyzerRegistry")

        for analyzer in analyzers:
            self.register(analyzer)

        self.logger.info(f"AnalyzerRegistry initialized with {len(self._analyzers)} analyzers")

    def register(self, analyzer: BaseAnalyzer) -> None:
        """
        Append an analyzer to the registry.

        Raises:
            ConfigurationError: If the id is already registered
        """
        if analyzer.id in self._analyzers:
            raise ConfigurationError(
                f"Duplicate analyzer id: {analyzer.id}",
                context={"analyzer_id": analyzer.id},
            )
        self._analyzers[analyzer.id] = analyzer
        self.logger.debug(f"Analyzer registered: {analyzer.id}",
                          keywords=list(analyzer.descriptor.trigger_keywords))

    def get(self, analyzer_id: str) -> Optional[BaseAnalyzer]:
        return self._analyzers.get(analyzer_id)

    def __getitem__(self, analyzer_id: str) -> BaseAnalyzer:
        return self._analyzers[analyzer_id]

    def __contains__(self, analyzer_id: object) -> bool:
        return analyzer_id in self._analyzers

    def __len__(self) -> int:
        return len(self._analyzers)

    def ids(self) -> List[str]:
        return list(self._analyzers)

    def descriptors(self) -> List[AnalyzerDescriptor]:
        """Descriptors in declaration order."""
        return [a.descriptor for a in self._analyzers.values()]

    def get_statistics(self) -> Dict[str, Any]:
        """
        Get registry statistics for monitoring.

        Returns:
            Dictionary with registry stats
        """
        return {
            "total_analyzers": len(self._analyzers),
            "analyzer_ids": self.ids(),
            "capabilities": sorted({
                cap for a in self._analyzers.values() for cap in a.get_capabilities()
            }),
        }


def load_descriptors(config: Mapping[str, Mapping[str, Any]] = ANALYZERS) -> List[AnalyzerDescriptor]:
    """
    Build descriptors from the static analyzer catalogue.

    Raises:
        ConfigurationError: If an entry is missing keywords or fails validation
    """
    descriptors = []
    for analyzer_id, entry in config.items():
        try:
            descriptors.append(AnalyzerDescriptor(id=analyzer_id, **entry))
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid analyzer configuration for '{analyzer_id}': {e}",
                context={"analyzer_id": analyzer_id},
            ) from e
    return descriptors


def load_scenarios(config: Sequence[Mapping[str, Any]] = DEMO_SCENARIOS) -> List[DemoScenario]:
    return [DemoScenario(**entry) for entry in config]


def build_default_registry(
    app_settings: Optional[Settings] = None,
    rng: Optional[random.Random] = None,
) -> AnalyzerRegistry:
    """
    Create the six simulated analyzers from static configuration.

    All analyzers share one random source so a single seed makes a whole
    verification reproducible.

    Args:
        app_settings: Settings override (defaults to the module singleton)
        rng: Random source override (defaults to one seeded from settings)
    """
    cfg = app_settings or default_settings
    shared_rng = rng or random.Random(cfg.random_seed)
    scenarios = load_scenarios()

    return AnalyzerRegistry(
        SimulatedAnalyzer(
            descriptor,
            scenarios=scenarios,
            rng=shared_rng,
            latency_scale=cfg.latency_scale,
            jitter_seconds=cfg.latency_jitter_seconds,
        )
        for descriptor in load_descriptors()
    )
