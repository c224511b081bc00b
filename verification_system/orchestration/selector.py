"""Keyword-based selection of the analyzers that should look at a piece of content."""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from loguru import logger

from verification_system.config.analyzers import DEFAULT_ANALYZER_IDS, LINK_ANALYZER_ID
from verification_system.data_management.schemas import AnalyzerDescriptor
from verification_system.exceptions import ConfigurationError

URL_PATTERN = re.compile(r"https?://[^\s]+", re.IGNORECASE)

DEFAULT_MAX_ANALYZERS = 4


@dataclass
class SelectionReport:
    """Why each analyzer was (or was not) selected.

    Attributes:
        selected: Final analyzer ids in declaration order.
        matched_keywords: analyzer id -> keywords found in the content.
        url_detected: Content contained an http(s) link.
        used_fallback: Nothing matched, so the default pair was used.
        truncated: Ids dropped by the maximum-analyzer cap.
    """

    selected: tuple[str, ...]
    matched_keywords: Dict[str, List[str]] = field(default_factory=dict)
    url_detected: bool = False
    used_fallback: bool = False
    truncated: tuple[str, ...] = ()


class AgentSelector:
    """
    Maps raw content to the ordered subset of analyzers that should run.

    Algorithm:
        1. Lower-case the content once.
        2. Keep every analyzer with a trigger keyword contained in the content.
        3. Force the link analyzer in when the content holds an http(s) URL.
        4. Fall back to the default pair when nothing matched.
        5. Keep the first max_analyzers in declaration order.

    Never raises for bad content: None, non-strings and empty strings are
    treated as matching nothing and get the default pair.

    Usage:
        selector = AgentSelector(registry.descriptors())
        selector.select("Breaking news: click this link")
        ('news', 'phishing')
    """

    def __init__(
        self,
        descriptors: Sequence[AnalyzerDescriptor],
        max_analyzers: int = DEFAULT_MAX_ANALYZERS,
        default_ids: Sequence[str] = DEFAULT_ANALYZER_IDS,
        link_analyzer_id: Optional[str] = LINK_ANALYZER_ID,
    ):
        """
        Initialize the selector.

        Args:
            descriptors: Analyzer descriptors in declaration order
            max_analyzers: Cap on the number of analyzers returned
            default_ids: Fallback analyzers when no keyword matches
            link_analyzer_id: Analyzer forced in when a URL is present

        Raises:
            ConfigurationError: If there are no descriptors or the cap is below 1
        """
        if not descriptors:
            raise ConfigurationError("AgentSelector needs at least one analyzer descriptor")
        if max_analyzers < 1:
            raise ConfigurationError(
                f"max_analyzers must be >= 1, got {max_analyzers}",
                context={"max_analyzers": max_analyzers},
            )

        self.descriptors = list(descriptors)
        self.max_analyzers = max_analyzers
        self._order = {d.id: i for i, d in enumerate(self.descriptors)}

        known_defaults = tuple(i for i in default_ids if i in self._order)
        # Non-empty output is guaranteed even for catalogues without news/fact
        self.default_ids = known_defaults or (self.descriptors[0].id,)
        self.link_analyzer_id = link_analyzer_id if link_analyzer_id in self._order else None

        self.logger = logger.bind(component="AgentSelector")

    def select(self, content: object) -> tuple[str, ...]:
        """Return the non-empty, duplicate-free, ordered analyzer ids for content."""
        return self.explain(content).selected

    def explain(self, content: object) -> SelectionReport:
        """Run selection and report which rule picked each analyzer."""
        content_lower = content.lower() if isinstance(content, str) else ""

        matched: Dict[str, List[str]] = {}
        for descriptor in self.descriptors:
            hits = [kw for kw in descriptor.trigger_keywords if kw in content_lower]
            if hits:
                matched[descriptor.id] = hits

        chosen = set(matched)

        url_detected = bool(URL_PATTERN.search(content_lower))
        if url_detected and self.link_analyzer_id:
            chosen.add(self.link_analyzer_id)

        used_fallback = not chosen
        if used_fallback:
            chosen.update(self.default_ids)

        ordered = sorted(chosen, key=self._order.__getitem__)
        selected = tuple(ordered[: self.max_analyzers])
        truncated = tuple(ordered[self.max_analyzers:])

        if truncated:
            self.logger.debug(f"Selection capped at {self.max_analyzers}", dropped=list(truncated))

        return SelectionReport(
            selected=selected,
            matched_keywords=matched,
            url_detected=url_detected,
            used_fallback=used_fallback,
            truncated=truncated,
        )
