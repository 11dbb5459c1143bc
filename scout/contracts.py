"""Data contracts for the site-discovery pipeline."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

Severity = Literal["Low", "Medium", "High"]

MOCK_SOURCE = "mock_yutori_data"
PLACEHOLDER_SOURCE = "yutori_api_placeholder"

# Candidates carrying these tags point at curated URLs and are not probed.
UNPROBED_SOURCES = frozenset({MOCK_SOURCE, PLACEHOLDER_SOURCE})


class SourceMode(str, Enum):
    """Where discovery candidates came from."""

    MOCK = "mock"
    PLACEHOLDER = "placeholder"
    LIVE = "live"
    SCOUT_API = "scout_api"


@dataclass(frozen=True)
class RawCandidate:
    """One search hit before normalization."""

    url: str
    title: str | None = None
    snippet: str | None = None
    source: str | None = None
    problems: list[str] = field(default_factory=list)
    severity: Severity | None = None
    quick_fix: str | None = None

    @property
    def skips_probe(self) -> bool:
        return self.source in UNPROBED_SOURCES


class ScoutSourceError(RuntimeError):
    """Raised by a result source when the upstream search itself fails."""

    def __init__(self, message: str, query: str | None = None):
        super().__init__(message)
        self.query = query
