from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal

Severity = Literal["Low", "Medium", "High"]


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class ContactHint:
    contact_page: str | None = None
    email: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.contact_page:
            data["contact_page"] = self.contact_page
        if self.email:
            data["email"] = self.email
        return data


@dataclass(frozen=True)
class UiAnalysis:
    problems: list[str] = field(default_factory=list)
    severity: Severity = "Medium"
    quick_fix: str = ""
    conversion_impact: str = "Unknown"

    def __post_init__(self):
        if self.severity not in {"Low", "Medium", "High"}:
            object.__setattr__(self, "severity", "Medium")

    def to_dict(self) -> dict[str, Any]:
        return {
            "problems": list(self.problems),
            "severity": self.severity,
            "quick_fix": self.quick_fix,
            "conversion_impact": self.conversion_impact,
        }


@dataclass(frozen=True)
class SiteResult:
    site_id: str
    name: str
    url: str
    source: str
    confidence: float
    contact_hint: ContactHint = field(default_factory=ContactHint)
    ui_analysis: UiAnalysis | None = None
    notes: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "site_id": self.site_id,
            "name": self.name,
            "url": self.url,
            "source": self.source,
            "confidence": self.confidence,
            "contact_hint": self.contact_hint.to_dict(),
            "ui_analysis": self.ui_analysis.to_dict() if self.ui_analysis else None,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class RunSeed:
    query: str
    sources: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class DiscoveryRun:
    run_id: str
    seed: RunSeed
    sites: list[SiteResult]

    generated_at: str = field(default_factory=utc_timestamp)
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def site_count(self) -> int:
        return len(self.sites)

    def to_dict(self) -> dict[str, Any]:
        return {
            "run_id": self.run_id,
            "generated_at": self.generated_at,
            "seed": {"query": self.seed.query, "sources": list(self.seed.sources)},
            "sites": [site.to_dict() for site in self.sites],
            "metadata": dict(self.metadata),
        }
