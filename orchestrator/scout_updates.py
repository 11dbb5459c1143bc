"""Map persistent-scout updates from the provider into SiteResults."""

import uuid
from collections.abc import Iterable
from typing import Any

from models.site_result import ContactHint, DiscoveryRun, RunSeed, SiteResult, UiAnalysis
from scout.contracts import SourceMode
from scout.urls import canonicalize, fingerprint
from utils.logger import get_logger

logger = get_logger(__name__)

SCOUT_SOURCE = "yutori_scout_api"
SCOUT_CONFIDENCE = 1.0
MISSING_URL = "https://example.com/missing-url"


def severity_from_score(score: Any) -> str:
    """Map a 1-10 severity score onto Low/Medium/High."""
    try:
        value = float(score)
    except (TypeError, ValueError):
        return "Medium"
    if value >= 7:
        return "High"
    if value >= 4:
        return "Medium"
    return "Low"


def _site(
    *,
    url: str | None,
    name: str | None,
    problems: list[str] | None,
    severity: str,
    quick_fix: str,
    notes: str,
) -> SiteResult:
    raw_url = url or MISSING_URL
    canonical_url = canonicalize(raw_url) or raw_url
    return SiteResult(
        site_id=fingerprint(canonical_url),
        name=name or "Unknown Startup",
        url=canonical_url,
        source=SCOUT_SOURCE,
        confidence=SCOUT_CONFIDENCE,
        contact_hint=ContactHint(),
        ui_analysis=UiAnalysis(
            problems=[str(p) for p in (problems or [])],
            severity=severity,
            quick_fix=quick_fix,
            conversion_impact="Unknown",
        ),
        notes=notes,
    )


def _sites_from_update(update: dict[str, Any]) -> list[SiteResult]:
    data = update.get("structured_result") or {}
    if not isinstance(data, dict) or not data:
        return []

    batched = data.get("results")
    if isinstance(batched, list):
        sites = []
        for item in batched:
            if not isinstance(item, dict):
                continue
            sites.append(
                _site(
                    url=item.get("website_url"),
                    name=item.get("startup_name"),
                    problems=item.get("accessibility_issues"),
                    severity=severity_from_score(item.get("severity_score")),
                    quick_fix=item.get("why_this_is_bad") or "Check accessibility guidelines.",
                    notes=item.get("notes") or "Found via daily scout.",
                )
            )
        return sites

    return [
        _site(
            url=data.get("site_url"),
            name=data.get("site_name"),
            problems=data.get("ui_issues"),
            severity=data.get("severity") or "Medium",
            quick_fix=data.get("quick_fix") or "Check accessibility guidelines.",
            notes=data.get("description") or "Found via daily scout.",
        )
    ]


def sites_from_scout_updates(updates: Iterable[dict[str, Any]]) -> list[SiteResult]:
    """Flatten scout updates into unique sites, first occurrence wins."""
    sites: dict[str, SiteResult] = {}
    for update in updates:
        if not isinstance(update, dict):
            continue
        for site in _sites_from_update(update):
            sites.setdefault(site.site_id, site)
    return list(sites.values())


def scout_poll_run(scout_id: str, updates: Iterable[dict[str, Any]]) -> DiscoveryRun:
    sites = sites_from_scout_updates(updates)
    logger.info(f"Mapped {len(sites)} sites from scout {scout_id}")
    return DiscoveryRun(
        run_id=f"poll-{uuid.uuid4()}",
        seed=RunSeed(query=f"scout:{scout_id}", sources=["yutori_scout"]),
        sites=sites,
        metadata={"source_mode": SourceMode.SCOUT_API.value},
    )
