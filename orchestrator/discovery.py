"""Discovery orchestrator: fan queries out to the result source, fan candidates back in.

Processing is strictly sequential (one search, then one probe at a time) so
upstream rate limits stay polite and "first seen wins" follows a single fixed
order: query order, then result order within each query.
"""

import math
import uuid
from collections.abc import Sequence
from typing import Protocol

from models.site_result import ContactHint, DiscoveryRun, RunSeed, SiteResult, UiAnalysis
from scout.contracts import RawCandidate, SourceMode
from scout.domain_policy import DomainPolicy
from scout.urls import FINGERPRINT_LENGTH, canonicalize, fingerprint, hostname_of
from utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_LIMIT = 20
MIN_RESULTS_PER_QUERY = 5
OVERFETCH_FACTOR = 1.5
HEURISTIC_CONFIDENCE = 0.6

DEFAULT_QUERIES: tuple[str, ...] = (
    'site:reddit.com/r/roastmystartup "feedback"',
    'site:reddit.com/r/SideProject "mvp" "roast"',
    'site:reddit.com/r/SaaS "landing page feedback"',
    'site:producthunt.com/posts "launch" -site:producthunt.com/posts/popular',
    'indie hackers "landing page roast"',
    '"built this weekend" "check it out" -github.com',
    '"first launch" "feedback appreciated"',
)

DIRECTORY_SEEDS: tuple[str, ...] = (
    "reddit_roastmystartup",
    "reddit_sideproject",
    "reddit_saas",
    "indiehackers_landing_page_feedback",
    "producthunt_newest",
)

DEFAULT_PROBLEMS = ("Potential visual hierarchy issues", "Unclear CTA")
DEFAULT_SEVERITY = "Medium"
DEFAULT_QUICK_FIX = "Improve contrast and spacing."
DEFAULT_CONVERSION_IMPACT = "High - poor first impression reduces trust."
DEFAULT_NOTES = "Identified as a potentially early-stage/scrappy project."


class ResultSource(Protocol):
    async def search(self, query: str, limit: int, force_mock: bool = False) -> list[RawCandidate]: ...


class Prober(Protocol):
    async def is_reachable(self, url: str, timeout_ms: int | None = None) -> bool: ...


def per_query_budget(limit: int, num_queries: int) -> int:
    """Raw results to request per query so enough survive filtering to reach `limit`."""
    if num_queries <= 0:
        return MIN_RESULTS_PER_QUERY
    return max(math.ceil(limit * OVERFETCH_FACTOR / num_queries), MIN_RESULTS_PER_QUERY)


def build_site(candidate: RawCandidate, canonical_url: str, site_id: str) -> SiteResult:
    return SiteResult(
        site_id=site_id,
        name=candidate.title or hostname_of(canonical_url) or canonical_url,
        url=canonical_url,
        source=candidate.source or "web_scout",
        confidence=HEURISTIC_CONFIDENCE,
        contact_hint=ContactHint(contact_page=f"{canonical_url}/contact"),
        ui_analysis=UiAnalysis(
            problems=list(candidate.problems) or list(DEFAULT_PROBLEMS),
            severity=candidate.severity or DEFAULT_SEVERITY,
            quick_fix=candidate.quick_fix or DEFAULT_QUICK_FIX,
            conversion_impact=DEFAULT_CONVERSION_IMPACT,
        ),
        notes=candidate.snippet or DEFAULT_NOTES,
    )


class DiscoveryOrchestrator:
    """
    Turns a set of search queries into a deduplicated, validated site list.

    Pipeline per candidate: canonicalize -> domain policy -> fingerprint
    dedup -> liveness probe (skipped for mock/placeholder data) -> SiteResult.
    """

    def __init__(
        self,
        source: ResultSource,
        prober: Prober,
        policy: DomainPolicy | None = None,
        default_queries: Sequence[str] = DEFAULT_QUERIES,
        directory_seeds: Sequence[str] = DIRECTORY_SEEDS,
        fingerprint_length: int = FINGERPRINT_LENGTH,
    ):
        self.source = source
        self.prober = prober
        self.policy = policy or DomainPolicy()
        self.default_queries = tuple(default_queries)
        self.directory_seeds = tuple(directory_seeds)
        self.fingerprint_length = fingerprint_length

    def _resolve_seed(self, query: str | None) -> tuple[list[str], RunSeed]:
        if query:
            return [query], RunSeed(query=query, sources=["user_query"])
        return list(self.default_queries), RunSeed(
            query="multi-query strategy", sources=[*self.directory_seeds, "web_search"]
        )

    def _source_mode(self, mock: bool) -> SourceMode:
        mode_for = getattr(self.source, "mode_for", None)
        return mode_for(mock) if callable(mode_for) else SourceMode.LIVE

    async def _collect(self, queries: list[str], budget: int, mock: bool) -> list[RawCandidate]:
        candidates: list[RawCandidate] = []
        for query in queries:
            try:
                results = await self.source.search(query, budget, mock)
            except Exception as exc:
                logger.error(
                    f"Error searching for '{query}': {exc}",
                    extra={"extra_fields": {"query": query, "error_type": type(exc).__name__}},
                )
                continue
            candidates.extend(results or [])
        return candidates

    async def run(self, query: str | None = None, limit: int = DEFAULT_LIMIT, mock: bool = False) -> DiscoveryRun:
        if limit <= 0:
            raise ValueError(f"limit must be a positive integer, got {limit}")
        queries, seed = self._resolve_seed(query)
        budget = per_query_budget(limit, len(queries))

        logger.info(f"Starting scout run. Queries: {len(queries)}, target limit: {limit}")

        candidates = await self._collect(queries, budget, mock)
        sites: dict[str, SiteResult] = {}

        for candidate in candidates:
            canonical_url = canonicalize(candidate.url)
            if not canonical_url:
                continue

            if not self.policy.is_allowed(canonical_url):
                logger.debug(f"Blocked domain: {canonical_url}")
                continue

            site_id = fingerprint(canonical_url, self.fingerprint_length)
            if site_id in sites:
                continue

            if not candidate.skips_probe and not await self.prober.is_reachable(canonical_url):
                logger.info(
                    f"Skipping unreachable site: {canonical_url}",
                    extra={"extra_fields": {"url": canonical_url}},
                )
                continue

            sites[site_id] = build_site(candidate, canonical_url, site_id)
            if len(sites) >= limit:
                break

        run = DiscoveryRun(
            run_id=str(uuid.uuid4()),
            seed=seed,
            sites=list(sites.values()),
            metadata={"source_mode": self._source_mode(mock).value},
        )
        logger.info(
            f"Scout run complete. Found {run.site_count} unique sites.",
            extra={"extra_fields": {"run_id": run.run_id, "candidates": len(candidates)}},
        )
        return run
