"""Discovery orchestrator behaviour with in-memory sources and probers (no network)."""

import asyncio
import re

import pytest

from orchestrator.discovery import (
    DEFAULT_QUERIES,
    DIRECTORY_SEEDS,
    HEURISTIC_CONFIDENCE,
    DiscoveryOrchestrator,
    per_query_budget,
)
from scout.contracts import ScoutSourceError
from scout.domain_policy import DomainPolicy
from scout.source_adapter import YutoriSearchAdapter
from scout.urls import canonicalize, fingerprint

pytestmark = pytest.mark.unit

HEX10 = re.compile(r"^[0-9a-f]{10}$")


class FakeSource:
    def __init__(self, results_by_query=None, failing=()):
        self.results_by_query = results_by_query or {}
        self.failing = set(failing)
        self.calls = []

    async def search(self, query, limit, force_mock=False):
        self.calls.append((query, limit, force_mock))
        if query in self.failing:
            raise ScoutSourceError("upstream down", query=query)
        return list(self.results_by_query.get(query, []))[:limit]


class FakeProber:
    def __init__(self, unreachable=()):
        self.unreachable = set(unreachable)
        self.probed = []

    async def is_reachable(self, url, timeout_ms=None):
        self.probed.append(url)
        return url not in self.unreachable


def _run(orchestrator, **kwargs):
    return asyncio.run(orchestrator.run(**kwargs))


def test_per_query_budget_overfetches_with_floor():
    assert per_query_budget(20, 7) == 5
    assert per_query_budget(20, 1) == 30
    assert per_query_budget(3, 1) == 5
    assert per_query_budget(40, 7) == 9


def test_duplicates_keep_first_seen(make_candidate):
    source = FakeSource(
        {
            "q": [
                make_candidate("https://Example.com/?utm_source=x", title="First"),
                make_candidate("example.com", title="Second"),
            ]
        }
    )
    run = _run(DiscoveryOrchestrator(source, FakeProber()), query="q", limit=5)

    assert len(run.sites) == 1
    site = run.sites[0]
    assert site.name == "First"
    assert site.site_id == fingerprint(canonicalize("example.com"))


def test_early_exit_caps_results_and_stops_probing(make_candidate):
    candidates = [make_candidate(f"https://site{i}.dev") for i in range(10)]
    prober = FakeProber()
    run = _run(DiscoveryOrchestrator(FakeSource({"q": candidates}), prober), query="q", limit=3)

    assert [s.url for s in run.sites] == ["https://site0.dev", "https://site1.dev", "https://site2.dev"]
    assert len(prober.probed) == 3


def test_invalid_blocked_and_unreachable_candidates_dropped(make_candidate):
    source = FakeSource(
        {
            "q": [
                make_candidate("ftp://files.example.com"),
                make_candidate("https://twitter.com/someone"),
                make_candidate("https://down.example.com"),
                make_candidate("https://up.example.com"),
            ]
        }
    )
    prober = FakeProber(unreachable={"https://down.example.com"})
    run = _run(DiscoveryOrchestrator(source, prober), query="q", limit=10)

    assert [s.url for s in run.sites] == ["https://up.example.com"]
    assert prober.probed == ["https://down.example.com", "https://up.example.com"]


def test_mock_and_placeholder_sources_are_not_probed(make_candidate):
    source = FakeSource(
        {
            "q": [
                make_candidate("https://a.example.com", source="mock_yutori_data"),
                make_candidate("https://b.example.com", source="yutori_api_placeholder"),
            ]
        }
    )
    prober = FakeProber()
    run = _run(DiscoveryOrchestrator(source, prober), query="q", limit=10)

    assert len(run.sites) == 2
    assert prober.probed == []


def test_failed_query_does_not_abort_run(make_candidate):
    source = FakeSource({"good": [make_candidate("https://ok.example.com")]}, failing={"bad"})
    orchestrator = DiscoveryOrchestrator(source, FakeProber(), default_queries=["bad", "good"])
    run = _run(orchestrator, limit=5)

    assert [q for q, _, _ in source.calls] == ["bad", "good"]
    assert [s.url for s in run.sites] == ["https://ok.example.com"]


def test_zero_results_is_an_empty_run():
    run = _run(DiscoveryOrchestrator(FakeSource(), FakeProber()), query="nothing", limit=5)
    assert run.sites == []
    assert run.to_dict()["sites"] == []


def test_site_defaults_when_candidate_has_no_hints(make_candidate):
    source = FakeSource({"q": [make_candidate("https://plain.example.com/app")]})
    site = _run(DiscoveryOrchestrator(source, FakeProber()), query="q").sites[0]

    assert site.name == "plain.example.com"
    assert site.confidence == HEURISTIC_CONFIDENCE
    assert site.contact_hint.contact_page == "https://plain.example.com/app/contact"
    assert site.ui_analysis.severity == "Medium"
    assert site.ui_analysis.problems
    assert site.notes


def test_candidate_hints_carry_into_ui_analysis(make_candidate):
    source = FakeSource(
        {
            "q": [
                make_candidate(
                    "https://hinted.example.com",
                    title="Hinted",
                    snippet="Solo founder MVP",
                    problems=["Missing alt text"],
                    severity="High",
                    quick_fix="Add alt attributes.",
                )
            ]
        }
    )
    site = _run(DiscoveryOrchestrator(source, FakeProber()), query="q").sites[0]
    assert site.ui_analysis.problems == ["Missing alt text"]
    assert site.ui_analysis.severity == "High"
    assert site.ui_analysis.quick_fix == "Add alt attributes."
    assert site.notes == "Solo founder MVP"


def test_default_strategy_seed_and_query_order():
    source = FakeSource()
    run = _run(DiscoveryOrchestrator(source, FakeProber()), limit=20)

    assert [q for q, _, _ in source.calls] == list(DEFAULT_QUERIES)
    assert all(limit == per_query_budget(20, len(DEFAULT_QUERIES)) for _, limit, _ in source.calls)
    assert run.seed.query == "multi-query strategy"
    assert run.seed.sources == [*DIRECTORY_SEEDS, "web_search"]


def test_query_order_decides_which_duplicate_wins(make_candidate):
    source = FakeSource(
        {
            "first": [make_candidate("https://shared.example.com", title="From first")],
            "second": [make_candidate("https://shared.example.com", title="From second")],
        }
    )
    orchestrator = DiscoveryOrchestrator(source, FakeProber(), default_queries=["first", "second"])
    run = _run(orchestrator, limit=5)
    assert [s.name for s in run.sites] == ["From first"]


def test_injected_policy_is_respected(make_candidate):
    source = FakeSource({"q": [make_candidate("https://twitter.com/a"), make_candidate("https://corp.example")]})
    orchestrator = DiscoveryOrchestrator(source, FakeProber(), policy=DomainPolicy({"corp.example"}))
    run = _run(orchestrator, query="q")
    assert [s.url for s in run.sites] == ["https://twitter.com/a"]


def test_end_to_end_mock_run():
    policy = DomainPolicy()
    orchestrator = DiscoveryOrchestrator(YutoriSearchAdapter(api_key=None), FakeProber(), policy=policy)
    run = _run(orchestrator, query="site:example-forum.com feedback", limit=3, mock=True)

    assert len(run.sites) <= 3
    assert all(policy.is_allowed(site.url) for site in run.sites)
    ids = [site.site_id for site in run.sites]
    assert len(set(ids)) == len(ids)
    assert all(HEX10.match(site_id) for site_id in ids)

    payload = run.to_dict()
    assert payload["seed"] == {"query": "site:example-forum.com feedback", "sources": ["user_query"]}
    assert payload["metadata"]["source_mode"] == "mock"
    assert payload["generated_at"].endswith("Z")


@pytest.mark.parametrize("limit", [0, -3])
def test_non_positive_limit_is_rejected(limit):
    source = FakeSource()
    with pytest.raises(ValueError):
        _run(DiscoveryOrchestrator(source, FakeProber()), query="q", limit=limit)
    assert source.calls == []
