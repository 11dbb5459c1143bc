import asyncio
import json

import httpx
import pytest

from api.base_client import UpstreamAPIError
from api.yutori_client import OWNER_SCHEMA, SCOUT_RESULT_SCHEMA, YutoriClient

pytestmark = pytest.mark.unit


def _client(handler, calls=None):
    def recording(request: httpx.Request):
        if calls is not None:
            calls.append(request)
        return handler(request)

    return YutoriClient(api_key="test-yutori-key", transport=httpx.MockTransport(recording))


def test_requires_api_key():
    with pytest.raises(ValueError):
        YutoriClient(api_key="")


def test_create_scout_sends_schema_and_auth():
    calls = []
    client = _client(lambda req: httpx.Response(200, json={"id": "s-1", "status": "active"}), calls)

    scout = asyncio.run(client.create_scout("indie saas launches"))

    request = calls[0]
    body = json.loads(request.content)
    assert request.method == "POST"
    assert request.url.path == "/v1/scouting/tasks"
    assert request.headers["X-API-Key"] == "test-yutori-key"
    assert body["query"] == "indie saas launches"
    assert body["schedule"] == "0 9 * * *"
    assert body["schema"] == SCOUT_RESULT_SCHEMA
    assert scout.id == "s-1"
    assert scout.query == "indie saas launches"
    assert scout.is_active


@pytest.mark.parametrize(
    "payload",
    [
        [{"id": "a", "status": "active", "query": "q"}],
        {"tasks": [{"id": "a", "status": "active", "query": "q"}]},
        {"scouts": [{"id": "a", "status": "active", "query": "q"}]},
    ],
)
def test_list_scouts_accepts_known_shapes(payload):
    client = _client(lambda req: httpx.Response(200, json=payload))
    scouts = asyncio.run(client.list_scouts())
    assert [s.id for s in scouts] == ["a"]


def test_list_scouts_unknown_shape_is_empty():
    client = _client(lambda req: httpx.Response(200, json={"weird": True}))
    assert asyncio.run(client.list_scouts()) == []


def test_find_active_scout_matches_query_and_status():
    payload = [
        {"id": "paused", "status": "paused", "query": "q"},
        {"id": "other", "status": "active", "query": "different"},
        {"id": "hit", "status": "ACTIVE", "query": "q"},
    ]
    client = _client(lambda req: httpx.Response(200, json=payload))
    assert asyncio.run(client.find_active_scout("q")).id == "hit"
    assert asyncio.run(client.find_active_scout("missing")) is None


def test_get_scout_updates_passes_page_size():
    calls = []
    client = _client(lambda req: httpx.Response(200, json={"updates": [{"id": 1}, "junk"]}), calls)

    updates = asyncio.run(client.get_scout_updates("s-9", page_size=5))

    assert updates == [{"id": 1}]
    assert calls[0].url.path == "/v1/scouting/tasks/s-9/updates"
    assert calls[0].url.params["page_size"] == "5"


def test_browsing_task_round_trip_paths():
    calls = []
    client = _client(lambda req: httpx.Response(200, json={"task_id": "t-1", "status": "queued"}), calls)

    created = asyncio.run(client.create_browsing_task("https://example.com", "check contrast"))
    fetched = asyncio.run(client.get_browsing_task("t-1"))

    assert created["task_id"] == "t-1"
    assert fetched["status"] == "queued"
    assert json.loads(calls[0].content) == {"start_url": "https://example.com", "task": "check contrast"}
    assert calls[1].method == "GET"
    assert calls[1].url.path == "/v1/browsing/tasks/t-1"


def test_find_site_owners_uses_research_schema():
    calls = []
    client = _client(lambda req: httpx.Response(200, json={"task_id": "r-1"}), calls)

    asyncio.run(client.find_site_owners(["https://a.example.com", "https://b.example.com"]))

    body = json.loads(calls[0].content)
    assert calls[0].url.path == "/v1/research/tasks"
    assert "https://a.example.com, https://b.example.com" in body["query"]
    assert body["task_spec"]["output_schema"]["json_schema"] == OWNER_SCHEMA


def test_non_2xx_raises_upstream_error_with_details():
    client = _client(lambda req: httpx.Response(401, text="bad key"))

    with pytest.raises(UpstreamAPIError) as exc_info:
        asyncio.run(client.get_scout_status("s-1"))

    assert exc_info.value.status_code == 401
    assert exc_info.value.details == "bad key"
    assert exc_info.value.service == "yutori"


def test_transport_error_maps_to_502():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(UpstreamAPIError) as exc_info:
        asyncio.run(_client(handler).list_scouts())

    assert exc_info.value.status_code == 502


def test_empty_body_decodes_to_empty_dict():
    client = _client(lambda req: httpx.Response(204))
    assert asyncio.run(client.get_scout_status("s-1")) == {}
