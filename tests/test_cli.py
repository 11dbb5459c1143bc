import json

import pytest

import main as cli

pytestmark = pytest.mark.unit


def test_parser_defaults():
    args = cli.build_parser().parse_args([])
    assert args.limit == 20
    assert args.query is None
    assert args.mock is False
    assert args.out is None


def test_scout_actions_are_mutually_exclusive():
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args(["--list-scouts", "--poll-scout", "abc"])


def test_mock_run_writes_output_file(tmp_path, no_provider_keys):
    out = tmp_path / "nested" / "sites.json"

    code = cli.main(["--mock", "--query", "site:example-forum.com feedback", "--limit", "3", "--out", str(out)])

    assert code == 0
    payload = json.loads(out.read_text(encoding="utf-8"))
    assert set(payload) >= {"run_id", "generated_at", "seed", "sites"}
    assert len(payload["sites"]) <= 3
    assert payload["metadata"]["source_mode"] == "mock"


def test_missing_key_falls_back_to_mock_with_warning(tmp_path, no_provider_keys, capsys):
    out = tmp_path / "sites.json"

    code = cli.main(["--limit", "2", "--out", str(out)])

    assert code == 0
    assert "YUTORI_API_KEY is missing" in capsys.readouterr().out
    assert json.loads(out.read_text(encoding="utf-8"))["metadata"]["source_mode"] == "mock"


@pytest.mark.parametrize("flags", [["--list-scouts"], ["--scout-status", "abc"], ["--poll-scout", "abc"], ["--create-scout"]])
def test_scout_actions_need_a_key(flags, no_provider_keys, capsys):
    assert cli.main(flags) == 1
    assert "YUTORI_API_KEY" in capsys.readouterr().err


def test_non_positive_limit_is_usage_error(no_provider_keys):
    assert cli.main(["--limit", "0"]) == 2


def test_poll_scout_writes_mapped_sites(tmp_path, mock_env, monkeypatch):
    updates = [{"structured_result": {"site_url": "https://polled.example.com", "site_name": "Polled"}}]

    async def fake_updates(self, scout_id, page_size=20):
        assert scout_id == "s-1"
        return updates

    monkeypatch.setattr(cli.YutoriClient, "get_scout_updates", fake_updates)
    out = tmp_path / "poll.json"

    assert cli.main(["--poll-scout", "s-1", "--out", str(out)]) == 0

    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["seed"]["query"] == "scout:s-1"
    assert [s["name"] for s in payload["sites"]] == ["Polled"]
