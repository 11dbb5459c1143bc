import os
import tempfile

# Keep JSON log files out of the working tree during test runs.
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "accessscout-test-logs"))

import pytest

from scout.contracts import RawCandidate


@pytest.fixture
def mock_env(monkeypatch):
    """Fixture to mock environment variables for testing."""
    env_vars = {
        "API_KEYS": "dev-key-1",
        "YUTORI_API_KEY": "test-yutori-key",
        "OPENAI_API_KEY": "test-openai-key",
        "LINEAR_API_KEY": "test-linear-key",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture
def no_provider_keys(monkeypatch):
    for key in ("YUTORI_API_KEY", "OPENAI_API_KEY", "LINEAR_API_KEY"):
        monkeypatch.setenv(key, "")


@pytest.fixture
def make_candidate():
    """Factory for RawCandidates tagged as live search hits (so they get probed)."""

    def _make(url: str, title: str | None = None, source: str = "web_search", **kwargs) -> RawCandidate:
        return RawCandidate(url=url, title=title, source=source, **kwargs)

    return _make
