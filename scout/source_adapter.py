"""Search adapter that isolates discovery from the upstream provider's shapes."""

import asyncio
import random
from collections.abc import Sequence
from dataclasses import replace

from utils.logger import get_logger

from .contracts import MOCK_SOURCE, PLACEHOLDER_SOURCE, RawCandidate, SourceMode
from .mock_pool import MOCK_SITES

logger = get_logger(__name__)


class YutoriSearchAdapter:
    """
    Result source for the discovery orchestrator.

    The Yutori scouting API has no synchronous search endpoint yet, so a
    configured key puts the adapter in PLACEHOLDER mode: it serves the mock
    pool under a distinct source tag and says so in the logs and in
    mode_for(), instead of pretending the results are live.
    """

    def __init__(
        self,
        api_key: str | None = None,
        mock_pool: Sequence[RawCandidate] = MOCK_SITES,
        rng: random.Random | None = None,
        placeholder_delay_s: float = 0.0,
    ):
        """
        Args:
            api_key: Yutori API key; None forces mock mode
            mock_pool: Candidates served in mock and placeholder modes
            rng: Random source for mock shuffling (seed it for repeatable tests)
            placeholder_delay_s: Simulated network latency in placeholder mode
        """
        self.api_key = api_key
        self.mock_pool = tuple(mock_pool)
        self._rng = rng or random.Random()
        self.placeholder_delay_s = placeholder_delay_s

    def mode_for(self, force_mock: bool = False) -> SourceMode:
        if force_mock or not self.api_key:
            return SourceMode.MOCK
        return SourceMode.PLACEHOLDER

    async def search(self, query: str, limit: int, force_mock: bool = False) -> list[RawCandidate]:
        """
        Fetch raw candidates for one query.

        Returns:
            At most `limit` candidates; an empty list is a valid answer
        """
        limit = max(0, int(limit))
        mode = self.mode_for(force_mock)

        if mode is SourceMode.MOCK:
            if force_mock:
                logger.info("Mock mode enabled via flag")
            else:
                logger.warning("No YUTORI_API_KEY found, falling back to mock mode")
            shuffled = list(self.mock_pool)
            self._rng.shuffle(shuffled)
            return [replace(site, source=MOCK_SOURCE) for site in shuffled[:limit]]

        logger.info(f"Searching Yutori for: '{query}' (limit: {limit})")
        logger.warning(
            "Yutori search is not wired yet; serving placeholder results",
            extra={"extra_fields": {"query": query, "source_mode": mode.value}},
        )
        if self.placeholder_delay_s:
            await asyncio.sleep(self.placeholder_delay_s)
        return [replace(site, source=PLACEHOLDER_SOURCE) for site in self.mock_pool[:limit]]
