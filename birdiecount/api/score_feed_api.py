"""Hole-by-hole score feed client."""

import asyncio
import json
import logging

import aiohttp
from pydantic import ValidationError

from ..config import DEFAULT_FEED_URL
from ..engine.counter import count_events
from ..models.feed_api import HoleByHoleResponse
from ..models.mock_data import MOCK_HOLE_BY_HOLE
from ..models.score import FetchFailure, FetchOutcome, FetchSuccess
from ..utils.logging import log


class ScoreFeedError(Exception):
    """The feed could not be reached or returned an unusable document"""


class ScoreFeedAPI:
    """Handle API calls to the hole-by-hole feed"""

    def __init__(self, base_url: str = DEFAULT_FEED_URL, timeout: float = 10.0):
        self.base_url: str = base_url.rstrip("/")
        self.timeout: float = timeout

    def round_url(self, event_id: str, round_id: str) -> str:
        return f"{self.base_url}/Event/{event_id}/Round/{round_id}"

    async def fetch_hole_by_hole(
        self, event_id: str, round_id: str
    ) -> HoleByHoleResponse:
        """Fetch and validate one round's hole-by-hole document.

        Raises ScoreFeedError for transport errors, non-200 responses,
        non-JSON bodies and documents without players and holes.
        """
        url = self.round_url(event_id, round_id)
        try:
            async with aiohttp.ClientSession() as session:
                log(f"🔍 Fetching hole-by-hole data: {url}")
                async with session.get(
                    url,
                    headers={"Accept": "application/json"},
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                ) as response:
                    log(f"📡 Feed Response Status: {response.status}")

                    if response.status != 200:
                        error_text = await response.text()
                        log(f"❌ HTTP Error: {error_text[:200]}", logging.ERROR)
                        raise ScoreFeedError(f"HTTP {response.status}")

                    # Some feed hosts mislabel JSON as text/plain
                    raw_data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ScoreFeedError(f"{type(e).__name__}: {e}") from e
        except json.JSONDecodeError as e:
            raise ScoreFeedError(f"Response is not JSON: {e}") from e

        if not isinstance(raw_data, dict):
            raise ScoreFeedError(
                f"Expected a JSON object, got {type(raw_data).__name__}"
            )

        try:
            document = HoleByHoleResponse(**raw_data)
        except ValidationError as e:
            log(f"❌ Pydantic validation error: {e}", logging.ERROR)
            log(f"📋 Raw response: {json.dumps(raw_data)[:500]}...")
            raise ScoreFeedError(f"Feed validation failed: {e}") from e

        log(f"✅ Feed document has {len(document.Players)} players")
        return document

    async def fetch_scores(self, event_id: str, round_id: str) -> FetchOutcome:
        """Fetch one round and count its birdies and eagles.

        Never raises: every failure becomes a FetchFailure.
        """
        try:
            document = await self.fetch_hole_by_hole(event_id, round_id)
        except ScoreFeedError as e:
            log(f"❌ Feed Error: {e}", logging.ERROR)
            return FetchFailure(reason=str(e))
        except Exception as e:
            log(f"❌ Unexpected feed error: {type(e).__name__}: {e}", logging.ERROR)
            return FetchFailure(reason=f"{type(e).__name__}: {e}")

        score = count_events(document.Players)
        log(f"📊 Counted {score.birdies} birdies, {score.eagles} eagles")
        return FetchSuccess(score=score)


class DemoScoreFeedAPI(ScoreFeedAPI):
    """Feed client that serves the mock document instead of the network"""

    def __init__(self, delay: float = 0.1):
        super().__init__(base_url="demo://hole-by-hole")
        self.delay = delay

    async def fetch_hole_by_hole(
        self, event_id: str, round_id: str
    ) -> HoleByHoleResponse:
        log(f"🧪 Serving mock hole-by-hole data for {event_id}/{round_id}")
        await asyncio.sleep(self.delay)  # Simulate network delay
        return HoleByHoleResponse(**MOCK_HOLE_BY_HOLE)
