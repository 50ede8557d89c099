"""Integration tests for PollSession"""

import asyncio

import pytest

from birdiecount.engine import PollSession
from birdiecount.engine.merge import FETCH_ERROR_MESSAGE
from birdiecount.models import Error, Idle, InputParameters, Loading, Ready, Score
from tests.fakes import FakeFeed, GatedFeed, failure, success

FEED_PARAMS = InputParameters(event_id="2025134", round_id="1")


async def settle(session: PollSession) -> None:
    """Let the timer launch its cycle, then wait for outstanding cycles"""
    await asyncio.sleep(0)
    await session.wait_for_in_flight()


@pytest.mark.integration
class TestPollSessionWithoutFeed:
    """Sessions with no event/round evaluate once and never poll"""

    @pytest.mark.asyncio
    async def test_overrides_only_publish_once_without_fetch(self):
        feed = FakeFeed(success(1, 1))
        published = []

        session = PollSession(
            InputParameters(eagle_override=2, birdie_override=3),
            feed,
            on_publish=published.append,
        ).start()
        await asyncio.sleep(0.05)

        assert published == [Ready(score=Score(birdies=3, eagles=2))]
        assert feed.calls == []
        assert not session.is_polling
        session.stop()

    @pytest.mark.asyncio
    async def test_nothing_configured_stays_idle(self):
        feed = FakeFeed(success(1, 1))

        session = PollSession(InputParameters(), feed).start()

        assert session.state == Idle()
        assert not session.is_polling
        assert session.refresh() is None
        assert feed.calls == []
        session.stop()

    @pytest.mark.asyncio
    async def test_run_cycle_without_feed_never_fetches(self):
        feed = FakeFeed(failure())
        published = []
        session = PollSession(InputParameters(), feed, on_publish=published.append)

        state = await session.run_cycle()

        assert state == Idle()
        assert published == [Idle()]
        assert feed.calls == []

    @pytest.mark.asyncio
    async def test_run_cycle_with_overrides_only(self):
        feed = FakeFeed(failure())
        session = PollSession(
            InputParameters(event_id="2025134", eagle_override=2, birdie_override=3),
            feed,
        )

        state = await session.run_cycle()

        assert state == Ready(score=Score(birdies=3, eagles=2))
        assert feed.calls == []


@pytest.mark.integration
class TestPollSessionWithFeed:
    """Sessions that poll the feed"""

    @pytest.mark.asyncio
    async def test_starts_loading_then_ready_after_immediate_cycle(self):
        feed = FakeFeed(success(5, 5))
        published = []

        session = PollSession(FEED_PARAMS, feed, on_publish=published.append).start()
        assert session.state == Loading()

        await settle(session)

        assert feed.calls == [("2025134", "1")]
        assert session.state == Ready(score=Score(birdies=5, eagles=5))
        assert published == [Loading(), Ready(score=Score(birdies=5, eagles=5))]
        assert session.is_polling
        session.stop()
        assert not session.is_polling

    @pytest.mark.asyncio
    async def test_overrides_added_to_fetched_counts(self):
        params = InputParameters(
            event_id="2025134", round_id="1", eagle_override=1, birdie_override=1
        )
        session = PollSession(params, FakeFeed(success(5, 5))).start()

        await settle(session)

        assert session.state == Ready(score=Score(birdies=6, eagles=6))
        session.stop()

    @pytest.mark.asyncio
    async def test_failure_without_overrides_is_error(self):
        session = PollSession(FEED_PARAMS, FakeFeed(failure())).start()

        await settle(session)

        assert session.state == Error(message=FETCH_ERROR_MESSAGE)
        session.stop()

    @pytest.mark.asyncio
    async def test_failure_with_overrides_falls_back(self):
        params = InputParameters(
            event_id="2025134", round_id="1", eagle_override=4, birdie_override=7
        )
        session = PollSession(params, FakeFeed(failure())).start()

        await settle(session)

        assert session.state == Ready(score=Score(birdies=7, eagles=4))
        session.stop()

    @pytest.mark.asyncio
    @pytest.mark.slow
    async def test_ticks_repeat_on_fixed_interval(self):
        feed = FakeFeed(success(1, 0))

        session = PollSession(FEED_PARAMS, feed, interval=0.05).start()
        await asyncio.sleep(0.18)
        session.stop()

        assert len(feed.calls) >= 3
        assert session.cycles_completed == len(feed.calls)

    @pytest.mark.asyncio
    @pytest.mark.slow
    async def test_error_recovers_on_next_tick(self):
        feed = FakeFeed(failure(), success(2, 1))
        published = []

        session = PollSession(
            FEED_PARAMS, feed, interval=0.05, on_publish=published.append
        ).start()
        await asyncio.sleep(0.08)
        await session.wait_for_in_flight()
        session.stop()

        assert published[:3] == [
            Loading(),
            Error(message=FETCH_ERROR_MESSAGE),
            Ready(score=Score(birdies=2, eagles=1)),
        ]

    @pytest.mark.asyncio
    async def test_error_does_not_keep_previous_score(self):
        feed = FakeFeed(success(3, 3), failure())

        session = PollSession(FEED_PARAMS, feed).start()
        await settle(session)
        assert isinstance(session.state, Ready)

        await session.refresh()

        assert session.state == Error(message=FETCH_ERROR_MESSAGE)
        session.stop()

    @pytest.mark.asyncio
    @pytest.mark.slow
    async def test_ticks_do_not_wait_for_outstanding_requests(self):
        feed = GatedFeed(success(1, 1))

        session = PollSession(FEED_PARAMS, feed, interval=0.05).start()
        await asyncio.sleep(0.12)

        assert feed.calls >= 2
        assert session.in_flight >= 2
        assert session.state == Loading()

        session.stop()
        feed.gate.set()
        await session.wait_for_in_flight()

    @pytest.mark.asyncio
    async def test_last_completed_cycle_wins(self):
        gates = [asyncio.Event(), asyncio.Event()]
        outcomes = [success(1, 0), success(9, 0)]
        calls = []

        class OrderedFeed:
            async def fetch_scores(self, event_id, round_id):
                index = len(calls)
                calls.append(index)
                await gates[index].wait()
                return outcomes[index]

        session = PollSession(FEED_PARAMS, OrderedFeed()).start()
        await asyncio.sleep(0)
        session.refresh()
        await asyncio.sleep(0)

        gates[1].set()
        await asyncio.sleep(0.01)
        assert session.state == Ready(score=Score(birdies=9))

        gates[0].set()
        await session.wait_for_in_flight()
        assert session.state == Ready(score=Score(birdies=1))
        session.stop()


@pytest.mark.integration
class TestPollSessionTeardown:
    """Stopping a session"""

    @pytest.mark.asyncio
    async def test_late_result_is_discarded_after_stop(self):
        feed = GatedFeed(success(5, 5))
        published = []

        session = PollSession(FEED_PARAMS, feed, on_publish=published.append).start()
        await feed.started.wait()

        session.stop()
        feed.gate.set()
        await session.wait_for_in_flight()

        assert session.state == Loading()
        assert published == [Loading()]
        assert session.cycles_completed == 0

    @pytest.mark.asyncio
    @pytest.mark.slow
    async def test_stop_cancels_future_ticks(self):
        feed = FakeFeed(success(1, 1))

        session = PollSession(FEED_PARAMS, feed, interval=0.05).start()
        await settle(session)
        session.stop()
        calls_at_stop = len(feed.calls)
        await asyncio.sleep(0.15)

        assert len(feed.calls) == calls_at_stop
        assert not session.is_active

    @pytest.mark.asyncio
    async def test_stop_is_idempotent(self):
        session = PollSession(FEED_PARAMS, FakeFeed(success(1, 1))).start()

        session.stop()
        session.stop()

        assert not session.is_active
        assert session.refresh() is None

    @pytest.mark.asyncio
    async def test_start_after_stop_does_nothing(self):
        feed = FakeFeed(success(1, 1))
        published = []
        session = PollSession(FEED_PARAMS, feed, on_publish=published.append)

        session.stop()
        session.start()
        await asyncio.sleep(0.01)

        assert published == []
        assert not session.is_polling
        assert feed.calls == []

    @pytest.mark.asyncio
    async def test_start_twice_returns_same_session(self):
        feed = FakeFeed(success(1, 1))
        session = PollSession(FEED_PARAMS, feed)

        assert session.start() is session.start()
        await settle(session)

        assert len(feed.calls) == 1
        session.stop()

    @pytest.mark.asyncio
    async def test_publish_callback_error_does_not_stop_session(self):
        def explode(state):
            raise RuntimeError("display went away")

        session = PollSession(FEED_PARAMS, FakeFeed(success(2, 2)), on_publish=explode).start()
        await settle(session)

        assert session.state == Ready(score=Score(birdies=2, eagles=2))
        assert session.is_polling
        session.stop()
