"""Polling session that drives fetch, count and merge on a fixed cadence."""

import asyncio
import logging
from typing import Callable, Protocol

from ..models.score import EngineState, FetchOutcome, Idle, InputParameters, Loading
from ..utils.logging import log
from .merge import merge_scores, select_rule

POLL_INTERVAL_SECONDS = 60.0


class ScoreFetcher(Protocol):
    async def fetch_scores(self, event_id: str, round_id: str) -> FetchOutcome: ...


PublishCallback = Callable[[EngineState], None]


class PollSession:
    """One set of input parameters driving zero or more poll cycles.

    ``start()`` publishes the initial state and, when the feed is configured,
    begins ticking every ``interval`` seconds with an immediate first cycle.
    Ticks are fixed wall-clock: a slow request does not delay the next tick,
    and whichever cycle completes last wins. ``stop()`` cancels the timer and
    voids the result of any request still in flight.
    """

    def __init__(
        self,
        params: InputParameters,
        api: ScoreFetcher,
        interval: float = POLL_INTERVAL_SECONDS,
        on_publish: PublishCallback | None = None,
    ):
        self.params: InputParameters = params
        self.api: ScoreFetcher = api
        self.interval: float = interval
        self.on_publish: PublishCallback | None = on_publish
        self.state: EngineState = Idle()
        self.cycles_completed: int = 0
        self._timer: asyncio.Task[None] | None = None
        self._in_flight: set[asyncio.Task[EngineState]] = set()
        self._started: bool = False
        self._stopped: bool = False

    @property
    def is_active(self) -> bool:
        return self._started and not self._stopped

    @property
    def is_polling(self) -> bool:
        return self._timer is not None and not self._timer.done()

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    def start(self) -> "PollSession":
        """Begin the session; must be called from a running event loop"""
        if self._started or self._stopped:
            return self
        self._started = True
        log(f"🏁 Poll session starting: {self.params!r}")

        if not self.params.has_feed:
            # One evaluation, no timer
            self._publish(merge_scores(self.params, None))
            return self

        self._publish(Loading())
        self._timer = asyncio.create_task(self._tick_forever())
        return self

    def stop(self) -> None:
        """End the session. Safe to call more than once."""
        if self._stopped:
            return
        self._stopped = True
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._in_flight:
            log(f"🛑 Poll session stopped with {len(self._in_flight)} request(s) in flight")
        else:
            log("🛑 Poll session stopped")

    def refresh(self) -> "asyncio.Task[EngineState] | None":
        """Run an extra cycle now without moving the regular ticks"""
        if not self.is_active or not self.params.has_feed:
            return None
        return self._launch_cycle()

    async def run_cycle(self) -> EngineState:
        """Fetch, count and merge once, then publish unless stopped meanwhile"""
        if not self.params.event_id or not self.params.round_id:
            # No feed to poll; evaluate overrides alone
            new_state = merge_scores(self.params, None)
            if not self._stopped:
                self._publish(new_state)
            return new_state

        log(f"🔄 Poll cycle for event {self.params.event_id} round {self.params.round_id}")
        outcome = await self.api.fetch_scores(self.params.event_id, self.params.round_id)

        if self._stopped:
            log("🗑️  Discarding result that arrived after session stop")
            return self.state

        rule = select_rule(self.params, outcome)
        new_state = rule.publish(self.params, outcome)
        log(f"🔄 Merge rule '{rule.name}' -> {new_state.status}")
        self.cycles_completed += 1
        self._publish(new_state)
        return new_state

    async def wait_for_in_flight(self) -> None:
        """Wait until every outstanding cycle has finished"""
        while self._in_flight:
            await asyncio.gather(*list(self._in_flight), return_exceptions=True)

    def _launch_cycle(self) -> "asyncio.Task[EngineState]":
        task = asyncio.create_task(self.run_cycle())
        self._in_flight.add(task)
        task.add_done_callback(self._cycle_done)
        return task

    def _cycle_done(self, task: "asyncio.Task[EngineState]") -> None:
        self._in_flight.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            log(f"❌ Poll cycle crashed: {type(exc).__name__}: {exc}", logging.ERROR)

    async def _tick_forever(self) -> None:
        while not self._stopped:
            self._launch_cycle()
            await asyncio.sleep(self.interval)

    def _publish(self, state: EngineState) -> None:
        self.state = state
        if self.on_publish is None:
            return
        try:
            self.on_publish(state)
        except Exception as e:
            log(f"⚠️  Publish callback failed: {type(e).__name__}: {e}", logging.WARNING)
