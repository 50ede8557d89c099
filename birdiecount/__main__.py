"""Main entry point for the birdie counter."""

import argparse
import asyncio
import json
import logging
import sys

from .api import DemoScoreFeedAPI, ScoreFeedAPI
from .config import load_settings
from .engine import PollSession, resolve_parameters
from .engine.resolver import query_from_url
from .engine.scheduler import ScoreFetcher
from .models import Error, InputParameters, state_summary
from .models.mock_data import DEMO_EVENT_ID, DEMO_ROUND_ID
from .ui import ScoreDisplay
from .ui.score_display import DEFAULT_TITLE
from .utils.logging import log


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Live birdie and eagle counter")
    parser.add_argument("--event", help="Feed event ID")
    parser.add_argument("--round", help="Feed round ID")
    parser.add_argument("--ea", help="Eagle override (added to live counts)")
    parser.add_argument("--bi", help="Birdie override (added to live counts)")
    parser.add_argument(
        "--url",
        help="Page URL carrying event/round/ea/bi in its query string",
    )
    parser.add_argument(
        "--interval", type=float, help="Seconds between polls (default 60)"
    )
    parser.add_argument("--feed-url", help="Base URL of the hole-by-hole feed")
    parser.add_argument("--title", default=DEFAULT_TITLE, help="Display title")
    parser.add_argument("--demo", action="store_true", help="Run with demo data")
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single poll cycle, print the result as JSON and exit",
    )
    return parser


def collect_parameters(args: argparse.Namespace, env_query: dict[str, str]) -> InputParameters:
    """Merge parameter carriers: flags over --url over the environment"""
    query: dict[str, str] = dict(env_query)
    if args.url:
        query.update(query_from_url(args.url))
    for key in ("event", "round", "ea", "bi"):
        value = getattr(args, key)
        if value is not None:
            query[key] = value

    if args.demo:
        query.setdefault("event", DEMO_EVENT_ID)
        query.setdefault("round", DEMO_ROUND_ID)

    return resolve_parameters(query)


async def run_once(params: InputParameters, api: ScoreFetcher) -> int:
    """Run one cycle without the TUI and print the published state"""
    session = PollSession(params, api)
    state = await session.run_cycle()
    session.stop()
    print(json.dumps(state_summary(state)))
    return 1 if isinstance(state, Error) else 0


def cleanup_terminal():
    """Cleanup terminal state to prevent mouse tracking issues"""
    try:
        sys.stdout.write(
            "\033[?1000l\033[?1003l\033[?1015l\033[?1006l\033[?25h\033[?1004l"
        )
        sys.stdout.flush()
    except OSError:
        pass


def main(argv: list[str] | None = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)
    settings = load_settings()

    params = collect_parameters(args, settings.parameter_mapping())
    interval = args.interval if args.interval and args.interval > 0 else settings.poll_interval
    feed_url = args.feed_url or settings.feed_url

    log("🔍 Resolved parameters:")
    log(f"   Event: {params.event_id}")
    log(f"   Round: {params.round_id}")
    log(f"   Eagle override: {params.eagle_override}")
    log(f"   Birdie override: {params.birdie_override}")
    log(f"   Demo: {args.demo}")

    api: ScoreFetcher
    if args.demo:
        log("🏆 Running in DEMO mode with mock feed data")
        api = DemoScoreFeedAPI()
    else:
        api = ScoreFeedAPI(base_url=feed_url)
        if params.has_feed:
            log(f"🌐 Polling live feed every {interval:g}s: {feed_url}")
        elif params.has_both_overrides:
            log("✍️  No event/round given - showing override counts only")
        else:
            log("⚠️  No event/round or overrides given - nothing to count", logging.WARNING)

    if args.once:
        return asyncio.run(run_once(params, api))

    app = ScoreDisplay(params=params, api=api, poll_interval=interval, title=args.title)

    try:
        log("🏁 Starting Textual app...")
        app.run()
        log("🏁 Textual app finished")
    except KeyboardInterrupt:
        log("\n👋 Birdie counter stopped")
    except Exception as e:
        log(f"❌ App crashed: {type(e).__name__}: {e}", logging.ERROR)
        return 1
    finally:
        # Always clean up terminal state regardless of how app exits
        cleanup_terminal()
    return 0


if __name__ == "__main__":
    sys.exit(main())
