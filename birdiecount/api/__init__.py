"""API module for score feed fetching."""

from .score_feed_api import DemoScoreFeedAPI, ScoreFeedAPI, ScoreFeedError

__all__ = ["ScoreFeedAPI", "DemoScoreFeedAPI", "ScoreFeedError"]
