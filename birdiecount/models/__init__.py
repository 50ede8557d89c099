"""Data models for scores, engine states and the feed document."""

from .feed_api import FeedHole, FeedPlayer, HoleByHoleResponse
from .score import (
    EngineState,
    Error,
    FetchFailure,
    FetchOutcome,
    FetchSuccess,
    Idle,
    InputParameters,
    Loading,
    Ready,
    Score,
    state_summary,
)

__all__ = [
    "EngineState",
    "Error",
    "FeedHole",
    "FeedPlayer",
    "FetchFailure",
    "FetchOutcome",
    "FetchSuccess",
    "HoleByHoleResponse",
    "Idle",
    "InputParameters",
    "Loading",
    "Ready",
    "Score",
    "state_summary",
]
