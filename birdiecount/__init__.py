"""Balls for Birdies - a live birdie and eagle counter for a tournament round."""

from .api import ScoreFeedAPI
from .engine import PollSession, merge_scores, resolve_parameters
from .models import EngineState, InputParameters, Score
from .ui import ScoreDisplay

__version__ = "1.0.0"
__all__ = [
    "EngineState",
    "InputParameters",
    "PollSession",
    "Score",
    "ScoreDisplay",
    "ScoreFeedAPI",
    "merge_scores",
    "resolve_parameters",
]
