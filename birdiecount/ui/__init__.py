"""Terminal display for the live counts."""

from .score_display import ScoreDisplay

__all__ = ["ScoreDisplay"]
