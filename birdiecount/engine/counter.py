"""Tally birdies and eagles across a hole-by-hole document."""

from typing import Iterable

from ..models.feed_api import FeedPlayer
from ..models.score import Score

BIRDIE_CLASS = "bi"
EAGLE_CLASS = "ea"


def count_events(players: Iterable[FeedPlayer]) -> Score:
    """Count birdie and eagle holes over every player and every hole.

    Any other score class, a hole without one, or a null hole is ignored.
    """
    birdies = 0
    eagles = 0
    for player in players:
        for hole in player.Holes:
            if hole is None:
                continue
            if hole.ScoreClass == BIRDIE_CLASS:
                birdies += 1
            elif hole.ScoreClass == EAGLE_CLASS:
                eagles += 1
    return Score(birdies=birdies, eagles=eagles)
