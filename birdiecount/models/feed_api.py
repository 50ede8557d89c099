"""Pydantic models for the hole-by-hole feed responses."""

from typing import Any, List, Optional

from pydantic import field_validator

from ..models.score import FeedModel


class FeedHole(FeedModel):
    """One hole played by one player"""

    ScoreClass: Optional[str] = None

    @field_validator("ScoreClass", mode="before")
    @classmethod
    def non_string_class_is_unknown(cls, value: Any) -> Optional[str]:
        # Codes we can't read are ignored by the counter, not rejected
        return value if isinstance(value, str) else None


class FeedPlayer(FeedModel):
    """A player in the round and the holes they have played"""

    Holes: List[Optional[FeedHole]]


class HoleByHoleResponse(FeedModel):
    """Complete hole-by-hole document for one event round"""

    Players: List[FeedPlayer]
