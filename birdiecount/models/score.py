"""Score data model and the engine's state values."""

from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class FeedModel(BaseModel):
    """Feed payload model; fields we don't read are kept, not rejected"""

    model_config = {"extra": "allow"}


class FrozenModel(BaseModel):
    """Immutable value published by the engine"""

    model_config = ConfigDict(frozen=True)


class Score(FrozenModel):
    """Birdie and eagle counts for one round"""

    birdies: int = Field(default=0, ge=0)
    eagles: int = Field(default=0, ge=0)

    @property
    def total_deployed(self) -> int:
        """Balls deployed: one per birdie, two per eagle"""
        return self.birdies + 2 * self.eagles

    def __add__(self, other: "Score") -> "Score":
        return Score(
            birdies=self.birdies + other.birdies, eagles=self.eagles + other.eagles
        )


class InputParameters(FrozenModel):
    """The four logical inputs for one polling session"""

    event_id: str | None = None
    round_id: str | None = None
    eagle_override: int | None = None
    birdie_override: int | None = None

    @property
    def has_feed(self) -> bool:
        """Both event and round are known, so the remote feed can be polled"""
        return bool(self.event_id) and bool(self.round_id)

    @property
    def has_both_overrides(self) -> bool:
        return self.eagle_override is not None and self.birdie_override is not None

    def override_score(self) -> Score:
        """Overrides as a Score, with absent values counted as zero"""
        return Score(
            birdies=self.birdie_override or 0, eagles=self.eagle_override or 0
        )


# Fetch outcomes
class FetchSuccess(FrozenModel):
    kind: Literal["success"] = "success"
    score: Score


class FetchFailure(FrozenModel):
    kind: Literal["failure"] = "failure"
    reason: str = "Failed to fetch scores"


FetchOutcome = Union[FetchSuccess, FetchFailure]


# Engine states
class Idle(FrozenModel):
    """Nothing to show: no feed and no complete pair of overrides"""

    status: Literal["idle"] = "idle"


class Loading(FrozenModel):
    """First poll of a feed-backed session is outstanding"""

    status: Literal["loading"] = "loading"


class Ready(FrozenModel):
    status: Literal["ready"] = "ready"
    score: Score

    @property
    def total_deployed(self) -> int:
        return self.score.total_deployed


class Error(FrozenModel):
    """No reliable count is available"""

    status: Literal["error"] = "error"
    message: str


EngineState = Union[Idle, Loading, Ready, Error]


def state_summary(state: EngineState) -> dict[str, Any]:
    """Flatten a state into the JSON shape printed by ``--once``"""
    score = state.score if isinstance(state, Ready) else None
    return {
        "status": state.status,
        "birdies": score.birdies if score else None,
        "eagles": score.eagles if score else None,
        "total_deployed": score.total_deployed if score else None,
        "message": state.message if isinstance(state, Error) else None,
    }
