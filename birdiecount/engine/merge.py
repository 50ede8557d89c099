"""Combine override values and fetched counts into the state to publish.

The policy is a table of rules evaluated top to bottom; the first rule whose
condition holds decides the state. Every rule is a pure function of the
session's InputParameters and the latest fetch outcome (None when no fetch
has completed or none is ever attempted).
"""

from typing import Callable, NamedTuple

from ..models.score import (
    EngineState,
    Error,
    FetchFailure,
    FetchOutcome,
    FetchSuccess,
    Idle,
    InputParameters,
    Loading,
    Ready,
)

FETCH_ERROR_MESSAGE = "Failed to fetch scores"

Condition = Callable[[InputParameters, FetchOutcome | None], bool]
Action = Callable[[InputParameters, FetchOutcome | None], EngineState]


class MergeRule(NamedTuple):
    name: str
    applies: Condition
    publish: Action


def _fetched_plus_overrides(
    params: InputParameters, outcome: FetchOutcome | None
) -> EngineState:
    if not isinstance(outcome, FetchSuccess):
        raise ValueError(f"Expected a successful fetch, got {outcome!r}")
    return Ready(score=params.override_score() + outcome.score)


DECISION_TABLE: tuple[MergeRule, ...] = (
    MergeRule(
        "overrides_only",
        lambda p, o: p.has_both_overrides and not p.has_feed,
        lambda p, o: Ready(score=p.override_score()),
    ),
    MergeRule(
        "nothing_configured",
        lambda p, o: not p.has_feed,
        lambda p, o: Idle(),
    ),
    MergeRule(
        "awaiting_feed",
        lambda p, o: o is None,
        lambda p, o: Loading(),
    ),
    MergeRule(
        "feed_counts",
        lambda p, o: isinstance(o, FetchSuccess),
        _fetched_plus_overrides,
    ),
    MergeRule(
        "feed_failed_overrides_fallback",
        lambda p, o: isinstance(o, FetchFailure) and p.has_both_overrides,
        lambda p, o: Ready(score=p.override_score()),
    ),
    MergeRule(
        "feed_failed",
        lambda p, o: isinstance(o, FetchFailure),
        lambda p, o: Error(message=FETCH_ERROR_MESSAGE),
    ),
)


def select_rule(
    params: InputParameters, outcome: FetchOutcome | None = None
) -> MergeRule:
    for rule in DECISION_TABLE:
        if rule.applies(params, outcome):
            return rule
    raise ValueError(f"No merge rule for {params!r} with outcome {outcome!r}")


def merge_scores(
    params: InputParameters, outcome: FetchOutcome | None = None
) -> EngineState:
    """Decide which state to publish for these inputs and fetch outcome"""
    return select_rule(params, outcome).publish(params, outcome)
