"""Score aggregation engine: resolve, count, merge and poll."""

from .counter import count_events
from .merge import DECISION_TABLE, merge_scores
from .resolver import parameters_from_url, parse_override, resolve_parameters
from .scheduler import POLL_INTERVAL_SECONDS, PollSession

__all__ = [
    "DECISION_TABLE",
    "POLL_INTERVAL_SECONDS",
    "PollSession",
    "count_events",
    "merge_scores",
    "parameters_from_url",
    "parse_override",
    "resolve_parameters",
]
