"""Turn query-style inputs into InputParameters."""

import re
from typing import Mapping
from urllib.parse import parse_qs, urlsplit

from ..models.score import InputParameters

EVENT_KEY = "event"
ROUND_KEY = "round"
EAGLE_KEY = "ea"
BIRDIE_KEY = "bi"

PARAMETER_KEYS = (EVENT_KEY, ROUND_KEY, EAGLE_KEY, BIRDIE_KEY)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_override(raw: str | None) -> int | None:
    """Parse an override count.

    Reads the leading base-10 integer and ignores whatever follows it,
    so ``"12abc"`` is 12 and ``"3.9"`` is 3. Anything without leading digits,
    including the empty string, is 0. Negative counts clamp to 0.

    Returns None only when the override was not supplied at all.
    """
    if raw is None:
        return None
    match = _LEADING_INT.match(raw)
    if not match:
        return 0
    return max(int(match.group(1)), 0)


def _identifier(raw: str | None) -> str | None:
    if raw is None:
        return None
    raw = raw.strip()
    return raw or None


def resolve_parameters(query: Mapping[str, str | None]) -> InputParameters:
    """Build InputParameters from ``event``/``round``/``ea``/``bi`` values"""
    return InputParameters(
        event_id=_identifier(query.get(EVENT_KEY)),
        round_id=_identifier(query.get(ROUND_KEY)),
        eagle_override=parse_override(query.get(EAGLE_KEY)),
        birdie_override=parse_override(query.get(BIRDIE_KEY)),
    )


def query_from_url(url: str) -> dict[str, str]:
    """Extract the known parameter keys from a page URL's query string.

    The first value wins when a key is repeated; blank values are kept so a
    bare ``?ea=`` still counts as a supplied override.
    """
    parsed = parse_qs(urlsplit(url).query, keep_blank_values=True)
    return {key: values[0] for key, values in parsed.items() if key in PARAMETER_KEYS}


def parameters_from_url(url: str) -> InputParameters:
    return resolve_parameters(query_from_url(url))
