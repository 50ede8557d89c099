"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_FEED_URL = "https://www.europeantour.com/api/sportdata/HoleByHole"
DEFAULT_POLL_INTERVAL = 60.0


def env(name: str, default: str | None = None) -> str | None:
    v = os.getenv(name)
    return v if v is not None else default


def _float_or_default(raw: str | None, default: float) -> float:
    try:
        value = float(raw) if raw else default
    except ValueError:
        return default
    return value if value > 0 else default


@dataclass(frozen=True)
class Settings:
    feed_url: str = DEFAULT_FEED_URL
    poll_interval: float = DEFAULT_POLL_INTERVAL

    # Lowest-precedence carrier for the four query-style inputs
    event: str | None = None
    round: str | None = None
    ea: str | None = None
    bi: str | None = None

    def parameter_mapping(self) -> dict[str, str]:
        """Environment-supplied inputs keyed the same way as the page query."""
        values = {"event": self.event, "round": self.round, "ea": self.ea, "bi": self.bi}
        return {key: value for key, value in values.items() if value is not None}


def load_settings() -> Settings:
    return Settings(
        feed_url=(env("BIRDIECOUNT_FEED_URL") or DEFAULT_FEED_URL).rstrip("/"),
        poll_interval=_float_or_default(
            env("BIRDIECOUNT_POLL_INTERVAL"), DEFAULT_POLL_INTERVAL
        ),
        event=env("BIRDIECOUNT_EVENT"),
        round=env("BIRDIECOUNT_ROUND"),
        ea=env("BIRDIECOUNT_EA"),
        bi=env("BIRDIECOUNT_BI"),
    )
