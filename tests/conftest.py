"""Shared fixtures"""

import pytest

ENV_KEYS = [
    "BIRDIECOUNT_FEED_URL",
    "BIRDIECOUNT_POLL_INTERVAL",
    "BIRDIECOUNT_EVENT",
    "BIRDIECOUNT_ROUND",
    "BIRDIECOUNT_EA",
    "BIRDIECOUNT_BI",
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep a developer's shell settings out of the tests"""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
