"""Mock hole-by-hole data for demo mode and tests."""

from typing import Any, Dict, List

DEMO_EVENT_ID = "demo"
DEMO_ROUND_ID = "1"


def _holes(*score_classes: str) -> List[Dict[str, Any]]:
    return [
        {"HoleNo": number, "ScoreClass": score_class}
        for number, score_class in enumerate(score_classes, start=1)
    ]


# Mock feed document matching the hole-by-hole response format
MOCK_HOLE_BY_HOLE: Dict[str, Any] = {
    "EventId": 2025134,
    "RoundNo": 1,
    "Players": [
        {
            "PlayerId": 1,
            "Name": "Alice Archer",
            "Holes": _holes("bi", "pa", "pa", "bi", "bo", "pa", "ea", "pa", "bi"),
        },
        {
            "PlayerId": 2,
            "Name": "Ben Birch",
            "Holes": _holes("pa", "pa", "bo", "pa", "bi", "db", "pa", "pa", "pa"),
        },
        {
            "PlayerId": 3,
            "Name": "Cara Cole",
            "Holes": _holes("ea", "bi", "pa", "pa", "pa", "bi", "pa", "bo", "pa"),
        },
        {
            "PlayerId": 4,
            "Name": "Dev Dunn",
            # Player still on the course
            "Holes": _holes("pa", "bi", "pa", "pa"),
        },
    ],
}

# 7 birdies, 2 eagles in the document above
MOCK_BIRDIES = 7
MOCK_EAGLES = 2
