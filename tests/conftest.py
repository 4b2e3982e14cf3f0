"""Pytest configuration shared across the suite."""

import pytest


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO-powered tests to run against asyncio backend only."""
    return "asyncio"


@pytest.fixture
def stats_document() -> dict:
    """A statistics document shaped like the ones in the report bucket."""
    return {
        "id": "abc123",
        "query": "#launchday",
        "stats": {
            "general": {
                "tweets": 1520,
                "retweets": 830,
                "replies": 120,
                "receivedRetweets": 2210,
                "favorites": 5400,
                "quotes": 95,
                "bookmarks": 41,
                "totalReplies": 310,
                "impressions": 412000,
                "impact": 980000,
            },
            "sentiment": {"positive": 61, "neutral": 30, "negative": 9},
            "influences": {
                "sentimentInfluence": [{"user": "alpha", "value": 0.8}],
                "contributorInfluence": [{"user": "beta", "value": 120}],
                "tweetValueInfluence": [{"user": "gamma", "value": 54.5}],
                "followersInfluence": [{"user": "delta", "value": 99000}],
                "languageInfluence": [{"lang": "en", "value": 0.9}],
            },
            "timeline": [{"hour": 0, "tweets": 12}],
        },
    }
