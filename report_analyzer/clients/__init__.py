"""Expose constructed client wrappers."""

from .gemini import GeminiClient
from .stats_storage import StatsStorageClient, resolve_stats_url

__all__ = [
    "GeminiClient",
    "StatsStorageClient",
    "resolve_stats_url",
]
