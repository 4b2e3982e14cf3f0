"""
Factory functions to provide shared clients and services as FastAPI dependencies.
"""

from functools import lru_cache

from report_analyzer.clients import GeminiClient, StatsStorageClient
from report_analyzer.core.config import get_settings
from report_analyzer.services import ChatAssistant, ReportAnalyst, SessionStore
from report_analyzer.workflow import ReportAnalysisWorkflow


@lru_cache()
def _settings():
    """Internal helper to cache settings for client factories."""
    return get_settings()


@lru_cache()
def get_gemini_client() -> GeminiClient:
    """Provide Gemini client instance."""
    settings = _settings()
    return GeminiClient(settings.gemini)


@lru_cache()
def get_stats_storage_client() -> StatsStorageClient:
    """Provide the report statistics storage client."""
    settings = _settings()
    return StatsStorageClient(settings.storage)


@lru_cache()
def get_session_store() -> SessionStore:
    """Provide the process-local session registry."""
    settings = _settings()
    return SessionStore(ttl_seconds=settings.session_ttl_seconds)


def get_report_analyst() -> ReportAnalyst:
    """Build the one-shot analyst using Gemini."""
    settings = _settings()
    return ReportAnalyst(
        get_gemini_client(),
        system_prompt=settings.gemini.analysis_system_prompt,
    )


def get_chat_assistant() -> ChatAssistant:
    """Build the follow-up chat assistant using Gemini."""
    settings = _settings()
    return ChatAssistant(
        get_gemini_client(),
        system_prompt=settings.gemini.chat_system_prompt,
    )


@lru_cache()
def get_report_workflow() -> ReportAnalysisWorkflow:
    """Provide the compiled report analysis workflow."""
    return ReportAnalysisWorkflow(
        stats_client=get_stats_storage_client(),
        analyst=get_report_analyst(),
    )


__all__ = [
    "get_chat_assistant",
    "get_gemini_client",
    "get_report_analyst",
    "get_report_workflow",
    "get_session_store",
    "get_stats_storage_client",
]
