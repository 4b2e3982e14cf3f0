"""Expose dependency helpers for FastAPI routers."""

from .clients import (
    get_chat_assistant,
    get_gemini_client,
    get_report_analyst,
    get_report_workflow,
    get_session_store,
    get_stats_storage_client,
)

__all__ = [
    "get_chat_assistant",
    "get_gemini_client",
    "get_report_analyst",
    "get_report_workflow",
    "get_session_store",
    "get_stats_storage_client",
]
