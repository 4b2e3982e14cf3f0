"""Service layer exports."""

from .chat import CHAT_FALLBACK_REPLY, ChatAssistant, ChatTurn
from .printing import render_print_document
from .report_analysis import ReportAnalyst
from .report_payload import FilteredPayload, check_budget, estimate_tokens, filter_stats
from .sessions import AnalysisSession, SessionStore

__all__ = [
    "AnalysisSession",
    "CHAT_FALLBACK_REPLY",
    "ChatAssistant",
    "ChatTurn",
    "FilteredPayload",
    "ReportAnalyst",
    "SessionStore",
    "check_budget",
    "estimate_tokens",
    "filter_stats",
    "render_print_document",
]
