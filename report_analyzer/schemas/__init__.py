"""Public schema exports."""

from .report import (
    AnalysisRequest,
    AnalysisResponse,
    ChatRequest,
    ChatResponse,
    ChatTurnSchema,
    SessionState,
)

__all__ = [
    "AnalysisRequest",
    "AnalysisResponse",
    "ChatRequest",
    "ChatResponse",
    "ChatTurnSchema",
    "SessionState",
]
