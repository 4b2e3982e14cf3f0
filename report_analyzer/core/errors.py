"""
Error taxonomy shared by the analysis pipeline, chat sessions and API layer.

Every pipeline failure derives from ``ReportAnalysisError`` so the routes can
surface them uniformly as ``"Error: <message>"``.
"""

from __future__ import annotations


class ReportAnalysisError(RuntimeError):
    """Base class for failures that terminate a report submission."""


class NetworkError(ReportAnalysisError):
    """Raised when the statistics document cannot be retrieved."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SchemaError(ReportAnalysisError):
    """Raised when the statistics document lacks a required group."""


class TokenLimitError(ReportAnalysisError):
    """Raised when the filtered payload exceeds the model token ceiling."""

    def __init__(self, estimate: int, limit: int) -> None:
        super().__init__(
            f"Report data exceeds the model token limit ({estimate} > {limit})"
        )
        self.estimate = estimate
        self.limit = limit


class ModelError(ReportAnalysisError):
    """Raised when the language model cannot fulfill a request."""


class SessionNotFoundError(LookupError):
    """Raised when an analysis session id is unknown or has expired."""


class SessionBusyError(RuntimeError):
    """Raised when a session already has an operation of the same kind in flight."""


__all__ = [
    "ModelError",
    "NetworkError",
    "ReportAnalysisError",
    "SchemaError",
    "SessionBusyError",
    "SessionNotFoundError",
    "TokenLimitError",
]
