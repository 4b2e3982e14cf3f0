"""
Data models shared across the analysis workflow.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, TypedDict

from report_analyzer.services.report_payload import FilteredPayload


class AnalysisState(TypedDict, total=False):
    """State tracked inside the LangGraph workflow."""

    report_url: str
    storage_url: str
    document: Dict[str, Any]
    payload: FilteredPayload
    token_estimate: int
    analysis: str


@dataclass(frozen=True, slots=True)
class AnalysisOutcome:
    """Result of one successful report submission."""

    report_url: str
    storage_url: str
    token_estimate: int
    analysis: str


__all__ = ["AnalysisOutcome", "AnalysisState"]
