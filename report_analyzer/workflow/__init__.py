"""LangGraph workflow turning a report URL into a model analysis."""

from .graph import ReportAnalysisWorkflow, create_analysis_graph
from .models import AnalysisOutcome, AnalysisState

__all__ = [
    "AnalysisOutcome",
    "AnalysisState",
    "ReportAnalysisWorkflow",
    "create_analysis_graph",
]
