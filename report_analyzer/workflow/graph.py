"""
LangGraph workflow definition for report analysis.

Nodes run strictly in order; any exception raised by a node aborts the run
and reaches the caller unchanged, so schema and budget failures happen before
the model is ever called.
"""

from __future__ import annotations

import logging
from typing import Any

from langgraph.graph import END, START, StateGraph

from report_analyzer.clients import StatsStorageClient
from report_analyzer.services.report_analysis import ReportAnalyst
from report_analyzer.services.report_payload import check_budget, filter_stats
from report_analyzer.workflow.models import AnalysisOutcome, AnalysisState

logger = logging.getLogger(__name__)


async def _resolve_report_url(
    state: AnalysisState, stats_client: StatsStorageClient
) -> AnalysisState:
    """Map the user-supplied report link to its statistics document."""
    state["storage_url"] = stats_client.resolve(state["report_url"])
    logger.info("Resolved %s to %s", state["report_url"], state["storage_url"])
    return state


async def _fetch_stats(
    state: AnalysisState, stats_client: StatsStorageClient
) -> AnalysisState:
    state["document"] = await stats_client.fetch(state["storage_url"])
    return state


async def _filter_stats(state: AnalysisState) -> AnalysisState:
    state["payload"] = filter_stats(state["document"])
    return state


async def _check_token_budget(state: AnalysisState) -> AnalysisState:
    """Reject payloads whose estimated size exceeds the model ceiling."""
    state["token_estimate"] = check_budget(state["payload"])
    logger.info("Estimated payload size: %d tokens", state["token_estimate"])
    return state


async def _analyze_report(state: AnalysisState, analyst: ReportAnalyst) -> AnalysisState:
    state["analysis"] = await analyst.analyze(state["payload"])
    return state


def create_analysis_graph(
    stats_client: StatsStorageClient, analyst: ReportAnalyst
) -> Any:
    """Compile and return the report analysis LangGraph workflow."""
    graph = StateGraph(AnalysisState)

    async def resolve_report_url_node(state: AnalysisState) -> AnalysisState:
        return await _resolve_report_url(state, stats_client)

    async def fetch_stats_node(state: AnalysisState) -> AnalysisState:
        return await _fetch_stats(state, stats_client)

    async def analyze_report_node(state: AnalysisState) -> AnalysisState:
        return await _analyze_report(state, analyst)

    graph.add_node("resolve_report_url", resolve_report_url_node)
    graph.add_node("fetch_stats", fetch_stats_node)
    graph.add_node("filter_stats", _filter_stats)
    graph.add_node("check_token_budget", _check_token_budget)
    graph.add_node("analyze_report", analyze_report_node)

    graph.add_edge(START, "resolve_report_url")
    graph.add_edge("resolve_report_url", "fetch_stats")
    graph.add_edge("fetch_stats", "filter_stats")
    graph.add_edge("filter_stats", "check_token_budget")
    graph.add_edge("check_token_budget", "analyze_report")
    graph.add_edge("analyze_report", END)
    return graph.compile()


class ReportAnalysisWorkflow:
    """Run the compiled graph for one report submission at a time."""

    def __init__(self, stats_client: StatsStorageClient, analyst: ReportAnalyst) -> None:
        self._graph = create_analysis_graph(stats_client, analyst)

    async def run(self, report_url: str) -> AnalysisOutcome:
        """Return the analysis for ``report_url``.

        Raises the ``ReportAnalysisError`` subclass produced by the failing step.
        """
        state: AnalysisState = await self._graph.ainvoke({"report_url": report_url})
        return AnalysisOutcome(
            report_url=report_url,
            storage_url=state["storage_url"],
            token_estimate=state["token_estimate"],
            analysis=state["analysis"],
        )


__all__ = ["ReportAnalysisWorkflow", "create_analysis_graph"]
