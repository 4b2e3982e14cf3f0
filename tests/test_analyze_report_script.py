"""Tests for the terminal report analysis script."""

from __future__ import annotations

try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import pytest

from report_analyzer.core.errors import NetworkError
from report_analyzer.services import AnalysisSession, ChatAssistant
from report_analyzer.workflow import AnalysisOutcome
from scripts import analyze_report


class StubWorkflow:
    def __init__(self, result) -> None:
        self.result = result

    async def run(self, report_url: str):
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


class EchoGemini:
    async def chat(self, messages):
        return f"echo: {messages[-1]['content']}"


@pytest.mark.asyncio
async def test_run_analysis_prints_analysis(capsys: pytest.CaptureFixture[str]) -> None:
    session = AnalysisSession(session_id="cli")
    workflow = StubWorkflow(
        AnalysisOutcome(
            report_url="https://dash.tweetbinder.com/report/abc123",
            storage_url="https://s3.eu-west-1.amazonaws.com/stats.tweetbinder.com/abc123/stats.json",
            token_estimate=512,
            analysis="Engagement Rating\n1. Medium",
        )
    )

    exit_code = await analyze_report.run_analysis(
        workflow, session, "https://dash.tweetbinder.com/report/abc123"
    )

    assert exit_code == analyze_report.EXIT_OK
    assert session.analysis == "Engagement Rating\n1. Medium"
    output = capsys.readouterr().out
    assert "512 tokens" in output
    assert "1. Medium" in output


@pytest.mark.asyncio
async def test_run_analysis_reports_errors(capsys: pytest.CaptureFixture[str]) -> None:
    session = AnalysisSession(session_id="cli")
    workflow = StubWorkflow(NetworkError("Request failed with status code 404", status_code=404))

    exit_code = await analyze_report.run_analysis(workflow, session, "bad-link")

    assert exit_code == analyze_report.EXIT_ANALYSIS_ERROR
    assert session.analysis is None
    assert "Error: Request failed with status code 404" in capsys.readouterr().err


@pytest.mark.asyncio
async def test_interactive_chat_until_exit(capsys: pytest.CaptureFixture[str]) -> None:
    session = AnalysisSession(session_id="cli", analysis="analysis")
    lines = iter(["Why?", "   ", "quit"])

    exit_code = await analyze_report.run_interactive(
        ChatAssistant(EchoGemini()), session, read_line=lambda _prompt: next(lines)
    )

    assert exit_code == analyze_report.EXIT_OK
    assert [turn.content for turn in session.transcript] == ["Why?", "echo: Why?"]
    assert "Analyst: echo: Why?" in capsys.readouterr().out
