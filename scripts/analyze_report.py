#!/usr/bin/env python
"""Lightweight CLI for analyzing a Tweet Binder report from the terminal."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Callable

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from report_analyzer.core.config import get_settings  # noqa: E402
from report_analyzer.core.errors import ReportAnalysisError  # noqa: E402
from report_analyzer.core.logging import configure_logging  # noqa: E402
from report_analyzer.dependencies import (  # noqa: E402
    get_chat_assistant,
    get_report_workflow,
)
from report_analyzer.services import AnalysisSession, ChatAssistant  # noqa: E402
from report_analyzer.workflow import ReportAnalysisWorkflow  # noqa: E402

EXIT_OK = 0
EXIT_ANALYSIS_ERROR = 1


async def run_analysis(
    workflow: ReportAnalysisWorkflow,
    session: AnalysisSession,
    report_url: str,
) -> int:
    try:
        with session.analysis_in_flight():
            outcome = await workflow.run(report_url)
    except ReportAnalysisError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_ANALYSIS_ERROR

    session.replace_analysis(
        report_url=outcome.report_url,
        storage_url=outcome.storage_url,
        analysis=outcome.analysis,
        token_estimate=outcome.token_estimate,
    )
    print(f"Estimated payload size: {outcome.token_estimate} tokens\n")
    print(outcome.analysis)
    print()
    return EXIT_OK


async def run_interactive(
    assistant: ChatAssistant,
    session: AnalysisSession,
    read_line: Callable[[str], str] = input,
) -> int:
    print("Ask follow-up questions about the analysis. Type 'exit' or 'quit' to end.\n")
    while True:
        try:
            message = read_line("You: ")
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye!")
            return EXIT_OK
        if message.strip().lower() in {"exit", "quit"}:
            print("Goodbye!")
            return EXIT_OK
        if not message.strip():
            continue
        with session.chat_in_flight():
            _, reply = await assistant.send(
                session.transcript, message.strip(), session.analysis or ""
            )
        print(f"Analyst: {reply}\n")


async def _main_async(report_url: str, chat: bool) -> int:
    session = AnalysisSession(session_id="cli")
    exit_code = await run_analysis(get_report_workflow(), session, report_url)
    if exit_code != EXIT_OK or not chat:
        return exit_code
    return await run_interactive(get_chat_assistant(), session)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Analyze a Tweet Binder report and optionally chat about it."
    )
    parser.add_argument(
        "url",
        help="Report link, e.g. https://dash.tweetbinder.com/report/<id>.",
    )
    parser.add_argument(
        "--chat",
        action="store_true",
        help="Start an interactive follow-up chat after the analysis.",
    )

    args = parser.parse_args(argv)
    configure_logging(get_settings().log_level)
    return asyncio.run(_main_async(args.url, args.chat))


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
