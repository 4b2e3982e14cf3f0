"""One-shot engagement analysis of a filtered Tweet Binder report."""

from __future__ import annotations

import json
import logging
from textwrap import dedent

from report_analyzer.clients import GeminiClient
from report_analyzer.services.report_payload import FilteredPayload

logger = logging.getLogger(__name__)


ANALYST_SYSTEM_PROMPT = dedent(
    """
    You are an expert analyst in Social Media Analytics and Data Analytics,
    specialized in Twitter / X metrics. You will analyze a Tweet Binder report.
    Tweet Binder reports analyze a Twitter query (a hashtag, a cashtag, a word,
    etc.) within a date range: number of tweets, their typology, number of
    users, engagement, impact and more. Agencies and companies use them to
    evaluate campaigns and events on Twitter / X.

    What matters most is the impact of each report. Look closely at the
    "impressions" field within "general" (real impressions) and relate it to
    the "impact" field within "general" (potential impressions): the closer
    impressions are to impact, the better. If the report has many replies (the
    "replies" field within "general"), impact will always be lower, because
    replies are only shown to followers shared by the replying account and the
    account receiving the reply.

    Engagement is determined by these metrics within stats.general:
    - receivedRetweets: retweets received by the report tweets. They need not
      match "retweets", which only counts public retweets inside the report;
      the rest may come from private accounts, fall outside the date range or
      have been deleted. More receivedRetweets means higher engagement.
    - favorites: likes received by the report tweets. More is better.
    - quotes: quotes received by the report tweets. More is better.
    - bookmarks: bookmarks received by the report tweets. More is better;
      bookmarks are usually far fewer than likes and retweets.
    - totalReplies: replies received by the report tweets. Do not confuse them
      with "replies", the replies inside the report that contain the analyzed
      query. totalReplies do not affect impact unless they contain the query.

    Your experience includes advanced engagement and interaction analysis,
    evaluation of campaign reach and impact, interpretation of social media
    KPIs, and performance benchmarking on social networks.

    Formatting rules for your answer:
    1. Start every section with a short header line, all headers with the same
       visual weight.
    2. Use numbered lists, never bulleted lists.
    3. Write plain text only; never output literal markup symbols such as
       asterisks, pound signs or backticks.
    """
).strip()

ANALYSIS_ANGLES: tuple[str, ...] = (
    "Engagement level rating (high/medium/low) with justification",
    "Analysis of real vs potential impressions relationship",
    "Sentiment evaluation and its correlation with engagement",
    "Key conclusions and recommendations",
)


def build_analysis_prompt(payload: FilteredPayload) -> str:
    """Render the user turn: the payload followed by the required angles."""
    report_data = json.dumps(payload.to_dict(), indent=2, ensure_ascii=False)
    angles = "\n".join(f"- {angle}" for angle in ANALYSIS_ANGLES)
    return (
        "Analyze this Twitter/X data and provide a detailed engagement and "
        "exposure analysis & valoration:\n\n"
        f"Report data: {report_data}\n\n"
        "Please include:\n"
        f"{angles}"
    )


class ReportAnalyst:
    """Issue the analysis request and return the model's text verbatim."""

    def __init__(
        self, gemini_client: GeminiClient, *, system_prompt: str | None = None
    ) -> None:
        self._gemini = gemini_client
        self._system_prompt = system_prompt or ANALYST_SYSTEM_PROMPT

    def build_messages(self, payload: FilteredPayload) -> list[dict[str, str]]:
        return [
            {"role": "system", "content": self._system_prompt},
            {"role": "user", "content": build_analysis_prompt(payload)},
        ]

    async def analyze(self, payload: FilteredPayload) -> str:
        """Return the analysis text; ``ModelError`` propagates to the caller."""
        messages = self.build_messages(payload)
        analysis = await self._gemini.analyze(messages)
        logger.info("Received analysis (%d characters)", len(analysis))
        return analysis


__all__ = [
    "ANALYSIS_ANGLES",
    "ANALYST_SYSTEM_PROMPT",
    "ReportAnalyst",
    "build_analysis_prompt",
]
