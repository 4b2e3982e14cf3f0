"""Follow-up conversation about a completed report analysis."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from textwrap import dedent
from typing import List, Literal, Tuple

from report_analyzer.clients import GeminiClient
from report_analyzer.core.errors import ModelError

logger = logging.getLogger(__name__)

ChatRole = Literal["user", "assistant"]

CHAT_FALLBACK_REPLY = (
    "An error occurred while processing your question. Please try again."
)

CHAT_SYSTEM_PROMPT = dedent(
    """
    You are an expert Social Media Analytics assistant specialized in
    Twitter / X metrics. The user has just received the Tweet Binder report
    analysis below and wants to ask follow-up questions about it.

    Answer using the analysis as your primary source. When a question goes
    beyond the data in the analysis, say so plainly instead of inventing
    figures. Keep answers concise, use numbered lists rather than bullets,
    and write plain text without markup symbols.

    Report analysis:
    """
).strip()


@dataclass(frozen=True, slots=True)
class ChatTurn:
    """One entry of a chat transcript."""

    role: ChatRole
    content: str
    failed: bool = False

    def as_message(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


class ChatAssistant:
    """Answer follow-up questions with the analysis and prior turns as context."""

    def __init__(
        self, gemini_client: GeminiClient, *, system_prompt: str | None = None
    ) -> None:
        self._gemini = gemini_client
        self._system_prompt = system_prompt or CHAT_SYSTEM_PROMPT

    def build_messages(
        self, transcript: List[ChatTurn], analysis_context: str
    ) -> list[dict[str, str]]:
        system = f"{self._system_prompt}\n{analysis_context}"
        return [
            {"role": "system", "content": system},
            *(turn.as_message() for turn in transcript),
        ]

    async def send(
        self,
        transcript: List[ChatTurn],
        user_text: str,
        analysis_context: str,
    ) -> Tuple[List[ChatTurn], str]:
        """Append the user turn, ask the model, and append its reply.

        The user turn is appended before the request so it is visible while
        the reply is pending, and it stays in place when the request fails.
        A failed request is recorded as ``CHAT_FALLBACK_REPLY`` with
        ``failed=True`` instead of raising, so the transcript remains usable.
        """
        transcript.append(ChatTurn(role="user", content=user_text))
        messages = self.build_messages(transcript, analysis_context)

        failed = False
        try:
            reply = await self._gemini.chat(messages)
        except ModelError as exc:
            logger.warning("Chat turn failed: %s", exc)
            reply = CHAT_FALLBACK_REPLY
            failed = True

        transcript.append(ChatTurn(role="assistant", content=reply, failed=failed))
        return transcript, reply


__all__ = [
    "CHAT_FALLBACK_REPLY",
    "CHAT_SYSTEM_PROMPT",
    "ChatAssistant",
    "ChatRole",
    "ChatTurn",
]
