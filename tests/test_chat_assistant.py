try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import pytest

from report_analyzer.core.errors import ModelError
from report_analyzer.services.chat import (
    CHAT_FALLBACK_REPLY,
    CHAT_SYSTEM_PROMPT,
    ChatAssistant,
    ChatTurn,
)


class ScriptedGemini:
    def __init__(self, *replies) -> None:
        self.replies = list(replies)
        self.messages: list[list[dict[str, str]]] = []

    async def chat(self, messages):
        self.messages.append(list(messages))
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.mark.asyncio
async def test_send_includes_analysis_and_prior_turns_in_order() -> None:
    gemini = ScriptedGemini("Because replies have low visibility.")
    transcript = [
        ChatTurn(role="user", content="Is engagement high?"),
        ChatTurn(role="assistant", content="Yes, fairly high."),
    ]

    updated, reply = await ChatAssistant(gemini).send(
        transcript, "Why is impact lower?", "Impact analysis text"
    )

    assert reply == "Because replies have low visibility."
    assert updated is transcript
    assert [turn.role for turn in updated] == ["user", "assistant", "user", "assistant"]
    (messages,) = gemini.messages
    assert messages[0] == {
        "role": "system",
        "content": f"{CHAT_SYSTEM_PROMPT}\nImpact analysis text",
    }
    assert messages[1:] == [
        {"role": "user", "content": "Is engagement high?"},
        {"role": "assistant", "content": "Yes, fairly high."},
        {"role": "user", "content": "Why is impact lower?"},
    ]


@pytest.mark.asyncio
async def test_failed_send_keeps_user_turn_and_appends_fallback() -> None:
    gemini = ScriptedGemini(ModelError("503 backend down"))
    transcript: list[ChatTurn] = []

    updated, reply = await ChatAssistant(gemini).send(transcript, "Hello?", "analysis")

    assert reply == CHAT_FALLBACK_REPLY
    assert updated == [
        ChatTurn(role="user", content="Hello?"),
        ChatTurn(role="assistant", content=CHAT_FALLBACK_REPLY, failed=True),
    ]


@pytest.mark.asyncio
async def test_transcript_stays_usable_after_failure() -> None:
    gemini = ScriptedGemini(ModelError("timeout"), "Recovered answer")
    assistant = ChatAssistant(gemini)
    transcript: list[ChatTurn] = []

    await assistant.send(transcript, "First", "analysis")
    _, reply = await assistant.send(transcript, "Second", "analysis")

    assert reply == "Recovered answer"
    assert [turn.content for turn in transcript] == [
        "First",
        CHAT_FALLBACK_REPLY,
        "Second",
        "Recovered answer",
    ]
    # The failed exchange is replayed as history on the next call.
    assert [m["content"] for m in gemini.messages[1][1:]] == [
        "First",
        CHAT_FALLBACK_REPLY,
        "Second",
    ]


@pytest.mark.asyncio
async def test_model_reply_matching_fallback_text_is_not_a_failure() -> None:
    gemini = ScriptedGemini(CHAT_FALLBACK_REPLY)
    transcript: list[ChatTurn] = []

    _, reply = await ChatAssistant(gemini).send(transcript, "Echo the error text", "analysis")

    assert reply == CHAT_FALLBACK_REPLY
    assert transcript[-1].failed is False
