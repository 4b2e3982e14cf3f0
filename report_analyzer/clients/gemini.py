"""Client wrapper for interacting with Google Gemini models."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Iterable, Mapping, Sequence

import google.generativeai as genai
from google.api_core.exceptions import GoogleAPIError, NotFound

from report_analyzer.core.config import GeminiSettings
from report_analyzer.core.errors import ModelError


_ANALYSIS_FALLBACKS: tuple[str, ...] = (
    "gemini-1.5-flash",
    "gemini-2.0-flash",
)
_CHAT_FALLBACKS: tuple[str, ...] = (
    "gemini-1.5-pro",
    "gemini-2.5-pro",
)

# Gemini names the assistant side of a conversation "model".
_ROLE_MAP = {"user": "user", "assistant": "model"}

logger = logging.getLogger(__name__)


class GeminiClient:
    """Send chat-style message lists to the analysis and chat model tiers."""

    def __init__(self, settings: GeminiSettings) -> None:
        self._settings = settings
        # Configure the global client once per process.
        genai.configure(api_key=settings.api_key)

    async def analyze(self, messages: Sequence[Mapping[str, str]]) -> str:
        """Run the one-shot analysis model over ``messages``."""
        return await self.generate_chat(
            messages,
            models=self._collect_candidates(
                self._settings.analysis_model_name, _ANALYSIS_FALLBACKS
            ),
            env_var="GEMINI_ANALYSIS_MODEL_NAME",
            temperature=self._settings.analysis_temperature,
            max_output_tokens=self._settings.analysis_max_output_tokens,
        )

    async def chat(self, messages: Sequence[Mapping[str, str]]) -> str:
        """Run the follow-up chat model over ``messages``."""
        return await self.generate_chat(
            messages,
            models=self._collect_candidates(
                self._settings.chat_model_name, _CHAT_FALLBACKS
            ),
            env_var="GEMINI_CHAT_MODEL_NAME",
            temperature=self._settings.chat_temperature,
            max_output_tokens=self._settings.chat_max_output_tokens,
        )

    async def generate_chat(
        self,
        messages: Sequence[Mapping[str, str]],
        *,
        models: Iterable[str],
        env_var: str,
        temperature: float,
        max_output_tokens: int,
    ) -> str:
        """Send an ordered ``role``/``content`` message list and return the reply text.

        ``system`` messages become the model's system instruction; ``user`` and
        ``assistant`` messages are replayed in order as conversation contents.
        """
        system_instruction, contents = _to_gemini_contents(messages)
        generation_config = genai.GenerationConfig(
            temperature=temperature,
            max_output_tokens=max_output_tokens,
        )

        def _invoke() -> str:
            response = self._invoke_with_models(
                models=models,
                env_var=env_var,
                error_prefix="Gemini generate_content failed",
                call=lambda model_name: genai.GenerativeModel(
                    model_name,
                    system_instruction=system_instruction,
                    generation_config=generation_config,
                ).generate_content(contents),
            )
            try:
                return response.text
            except ValueError as exc:
                # Raised when the first candidate carries no text parts.
                raise ModelError(f"Gemini returned no usable text: {exc}") from exc

        return await asyncio.to_thread(_invoke)

    def _invoke_with_models(
        self,
        *,
        models: Iterable[str],
        env_var: str,
        error_prefix: str,
        call: Callable[[str], Any],
    ) -> Any:
        """Try the configured model followed by fallbacks when available."""

        model_sequence = list(models)
        last_not_found: NotFound | None = None
        for index, model_name in enumerate(model_sequence):
            try:
                return call(model_name)
            except NotFound as exc:
                last_not_found = exc
                logger.warning(
                    "Gemini model '%s' not found (attempt %d/%d); trying fallback.",
                    model_name,
                    index + 1,
                    len(model_sequence),
                )
                continue
            except GoogleAPIError as exc:
                raise ModelError(f"{error_prefix}: {exc}") from exc

        if last_not_found is not None:
            primary = model_sequence[0] if model_sequence else "unknown"
            raise ModelError(
                "Gemini model '"
                f"{primary}"
                "' is not available. Update "
                f"{env_var} to a supported value."
            ) from last_not_found

        raise ModelError(f"{error_prefix}: Unknown error invoking Gemini.")

    @staticmethod
    def _collect_candidates(
        configured: str | None,
        fallbacks: tuple[str, ...],
    ) -> list[str]:
        """Return distinct model names prioritizing the configured value."""
        seen: set[str] = set()
        candidates: list[str] = []
        for name in (configured, *fallbacks):
            if not name:
                continue
            cleaned = name.strip()
            if not cleaned or cleaned in seen:
                continue
            seen.add(cleaned)
            candidates.append(cleaned)
        return candidates


def _to_gemini_contents(
    messages: Sequence[Mapping[str, str]],
) -> tuple[str | None, list[dict[str, Any]]]:
    """Split chat messages into a system instruction and Gemini contents."""
    system_parts: list[str] = []
    contents: list[dict[str, Any]] = []
    for message in messages:
        role = message["role"]
        if role == "system":
            system_parts.append(message["content"])
            continue
        if role not in _ROLE_MAP:
            raise ValueError(f"Unsupported message role: {role!r}")
        contents.append({"role": _ROLE_MAP[role], "parts": [message["content"]]})
    return ("\n\n".join(system_parts) or None), contents


__all__ = ["GeminiClient"]
