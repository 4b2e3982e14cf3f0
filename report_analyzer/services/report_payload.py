"""Reduce fetched report statistics to the payload sent to the model.

``general`` and ``sentiment`` are copied whole while ``influences`` is narrowed
to three sub-fields. The serialized payload must stay under
``MAX_PAYLOAD_TOKENS`` before any model call is made.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping

from report_analyzer.core.errors import SchemaError, TokenLimitError

CHARS_PER_TOKEN = 4
MAX_PAYLOAD_TOKENS = 8000

REQUIRED_GROUPS: tuple[str, ...] = ("general", "sentiment", "influences")
INFLUENCE_FIELDS: tuple[str, ...] = (
    "sentimentInfluence",
    "contributorInfluence",
    "tweetValueInfluence",
)


def serialize_payload(data: Mapping[str, Any]) -> str:
    """Return the canonical compact JSON text used for size estimates."""
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def text_length(text: str) -> int:
    """Count UTF-16 code units, so characters outside the BMP count as two."""
    return len(text.encode("utf-16-le")) // 2


def estimate_tokens(text: str) -> int:
    """Approximate a token count as one token per four characters, rounded up."""
    return math.ceil(text_length(text) / CHARS_PER_TOKEN)


@dataclass(frozen=True, slots=True)
class FilteredPayload:
    """The reduced statistics structure forwarded to the analysis model."""

    serialized: str

    @property
    def serialized_length(self) -> int:
        return text_length(self.serialized)

    def to_dict(self) -> Dict[str, Any]:
        """Return a fresh copy of the payload as plain JSON data."""
        return json.loads(self.serialized)


def _is_present(value: Any) -> bool:
    # Mirrors JSON truthiness: empty objects and arrays count as present.
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value != 0
    if isinstance(value, str):
        return value != ""
    return True


def filter_stats(document: Any) -> FilteredPayload:
    """Extract the analysed subset of a statistics document.

    Raises ``SchemaError`` when any of ``stats.general``, ``stats.sentiment``
    or ``stats.influences`` is missing.
    """
    stats = document.get("stats") if isinstance(document, Mapping) else None
    if not isinstance(stats, Mapping):
        raise SchemaError("Invalid report format: missing 'stats' object")

    missing = [group for group in REQUIRED_GROUPS if not _is_present(stats.get(group))]
    if missing:
        raise SchemaError(
            "Invalid report format: missing " + ", ".join(f"stats.{g}" for g in missing)
        )

    influences = stats["influences"]
    narrowed: Dict[str, Any] = {}
    if isinstance(influences, Mapping):
        for field_name in INFLUENCE_FIELDS:
            if field_name in influences:
                narrowed[field_name] = influences[field_name]

    data = {
        "stats": {
            "general": stats["general"],
            "sentiment": stats["sentiment"],
            "influences": narrowed,
        }
    }
    return FilteredPayload(serialized=serialize_payload(data))


def check_budget(payload: FilteredPayload) -> int:
    """Return the payload's token estimate or raise ``TokenLimitError``."""
    estimate = estimate_tokens(payload.serialized)
    if estimate > MAX_PAYLOAD_TOKENS:
        raise TokenLimitError(estimate, MAX_PAYLOAD_TOKENS)
    return estimate


__all__ = [
    "CHARS_PER_TOKEN",
    "FilteredPayload",
    "INFLUENCE_FIELDS",
    "MAX_PAYLOAD_TOKENS",
    "check_budget",
    "estimate_tokens",
    "filter_stats",
    "serialize_payload",
    "text_length",
]
