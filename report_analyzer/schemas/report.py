"""
Pydantic models for report analysis and follow-up chat requests.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class AnalysisRequest(BaseModel):
    """Report link submitted for analysis."""

    url: str = Field(
        ...,
        min_length=1,
        description="Tweet Binder report link, e.g. https://dash.tweetbinder.com/report/<id>.",
    )
    session_id: Optional[str] = Field(
        None,
        description="Existing session to replace the analysis of; a new one is created when omitted.",
    )


class AnalysisResponse(BaseModel):
    """Outcome of a successful report analysis."""

    session_id: str
    status: str = Field(..., description="Human readable status message.")
    analysis: str = Field(..., description="Model analysis text, returned verbatim.")
    token_estimate: int = Field(
        ..., description="Estimated token count of the payload sent to the model."
    )
    storage_url: str = Field(
        ..., description="Location the statistics document was fetched from."
    )


class ChatTurnSchema(BaseModel):
    """One transcript entry."""

    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    """Follow-up question about the current analysis."""

    message: str = Field(..., min_length=1)


class ChatResponse(BaseModel):
    """Assistant reply together with the full transcript."""

    session_id: str
    reply: str
    failed: bool = Field(
        False, description="True when the reply is the fallback after a model failure."
    )
    transcript: List[ChatTurnSchema] = Field(default_factory=list)


class SessionState(BaseModel):
    """Snapshot of an analysis session."""

    session_id: str
    report_url: Optional[str] = None
    analysis: Optional[str] = None
    token_estimate: Optional[int] = None
    transcript: List[ChatTurnSchema] = Field(default_factory=list)
    analysis_busy: bool = False
    chat_busy: bool = False
    updated_at: datetime


__all__ = [
    "AnalysisRequest",
    "AnalysisResponse",
    "ChatRequest",
    "ChatResponse",
    "ChatTurnSchema",
    "SessionState",
]
