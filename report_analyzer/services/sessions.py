"""Process-local storage for report analysis sessions."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterator, List, Optional
from uuid import uuid4

from report_analyzer.core.errors import SessionBusyError, SessionNotFoundError
from report_analyzer.services.chat import ChatTurn


@dataclass(slots=True)
class AnalysisSession:
    """Current analysis, its chat transcript and the two in-flight flags."""

    session_id: str
    report_url: Optional[str] = None
    storage_url: Optional[str] = None
    analysis: Optional[str] = None
    token_estimate: Optional[int] = None
    transcript: List[ChatTurn] = field(default_factory=list)
    analysis_busy: bool = False
    chat_busy: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def replace_analysis(
        self,
        *,
        report_url: str,
        storage_url: str,
        analysis: str,
        token_estimate: int,
    ) -> None:
        """Store a new analysis and start a fresh transcript for it."""
        self.report_url = report_url
        self.storage_url = storage_url
        self.analysis = analysis
        self.token_estimate = token_estimate
        self.transcript = []
        self.touch()

    @contextmanager
    def analysis_in_flight(self) -> Iterator["AnalysisSession"]:
        if self.analysis_busy:
            raise SessionBusyError("An analysis is already running for this session")
        self.analysis_busy = True
        try:
            yield self
        finally:
            self.analysis_busy = False
            self.touch()

    @contextmanager
    def chat_in_flight(self) -> Iterator["AnalysisSession"]:
        if self.chat_busy:
            raise SessionBusyError("A chat message is already being answered")
        self.chat_busy = True
        try:
            yield self
        finally:
            self.chat_busy = False
            self.touch()

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)


class SessionStore:
    """In-memory session registry with TTL pruning; nothing is persisted."""

    def __init__(self, ttl_seconds: int = 3600) -> None:
        self._ttl = ttl_seconds
        self._sessions: Dict[str, AnalysisSession] = {}

    def _prune(self) -> None:
        threshold = datetime.now(timezone.utc) - timedelta(seconds=self._ttl)
        expired = [
            session_id
            for session_id, session in self._sessions.items()
            if session.updated_at < threshold
            and not (session.analysis_busy or session.chat_busy)
        ]
        for session_id in expired:
            del self._sessions[session_id]

    def create(self) -> AnalysisSession:
        self._prune()
        session = AnalysisSession(session_id=uuid4().hex)
        self._sessions[session.session_id] = session
        return session

    def get(self, session_id: str) -> Optional[AnalysisSession]:
        self._prune()
        return self._sessions.get(session_id)

    def require(self, session_id: str) -> AnalysisSession:
        session = self.get(session_id)
        if session is None:
            raise SessionNotFoundError(f"Unknown session: {session_id}")
        return session

    def get_or_create(self, session_id: str | None) -> AnalysisSession:
        if session_id is not None:
            return self.require(session_id)
        return self.create()

    def delete(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)


__all__ = ["AnalysisSession", "SessionStore"]
