"""
FastAPI routes for the report analyzer.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.responses import HTMLResponse

from report_analyzer.core.errors import (
    ModelError,
    NetworkError,
    ReportAnalysisError,
    SchemaError,
    SessionBusyError,
    SessionNotFoundError,
    TokenLimitError,
)
from report_analyzer.dependencies import (
    get_chat_assistant,
    get_report_workflow,
    get_session_store,
)
from report_analyzer.schemas import (
    AnalysisRequest,
    AnalysisResponse,
    ChatRequest,
    ChatResponse,
    ChatTurnSchema,
    SessionState,
)
from report_analyzer.services import (
    AnalysisSession,
    ChatTurn,
    render_print_document,
)

router = APIRouter()
logger = logging.getLogger(__name__)

ANALYSIS_SUCCESS_MESSAGE = "Report analyzed successfully"

_ERROR_STATUS: tuple[tuple[type[ReportAnalysisError], HTTPStatus], ...] = (
    (NetworkError, HTTPStatus.BAD_GATEWAY),
    (SchemaError, HTTPStatus.UNPROCESSABLE_ENTITY),
    (TokenLimitError, HTTPStatus.REQUEST_ENTITY_TOO_LARGE),
    (ModelError, HTTPStatus.SERVICE_UNAVAILABLE),
)


def _error_detail(exc: Exception) -> str:
    return f"Error: {exc}"


def _status_for(exc: ReportAnalysisError) -> HTTPStatus:
    for error_type, status in _ERROR_STATUS:
        if isinstance(exc, error_type):
            return status
    return HTTPStatus.INTERNAL_SERVER_ERROR


def _require_session(store: Any, session_id: str) -> AnalysisSession:
    try:
        return store.require(session_id)
    except SessionNotFoundError as exc:
        raise HTTPException(
            status_code=HTTPStatus.NOT_FOUND,
            detail=_error_detail(exc),
        ) from exc


def _transcript_schema(transcript: list[ChatTurn]) -> list[ChatTurnSchema]:
    return [ChatTurnSchema(role=turn.role, content=turn.content) for turn in transcript]


@router.get("/health", status_code=HTTPStatus.OK)
async def healthcheck() -> dict:
    """Simple health endpoint for monitoring."""
    return {"status": "ok"}


@router.post("/reports/analyze", response_model=AnalysisResponse)
async def analyze_report(
    payload: AnalysisRequest,
    workflow: Annotated[Any, Depends(get_report_workflow)],
    store: Annotated[Any, Depends(get_session_store)],
) -> AnalysisResponse:
    """Fetch, filter and analyze a report, storing the result on a session."""
    created = payload.session_id is None
    try:
        session = store.get_or_create(payload.session_id)
    except SessionNotFoundError as exc:
        raise HTTPException(
            status_code=HTTPStatus.NOT_FOUND,
            detail=_error_detail(exc),
        ) from exc

    try:
        with session.analysis_in_flight():
            outcome = await workflow.run(payload.url)
    except SessionBusyError as exc:
        raise HTTPException(
            status_code=HTTPStatus.CONFLICT, detail=_error_detail(exc)
        ) from exc
    except ReportAnalysisError as exc:
        logger.warning("Report analysis failed for %s: %s", payload.url, exc)
        if created:
            store.delete(session.session_id)
        raise HTTPException(
            status_code=_status_for(exc), detail=_error_detail(exc)
        ) from exc

    session.replace_analysis(
        report_url=outcome.report_url,
        storage_url=outcome.storage_url,
        analysis=outcome.analysis,
        token_estimate=outcome.token_estimate,
    )
    return AnalysisResponse(
        session_id=session.session_id,
        status=ANALYSIS_SUCCESS_MESSAGE,
        analysis=outcome.analysis,
        token_estimate=outcome.token_estimate,
        storage_url=outcome.storage_url,
    )


@router.get("/sessions/{session_id}", response_model=SessionState)
async def get_session(
    session_id: str,
    store: Annotated[Any, Depends(get_session_store)],
) -> SessionState:
    """Return the current analysis and transcript of a session."""
    session = _require_session(store, session_id)
    return SessionState(
        session_id=session.session_id,
        report_url=session.report_url,
        analysis=session.analysis,
        token_estimate=session.token_estimate,
        transcript=_transcript_schema(session.transcript),
        analysis_busy=session.analysis_busy,
        chat_busy=session.chat_busy,
        updated_at=session.updated_at,
    )


@router.delete("/sessions/{session_id}", status_code=HTTPStatus.NO_CONTENT)
async def delete_session(
    session_id: str,
    store: Annotated[Any, Depends(get_session_store)],
) -> Response:
    store.delete(session_id)
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.post("/sessions/{session_id}/chat", response_model=ChatResponse)
async def chat_about_report(
    session_id: str,
    payload: ChatRequest,
    assistant: Annotated[Any, Depends(get_chat_assistant)],
    store: Annotated[Any, Depends(get_session_store)],
) -> ChatResponse:
    """Ask a follow-up question about the session's analysis.

    Model failures are answered with a fallback transcript entry rather than
    an error status.
    """
    session = _require_session(store, session_id)
    if not session.analysis:
        raise HTTPException(
            status_code=HTTPStatus.CONFLICT,
            detail="Error: Analyze a report before asking follow-up questions.",
        )

    try:
        with session.chat_in_flight():
            transcript, reply = await assistant.send(
                session.transcript, payload.message, session.analysis
            )
    except SessionBusyError as exc:
        raise HTTPException(
            status_code=HTTPStatus.CONFLICT, detail=_error_detail(exc)
        ) from exc

    return ChatResponse(
        session_id=session.session_id,
        reply=reply,
        failed=transcript[-1].failed,
        transcript=_transcript_schema(transcript),
    )


@router.get("/sessions/{session_id}/print", response_class=HTMLResponse)
async def print_analysis(
    session_id: str,
    store: Annotated[Any, Depends(get_session_store)],
) -> HTMLResponse:
    """Render the session's analysis as a printable HTML page."""
    session = _require_session(store, session_id)
    if not session.analysis:
        raise HTTPException(
            status_code=HTTPStatus.NOT_FOUND,
            detail="Error: No analysis available for this session.",
        )
    return HTMLResponse(content=render_print_document(session.analysis))


__all__ = ["router"]
