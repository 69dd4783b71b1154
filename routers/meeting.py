"""
Meeting session router.

This router serves the live meeting page and the JSON API its script calls:

- GET  /                                 page bound to a new session
- GET  /sessions/{session_id}            current session view
- POST /sessions/{session_id}/segments   submit one transcript segment
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse

from models.session_view import SegmentSubmitRequest, SessionView
from services.meeting_session import MeetingSession, SessionBusyError
from services.session_store import SessionNotFoundError, SessionStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["meeting"])

MAX_HEARTBEAT_SECONDS = 60


def heartbeat_interval_ms(ttl_seconds: float) -> int:
    """How often an open page polls its session so it never reaches the TTL."""
    return int(min(MAX_HEARTBEAT_SECONDS, ttl_seconds / 3) * 1000)


async def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


async def get_session(
    session_id: str,
    store: SessionStore = Depends(get_session_store)
) -> MeetingSession:
    """Resolve a live session or fail with 404."""
    try:
        return store.get(session_id)
    except SessionNotFoundError:
        logger.warning(f"Unknown session requested: session_id={session_id}")
        raise HTTPException(status_code=404, detail="Session not found")


@router.get("/", response_class=HTMLResponse)
async def index(request: Request, store: SessionStore = Depends(get_session_store)):
    """Render the meeting page for a fresh session."""
    session = store.create()
    view = session.view().model_dump(mode="json", by_alias=True)
    return request.app.state.templates.TemplateResponse(
        request,
        "index.html",
        {
            "session_id": session.session_id,
            "initial_view": view,
            "heartbeat_ms": heartbeat_interval_ms(store.ttl_seconds),
        }
    )


@router.get("/sessions/{session_id}", response_model=SessionView)
async def read_session(session: MeetingSession = Depends(get_session)):
    return session.view()


@router.post("/sessions/{session_id}/segments", response_model=SessionView)
async def submit_segment(
    body: SegmentSubmitRequest,
    session: MeetingSession = Depends(get_session)
):
    """
    Submit a transcript segment and wait for the analysis cycle to finish.

    Args:
        body: SegmentSubmitRequest with the raw segment text
        session: The live session resolved from the path

    Returns:
        SessionView after the cycle. A failed analysis is reported through
        status="error", not through an HTTP error. Blank text returns the
        unchanged view.

    Raises:
        HTTPException: 404 for unknown sessions, 409 while a previous
            segment is still being analyzed
    """
    try:
        await session.submit_segment(body.text)
    except SessionBusyError:
        raise HTTPException(
            status_code=409,
            detail="A segment is already being analyzed for this session"
        )

    return session.view()
