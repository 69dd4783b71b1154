"""
Session Request/Response Models

This module defines the Pydantic models for the meeting session endpoints.
These models handle validation and serialization for the
POST /sessions/{session_id}/segments and GET /sessions/{session_id} APIs.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from models.meeting_state import (
    ProcessingStatus,
    StructuredMeetingState,
    TranscriptSegment,
)


class SegmentSubmitRequest(BaseModel):
    """
    Request body for the segment submission endpoint.

    Whitespace-only text is accepted here on purpose: the session treats it
    as a silent no-op rather than a validation error.

    Attributes:
        text: Raw segment text as typed or pasted by the user
    """
    text: str = Field(
        default="",
        description="Transcript segment text"
    )


class SessionView(BaseModel):
    """
    Read-only snapshot of a meeting session, rendered by the browser.

    Attributes:
        session_id: Identifier of the session
        status: Current processing status
        pending_input: Text to place back in the input box (restored on failure)
        segments: Transcript log in submission order
        meeting_data: Current structured meeting state
        last_error: Short description of the last analysis failure, if any
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    session_id: str = Field(
        ...,
        description="Identifier of the session"
    )
    status: ProcessingStatus = Field(
        ...,
        description="Current processing status"
    )
    pending_input: str = Field(
        default="",
        description="Text to restore into the input box"
    )
    segments: List[TranscriptSegment] = Field(
        default_factory=list,
        description="Transcript log in submission order"
    )
    meeting_data: StructuredMeetingState = Field(
        default_factory=StructuredMeetingState,
        description="Current structured meeting state"
    )
    last_error: Optional[str] = Field(
        default=None,
        description="Short description of the last analysis failure"
    )
