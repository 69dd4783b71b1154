"""Data models for the live meeting summary service."""
from .meeting_state import (
    ActionItem,
    MeetingDataReply,
    ProcessingStatus,
    StructuredMeetingState,
    TranscriptSegment,
)
from .session_view import SegmentSubmitRequest, SessionView

__all__ = [
    # Meeting state
    "ActionItem",
    "MeetingDataReply",
    "ProcessingStatus",
    "StructuredMeetingState",
    "TranscriptSegment",
    # API models
    "SegmentSubmitRequest",
    "SessionView",
]
