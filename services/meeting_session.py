"""MeetingSession: the processing controller for one browser session.

A session owns the transcript log, the structured meeting state, the
pending-input buffer and the processing status. Each submitted segment runs
one analysis cycle:

    idle -> processing -> idle     (analysis succeeded, state replaced)
    idle -> processing -> error    (analysis failed, state kept, input restored)
    error -> processing -> ...     (manual retry by resubmitting)

Only one analysis may be in flight per session. The guard check and the
switch to ``processing`` happen before the first ``await``, so on a single
event loop no second coroutine can slip past it.
"""
import asyncio
import uuid
import logging
from typing import List, Optional

from models.meeting_state import (
    ProcessingStatus,
    StructuredMeetingState,
    TranscriptSegment,
)
from models.session_view import SessionView
from services.analysis_client import AnalysisClient

logger = logging.getLogger(__name__)


class SessionBusyError(Exception):
    """A segment was submitted while the previous one is still processing."""


class MeetingSession:
    """Processing controller for one meeting session."""

    def __init__(self, analysis_client: AnalysisClient, session_id: Optional[str] = None):
        self.session_id = session_id or str(uuid.uuid4())
        self.analysis_client = analysis_client
        self.meeting_data = StructuredMeetingState()
        self.segments: List[TranscriptSegment] = []
        self.pending_input = ""
        self.status = ProcessingStatus.idle
        self.last_error: Optional[str] = None

    @property
    def is_processing(self) -> bool:
        return self.status is ProcessingStatus.processing

    def can_submit(self, text: Optional[str]) -> bool:
        """Whether the submit affordance should be enabled for this text."""
        return bool(text and text.strip()) and not self.is_processing

    async def submit_segment(self, text: Optional[str]) -> Optional[TranscriptSegment]:
        """Append a segment to the log and run one analysis cycle.

        Args:
            text: Raw segment text as typed by the user

        Returns:
            The appended TranscriptSegment, or None if the text was blank

        Raises:
            SessionBusyError: If an analysis is already in flight
        """
        trimmed = text.strip() if text else ""
        if not trimmed:
            logger.debug(f"Blank segment ignored: session_id={self.session_id}")
            return None

        if self.is_processing:
            logger.warning(
                f"Segment rejected, analysis in progress: session_id={self.session_id}"
            )
            raise SessionBusyError("A segment is already being analyzed")

        segment = TranscriptSegment(text=trimmed)
        self.segments.append(segment)
        original_text = text
        self.pending_input = ""
        self.status = ProcessingStatus.processing

        logger.info(
            f"Segment submitted: session_id={self.session_id}, "
            f"segment_id={segment.id}, length={len(trimmed)}, "
            f"log_size={len(self.segments)}"
        )

        try:
            updated = await self.analysis_client.analyze(trimmed, self.meeting_data)
        except asyncio.CancelledError:
            logger.warning(
                f"Analysis cancelled: session_id={self.session_id}, segment_id={segment.id}"
            )
            self._fail(original_text, "Analysis was cancelled")
            raise
        except Exception as e:
            logger.error(
                f"Failed to analyze segment: session_id={self.session_id}, "
                f"segment_id={segment.id}, error={type(e).__name__}: {str(e)}",
                exc_info=True
            )
            self._fail(original_text, str(e) or type(e).__name__)
            return segment

        self.meeting_data = updated
        self.status = ProcessingStatus.idle
        self.last_error = None

        logger.info(
            f"Meeting state updated: session_id={self.session_id}, "
            f"segment_id={segment.id}, action_items={len(updated.action_items)}"
        )

        return segment

    def _fail(self, original_text: str, reason: str) -> None:
        self.status = ProcessingStatus.error
        self.pending_input = original_text
        self.last_error = reason

    def view(self) -> SessionView:
        """Snapshot of the session for the presentation layer."""
        return SessionView(
            session_id=self.session_id,
            status=self.status,
            pending_input=self.pending_input,
            segments=list(self.segments),
            meeting_data=self.meeting_data,
            last_error=self.last_error,
        )
