"""Pydantic models for the structured meeting state and the transcript log.

StructuredMeetingState is both the JSON shape the LLM is asked to return and
the shape the browser renders. Python attributes are snake_case; the wire form
uses camelCase aliases (summary, discussionPoints, decisions, actionItems,
risks).
"""
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


DEFAULT_SPEAKER = "Speaker"
UNKNOWN_PLACEHOLDER = "TBD"


class ProcessingStatus(str, Enum):
    """Phase of a meeting session's processing cycle."""
    idle = "idle"
    processing = "processing"
    error = "error"


class ActionItem(BaseModel):
    """An actionable task extracted from the meeting."""
    model_config = ConfigDict(extra="forbid")

    task: str = Field(description="What needs to be done")
    owner: str = Field(description="Who is responsible, or TBD")
    deadline: str = Field(description="When it is due, or TBD")


class StructuredMeetingState(BaseModel):
    """Cumulative structured view of the meeting so far.

    Replaced wholesale after each successful analysis. Unknown keys are
    rejected so that a reply which drifts from the schema fails validation
    instead of being partially accepted.
    """
    model_config = ConfigDict(alias_generator=to_camel, extra="forbid")

    summary: List[str] = Field(default_factory=list)
    discussion_points: List[str] = Field(default_factory=list)
    decisions: List[str] = Field(default_factory=list)
    action_items: List[ActionItem] = Field(default_factory=list)
    risks: List[str] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not (
            self.summary
            or self.discussion_points
            or self.decisions
            or self.action_items
            or self.risks
        )

    def to_wire(self) -> dict:
        """Dump with camelCase keys, as sent to the LLM and the browser."""
        return self.model_dump(mode="json", by_alias=True)


class MeetingDataReply(BaseModel):
    """Structured output requested from the LLM.

    Same shape as StructuredMeetingState, but every field is required: a
    reply that leaves a field out is a parse failure, not an empty list.
    Used as ``response_format`` for OpenAI's Structured Outputs.
    """
    model_config = ConfigDict(alias_generator=to_camel, extra="forbid")

    summary: List[str] = Field(
        ...,
        description="2-4 concise bullet points summarizing the meeting status."
    )
    discussion_points: List[str] = Field(
        ...,
        description="Key themes and topics covered."
    )
    decisions: List[str] = Field(
        ...,
        description="Concrete decisions reached."
    )
    action_items: List[ActionItem] = Field(
        ...,
        description="Tasks with owner and deadline."
    )
    risks: List[str] = Field(
        ...,
        description="Blockers, risks, or follow-up items."
    )

    def to_state(self) -> StructuredMeetingState:
        return StructuredMeetingState.model_validate(self.model_dump(by_alias=True))


def _new_segment_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TranscriptSegment(BaseModel):
    """One submitted chunk of transcript text. Immutable once created."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_segment_id)
    timestamp: datetime = Field(default_factory=_utcnow)
    text: str
    speaker: str = DEFAULT_SPEAKER

    @field_validator("text")
    @classmethod
    def text_must_not_be_empty(cls, v: str) -> str:
        """Validate that text is not empty or whitespace-only."""
        if not v or not v.strip():
            raise ValueError("segment text cannot be empty or contain only whitespace")
        return v
