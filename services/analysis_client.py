"""AnalysisClient for turning transcript segments into a structured meeting state.

This service uses OpenAI's Structured Outputs with ``MeetingDataReply`` as the
response format. Merging the new segment into the previous state is delegated
to the model; nothing is merged locally.
"""
import json
import os
import logging
from typing import Optional

from openai import (
    AsyncOpenAI,
    ContentFilterFinishReasonError,
    LengthFinishReasonError,
    OpenAIError,
)
from pydantic import ValidationError

from models.meeting_state import (
    MeetingDataReply,
    StructuredMeetingState,
    UNKNOWN_PLACEHOLDER,
)


logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o"
NO_PRIOR_CONTEXT = "None (First segment)"

SYSTEM_INSTRUCTION = f"""You are an expert AI meeting assistant. Your task is to analyze meeting transcript segments and maintain a structured, consolidated view of the meeting.

RULES:
1. Merge new information into existing context. Do not repeat unchanged points unless necessary for context.
2. Be concise and professional.
3. If information is incomplete, use "{UNKNOWN_PLACEHOLDER}".
4. Always return valid JSON matching the schema provided.

Output format should follow this structure exactly:
- Summary: 2-4 bullet points.
- Discussion Points: Key topics discussed.
- Decisions: Clear decisions made.
- Action Items: Array of objects {{ task, owner, deadline }}.
- Risks/Follow-ups: Identified risks or blockers."""


class ServiceError(Exception):
    """The LLM service could not produce a valid structured meeting state."""


class AnalysisClient:
    """Client for the external language-model service.

    One call per segment. The client never retries on its own: the underlying
    OpenAI client is expected to be built with ``max_retries=0`` and a failed
    call surfaces as ServiceError for the caller to handle.
    """

    def __init__(self, client: AsyncOpenAI, model: str = DEFAULT_MODEL):
        self.client = client
        self.model = model
        logger.info(f"AnalysisClient initialized with model: {self.model}")

    @classmethod
    def from_env(cls) -> "AnalysisClient":
        """Build a client from OPENAI_API_KEY and OPENAI_MODEL."""
        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            raise ValueError("OPENAI_API_KEY environment variable is required")

        model = os.getenv("OPENAI_MODEL", DEFAULT_MODEL)
        return cls(AsyncOpenAI(api_key=api_key, max_retries=0), model=model)

    async def analyze(
        self,
        segment_text: str,
        previous_state: Optional[StructuredMeetingState] = None
    ) -> StructuredMeetingState:
        """Analyze a segment in the context of the previous state.

        Args:
            segment_text: The new transcript segment (non-empty)
            previous_state: Consolidated state so far, or None for the first segment

        Returns:
            The new StructuredMeetingState proposed by the model

        Raises:
            ServiceError: On network failure, non-success status, refusal,
                truncated or filtered output, or a reply that does not
                match the schema
        """
        logger.info(
            f"Analyzing segment: model={self.model}, "
            f"segment_length={len(segment_text)}, "
            f"has_context={previous_state is not None}"
        )

        try:
            completion = await self.client.beta.chat.completions.parse(
                model=self.model,
                messages=[
                    {
                        "role": "system",
                        "content": SYSTEM_INSTRUCTION
                    },
                    {
                        "role": "user",
                        "content": self._build_user_prompt(segment_text, previous_state)
                    }
                ],
                response_format=MeetingDataReply,
            )
        except (LengthFinishReasonError, ContentFilterFinishReasonError) as e:
            raise ServiceError(f"LLM output was cut off: {type(e).__name__}") from e
        except OpenAIError as e:
            raise ServiceError(f"LLM request failed: {type(e).__name__}: {e}") from e
        except ValidationError as e:
            raise ServiceError(
                f"LLM response does not match the meeting schema: {e.error_count()} error(s)"
            ) from e

        if not completion.choices:
            raise ServiceError("LLM response contained no choices")

        message = completion.choices[0].message
        if getattr(message, "refusal", None):
            raise ServiceError(f"LLM refused the request: {message.refusal}")

        reply = message.parsed
        if reply is None:
            raise ServiceError("LLM response was empty")

        result = reply.to_state()

        logger.info(
            f"Segment analyzed: summary={len(result.summary)}, "
            f"decisions={len(result.decisions)}, "
            f"action_items={len(result.action_items)}, "
            f"risks={len(result.risks)}"
        )

        return result

    def _build_user_prompt(
        self,
        segment_text: str,
        previous_state: Optional[StructuredMeetingState]
    ) -> str:
        if previous_state is None:
            context = NO_PRIOR_CONTEXT
        else:
            context = json.dumps(previous_state.to_wire())

        return f"""NEW TRANSCRIPT SEGMENT:
"{segment_text}"

PREVIOUS CONSOLIDATED DATA (FOR CONTEXT):
{context}

Analyze the segment and provide the updated consolidated meeting data in JSON format."""
