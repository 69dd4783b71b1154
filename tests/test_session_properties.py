"""
Property-Based Tests for the Meeting Session Cycle

This module contains property tests for MeetingSession.submit_segment:

- Property 1: Exactly one trimmed segment per non-blank submission
- Property 2: Blank submissions are no-ops
- Property 3: Failures never change the structured state
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock
from hypothesis import given, strategies as st, settings, assume

from models.meeting_state import ProcessingStatus, StructuredMeetingState
from services.analysis_client import ServiceError
from services.meeting_session import MeetingSession


# =============================================================================
# Strategy Definitions
# =============================================================================

@st.composite
def whitespace_only_string(draw):
    """Generate strings containing only whitespace characters, including empty."""
    return draw(st.one_of(
        st.just(""),
        st.just(" "),
        st.just("\t"),
        st.just("\n"),
        st.just("\r\n"),
        st.just(" \t \n \r "),
        st.text(
            alphabet=st.sampled_from([' ', '\t', '\n', '\r']),
            min_size=1,
            max_size=20
        ),
    ))


@st.composite
def non_blank_text(draw):
    """Generate strings with at least one non-whitespace character."""
    base = draw(st.text(min_size=1, max_size=200))
    assume(base.strip() != "")
    return base


def meeting_states():
    """Generate arbitrary valid structured meeting states."""
    lines = st.lists(st.text(max_size=30), max_size=4)
    action_items = st.lists(
        st.fixed_dictionaries({
            "task": st.text(max_size=20),
            "owner": st.text(max_size=10),
            "deadline": st.text(max_size=10),
        }),
        max_size=3
    )
    return st.fixed_dictionaries({
        "summary": lines,
        "discussionPoints": lines,
        "decisions": lines,
        "actionItems": action_items,
        "risks": lines,
    }).map(StructuredMeetingState.model_validate)


def _session(result=None, error=None):
    client = MagicMock()
    client.model = "test-model"
    client.analyze = AsyncMock(return_value=result or StructuredMeetingState(), side_effect=error)
    return MeetingSession(client), client


# =============================================================================
# Property 1: Exactly one trimmed segment per non-blank submission
# =============================================================================

@given(non_blank_text(), meeting_states())
@settings(max_examples=100)
def test_property1_non_blank_submission_appends_one_trimmed_segment(text, new_state):
    session, client = _session(result=new_state)

    asyncio.run(session.submit_segment(text))

    assert len(session.segments) == 1
    assert session.segments[0].text == text.strip()
    assert session.meeting_data == new_state
    assert session.status is ProcessingStatus.idle
    assert client.analyze.await_count == 1


# =============================================================================
# Property 2: Blank submissions are no-ops
# =============================================================================

@given(whitespace_only_string())
@settings(max_examples=100)
def test_property2_blank_submission_is_no_op(text):
    session, client = _session()

    result = asyncio.run(session.submit_segment(text))

    assert result is None
    assert session.segments == []
    assert session.status is ProcessingStatus.idle
    assert session.pending_input == ""
    client.analyze.assert_not_called()


# =============================================================================
# Property 3: Failures never change the structured state
# =============================================================================

@given(non_blank_text(), meeting_states())
@settings(max_examples=100)
def test_property3_failure_preserves_state_and_restores_input(text, prior_state):
    session, client = _session(error=ServiceError("schema mismatch"))
    session.meeting_data = prior_state

    asyncio.run(session.submit_segment(text))

    assert session.meeting_data == prior_state
    assert session.status is ProcessingStatus.error
    assert session.pending_input == text
    assert len(session.segments) == 1
