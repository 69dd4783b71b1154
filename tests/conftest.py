"""Shared fixtures for the test suite."""

import os

# main builds its AnalysisClient at import time and exits without a key.
os.environ.setdefault("OPENAI_API_KEY", "test-openai-key")

import pytest
from unittest.mock import AsyncMock, MagicMock

from models.meeting_state import StructuredMeetingState


@pytest.fixture
def launch_state():
    """The structured state for "We agreed to launch on Friday."."""
    return StructuredMeetingState.model_validate({
        "summary": ["Launch agreed for Friday"],
        "discussionPoints": [],
        "decisions": ["Launch on Friday"],
        "actionItems": [],
        "risks": [],
    })


@pytest.fixture
def mock_analysis_client(launch_state):
    """Analysis client double whose analyze() returns launch_state."""
    client = MagicMock()
    client.model = "test-model"
    client.analyze = AsyncMock(return_value=launch_state)
    return client
