#!/usr/bin/env python3
"""Utility script to run a local transcript through a MeetingSession.

This script:
1. Reads a transcript file (default: raw_transcript.txt in the project root)
2. Splits it into segments on blank lines
3. Feeds the segments one by one through the real OpenAI-backed AnalysisClient
4. Saves the final structured meeting state to meeting_summary.md
"""
import asyncio
import sys
from pathlib import Path
from typing import List
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Add parent directory to path to import services
sys.path.insert(0, str(Path(__file__).parent.parent))

from models.meeting_state import ProcessingStatus, StructuredMeetingState
from services.analysis_client import AnalysisClient
from services.meeting_session import MeetingSession


def split_segments(raw_transcript: str) -> List[str]:
    """Split a transcript into blank-line separated segments."""
    blocks = [block.strip() for block in raw_transcript.split("\n\n")]
    return [block for block in blocks if block]


def _bullets(items: List[str], empty: str) -> str:
    if not items:
        return f"*{empty}*\n"
    return "".join(f"- {item}\n" for item in items)


def format_markdown(state: StructuredMeetingState, segment_count: int) -> str:
    """Render the structured meeting state as Markdown."""
    if state.is_empty():
        return f"# Meeting Summary\n\n*Nothing captured from {segment_count} transcript segment(s)*\n"

    markdown_output = f"""# Meeting Summary

*Built from {segment_count} transcript segment(s)*

## Summary

{_bullets(state.summary, "No summary yet")}
## Decisions

{_bullets(state.decisions, "No decisions captured")}
## Action Items

"""
    if state.action_items:
        markdown_output += "| Task | Owner | Deadline |\n|---|---|---|\n"
        for item in state.action_items:
            markdown_output += f"| {item.task} | {item.owner} | {item.deadline} |\n"
    else:
        markdown_output += "*No action items identified*\n"

    markdown_output += f"""
## Key Discussion Points

{_bullets(state.discussion_points, "No discussion points")}
## Risks & Follow-ups

{_bullets(state.risks, "No risks identified")}"""
    return markdown_output


async def main():
    """Main execution function."""
    project_root = Path(__file__).parent.parent
    input_file = Path(sys.argv[1]) if len(sys.argv) > 1 else project_root / "raw_transcript.txt"
    output_file = project_root / "meeting_summary.md"

    # Check if input file exists
    if not input_file.exists():
        print(f"Error: Input file not found: {input_file}")
        sys.exit(1)

    print(f"Reading transcript from: {input_file}")

    with open(input_file, 'r', encoding='utf-8') as f:
        segments = split_segments(f.read())

    if not segments:
        print("Error: transcript contains no text")
        sys.exit(1)

    print(f"Segments found: {len(segments)}")

    try:
        session = MeetingSession(AnalysisClient.from_env(), session_id="local-file")
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    for i, segment in enumerate(segments, 1):
        print(f"Processing segment {i}/{len(segments)}...")
        await session.submit_segment(segment)
        if session.status is ProcessingStatus.error:
            print(f"Error analyzing segment {i}: {session.last_error}")
            sys.exit(1)

    print("✓ Processing complete!")

    with open(output_file, 'w', encoding='utf-8') as f:
        f.write(format_markdown(session.meeting_data, len(session.segments)))

    print(f"✓ Results saved to: {output_file}")
    print(f"Action items found: {len(session.meeting_data.action_items)}")
    print(f"Decisions found: {len(session.meeting_data.decisions)}")


if __name__ == "__main__":
    asyncio.run(main())
