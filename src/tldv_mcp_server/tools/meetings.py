"""Meetings-related tool handlers.

Each handler receives the API client and an already validated input
model, and returns the client's envelope untouched.
"""

from __future__ import annotations

from ..api import TldvApi
from ..schemas import (
    GetHighlightsInput,
    GetMeetingInput,
    GetMeetingsParams,
    GetTranscriptInput,
    TldvResponse,
)


async def get_meeting_metadata(api: TldvApi, params: GetMeetingInput) -> TldvResponse:
    """Get a meeting's metadata by id."""
    return await api.get_meeting(params.id)


async def get_transcript(api: TldvApi, params: GetTranscriptInput) -> TldvResponse:
    return await api.get_transcript(params.meeting_id)


async def list_meetings(api: TldvApi, params: GetMeetingsParams) -> TldvResponse:
    """List meetings matching the filters; pagination is server-side."""
    return await api.get_meetings(params)


async def get_highlights(api: TldvApi, params: GetHighlightsInput) -> TldvResponse:
    return await api.get_highlights(params.meeting_id)
