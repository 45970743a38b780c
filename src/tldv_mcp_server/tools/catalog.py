"""Static tool catalogue and dispatch.

`TOOLS` maps each tool name to its description, input model and
handler. The server iterates it once at startup to advertise the tools;
`call_tool` validates the arguments of an incoming call, runs the
handler and serializes the resulting envelope to text. Success and
error envelopes are serialized the same way.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Type

import structlog
from pydantic import BaseModel

from ..api import TldvApi
from ..errors import BadRequestError
from ..schemas import (
    GetHighlightsInput,
    GetMeetingInput,
    GetMeetingsParams,
    GetTranscriptInput,
    TldvResponse,
)
from ..validation import Invalid, validate
from .meetings import get_highlights, get_meeting_metadata, get_transcript, list_meetings

logger = structlog.get_logger(__name__)

Handler = Callable[[TldvApi, Any], Awaitable[TldvResponse]]


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    input_model: Type[BaseModel]
    handler: Handler


_CATALOGUE = [
    ToolSpec(
        "get-meeting-metadata",
        "Get a meeting by its ID. The meeting ID is a unique identifier for a "
        "meeting. It will return the meeting metadata, including the name, the "
        "date, the organizer, participants and more.",
        GetMeetingInput,
        get_meeting_metadata,
    ),
    ToolSpec(
        "get-transcript",
        "Get transcript by meeting ID. The transcript is a list of messages "
        "exchanged between the participants in the meeting. It's time-stamped "
        "and contains the speaker and the message",
        GetTranscriptInput,
        get_transcript,
    ),
    ToolSpec(
        "list-meetings",
        "List all meetings based on the filters provided. You can filter by "
        "date, status, and more. Those meetings are the same you have access "
        "to in the tl;dv app.",
        GetMeetingsParams,
        list_meetings,
    ),
    ToolSpec(
        "get-highlights",
        "Allows you to get highlights from a meeting by providing a meeting ID.",
        GetHighlightsInput,
        get_highlights,
    ),
]

TOOLS: Dict[str, ToolSpec] = {spec.name: spec for spec in _CATALOGUE}


def input_schema(spec: ToolSpec) -> Dict[str, Any]:
    """JSON schema of a tool's input, keyed by wire names."""
    return spec.input_model.model_json_schema(by_alias=True)


def serialize(envelope: TldvResponse) -> str:
    return json.dumps(envelope, default=str)


async def call_tool(
    api: TldvApi, name: str, arguments: Optional[Mapping[str, Any]]
) -> str:
    """Validate `arguments`, run the named tool and return its text output.

    Raises:
        BadRequestError: If no tool has this name.
    """

    spec = TOOLS.get(name)
    if spec is None:
        raise BadRequestError(f"Unknown tool: {name}", {"name": name})

    result = validate(spec.input_model, arguments)
    if isinstance(result, Invalid):
        logger.warning("Rejected tool input", tool=name, error=result.message)
        envelope: TldvResponse = {"data": None, "error": result.message}
    else:
        logger.debug("Calling tool", tool=name)
        envelope = await spec.handler(api, result.value)
    return serialize(envelope)
