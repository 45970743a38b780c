"""MCP tools for meeting metadata, transcripts, highlights and listing.

Each tool is a plain async function taking the API client and a parsed
input model, which keeps them testable without the MCP runtime. The
catalogue in `catalog.py` is what the server registers.
"""

from .catalog import TOOLS, ToolSpec, call_tool, input_schema, serialize
from .meetings import (
    get_highlights,
    get_meeting_metadata,
    get_transcript,
    list_meetings,
)

__all__ = [
    "TOOLS",
    "ToolSpec",
    "call_tool",
    "input_schema",
    "serialize",
    "get_meeting_metadata",
    "get_transcript",
    "list_meetings",
    "get_highlights",
]
