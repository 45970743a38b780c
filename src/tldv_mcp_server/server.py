"""MCP server entrypoint.

Registers the tool catalogue with the MCP runtime and serves it over
stdio. Tool implementations live in `tools` so they can be unit-tested
without the runtime.

The catalogue is registered through the low-level `mcp` server rather
than FastMCP: the advertised input schemas come straight from the
pydantic models, which lets `list-meetings` keep wire names such as
`from` that are not valid Python parameter names.
"""

from __future__ import annotations

import asyncio
import sys
from typing import Any, Dict, List, Optional

import dotenv
import mcp.types as types
import structlog
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from . import __version__
from .api import TldvApi
from .config import load_config, load_startup_config
from .errors import to_error_payload
from .logger import configure_logging
from .tools import TOOLS, call_tool, input_schema

logger = structlog.get_logger(__name__)

SERVER_NAME = "tldv-server"
INSTRUCTIONS = "You are a helpful assistant that can help with tl;dv API requests."


def build_server(api: TldvApi) -> Server:
    """Create the MCP server and register every catalogue entry once."""

    server: Server = Server(SERVER_NAME, version=__version__, instructions=INSTRUCTIONS)
    tools = [
        types.Tool(
            name=spec.name,
            description=spec.description,
            inputSchema=input_schema(spec),
        )
        for spec in TOOLS.values()
    ]

    @server.list_tools()
    async def _list_tools() -> List[types.Tool]:
        return tools

    @server.call_tool()
    async def _call_tool(
        name: str, arguments: Optional[Dict[str, Any]]
    ) -> List[types.TextContent]:
        text = await call_tool(api, name, arguments)
        return [types.TextContent(type="text", text=text)]

    return server


async def serve(api: TldvApi) -> None:
    """Connect the stdio transport and serve until the host disconnects."""

    server = build_server(api)
    logger.info("Connecting to MCP server...")
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream, write_stream, server.create_initialization_options()
        )


def main() -> None:
    """Run the MCP server.

    Loads configuration, configures logging to stderr, builds the API
    client and serves the tools over stdio. A fatal startup error is
    logged; the process then exits with status 1 when `TLDV_EXIT_ON_FATAL`
    is set, otherwise `main()` returns normally. The flag is read on its
    own so it still applies when another setting is invalid; an
    unreadable flag counts as set.
    """

    dotenv.load_dotenv()
    configure_logging()
    exit_on_fatal: Optional[bool] = None
    try:
        exit_on_fatal = load_startup_config().exit_on_fatal
        config = load_config()
        configure_logging(level=config.log_level)
        logger.info("Initializing tl;dv API...")
        api = TldvApi(config.to_client_config())
        logger.info("Starting MCP server...", tools=list(TOOLS))
        asyncio.run(serve(api))
    except Exception as exc:
        logger.error(
            "Fatal error in main()",
            error=str(exc),
            payload=to_error_payload(exc),
            exc_info=True,
        )
        if exit_on_fatal is None or exit_on_fatal:
            sys.exit(1)


if __name__ == "__main__":  # pragma: no cover
    main()
