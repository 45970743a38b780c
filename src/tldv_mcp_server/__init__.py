"""tl;dv MCP Server package.

This package provides a read-only MCP server exposing tl;dv meetings,
transcripts and highlights through a set of tools backed by the tl;dv
public REST API.

Usage example:
    from tldv_mcp_server.server import main
    if __name__ == "__main__":
        main()

Note: The API client (`tldv_mcp_server.api.TldvApi`) can also be used
on its own.
"""

__all__ = [
    "__version__",
]

__version__ = "1.0.1"
