from __future__ import annotations

import io
import json

import httpx
import pytest
import structlog
from mcp.shared.memory import create_connected_server_and_client_session

from tldv_mcp_server import server as server_module
from tldv_mcp_server.logger import configure_logging
from tldv_mcp_server.server import build_server, main


def _log_lines(text: str) -> list:
    return [json.loads(line) for line in text.splitlines() if line.strip()]


@pytest.mark.asyncio
async def test_lists_catalogue_tools(make_api):
    api, _ = make_api(lambda r: httpx.Response(200, json={}))
    async with create_connected_server_and_client_session(build_server(api)) as client:
        tools = (await client.list_tools()).tools
    assert [t.name for t in tools] == [
        "get-meeting-metadata",
        "get-transcript",
        "list-meetings",
        "get-highlights",
    ]
    assert tools[0].inputSchema["properties"]["id"]["type"] == "string"


@pytest.mark.asyncio
async def test_call_returns_envelope_as_text(make_api, meeting_payload):
    api, _ = make_api(lambda r: httpx.Response(200, json=meeting_payload))
    async with create_connected_server_and_client_session(build_server(api)) as client:
        result = await client.call_tool("get-meeting-metadata", {"id": "m1"})
    assert result.isError is False
    content = result.content
    assert len(content) == 1
    assert content[0].type == "text"
    assert json.loads(content[0].text)["data"]["id"] == "m1"


def test_logging_writes_json_lines_to_injected_stream():
    sink = io.StringIO()
    configure_logging(stream=sink, level="INFO")
    log = structlog.get_logger("test")
    log.debug("hidden")
    log.info("Starting MCP server...", tools=2)
    [entry] = _log_lines(sink.getvalue())
    assert entry["event"] == "Starting MCP server..."
    assert entry["level"] == "info"
    assert entry["tools"] == 2
    assert "timestamp" in entry


@pytest.fixture
def no_api_key(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TLDV_API_KEY", "")
    monkeypatch.delenv("TLDV_EXIT_ON_FATAL", raising=False)

    def _serve(api):  # pragma: no cover - must not be reached
        raise AssertionError("server started without an API key")

    monkeypatch.setattr(server_module, "serve", _serve)


def test_fatal_startup_error_is_logged_and_returns(no_api_key, capsys):
    main()
    captured = capsys.readouterr()
    assert captured.out == ""
    fatal = [e for e in _log_lines(captured.err) if e["event"] == "Fatal error in main()"]
    assert fatal[0]["level"] == "error"
    assert fatal[0]["error"] == "API key is required"
    assert fatal[0]["payload"]["code"] == "CONFIG_ERROR"
    assert "exception" in fatal[0]


def test_fatal_startup_error_exits_when_configured(no_api_key, monkeypatch):
    monkeypatch.setenv("TLDV_EXIT_ON_FATAL", "true")
    with pytest.raises(SystemExit) as exc:
        main()
    assert exc.value.code == 1


@pytest.mark.parametrize(
    "name, value",
    [
        ("TLDV_MAX_RETRIES", "abc"),
        ("TLDV_LOG_LEVEL", "verbose"),
        ("TLDV_EXIT_ON_FATAL", "maybe"),
    ],
)
def test_invalid_setting_still_exits_when_configured(
    no_api_key, monkeypatch, capsys, name, value
):
    monkeypatch.setenv("TLDV_API_KEY", "k")
    monkeypatch.setenv("TLDV_EXIT_ON_FATAL", "true")
    monkeypatch.setenv(name, value)
    with pytest.raises(SystemExit) as exc:
        main()
    assert exc.value.code == 1
    fatal = [
        e for e in _log_lines(capsys.readouterr().err) if e["event"] == "Fatal error in main()"
    ]
    assert name[len("TLDV_"):].lower() in fatal[0]["error"]


def test_invalid_setting_returns_without_exit_flag(no_api_key, monkeypatch):
    monkeypatch.setenv("TLDV_API_KEY", "k")
    monkeypatch.setenv("TLDV_MAX_RETRIES", "abc")
    assert main() is None
