from __future__ import annotations

import io
import json

from ds_mcp.config import RepoPaths
from ds_mcp.server import PROTOCOL_VERSION, create_server


def _request(request_id: object, method: str, params: dict[str, object] | None = None) -> str:
    message: dict[str, object] = {"jsonrpc": "2.0", "id": request_id, "method": method}
    if params is not None:
        message["params"] = params
    return json.dumps(message)


def test_stdio_server_routes_multiple_requests(repo_paths: RepoPaths) -> None:
    server = create_server(repo_root=str(repo_paths.repo_root), environ={})
    in_stream = io.StringIO(
        "\n".join(
            [
                _request(1, "initialize", {"protocolVersion": PROTOCOL_VERSION}),
                json.dumps({"jsonrpc": "2.0", "method": "notifications/initialized"}),
                "",
                _request("req-2", "tools/list"),
                _request(
                    "req-3",
                    "tools/call",
                    {"name": "search", "arguments": {"query": "button", "limit": 2}},
                ),
                _request(4, "ping"),
            ]
        )
        + "\n"
    )
    out_stream = io.StringIO()

    server.serve(in_stream=in_stream, out_stream=out_stream)
    responses = [json.loads(line) for line in out_stream.getvalue().splitlines() if line]

    assert [response["id"] for response in responses] == [1, "req-2", "req-3", 4]
    assert all(response["jsonrpc"] == "2.0" for response in responses)

    initialized = responses[0]["result"]
    assert initialized["protocolVersion"] == PROTOCOL_VERSION
    assert initialized["serverInfo"]["name"] == "design-system-mcp"
    assert initialized["capabilities"] == {"tools": {}}

    assert len(responses[1]["result"]["tools"]) == 10

    search = json.loads(responses[2]["result"]["content"][0]["text"])
    assert [hit["id"] for hit in search["hits"]] == ["atoms/button", "atoms/split-button"]

    assert responses[3]["result"] == {}


def test_malformed_line_does_not_stop_the_loop(tmp_path) -> None:
    server = create_server(repo_root=str(tmp_path), environ={})
    in_stream = io.StringIO("{oops\n" + _request(2, "ping") + "\n")
    out_stream = io.StringIO()

    server.serve(in_stream=in_stream, out_stream=out_stream)
    first, second = [json.loads(line) for line in out_stream.getvalue().splitlines()]

    assert first["error"]["code"] == -32700
    assert second == {"jsonrpc": "2.0", "id": 2, "result": {}}


def test_missing_directories_yield_empty_indices(tmp_path) -> None:
    server = create_server(repo_root=str(tmp_path / "empty"), environ={})

    components = json.loads(server.call_tool("list_components", {})["content"][0]["text"])
    stories = json.loads(server.call_tool("list_stories", {})["content"][0]["text"])
    search = json.loads(server.call_tool("search", {"query": "x"})["content"][0]["text"])

    assert components["components"] == []
    assert stories["stories"] == []
    assert search["hits"] == []


def test_deeply_nested_line_is_a_parse_error(tmp_path) -> None:
    server = create_server(repo_root=str(tmp_path), environ={})
    in_stream = io.StringIO("[" * 200000 + "\n" + _request(2, "ping") + "\n")
    out_stream = io.StringIO()

    server.serve(in_stream=in_stream, out_stream=out_stream)
    first, second = [json.loads(line) for line in out_stream.getvalue().splitlines()]

    assert first["error"]["code"] == -32700
    assert second["result"] == {}


def test_unexpected_failure_becomes_internal_error(tmp_path, monkeypatch) -> None:
    server = create_server(repo_root=str(tmp_path), environ={})

    def explode(payload: object) -> None:
        raise RuntimeError("boom")

    monkeypatch.setattr(server, "handle_payload", explode)
    in_stream = io.StringIO(_request(1, "ping") + "\n" + _request(2, "ping") + "\n")
    out_stream = io.StringIO()

    server.serve(in_stream=in_stream, out_stream=out_stream)
    responses = [json.loads(line) for line in out_stream.getvalue().splitlines()]

    assert [response["error"]["code"] for response in responses] == [-32603, -32603]
