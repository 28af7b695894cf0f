from __future__ import annotations

import json
from pathlib import Path


def test_stdio_workflow_e2e(tmp_path: Path, start_stdio_server) -> None:
    components = tmp_path / "packages" / "design-system" / "src" / "components"
    stories = tmp_path / "apps" / "storybook" / "stories"
    (components / "molecules").mkdir(parents=True)
    stories.mkdir(parents=True)
    (components / "molecules" / "card.tsx").write_text(
        "export function Card() { return null; }\n", encoding="utf-8"
    )
    (stories / "Card.stories.tsx").write_text(
        "export default { title: 'Card' };\n", encoding="utf-8"
    )
    audit_path = tmp_path / "audit.jsonl"

    client = start_stdio_server("--repo-root", str(tmp_path), "--audit-log", str(audit_path))

    initialized = client.request("initialize")
    assert initialized["result"]["serverInfo"]["name"] == "design-system-mcp"

    tools = client.request("tools/list")
    assert len(tools["result"]["tools"]) == 10

    listed = client.call_tool("list_components", {})
    assert [entry["id"] for entry in listed["components"]] == ["molecules/card"]

    source = client.call_tool("get_component_source", {"id": "molecules/card"})
    assert source["component"]["fileStem"] == "card"

    suggested = client.call_tool("suggest_story_for_component", {"componentId": "molecules/card"})
    assert suggested["exists"] is True

    missing = client.call_tool("get_story_source", {"name": "Tooltip"})
    assert missing["error"] == "Story not found: Tooltip"

    assert client.close() == 0

    events = [json.loads(line) for line in audit_path.read_text(encoding="utf-8").splitlines()]
    assert [event["tool"] for event in events] == [
        "list_components",
        "get_component_source",
        "suggest_story_for_component",
        "get_story_source",
    ]


def test_undecodable_input_line_gets_parse_error(tmp_path: Path, start_stdio_server) -> None:
    client = start_stdio_server("--repo-root", str(tmp_path))

    garbage = client.send_line(b"\xff\xfe garbage")
    pong = client.request("ping")

    assert garbage["error"]["code"] == -32700
    assert pong == {"jsonrpc": "2.0", "id": 1, "result": {}}
    assert client.close() == 0
