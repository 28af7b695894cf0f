#!/usr/bin/env python3
"""Start the design-system MCP server over STDIO and exercise a few tools."""

from __future__ import annotations

import argparse
import json
import os
import subprocess
import sys
from pathlib import Path
from typing import Any


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="smoke")
    parser.add_argument("--repo-root", required=False, default=None)
    parser.add_argument("--component-id", required=False, default="molecules/card")
    args = parser.parse_args(argv)

    proc = _start_server(args.repo_root)
    try:
        _request(proc, 1, "initialize", {})
        tools = _request(proc, 2, "tools/list", {})
        names = sorted(tool["name"] for tool in tools["result"]["tools"])
        print("tools:", names)

        listed = _request(proc, 3, "tools/call", {"name": "list_components", "arguments": {}})
        print("list_components:", listed["result"]["content"][0]["type"])

        source = _request(
            proc,
            4,
            "tools/call",
            {"name": "get_component_source", "arguments": {"id": args.component_id}},
        )
        payload = json.loads(source["result"]["content"][0]["text"])
        print("get_component_source:", "error" if "error" in payload else "ok")
    except (KeyError, RuntimeError) as error:
        print(f"smoke failed: {error}", file=sys.stderr)
        return 1
    finally:
        _stop_server(proc)
    return 0


def _start_server(repo_root: str | None) -> subprocess.Popen[str]:
    env = os.environ.copy()
    src_path = Path(__file__).resolve().parents[1] / "src"
    existing = env.get("PYTHONPATH")
    env["PYTHONPATH"] = str(src_path) if not existing else f"{src_path}{os.pathsep}{existing}"
    cmd = [sys.executable, "-m", "ds_mcp.server"]
    if repo_root is not None:
        cmd.extend(["--repo-root", repo_root])
    return subprocess.Popen(
        cmd,
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        env=env,
    )


def _request(
    proc: subprocess.Popen[str],
    request_id: int,
    method: str,
    params: dict[str, object],
) -> dict[str, Any]:
    assert proc.stdin is not None
    assert proc.stdout is not None
    message = {"jsonrpc": "2.0", "id": request_id, "method": method, "params": params}
    proc.stdin.write(json.dumps(message) + "\n")
    proc.stdin.flush()
    line = proc.stdout.readline()
    if not line:
        stderr_output = proc.stderr.read() if proc.stderr is not None else ""
        raise RuntimeError(f"Server produced no response. stderr={stderr_output}")
    return json.loads(line)


def _stop_server(proc: subprocess.Popen[str]) -> None:
    if proc.stdin is not None:
        proc.stdin.close()
    proc.wait(timeout=5)


if __name__ == "__main__":
    raise SystemExit(main())
