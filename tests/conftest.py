from __future__ import annotations

import json
import os
import subprocess
import sys
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest

from ds_mcp.config import RepoPaths, get_repo_paths

BUTTON_SOURCE = """import * as React from "react";
import { cva } from "class-variance-authority";

export const buttonVariants = cva(
  "inline-flex items-center",
  {
    variants: {
      variant: {
        primary: "bg-primary",
        ghost: "bg-transparent",
      },
      size: {
        sm: "h-8",
        lg: "h-10",
      },
    },
    defaultVariants: {
      variant: "primary",
    },
  },
);

type ButtonProps = Omit<React.ButtonHTMLAttributes<HTMLButtonElement>, "style"> & {
  /** Shows a spinner */
  loading?: boolean;
  children?: React.ReactNode;
  tone: "neutral" | "brand";
};

export const Button = React.forwardRef<HTMLButtonElement, ButtonProps>(
  ({ loading, ...props }, ref) => <button ref={ref} aria-busy={loading} {...props} />,
);

export function ButtonGroup({ children }: { children: React.ReactNode }) {
  return <div role="group">{children}</div>;
}
"""

CARD_SOURCE = """export function Card({ children }: { children: React.ReactNode }) {
  return <section data-slot="card">{children}</section>;
}
"""

BUTTON_STORY = """import type { Meta, StoryObj } from "@storybook/react";
import { Button } from "@trycompai/design-system";

type Story = StoryObj<typeof Button>;

export const Primary: Story = {
  render: () => (
    <Button variant="primary">Save</Button>
  ),
};
"""

DEFAULT_COMPONENTS: dict[str, str] = {
    "atoms/button.tsx": BUTTON_SOURCE,
    "atoms/split-button.tsx": "export function SplitButton() { return null; }\n",
    "atoms/index.ts": 'export * from "./button";\n',
    "atoms/notes.md": "# not a component\n",
    "molecules/card.tsx": CARD_SOURCE,
    "organisms/ai_chat.tsx": "export function AiChat() { return <Card />; }\n",
    "ui/index.ts": 'export * from "../atoms";\n',
    "ui/dialog.tsx": "export function Dialog() { return null; }\n",
    "lib/helpers.ts": "export const noop = () => {};\n",
    "root.tsx": "export const Root = 1;\n",
}

DEFAULT_STORIES: dict[str, str] = {
    "Button.stories.tsx": BUTTON_STORY,
    "Card.stories.tsx": "export default { title: 'Card' };\n",
    "patterns/AiChat.stories.tsx": "export default { title: 'AiChat' };\n",
    "fixtures.ts": "export const data = [];\n",
}

RepoFactory = Callable[..., RepoPaths]


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


@pytest.fixture
def make_repo(tmp_path: Path) -> RepoFactory:
    def factory(
        components: dict[str, str] | None = None,
        stories: dict[str, str] | None = None,
        extra: dict[str, str] | None = None,
    ) -> RepoPaths:
        paths = get_repo_paths(tmp_path / "repo")
        paths.repo_root.mkdir(parents=True, exist_ok=True)
        for rel, text in (components or {}).items():
            _write(paths.components_dir / rel, text)
        for rel, text in (stories or {}).items():
            _write(paths.stories_dir / rel, text)
        for rel, text in (extra or {}).items():
            _write(paths.repo_root / rel, text)
        return paths

    return factory


@pytest.fixture
def repo_paths(make_repo: RepoFactory) -> RepoPaths:
    return make_repo(components=DEFAULT_COMPONENTS, stories=DEFAULT_STORIES)


class StdioClient:
    """Line-oriented JSON-RPC client for a server subprocess."""

    def __init__(self, proc: subprocess.Popen[bytes]) -> None:
        self.proc = proc
        self._last_id = 0

    def send_line(self, raw: bytes) -> dict[str, Any]:
        assert self.proc.stdin is not None
        assert self.proc.stdout is not None
        self.proc.stdin.write(raw + b"\n")
        self.proc.stdin.flush()
        line = self.proc.stdout.readline()
        if not line:
            stderr_output = b""
            if self.proc.stderr is not None:
                stderr_output = self.proc.stderr.read()
            raise RuntimeError(f"Server produced no response. stderr={stderr_output!r}")
        return json.loads(line)

    def request(self, method: str, params: dict[str, object] | None = None) -> dict[str, Any]:
        self._last_id += 1
        message = {"jsonrpc": "2.0", "id": self._last_id, "method": method, "params": params or {}}
        return self.send_line(json.dumps(message).encode("utf-8"))

    def call_tool(self, name: str, arguments: dict[str, object]) -> dict[str, Any]:
        response = self.request("tools/call", {"name": name, "arguments": arguments})
        return json.loads(response["result"]["content"][0]["text"])

    def close(self) -> int:
        if self.proc.stdin is not None and not self.proc.stdin.closed:
            self.proc.stdin.close()
        return self.proc.wait(timeout=5)


@pytest.fixture
def start_stdio_server() -> Iterator[Callable[..., StdioClient]]:
    clients: list[StdioClient] = []

    def start(*args: str) -> StdioClient:
        env = os.environ.copy()
        for key in ("DS_REPO_ROOT", "DS_MCP_AUDIT_LOG", "DS_MCP_LOG_LEVEL"):
            env.pop(key, None)
        src_path = Path(__file__).resolve().parents[1] / "src"
        existing = env.get("PYTHONPATH")
        env["PYTHONPATH"] = str(src_path) if not existing else f"{src_path}{os.pathsep}{existing}"
        proc = subprocess.Popen(
            [sys.executable, "-m", "ds_mcp.server", *args],
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            env=env,
        )
        client = StdioClient(proc)
        clients.append(client)
        return client

    yield start
    for client in clients:
        client.close()
