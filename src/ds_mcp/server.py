"""STDIO MCP server entrypoint."""

from __future__ import annotations

import argparse
import io
import json
import logging
import sys
import time
from collections.abc import Mapping
from pathlib import Path
from typing import TextIO

from pydantic import BaseModel

from ds_mcp import __version__
from ds_mcp.config import (
    LOG_LEVELS,
    CliOverrides,
    ServerConfig,
    configure_logging,
    load_effective_config,
)
from ds_mcp.logging import AuditEvent, JsonlAuditLogger, sanitize_arguments, utc_timestamp
from ds_mcp.tools import ToolDispatchError, ToolRegistry, json_content, register_builtin_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "design-system-mcp"
PROTOCOL_VERSION = "2024-11-05"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for server startup configuration."""
    parser = argparse.ArgumentParser(prog="design-system-mcp")
    parser.add_argument("--repo-root", required=False, default=None)
    parser.add_argument("--audit-log", required=False, default=None)
    parser.add_argument("--log-level", choices=LOG_LEVELS, required=False, default=None)
    return parser


class StdioServer:
    """Newline-delimited JSON-RPC 2.0 server routing MCP tool requests."""

    def __init__(self, config: ServerConfig) -> None:
        self._config = config
        self._repo_paths = config.repo_paths
        self._registry = ToolRegistry()
        register_builtin_tools(self._registry, repo_paths=self._repo_paths)
        self._audit_logger: JsonlAuditLogger | None = None
        if config.audit_log_path is not None:
            self._audit_logger = JsonlAuditLogger(path=config.audit_log_path)
        self._fallback_request_counter = 0

    @property
    def config(self) -> ServerConfig:
        """Return the effective configuration."""
        return self._config

    @property
    def registry(self) -> ToolRegistry:
        """Return the tool registry."""
        return self._registry

    def serve(self, in_stream: TextIO, out_stream: TextIO) -> None:
        """Process JSON-line requests from stdin and write JSON-line responses."""
        for raw_line in in_stream:
            line = raw_line.strip()
            if not line:
                continue
            try:
                response = self.handle_json_line(line)
            except Exception:
                logger.exception("Unhandled failure while processing a request line")
                response = self.error_response(None, INTERNAL_ERROR, "Internal error.")
            if response is None:
                continue
            out_stream.write(f"{json.dumps(response)}\n")
            out_stream.flush()

    def handle_json_line(self, raw_line: str) -> dict[str, object] | None:
        """Handle a single JSON-line message."""
        try:
            payload = json.loads(raw_line)
        except (ValueError, RecursionError):
            logger.warning("Dropping malformed JSON line (%d chars)", len(raw_line))
            return self.error_response(None, PARSE_ERROR, "Request must be valid JSON.")
        return self.handle_payload(payload)

    def handle_payload(self, payload: object) -> dict[str, object] | None:
        """Validate and route one parsed JSON-RPC message; notifications get no response."""
        if not isinstance(payload, dict):
            return self.error_response(None, INVALID_REQUEST, "Request must be an object.")

        request_id = payload.get("id")
        method = payload.get("method")
        params = payload.get("params")
        if params is None:
            params = {}

        if not isinstance(method, str) or not method:
            return self.error_response(
                request_id, INVALID_REQUEST, "Request method must be a non-empty string."
            )
        if "id" not in payload:
            logger.debug("Notification received: %s", method)
            return None
        if not isinstance(params, dict):
            return self.error_response(
                request_id, INVALID_PARAMS, "Request params must be an object."
            )

        if method == "initialize":
            return self.success_response(request_id, self.initialize_result())
        if method == "ping":
            return self.success_response(request_id, {})
        if method == "tools/list":
            return self.success_response(request_id, {"tools": self.list_tools()})
        if method == "tools/call":
            name = params.get("name")
            arguments = params.get("arguments")
            if arguments is None:
                arguments = {}
            if not isinstance(name, str) or not name:
                return self.error_response(
                    request_id, INVALID_PARAMS, "tools/call params.name must be a non-empty string."
                )
            if not isinstance(arguments, dict):
                return self.error_response(
                    request_id, INVALID_PARAMS, "tools/call params.arguments must be an object."
                )
            return self.success_response(
                request_id,
                self.call_tool(name, arguments, request_id=self.audit_request_id(request_id)),
            )
        return self.error_response(request_id, METHOD_NOT_FOUND, f"Unknown method: {method}")

    def initialize_result(self) -> dict[str, object]:
        """Describe the server to a connecting client."""
        return {
            "protocolVersion": PROTOCOL_VERSION,
            "serverInfo": {"name": SERVER_NAME, "version": __version__},
            "capabilities": {"tools": {}},
        }

    def list_tools(self) -> list[dict[str, object]]:
        """Return the static tool catalogue."""
        return self._registry.describe()

    def call_tool(
        self,
        name: str,
        arguments: dict[str, object],
        request_id: str | None = None,
    ) -> dict[str, object]:
        """Run one tool; every failure becomes an ``{"error": ...}`` content payload."""
        started = time.perf_counter()
        error_message: str | None = None
        parsed: BaseModel | None = None
        try:
            parsed = self._registry.parse_arguments(name, arguments)
            content = self._registry.run(name, parsed)
        except ToolDispatchError as error:
            error_message = error.message
            content = json_content({"error": error.message})
        except Exception as error:
            logger.exception("Tool %s failed", name)
            error_message = str(error) or type(error).__name__
            content = json_content({"error": error_message})

        self.log_request(
            request_id=request_id or self.next_request_id(),
            tool_name=name,
            arguments=parsed,
            error=error_message,
            elapsed_ms=(time.perf_counter() - started) * 1000.0,
        )
        return {"content": content}

    def audit_request_id(self, request_id: object) -> str:
        """Stringify a JSON-RPC id for the audit log."""
        if isinstance(request_id, str) and request_id:
            return request_id
        if isinstance(request_id, int) and not isinstance(request_id, bool):
            return str(request_id)
        return self.next_request_id()

    def next_request_id(self) -> str:
        """Generate deterministic fallback request IDs for invalid/missing IDs."""
        self._fallback_request_counter += 1
        return f"req-{self._fallback_request_counter:06d}"

    @staticmethod
    def success_response(request_id: object, result: dict[str, object]) -> dict[str, object]:
        """Build JSON-RPC success envelope."""
        return {"jsonrpc": "2.0", "id": request_id, "result": result}

    @staticmethod
    def error_response(request_id: object, code: int, message: str) -> dict[str, object]:
        """Build JSON-RPC error envelope."""
        return {"jsonrpc": "2.0", "id": request_id, "error": {"code": code, "message": message}}

    def log_request(
        self,
        request_id: str,
        tool_name: str,
        arguments: BaseModel | None,
        error: str | None,
        elapsed_ms: float,
    ) -> None:
        """Log one tool call; ``arguments`` is None when validation rejected them."""
        logger.info("tool=%s ok=%s elapsed_ms=%.1f", tool_name, error is None, elapsed_ms)
        if self._audit_logger is None:
            return
        event = AuditEvent(
            timestamp=utc_timestamp(),
            request_id=request_id,
            tool=tool_name,
            ok=error is None,
            error=error,
            elapsed_ms=round(elapsed_ms, 3),
            metadata=sanitize_arguments(arguments),
        )
        self._audit_logger.append(event)


def create_server(
    repo_root: str | None = None,
    audit_log_path: str | None = None,
    cli_overrides: CliOverrides | None = None,
    environ: Mapping[str, str] | None = None,
) -> StdioServer:
    """Create a configured STDIO server instance."""
    overrides = cli_overrides or CliOverrides()
    if repo_root is not None:
        overrides = CliOverrides(
            repo_root=Path(repo_root),
            audit_log_path=overrides.audit_log_path,
            log_level=overrides.log_level,
        )
    if audit_log_path is not None:
        overrides = CliOverrides(
            repo_root=overrides.repo_root,
            audit_log_path=Path(audit_log_path),
            log_level=overrides.log_level,
        )
    config = load_effective_config(environ=environ, overrides=overrides)
    return StdioServer(config=config)


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for the design-system MCP server process."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    overrides = CliOverrides(
        repo_root=Path(args.repo_root) if args.repo_root is not None else None,
        audit_log_path=Path(args.audit_log) if args.audit_log is not None else None,
        log_level=args.log_level,
    )
    server = create_server(cli_overrides=overrides)
    configure_logging(server.config)
    if isinstance(sys.stdin, io.TextIOWrapper):
        # undecodable bytes surface as a parse error for that line only
        sys.stdin.reconfigure(errors="replace")
    paths = server.config.repo_paths
    logger.info("Repo root: %s", paths.repo_root)
    if not paths.components_dir.exists():
        logger.warning("Components directory not found: %s", paths.components_dir)
    if not paths.stories_dir.exists():
        logger.warning("Stories directory not found: %s", paths.stories_dir)
    server.serve(in_stream=sys.stdin, out_stream=sys.stdout)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
