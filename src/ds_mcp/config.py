"""Repository path resolution and deterministic config merge order."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

REPO_ROOT_ENV = "DS_REPO_ROOT"
AUDIT_LOG_ENV = "DS_MCP_AUDIT_LOG"
LOG_LEVEL_ENV = "DS_MCP_LOG_LEVEL"

DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULT_SEARCH_LIMIT = 20
MIN_SEARCH_LIMIT = 1
MAX_SEARCH_LIMIT = 50

COMPONENTS_SEGMENTS = ("packages", "design-system", "src", "components")
STORIES_SEGMENTS = ("apps", "storybook", "stories")
GLOBALS_STYLES_SEGMENTS = ("packages", "design-system", "src", "styles", "globals.css")
AGENTS_MD_SEGMENTS = ("packages", "design-system", "agents.md")
CLAUDE_MD_SEGMENTS = ("CLAUDE.md",)


@dataclass(slots=True, frozen=True)
class RepoPaths:
    """Absolute locations derived from a single repository root."""

    repo_root: Path
    components_dir: Path
    stories_dir: Path
    globals_styles_path: Path
    agents_md_path: Path
    claude_md_path: Path

    def to_public_dict(self) -> dict[str, object]:
        """Return serializable paths snapshot for tool responses."""
        return {
            "repoRoot": str(self.repo_root),
            "designSystemSrcComponentsDir": str(self.components_dir),
            "storybookStoriesDir": str(self.stories_dir),
            "globalsStylesPath": str(self.globals_styles_path),
            "agentsMdPath": str(self.agents_md_path),
            "claudeMdPath": str(self.claude_md_path),
        }


@dataclass(slots=True, frozen=True)
class ServerConfig:
    """Fully merged server configuration."""

    repo_paths: RepoPaths
    audit_log_path: Path | None
    log_level: str

    def to_public_dict(self) -> dict[str, object]:
        """Return serializable config snapshot."""
        return {
            "repo_paths": self.repo_paths.to_public_dict(),
            "audit_log_path": str(self.audit_log_path) if self.audit_log_path else None,
            "log_level": self.log_level,
        }


@dataclass(slots=True, frozen=True)
class CliOverrides:
    """Optional startup overrides applied at highest precedence."""

    repo_root: Path | None = None
    audit_log_path: Path | None = None
    log_level: str | None = None


def default_app_dir() -> Path:
    """Return the project directory that holds ``src/ds_mcp``."""
    return Path(__file__).resolve().parents[2]


def repo_root_from_app_dir(app_dir: Path) -> Path:
    """Walk from ``apps/<app>`` up to the repository root."""
    return absolute_path(app_dir / ".." / "..")


def get_repo_paths(repo_root: Path) -> RepoPaths:
    """Join every known location onto ``repo_root``."""
    return RepoPaths(
        repo_root=repo_root,
        components_dir=repo_root.joinpath(*COMPONENTS_SEGMENTS),
        stories_dir=repo_root.joinpath(*STORIES_SEGMENTS),
        globals_styles_path=repo_root.joinpath(*GLOBALS_STYLES_SEGMENTS),
        agents_md_path=repo_root.joinpath(*AGENTS_MD_SEGMENTS),
        claude_md_path=repo_root.joinpath(*CLAUDE_MD_SEGMENTS),
    )


def repo_root_override(environ: Mapping[str, str]) -> Path | None:
    """Return the absolute override root, or None when unset or blank."""
    value = _env_value(environ, REPO_ROOT_ENV)
    if value is None:
        return None
    return absolute_path(Path(value))


def resolve_repo_paths(
    app_dir: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> RepoPaths:
    """Resolve paths from the environment override or from the install location."""
    override = repo_root_override(os.environ if environ is None else environ)
    if override is not None:
        return get_repo_paths(override)
    return get_repo_paths(repo_root_from_app_dir(app_dir or default_app_dir()))


def load_effective_config(
    app_dir: Path | None = None,
    environ: Mapping[str, str] | None = None,
    overrides: CliOverrides | None = None,
) -> ServerConfig:
    """Load effective config using merge order defaults -> environment -> overrides."""
    env = os.environ if environ is None else environ
    active = overrides or CliOverrides()

    if active.repo_root is not None:
        repo_paths = get_repo_paths(absolute_path(active.repo_root))
    else:
        repo_paths = resolve_repo_paths(app_dir=app_dir, environ=env)

    audit_log_path = active.audit_log_path
    if audit_log_path is None:
        env_audit = _env_value(env, AUDIT_LOG_ENV)
        audit_log_path = Path(env_audit) if env_audit is not None else None

    log_level = active.log_level or _env_value(env, LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL
    log_level = log_level.upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(f"Log level must be one of {', '.join(LOG_LEVELS)}; got '{log_level}'.")

    return ServerConfig(
        repo_paths=repo_paths,
        audit_log_path=absolute_path(audit_log_path) if audit_log_path is not None else None,
        log_level=log_level,
    )


def configure_logging(config: ServerConfig) -> None:
    """Send diagnostics to stderr; stdout carries protocol frames only."""
    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _env_value(environ: Mapping[str, str], key: str) -> str | None:
    value = environ.get(key, "").strip()
    return value or None


def absolute_path(path: Path) -> Path:
    """Normalize to an absolute path without touching the filesystem."""
    return Path(os.path.abspath(path))
