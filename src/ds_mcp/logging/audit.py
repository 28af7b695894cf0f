"""JSONL audit trail of tool calls."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path

from pydantic import BaseModel

logger = logging.getLogger(__name__)

# Argument fields carrying user prose; only their length is recorded.
FREE_TEXT_FIELDS = frozenset({"query"})


@dataclass(slots=True, frozen=True)
class AuditEvent:
    """One tool call as written to the audit file."""

    timestamp: str
    request_id: str
    tool: str
    ok: bool
    error: str | None
    elapsed_ms: float
    metadata: dict[str, object]

    def to_json(self) -> str:
        return json.dumps(asdict(self), sort_keys=True)


def utc_timestamp() -> str:
    """Millisecond UTC timestamp, e.g. ``2024-05-01T12:00:00.123Z``."""
    now = datetime.now(tz=UTC)
    return f"{now:%Y-%m-%dT%H:%M:%S}.{now.microsecond // 1000:03d}Z"


def sanitize_arguments(arguments: BaseModel | None) -> dict[str, object]:
    """Flatten validated tool arguments into audit metadata.

    Fields are keyed by their wire names. Free-text fields are replaced by
    ``<field>_length``. Rejected calls have no validated arguments and
    record nothing.
    """
    if arguments is None:
        return {}
    metadata: dict[str, object] = {}
    for key, value in sorted(arguments.model_dump(by_alias=True).items()):
        if key in FREE_TEXT_FIELDS and isinstance(value, str):
            metadata[f"{key}_length"] = len(value)
        else:
            metadata[key] = value
    return metadata


class JsonlAuditLogger:
    """Appends audit events to a JSONL file.

    Write failures are logged and reported through the return value; a broken
    audit file never fails the tool call it describes.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def append(self, event: AuditEvent) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as handle:
                handle.write(event.to_json() + "\n")
        except OSError as error:
            logger.warning("Could not write audit event to %s: %s", self.path, error)
            return False
        return True
