"""Append-only JSONL audit trail of guide tool requests."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path

_VERBATIM_STRING_KEYS = frozenset({"path", "filter", "lines", "since"})
_VERBATIM_INT_KEYS = frozenset({"limit", "max_results"})
_VERBATIM_BOOL_KEYS = frozenset({"refresh"})


@dataclass(slots=True, frozen=True)
class AuditEvent:
    """Sanitized record of one tool request."""

    timestamp: str
    request_id: str
    tool: str
    ok: bool
    blocked: bool
    error_code: str | None
    metadata: dict[str, object]


def utc_timestamp() -> str:
    """Return an ISO-8601 UTC timestamp with millisecond precision."""
    return datetime.now(tz=UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def sanitize_arguments(arguments: dict[str, object]) -> dict[str, object]:
    """Reduce tool arguments to loggable metadata.

    Paths, filters and numeric knobs are kept as-is. Free text such as a
    question is replaced by presence and length so user prose never lands
    in the log.
    """
    sanitized: dict[str, object] = {}
    for key in sorted(arguments):
        value = arguments[key]
        if key in _VERBATIM_STRING_KEYS and isinstance(value, str):
            sanitized[key] = value
        elif key in _VERBATIM_INT_KEYS and isinstance(value, int) and not isinstance(value, bool):
            sanitized[key] = value
        elif key in _VERBATIM_BOOL_KEYS and isinstance(value, bool):
            sanitized[key] = value
        elif isinstance(value, str):
            sanitized[f"{key}_present"] = True
            sanitized[f"{key}_length"] = len(value)
        elif isinstance(value, (int, float, bool)) or value is None:
            sanitized[key] = value
        elif isinstance(value, (list, dict)):
            sanitized[f"{key}_type"] = type(value).__name__
            sanitized[f"{key}_length"] = len(value)
        else:
            sanitized[f"{key}_type"] = type(value).__name__
    return sanitized


class JsonlAuditLogger:
    """JSONL audit writer with a bounded tail reader."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self._path

    def append(self, event: AuditEvent) -> None:
        """Write one event as a single sorted-key JSON line."""
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(asdict(event), sort_keys=True))
            handle.write("\n")

    def read(self, since: str | None = None, limit: int = 50) -> list[dict[str, object]]:
        """Return the most recent events, optionally at or after a timestamp."""
        if limit < 1 or not self._path.exists():
            return []
        entries: list[dict[str, object]] = []
        with self._path.open("r", encoding="utf-8") as handle:
            for line in handle:
                stripped = line.strip()
                if not stripped:
                    continue
                try:
                    record = json.loads(stripped)
                except json.JSONDecodeError:
                    continue
                if since is not None:
                    timestamp = record.get("timestamp")
                    if not isinstance(timestamp, str) or timestamp < since:
                        continue
                entries.append(record)
        return entries[-limit:]
