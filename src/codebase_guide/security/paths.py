"""Workspace-scoped path resolution for guide reads."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Final

WINDOWS_DRIVE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[a-zA-Z]:[\\/]")


class PathBlockedError(Exception):
    """Raised when a requested path falls outside the guided workspace."""

    def __init__(self, reason: str, hint: str) -> None:
        super().__init__(reason)
        self.reason = reason
        self.hint = hint


def _split_request(candidate: str) -> tuple[str, bool]:
    """Return the slash-normalized request and whether it names an absolute path."""
    normalized = candidate.replace("\\", "/")
    absolute = normalized.startswith("/") or WINDOWS_DRIVE_PATTERN.match(normalized) is not None
    return normalized, absolute


def resolve_workspace_path(workspace_root: Path, candidate: str) -> Path:
    """Resolve a workspace-relative or absolute path, refusing anything outside the root."""
    root = workspace_root.resolve()
    normalized, absolute = _split_request(candidate.strip())

    if not normalized:
        raise PathBlockedError(
            reason="Path is empty.",
            hint="Pass a workspace-relative path such as 'src/index.ts'.",
        )

    if absolute:
        resolved = Path(normalized).resolve(strict=False)
        if not resolved.is_relative_to(root):
            raise PathBlockedError(
                reason="Absolute path is outside the workspace root.",
                hint="Choose a file located under the guided workspace.",
            )
        return resolved

    parts = [part for part in normalized.split("/") if part not in ("", ".")]
    if ".." in parts:
        raise PathBlockedError(
            reason="Path traversal is blocked.",
            hint="Remove '..' segments and use a workspace-relative path.",
        )

    resolved = (root / Path(*parts)).resolve(strict=False)
    if not resolved.is_relative_to(root):
        raise PathBlockedError(
            reason="Resolved path escapes the workspace root.",
            hint="Choose a file located under the guided workspace.",
        )
    return resolved


def is_inside(workspace_root: Path, candidate: Path) -> bool:
    """Return True when candidate resolves to a location under the workspace root."""
    try:
        return candidate.resolve(strict=False).is_relative_to(workspace_root.resolve())
    except OSError:
        return False
