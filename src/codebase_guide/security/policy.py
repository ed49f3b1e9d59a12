"""Read policy: secret denylist and size limits for learned files."""

from __future__ import annotations

import fnmatch
from dataclasses import dataclass
from pathlib import Path

_DENIED_BASENAME_GLOBS = ("*.pem", "*.key", "*.pfx", "*.p12", "id_rsa*", "secrets.*")


@dataclass(slots=True, frozen=True)
class ReadLimits:
    """Bounds applied to file reads and tool responses."""

    max_file_bytes: int = 1024 * 1024
    max_open_lines: int = 500
    max_listed_files: int = 500
    max_total_bytes_per_response: int = 256 * 1024


@dataclass(slots=True, frozen=True)
class PolicyBlockedError(Exception):
    """Raised when the read policy refuses a file."""

    reason: str
    hint: str


def is_denylisted(workspace_root: Path, resolved_path: Path) -> bool:
    """Return True for secret-like files and anything inside .git."""
    relative = resolved_path.relative_to(workspace_root.resolve()).as_posix()
    basename = Path(relative).name.lower()
    if basename == ".env" or basename.startswith(".env."):
        return True
    if any(fnmatch.fnmatch(basename, pattern) for pattern in _DENIED_BASENAME_GLOBS):
        return True
    return "/.git/" in f"/{relative.lower()}/"


def enforce_read_policy(workspace_root: Path, resolved_path: Path, limits: ReadLimits) -> None:
    """Raise PolicyBlockedError when a file may not be read by the guide."""
    if is_denylisted(workspace_root, resolved_path):
        raise PolicyBlockedError(
            reason="File is denylisted by the read policy.",
            hint="Secrets and VCS internals are never shown by the guide.",
        )
    if resolved_path.is_file() and resolved_path.stat().st_size > limits.max_file_bytes:
        raise PolicyBlockedError(
            reason="File exceeds max_file_bytes limit.",
            hint="Pick a smaller file or raise limits.max_file_bytes in codebase_guide.toml.",
        )


def enforce_open_line_limits(start_line: int, end_line: int, limits: ReadLimits) -> None:
    """Raise PolicyBlockedError when a requested line span exceeds max_open_lines."""
    if end_line - start_line + 1 > limits.max_open_lines:
        raise PolicyBlockedError(
            reason="Requested line range exceeds max_open_lines limit.",
            hint="Request a narrower range such as '10-60'.",
        )
