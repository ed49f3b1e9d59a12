"""Workspace sandboxing and read policy."""

from .paths import PathBlockedError, is_inside, resolve_workspace_path
from .policy import (
    PolicyBlockedError,
    ReadLimits,
    enforce_open_line_limits,
    enforce_read_policy,
    is_denylisted,
)

__all__ = [
    "PathBlockedError",
    "PolicyBlockedError",
    "ReadLimits",
    "enforce_open_line_limits",
    "enforce_read_policy",
    "is_denylisted",
    "is_inside",
    "resolve_workspace_path",
]
