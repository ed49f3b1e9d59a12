"""Configuration loading with deterministic merge order."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from codebase_guide.security import ReadLimits

CONFIG_FILE_NAME = "codebase_guide.toml"

MAX_FILE_BYTES_CAP = 4 * 1024 * 1024
MAX_OPEN_LINES_CAP = 2_000
MAX_LISTED_FILES_CAP = 5_000
MAX_TOTAL_BYTES_PER_RESPONSE_CAP = 1024 * 1024

DEFAULT_DEPENDENCY_EXCLUDE = "**/node_modules/**"
DEFAULT_LISTING_EXCLUDE_GLOBS = ("**/{node_modules,.git,.vscode,.idea}/**",)
DEFAULT_DATA_DIR_NAME = ".codebase_guide"
AUDIT_LOG_NAME = "audit.jsonl"


@dataclass(slots=True, frozen=True)
class WorkspaceConfig:
    """File discovery settings."""

    dependency_exclude: str
    listing_exclude_globs: tuple[str, ...]


@dataclass(slots=True, frozen=True)
class GuideConfig:
    """Fully merged guide configuration."""

    workspace_root: Path
    data_dir: Path
    limits: ReadLimits
    workspace: WorkspaceConfig

    def to_public_dict(self) -> dict[str, object]:
        """Return a serializable snapshot for status responses."""
        return {
            "workspace_root": str(self.workspace_root),
            "data_dir": str(self.data_dir),
            "limits": {
                "max_file_bytes": self.limits.max_file_bytes,
                "max_open_lines": self.limits.max_open_lines,
                "max_listed_files": self.limits.max_listed_files,
                "max_total_bytes_per_response": self.limits.max_total_bytes_per_response,
            },
            "workspace": {
                "dependency_exclude": self.workspace.dependency_exclude,
                "listing_exclude_globs": list(self.workspace.listing_exclude_globs),
            },
        }

    @property
    def audit_log_path(self) -> Path:
        return self.data_dir / AUDIT_LOG_NAME

    def listing_excludes(self) -> tuple[str, ...]:
        """Configured listing excludes plus the data dir when it sits inside the workspace."""
        if not self.data_dir.is_relative_to(self.workspace_root):
            return self.workspace.listing_exclude_globs
        relative = self.data_dir.relative_to(self.workspace_root).as_posix()
        data_glob = f"{relative}/**" if relative != "." else AUDIT_LOG_NAME
        return (*self.workspace.listing_exclude_globs, data_glob)


@dataclass(slots=True, frozen=True)
class CliOverrides:
    """Startup overrides applied at highest precedence."""

    data_dir: Path | None = None
    max_file_bytes: int | None = None
    max_open_lines: int | None = None
    max_listed_files: int | None = None
    max_total_bytes_per_response: int | None = None


def default_config(workspace_root: Path) -> GuideConfig:
    """Build the default config for a workspace root."""
    root = workspace_root.resolve()
    return GuideConfig(
        workspace_root=root,
        data_dir=root / DEFAULT_DATA_DIR_NAME,
        limits=ReadLimits(),
        workspace=WorkspaceConfig(
            dependency_exclude=DEFAULT_DEPENDENCY_EXCLUDE,
            listing_exclude_globs=DEFAULT_LISTING_EXCLUDE_GLOBS,
        ),
    )


def load_workspace_config_file(workspace_root: Path) -> dict[str, object]:
    """Load the optional codebase_guide.toml from the workspace root."""
    config_path = workspace_root / CONFIG_FILE_NAME
    if not config_path.exists():
        return {}
    with config_path.open("rb") as handle:
        return tomllib.load(handle)


def _get_table(payload: dict[str, object], key: str) -> dict[str, object]:
    value = payload.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be a table.")
    return value


def _tuple_of_strings(value: object, name: str) -> tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"Config field '{name}' must be a list of strings.")
    return tuple(value)


def merge_config(
    base: GuideConfig, file_payload: dict[str, object], overrides: CliOverrides
) -> GuideConfig:
    """Merge defaults, the workspace config file, then startup overrides."""
    limits_payload = _get_table(file_payload, "limits")
    workspace_payload = _get_table(file_payload, "workspace")

    limits = _merge_limits(
        base.limits,
        {
            "max_file_bytes": limits_payload.get("max_file_bytes"),
            "max_open_lines": limits_payload.get("max_open_lines"),
            "max_listed_files": limits_payload.get("max_listed_files"),
            "max_total_bytes_per_response": limits_payload.get("max_total_bytes_per_response"),
        },
        prefix="limits",
    )

    dependency_exclude = base.workspace.dependency_exclude
    if "dependency_exclude" in workspace_payload:
        raw = workspace_payload["dependency_exclude"]
        if not isinstance(raw, str) or not raw.strip():
            raise ValueError("Config field 'workspace.dependency_exclude' must be a glob string.")
        dependency_exclude = raw
    listing_exclude_globs = base.workspace.listing_exclude_globs
    if "listing_exclude_globs" in workspace_payload:
        listing_exclude_globs = _tuple_of_strings(
            workspace_payload["listing_exclude_globs"], "workspace.listing_exclude_globs"
        )

    merged = GuideConfig(
        workspace_root=base.workspace_root,
        data_dir=base.data_dir,
        limits=limits,
        workspace=WorkspaceConfig(
            dependency_exclude=dependency_exclude,
            listing_exclude_globs=listing_exclude_globs,
        ),
    )
    return apply_cli_overrides(merged, overrides)


def apply_cli_overrides(config: GuideConfig, overrides: CliOverrides) -> GuideConfig:
    """Apply startup overrides at highest precedence."""
    limits = _merge_limits(
        config.limits,
        {
            "max_file_bytes": overrides.max_file_bytes,
            "max_open_lines": overrides.max_open_lines,
            "max_listed_files": overrides.max_listed_files,
            "max_total_bytes_per_response": overrides.max_total_bytes_per_response,
        },
        prefix="overrides",
    )
    data_dir = overrides.data_dir or config.data_dir
    return GuideConfig(
        workspace_root=config.workspace_root,
        data_dir=data_dir.resolve(),
        limits=limits,
        workspace=config.workspace,
    )


def load_effective_config(
    workspace_root: Path, overrides: CliOverrides | None = None
) -> GuideConfig:
    """Load config using merge order defaults -> codebase_guide.toml -> overrides."""
    root = workspace_root.resolve()
    return merge_config(
        default_config(root),
        load_workspace_config_file(root),
        overrides or CliOverrides(),
    )


_LIMIT_CAPS = {
    "max_file_bytes": MAX_FILE_BYTES_CAP,
    "max_open_lines": MAX_OPEN_LINES_CAP,
    "max_listed_files": MAX_LISTED_FILES_CAP,
    "max_total_bytes_per_response": MAX_TOTAL_BYTES_PER_RESPONSE_CAP,
}


def _merge_limits(base: ReadLimits, values: dict[str, object], prefix: str) -> ReadLimits:
    return ReadLimits(
        **{
            field: _optional_positive_int_with_cap(
                values.get(field),
                f"{prefix}.{field}",
                getattr(base, field),
                cap,
            )
            for field, cap in _LIMIT_CAPS.items()
        }
    )


def _optional_positive_int_with_cap(value: object, name: str, default: int, cap: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"Config field '{name}' must be a positive integer.")
    if value > cap:
        raise ValueError(f"Config field '{name}' must be <= {cap}.")
    return value
