from __future__ import annotations

from pathlib import Path

import pytest

from codebase_guide.config import CliOverrides, load_effective_config
from codebase_guide.server import create_server


def test_invalid_limit_type_raises_value_error(tmp_path: Path) -> None:
    (tmp_path / "codebase_guide.toml").write_text(
        "\n".join(
            [
                "[limits]",
                'max_open_lines = "not-an-int"',
            ]
        ),
        encoding="utf-8",
    )

    with pytest.raises(ValueError, match="limits.max_open_lines"):
        create_server(workspace_root=str(tmp_path))


def test_invalid_section_type_raises_value_error(tmp_path: Path) -> None:
    (tmp_path / "codebase_guide.toml").write_text('limits = "not-a-table"\n', encoding="utf-8")

    with pytest.raises(ValueError, match="section 'limits'"):
        create_server(workspace_root=str(tmp_path))


def test_limit_above_cap_is_rejected(tmp_path: Path) -> None:
    (tmp_path / "codebase_guide.toml").write_text(
        "[limits]\nmax_open_lines = 100000\n", encoding="utf-8"
    )

    with pytest.raises(ValueError, match="must be <= 2000"):
        load_effective_config(tmp_path)


def test_boolean_limit_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="overrides.max_listed_files"):
        load_effective_config(tmp_path, CliOverrides(max_listed_files=True))


def test_blank_dependency_exclude_is_rejected(tmp_path: Path) -> None:
    (tmp_path / "codebase_guide.toml").write_text(
        '[workspace]\ndependency_exclude = "  "\n', encoding="utf-8"
    )

    with pytest.raises(ValueError, match="workspace.dependency_exclude"):
        load_effective_config(tmp_path)


def test_listing_excludes_must_be_strings(tmp_path: Path) -> None:
    (tmp_path / "codebase_guide.toml").write_text(
        "[workspace]\nlisting_exclude_globs = [1, 2]\n", encoding="utf-8"
    )

    with pytest.raises(ValueError, match="workspace.listing_exclude_globs"):
        load_effective_config(tmp_path)
