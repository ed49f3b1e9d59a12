from __future__ import annotations

from pathlib import Path

import pytest

from codebase_guide.security import PathBlockedError, is_inside, resolve_workspace_path


def test_path_traversal_is_blocked(tmp_path: Path) -> None:
    with pytest.raises(PathBlockedError) as error:
        resolve_workspace_path(workspace_root=tmp_path, candidate="../outside.txt")

    assert error.value.reason == "Path traversal is blocked."


def test_absolute_path_outside_root_is_blocked(tmp_path: Path) -> None:
    workspace = tmp_path / "workspace"
    workspace.mkdir()
    outside = tmp_path / "outside.txt"

    with pytest.raises(PathBlockedError) as error:
        resolve_workspace_path(workspace_root=workspace, candidate=str(outside))

    assert error.value.reason == "Absolute path is outside the workspace root."


def test_empty_path_is_blocked(tmp_path: Path) -> None:
    with pytest.raises(PathBlockedError, match="Path is empty."):
        resolve_workspace_path(workspace_root=tmp_path, candidate="   ")


def test_relative_and_absolute_paths_resolve_inside_root(tmp_path: Path) -> None:
    target = tmp_path / "src" / "index.ts"
    target.parent.mkdir()
    target.write_text("export {}\n", encoding="utf-8")

    assert resolve_workspace_path(tmp_path, "src/index.ts") == target.resolve()
    assert resolve_workspace_path(tmp_path, "./src\\index.ts") == target.resolve()
    assert resolve_workspace_path(tmp_path, str(target)) == target.resolve()


def test_symlink_escape_is_blocked(tmp_path: Path) -> None:
    workspace = tmp_path / "workspace"
    workspace.mkdir()
    outside = tmp_path / "secret.txt"
    outside.write_text("nope\n", encoding="utf-8")
    link = workspace / "link.txt"
    try:
        link.symlink_to(outside)
    except OSError:
        pytest.skip("symlinks are not available on this platform")

    with pytest.raises(PathBlockedError) as error:
        resolve_workspace_path(workspace, "link.txt")

    assert error.value.reason == "Resolved path escapes the workspace root."
    assert is_inside(workspace, link) is False
