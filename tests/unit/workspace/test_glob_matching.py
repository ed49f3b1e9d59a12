from __future__ import annotations

import pytest

from codebase_guide.workspace import matches_glob, prunes_directory


@pytest.mark.parametrize(
    ("path", "pattern", "expected"),
    [
        ("README.md", "**/README.md", True),
        ("docs/guide/README.md", "**/README.md", True),
        ("NOT_README.md", "**/README.md", False),
        ("src/index.ts", "**/src/index.*", True),
        ("packages/api/src/index.ts", "**/src/index.*", True),
        ("src/index/helpers.ts", "**/src/index.*", False),
        ("src/routes/users/list.ts", "**/src/routes/**", True),
        ("web/node_modules/react/index.js", "**/node_modules/**", True),
        ("a/.git/config", "**/{node_modules,.git,.vscode,.idea}/**", True),
        ("a/.github/config", "**/{node_modules,.git,.vscode,.idea}/**", False),
        ("src/App.tsx", "src/App.ts?", True),
        ("src/App.ts", "src/App.ts?", False),
        ("v1.txt", "v[0-9].txt", True),
        ("va.txt", "v[!0-9].txt", True),
        ("v1.txt", "v[!0-9].txt", False),
    ],
)
def test_glob_dialect(path: str, pattern: str, expected: bool) -> None:
    assert matches_glob(path, pattern) is expected


def test_prunes_only_fully_excluded_directories() -> None:
    excludes = ("**/node_modules/**",)

    assert prunes_directory("node_modules", excludes) is True
    assert prunes_directory("packages/web/node_modules", excludes) is True
    assert prunes_directory("src", excludes) is False
    assert prunes_directory("src", ("**/*.log",)) is False
