from __future__ import annotations

from pathlib import Path

import pytest

from codebase_guide.workspace import (
    MARKUP,
    OTHER,
    PROSE,
    STYLESHEET,
    classify_document,
    parse_manifest,
    read_manifest_file,
    split_document_lines,
)


def test_manifest_unions_dependency_maps() -> None:
    manifest = parse_manifest(
        '{"dependencies": {"next": "14.0.0"}, "devDependencies": {"react": "18.2.0"}}'
    )

    assert manifest is not None
    assert manifest.dependency_names() == frozenset({"next", "react"})


@pytest.mark.parametrize("text", ["{not json", "[1, 2]", '"string"', ""])
def test_malformed_manifest_is_none(text: str) -> None:
    assert parse_manifest(text) is None


def test_non_object_dependency_maps_are_ignored() -> None:
    manifest = parse_manifest('{"dependencies": ["react"], "devDependencies": null}')

    assert manifest is not None
    assert manifest.dependency_names() == frozenset()


def test_unreadable_manifest_file_is_none(tmp_path: Path) -> None:
    assert read_manifest_file(tmp_path / "package.json") is None
    (tmp_path / "package.json").write_bytes(b"\xff\xfe\x00")
    assert read_manifest_file(tmp_path / "package.json") is None


@pytest.mark.parametrize(
    ("path", "declared", "expected"),
    [
        ("README.md", None, PROSE),
        ("docs/intro.markdown", None, PROSE),
        ("index.HTML", None, MARKUP),
        ("styles/site.css", None, STYLESHEET),
        ("src/index.ts", None, OTHER),
        ("notes.txt", "markdown", PROSE),
        ("template.njk", "html", MARKUP),
        ("README.md", "plaintext", PROSE),
    ],
)
def test_classify_document(path: str, declared: str | None, expected: str) -> None:
    assert classify_document(path, declared) == expected


def test_split_document_lines_handles_all_newlines() -> None:
    assert split_document_lines("a\r\nb\rc\nd") == ["a", "b", "c", "d"]
    assert split_document_lines("") == []
