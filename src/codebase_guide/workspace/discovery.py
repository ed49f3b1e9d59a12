"""Filesystem-backed workspace collaborators for the guide engine."""

from __future__ import annotations

import os
from pathlib import Path

from codebase_guide.guide.models import Manifest
from codebase_guide.security import is_inside
from codebase_guide.workspace.documents import split_document_lines
from codebase_guide.workspace.globs import matches_glob, prunes_directory
from codebase_guide.workspace.manifest import read_manifest_file

MANIFEST_NAME = "package.json"
MANIFEST_SEARCH_LIMIT = 5


class Workspace:
    """Deterministic, read-only view of one project directory.

    File identifiers are absolute POSIX path strings; labels are paths
    relative to the workspace root. Directory listings are cached per
    exclude set until `refresh` is called.
    """

    def __init__(self, root: Path) -> None:
        self._root = root.resolve()
        self._listing_cache: dict[tuple[str, ...], tuple[str, ...]] = {}

    @property
    def root(self) -> Path:
        return self._root

    def refresh(self) -> None:
        """Drop cached listings so the next search sees the current tree."""
        self._listing_cache.clear()

    def find(self, pattern: str, exclude: str | None = None, limit: int | None = None) -> list[str]:
        """Return files matching `pattern`, sorted by relative path and capped at `limit`."""
        excludes = (exclude,) if exclude else ()
        matches: list[str] = []
        for relative in self._relative_files(excludes):
            if limit is not None and len(matches) >= limit:
                break
            if matches_glob(relative, pattern):
                matches.append(self.identifier_for(relative))
        return matches

    def list_files(self, exclude_globs: tuple[str, ...], limit: int | None = None) -> list[str]:
        """Return every file outside `exclude_globs`, sorted by relative path."""
        files = [self.identifier_for(relative) for relative in self._relative_files(exclude_globs)]
        return files if limit is None else files[:limit]

    def exists(self, path: str) -> bool:
        """Return True only for regular files under the workspace root."""
        candidate = Path(path)
        if not candidate.is_absolute():
            candidate = self._root / candidate
        if not is_inside(self._root, candidate):
            return False
        try:
            return candidate.is_file()
        except OSError:
            return False

    def read_lines(self, path: str) -> list[str]:
        """Read a file as UTF-8 text, replacing undecodable bytes."""
        text = Path(path).read_text(encoding="utf-8", errors="replace")
        return split_document_lines(text)

    def read_manifest(self, exclude: str | None = None) -> Manifest | None:
        """Read the root package.json, else the first one found outside `exclude`."""
        root_manifest = self._root / MANIFEST_NAME
        if root_manifest.is_file():
            return read_manifest_file(root_manifest)
        found = self.find(f"**/{MANIFEST_NAME}", exclude, MANIFEST_SEARCH_LIMIT)
        if not found:
            return None
        return read_manifest_file(Path(found[0]))

    def identifier_for(self, relative: str) -> str:
        return (self._root / relative).as_posix()

    def label_for(self, path: str) -> str:
        """Workspace-relative label for a file identifier."""
        candidate = Path(path)
        if candidate.is_absolute() and candidate.is_relative_to(self._root):
            return candidate.relative_to(self._root).as_posix()
        return candidate.as_posix()

    def _relative_files(self, excludes: tuple[str, ...]) -> tuple[str, ...]:
        cached = self._listing_cache.get(excludes)
        if cached is None:
            cached = tuple(sorted(_walk_relative_files(self._root, excludes)))
            self._listing_cache[excludes] = cached
        return cached


def _walk_relative_files(root: Path, excludes: tuple[str, ...]) -> list[str]:
    """Walk the tree without following symlinks, pruning fully excluded directories."""
    found: list[str] = []
    stack: list[Path] = [root]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as entries:
                ordered = sorted(entries, key=lambda item: item.name)
        except OSError:
            continue
        for entry in reversed(ordered):
            relative = Path(entry.path).relative_to(root).as_posix()
            try:
                if entry.is_dir(follow_symlinks=False):
                    if not prunes_directory(relative, excludes):
                        stack.append(Path(entry.path))
                    continue
                if not entry.is_file(follow_symlinks=False):
                    continue
            except OSError:
                continue
            if any(matches_glob(relative, pattern) for pattern in excludes):
                continue
            found.append(relative)
    return found
