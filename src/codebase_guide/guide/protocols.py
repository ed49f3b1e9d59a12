"""Collaborator callbacks consumed by the guide engine."""

from __future__ import annotations

from typing import Protocol

from codebase_guide.guide.models import Manifest


class FindFilesFn(Protocol):
    """File search over the workspace snapshot."""

    def __call__(
        self, pattern: str, exclude: str | None = None, limit: int | None = None
    ) -> list[str]:
        """Return matching file identifiers in deterministic order, capped at limit."""


class ExistsFn(Protocol):
    """Existence check that never raises for a missing path."""

    def __call__(self, path: str) -> bool:
        """Return True when the file exists."""


class ReadManifestFn(Protocol):
    """Manifest reader returning None on missing or malformed input."""

    def __call__(self) -> Manifest | None:
        """Return the workspace manifest, if any."""


class ReadLinesFn(Protocol):
    """Document text source."""

    def __call__(self, path: str) -> list[str]:
        """Return the document's lines; line N is index N - 1."""


class LabelFn(Protocol):
    """Display label for a file identifier."""

    def __call__(self, path: str) -> str:
        """Return a human-readable, usually workspace-relative, label."""
