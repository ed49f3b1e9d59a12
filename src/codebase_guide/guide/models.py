"""Typed records produced and consumed by the guide engine."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

FrameworkSet = tuple[str, ...]


@dataclass(slots=True, frozen=True)
class SuggestionRule:
    """One ranking rule: files matching `glob` are proposed with `reason`."""

    glob: str
    reason: str


@dataclass(slots=True, frozen=True)
class FileCandidate:
    """A file proposed for reading, with the reason of the first rule that found it."""

    label: str
    reason: str
    path: str


@dataclass(slots=True, frozen=True)
class Manifest:
    """Dependency maps read from a package manifest."""

    dependencies: Mapping[str, str] = field(default_factory=dict)
    dev_dependencies: Mapping[str, str] = field(default_factory=dict)

    def dependency_names(self) -> frozenset[str]:
        """Union of production and development dependency names."""
        return frozenset(self.dependencies) | frozenset(self.dev_dependencies)


@dataclass(slots=True, frozen=True)
class WalkthroughStep:
    """One learning step; `target` is None when no suggestion resolves it."""

    title: str
    details: str
    target: str | None = None


@dataclass(slots=True, frozen=True)
class Declaration:
    """Named top-level declaration and its 1-based line."""

    name: str
    line: int
    kind: str


@dataclass(slots=True, frozen=True)
class DocumentSummary:
    """Structural summary of one learned document."""

    path: str
    display_path: str
    kind: str
    line_count: int
    headings: tuple[str, ...]
    exported_names: tuple[str, ...]
    declarations: tuple[Declaration, ...]


@dataclass(slots=True, frozen=True)
class EvidenceLine:
    """Source line cited in an answer."""

    line: int
    text: str


@dataclass(slots=True, frozen=True)
class QAResult:
    """Answer to a question about the current document."""

    question: str
    message: str
    evidence: tuple[EvidenceLine, ...]


@dataclass(slots=True, frozen=True)
class NextSuggestion:
    """Entry of the explore-next list."""

    label: str
    reason: str
    path: str


@dataclass(slots=True, frozen=True)
class SourceDocument:
    """Lines and kind of the document a question is asked against."""

    path: str
    lines: tuple[str, ...]
    kind: str
