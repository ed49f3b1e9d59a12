"""Guide session: the learned-file set and the active context."""

from __future__ import annotations

from dataclasses import dataclass, replace

from codebase_guide.analysis import answer_question, load_document
from codebase_guide.config import GuideConfig
from codebase_guide.guide import (
    DocumentSummary,
    FileCandidate,
    FrameworkSet,
    NextSuggestion,
    QAResult,
    SourceDocument,
    WalkthroughStep,
    build_walkthrough,
    detect_frameworks,
    rank_suggestions,
    resolve_next_suggestions,
)
from codebase_guide.workspace import Workspace


class EmptyQuestionError(ValueError):
    """Raised when a question is blank after trimming."""


@dataclass(slots=True, frozen=True)
class ActiveContext:
    """The single learned file with its summary and latest answer."""

    path: str | None = None
    document: SourceDocument | None = None
    summary: DocumentSummary | None = None
    answer: QAResult | None = None


class GuideSession:
    """Owns the only mutable guide state.

    `learn` replaces the active context and grows the learned set; `ask`
    replaces the latest answer. Nothing else writes either. Calls are not
    synchronized: if two callers interleave `learn`/`ask`, the last write
    wins.
    """

    def __init__(self, workspace: Workspace, config: GuideConfig) -> None:
        self._workspace = workspace
        self._config = config
        self._learned: set[str] = set()
        self._context = ActiveContext()
        self._frameworks: FrameworkSet | None = None

    @property
    def workspace(self) -> Workspace:
        return self._workspace

    @property
    def learned(self) -> frozenset[str]:
        return frozenset(self._learned)

    @property
    def context(self) -> ActiveContext:
        return self._context

    def refresh(self) -> None:
        """Forget cached listings and frameworks; learned files and context are kept."""
        self._workspace.refresh()
        self._frameworks = None

    def suggestions(self) -> list[FileCandidate]:
        return rank_suggestions(
            self._workspace.find,
            exclude=self._config.workspace.dependency_exclude,
            label_for=self._workspace.label_for,
        )

    def frameworks(self, refresh: bool = False) -> FrameworkSet:
        """Detected frameworks, computed once and cached until refreshed."""
        if refresh or self._frameworks is None:
            exclude = self._config.workspace.dependency_exclude
            self._frameworks = detect_frameworks(
                lambda: self._workspace.read_manifest(exclude),
                self._workspace.find,
                exclude=exclude,
            )
        return self._frameworks

    def walkthrough(self, suggestions: list[FileCandidate] | None = None) -> list[WalkthroughStep]:
        ranked = suggestions if suggestions is not None else self.suggestions()
        return build_walkthrough(ranked, self.frameworks())

    def learn(self, path: str, declared_type: str | None = None) -> DocumentSummary:
        """Read and summarize a file, making it the active context."""
        document, summary = load_document(
            path,
            self._workspace.read_lines,
            declared_type,
            label_for=self._workspace.label_for,
        )
        self._context = ActiveContext(path=path, document=document, summary=summary)
        self._learned.add(path)
        return summary

    def ask(self, question: str) -> QAResult:
        """Answer a question about the active file; blank questions are rejected."""
        trimmed = question.strip()
        if not trimmed:
            raise EmptyQuestionError("Question must not be empty.")
        result = answer_question(trimmed, self._context.document, self._context.summary)
        self._context = replace(self._context, answer=result)
        return result

    def next_suggestions(self) -> list[NextSuggestion]:
        """Explore-next list for the active file; empty before anything is learned."""
        document = self._context.document
        if document is None:
            return []
        suggestions = self.suggestions()
        return resolve_next_suggestions(
            document.path,
            "\n".join(document.lines),
            suggestions,
            self.walkthrough(suggestions),
            learned=self._learned,
            exists=self._workspace.exists,
            label_for=self._workspace.label_for,
        )
