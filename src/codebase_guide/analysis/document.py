"""Structural summary of a single learned document."""

from __future__ import annotations

from collections.abc import Sequence

from codebase_guide.analysis.patterns import match_declaration, match_export, match_heading
from codebase_guide.guide.models import Declaration, DocumentSummary, SourceDocument
from codebase_guide.guide.protocols import LabelFn, ReadLinesFn
from codebase_guide.workspace.documents import PROSE, classify_document

MAX_HEADINGS = 5
MAX_EXPORTED_NAMES = 8


def analyze_document(
    path: str,
    lines: Sequence[str],
    kind: str,
    display_path: str | None = None,
) -> DocumentSummary:
    """Extract headings (prose only), exported names and shallow declarations.

    Exported names are unique and capped in order of first appearance;
    declarations are unique by name with the first occurrence kept.
    """
    headings: list[str] = []
    exported_names: list[str] = []
    declarations: list[Declaration] = []
    declared_names: set[str] = set()

    for index, line in enumerate(lines):
        if kind == PROSE and len(headings) < MAX_HEADINGS:
            heading = match_heading(line)
            if heading is not None:
                headings.append(heading)

        exported = match_export(line)
        if (
            exported is not None
            and exported not in exported_names
            and len(exported_names) < MAX_EXPORTED_NAMES
        ):
            exported_names.append(exported)

        declared = match_declaration(line)
        if declared is None:
            continue
        declaration_kind, name = declared
        if name in declared_names:
            continue
        declared_names.add(name)
        declarations.append(Declaration(name=name, line=index + 1, kind=declaration_kind))

    return DocumentSummary(
        path=path,
        display_path=display_path if display_path is not None else path,
        kind=kind,
        line_count=len(lines),
        headings=tuple(headings),
        exported_names=tuple(exported_names),
        declarations=tuple(declarations),
    )


def load_document(
    path: str,
    read_lines: ReadLinesFn,
    declared_type: str | None = None,
    label_for: LabelFn | None = None,
) -> tuple[SourceDocument, DocumentSummary]:
    """Read, classify and summarize one file; read errors propagate."""
    lines = tuple(read_lines(path))
    kind = classify_document(path, declared_type)
    summary = analyze_document(
        path,
        lines,
        kind,
        display_path=label_for(path) if label_for is not None else None,
    )
    return SourceDocument(path=path, lines=lines, kind=kind), summary
