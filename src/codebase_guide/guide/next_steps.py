"""Explore-next recommendations for the currently learned file."""

from __future__ import annotations

import posixpath
import re
from collections.abc import Collection, Sequence

from codebase_guide.guide.models import FileCandidate, NextSuggestion, WalkthroughStep
from codebase_guide.guide.protocols import ExistsFn, LabelFn

MAX_NEXT_SUGGESTIONS = 6

IMPORT_PATTERN = re.compile(
    r"""import\s+.*?\s+from\s+['"](.+?)['"]|require\s*\(\s*['"](.+?)['"]\s*\)"""
)
# Tried in order; the first existing candidate wins for a specifier.
IMPORT_RESOLUTION_SUFFIXES = (
    "",
    ".ts",
    ".tsx",
    ".js",
    ".jsx",
    "/index.ts",
    "/index.tsx",
    "/index.js",
    "/index.jsx",
)

IMPORTED_REASON = "Imported by current file"
IMPORTED_EXPLORED_REASON = "Imported by current file (already explored)"


def relative_import_specifiers(source_text: str) -> list[str]:
    """Distinct relative import/require specifiers in order of first appearance."""
    specifiers: list[str] = []
    for match in IMPORT_PATTERN.finditer(source_text):
        specifier = match.group(1) or match.group(2)
        if not specifier or not specifier.startswith("."):
            continue
        if specifier not in specifiers:
            specifiers.append(specifier)
    return specifiers


def resolve_relative_import(current_path: str, specifier: str, exists: ExistsFn) -> str | None:
    """Resolve a specifier against the current file's directory; first existing suffix wins."""
    base = posixpath.join(posixpath.dirname(current_path), specifier)
    for suffix in IMPORT_RESOLUTION_SUFFIXES:
        candidate = posixpath.normpath(base + suffix)
        if exists(candidate):
            return candidate
    return None


def resolve_next_suggestions(
    current_path: str,
    source_text: str,
    suggestions: Sequence[FileCandidate],
    walkthrough: Sequence[WalkthroughStep],
    *,
    learned: Collection[str],
    exists: ExistsFn,
    label_for: LabelFn | None = None,
    limit: int = MAX_NEXT_SUGGESTIONS,
) -> list[NextSuggestion]:
    """Combine imports, walkthrough continuation and unexplored suggestions, in that order.

    One dedupe set spans all three tiers and starts with the current file,
    so nothing repeats and the current file is never suggested.
    """
    seen: set[str] = {current_path}
    result: list[NextSuggestion] = []

    def label(path: str) -> str:
        return label_for(path) if label_for is not None else path

    for specifier in relative_import_specifiers(source_text):
        if len(result) >= limit:
            return result
        resolved = resolve_relative_import(current_path, specifier, exists)
        if resolved is None or resolved in seen:
            continue
        seen.add(resolved)
        reason = IMPORTED_EXPLORED_REASON if resolved in learned else IMPORTED_REASON
        result.append(NextSuggestion(label=label(resolved), reason=reason, path=resolved))

    step_index = next(
        (index for index, step in enumerate(walkthrough) if step.target == current_path),
        None,
    )
    if step_index is not None and len(result) < limit:
        for step in walkthrough[step_index + 1 :]:
            if step.target is None or step.target in seen:
                continue
            seen.add(step.target)
            result.append(
                NextSuggestion(
                    label=label(step.target),
                    reason=f"Next walkthrough step: {step.title}",
                    path=step.target,
                )
            )
            break

    for suggestion in suggestions:
        if len(result) >= limit:
            break
        if suggestion.path in seen or suggestion.path in learned:
            continue
        seen.add(suggestion.path)
        result.append(
            NextSuggestion(label=suggestion.label, reason=suggestion.reason, path=suggestion.path)
        )
    return result
