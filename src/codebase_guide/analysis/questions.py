"""Keyword and selector matching of questions against the current document."""

from __future__ import annotations

import re
from typing import Final

from codebase_guide.analysis.patterns import extract_keywords, extract_named_query, keyword_forms
from codebase_guide.guide.models import DocumentSummary, EvidenceLine, QAResult, SourceDocument
from codebase_guide.workspace.documents import MARKUP, STYLESHEET

MAX_EVIDENCE_LINES = 6

BEST_MATCH_MESSAGE = "Here are the lines in this file that best match your question."
NOT_FOUND_MESSAGE = (
    "I could not find matching lines in the current file. "
    "Try a different question or choose another file."
)

_CLASS_ATTRIBUTE: Final[re.Pattern[str]] = re.compile(r"""\bclass\s*=\s*["']?([^"'>]*)""")
_ID_ATTRIBUTE: Final[re.Pattern[str]] = re.compile(r"""\bid\s*=\s*["']?([^"'>]*)""")


def class_matched_message(name: str) -> str:
    return f'Matching class "{name}" in this file.'


def id_matched_message(name: str) -> str:
    return f'Matching id "{name}" in this file.'


def declarations_pointer_message(count: int) -> str:
    noun = "declaration" if count == 1 else "declarations"
    return (
        f"I could not find direct matches, but this file has {count} key {noun} "
        "you can explore."
    )


def _attribute_contains(pattern: re.Pattern[str], lowered_line: str, name: str) -> bool:
    return any(name in value for value in pattern.findall(lowered_line))


def _selector_matches(
    document: SourceDocument, class_name: str | None, id_name: str | None
) -> list[int]:
    """Indexes of lines matching the class/id selector, markup or stylesheet only.

    Markup lines match on the class attribute, falling back to the id attribute;
    stylesheets match one selector, the class taking precedence.
    """
    if document.kind not in (MARKUP, STYLESHEET):
        return []
    selector = f".{class_name}" if class_name else f"#{id_name}"
    indexes: list[int] = []
    for index, line in enumerate(document.lines):
        if len(indexes) >= MAX_EVIDENCE_LINES:
            break
        lowered = line.lower()
        if document.kind == STYLESHEET:
            matched = selector in lowered
        elif class_name and _attribute_contains(_CLASS_ATTRIBUTE, lowered, class_name):
            matched = True
        else:
            matched = id_name is not None and _attribute_contains(_ID_ATTRIBUTE, lowered, id_name)
        if matched:
            indexes.append(index)
    return indexes


def answer_question(
    question: str,
    document: SourceDocument | None,
    summary: DocumentSummary | None,
) -> QAResult:
    """Collect up to six evidence lines: selector matches first, then keyword matches."""
    keywords = keyword_forms(extract_keywords(question))
    class_name = extract_named_query(question, "class")
    id_name = extract_named_query(question, "id")

    lines: tuple[str, ...] = document.lines if document is not None else ()
    collected: list[int] = []
    if document is not None and (class_name or id_name):
        collected.extend(_selector_matches(document, class_name, id_name))
    already = set(collected)
    for index, line in enumerate(lines):
        if len(collected) >= MAX_EVIDENCE_LINES:
            break
        if index in already:
            continue
        lowered = line.lower()
        if any(keyword in lowered for keyword in keywords):
            collected.append(index)

    evidence = tuple(EvidenceLine(line=index + 1, text=lines[index].strip()) for index in collected)

    message = BEST_MATCH_MESSAGE
    if class_name:
        message = class_matched_message(class_name)
    elif id_name:
        message = id_matched_message(id_name)
    if document is None or not evidence:
        message = NOT_FOUND_MESSAGE
    if not evidence and summary is not None and summary.declarations:
        message = declarations_pointer_message(len(summary.declarations))

    return QAResult(question=question, message=message, evidence=evidence)
