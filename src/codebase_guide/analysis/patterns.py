"""Line patterns for structural extraction and question parsing.

Extraction is textual, not syntactic. Declarations are only recognized at
an indentation of at most two whitespace characters so that nested and
inner declarations stay out of the summary; multi-line or unusually
formatted declarations are missed. That threshold trades recall for
precision and is kept on purpose.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

HEADING_PATTERN: Final[re.Pattern[str]] = re.compile(r"^#{1,3}\s+(.*)$")
EXPORT_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^\s*export\s+(?:default\s+)?"
    r"(?:async\s+function|class|function|const|let|var|interface|type|enum)?"
    r"\s*([A-Za-z0-9_]+)"
)


@dataclass(slots=True, frozen=True)
class DeclarationShape:
    """One recognizable declaration form; group 1 of `pattern` is the name."""

    kind: str
    pattern: re.Pattern[str]


# Checked in order; the first shape that matches a line ends the search for that line.
DECLARATION_SHAPES: Final[tuple[DeclarationShape, ...]] = (
    DeclarationShape(
        "function",
        re.compile(r"^\s{0,2}(?:export\s+)?(?:default\s+)?(?:async\s+)?function\s+([A-Za-z0-9_]+)"),
    ),
    DeclarationShape(
        "class",
        re.compile(r"^\s{0,2}(?:export\s+)?(?:default\s+)?class\s+([A-Za-z0-9_]+)"),
    ),
    DeclarationShape(
        "arrow_function",
        re.compile(
            r"^\s{0,2}(?:export\s+)?const\s+([A-Za-z0-9_]+)\s*=\s*(?:async\s*)?\([^)]*\)\s*=>"
        ),
    ),
)

MIN_KEYWORD_LENGTH = 4
TOKEN_SPLIT_PATTERN: Final[re.Pattern[str]] = re.compile(r"\W+")
STOPWORDS: Final[frozenset[str]] = frozenset(
    {
        "what",
        "which",
        "where",
        "when",
        "then",
        "this",
        "that",
        "with",
        "from",
        "have",
        "your",
        "about",
    }
)


def match_heading(line: str) -> str | None:
    match = HEADING_PATTERN.match(line)
    if match is None:
        return None
    return match.group(1).strip()


def match_export(line: str) -> str | None:
    match = EXPORT_PATTERN.match(line)
    if match is None:
        return None
    return match.group(1)


def match_declaration(line: str) -> tuple[str, str] | None:
    """Return (kind, name) for the first declaration shape matching the line."""
    for shape in DECLARATION_SHAPES:
        match = shape.pattern.match(line)
        if match is not None:
            return shape.kind, match.group(1)
    return None


def extract_keywords(question: str) -> list[str]:
    """Lowercased tokens longer than three characters, minus stopwords, in question order."""
    tokens = (token.strip() for token in TOKEN_SPLIT_PATTERN.split(question.lower()))
    return [
        token
        for token in tokens
        if len(token) >= MIN_KEYWORD_LENGTH and token not in STOPWORDS
    ]


# Longest first; a root shorter than MIN_KEYWORD_LENGTH is not used.
KEYWORD_SUFFIXES: Final[tuple[str, ...]] = (
    "ations",
    "ation",
    "ings",
    "ing",
    "ers",
    "ies",
    "er",
    "es",
    "ed",
    "s",
)


def keyword_root(keyword: str) -> str:
    """Strip one inflection suffix so `routing` also finds `router`."""
    for suffix in KEYWORD_SUFFIXES:
        if keyword.endswith(suffix) and len(keyword) - len(suffix) >= MIN_KEYWORD_LENGTH:
            return keyword[: -len(suffix)]
    return keyword


def keyword_forms(keywords: list[str]) -> tuple[str, ...]:
    """Keywords plus their roots, deduplicated in order."""
    forms: list[str] = []
    for keyword in keywords:
        for form in (keyword, keyword_root(keyword)):
            if form not in forms:
                forms.append(form)
    return tuple(forms)


def _selector_pattern(keyword: str) -> re.Pattern[str]:
    return re.compile(rf"\b{keyword}(?:\s*[:=]\s*|\s+)['\"]?([a-z0-9_-]+)['\"]?")


CLASS_QUERY_PATTERN: Final[re.Pattern[str]] = _selector_pattern("class")
ID_QUERY_PATTERN: Final[re.Pattern[str]] = _selector_pattern("id")


def extract_named_query(question: str, keyword: str) -> str | None:
    """Name following a `class` or `id` keyword, e.g. `class="hero"` or `id: main`."""
    pattern = CLASS_QUERY_PATTERN if keyword == "class" else ID_QUERY_PATTERN
    match = pattern.search(question.lower())
    if match is None:
        return None
    return match.group(1)
