"""Document kinds that switch analyzer and question-matching behavior."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Final, Literal

DocumentKind = Literal["prose", "markup", "stylesheet", "other"]

PROSE: Final = "prose"
MARKUP: Final = "markup"
STYLESHEET: Final = "stylesheet"
OTHER: Final = "other"

_DECLARED_KINDS: dict[str, DocumentKind] = {
    "markdown": PROSE,
    "html": MARKUP,
    "css": STYLESHEET,
}
_EXTENSION_KINDS: dict[str, DocumentKind] = {
    ".md": PROSE,
    ".markdown": PROSE,
    ".html": MARKUP,
    ".htm": MARKUP,
    ".css": STYLESHEET,
}


def classify_document(path: str, declared_type: str | None = None) -> DocumentKind:
    """Classify by declared language id first, then by file extension."""
    if declared_type is not None:
        declared = _DECLARED_KINDS.get(declared_type.strip().lower())
        if declared is not None:
            return declared
    suffix = PurePosixPath(path.replace("\\", "/")).suffix.lower()
    return _EXTENSION_KINDS.get(suffix, OTHER)


def split_document_lines(text: str) -> list[str]:
    """Split document text into lines; line N of the document is index N - 1."""
    return text.splitlines()
