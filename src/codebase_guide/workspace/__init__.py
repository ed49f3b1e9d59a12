"""Filesystem workspace: search, existence, manifest and document reads."""

from .discovery import MANIFEST_NAME, Workspace
from .documents import (
    MARKUP,
    OTHER,
    PROSE,
    STYLESHEET,
    DocumentKind,
    classify_document,
    split_document_lines,
)
from .globs import compile_glob, matches_glob, prunes_directory
from .manifest import parse_manifest, read_manifest_file

__all__ = [
    "DocumentKind",
    "MANIFEST_NAME",
    "MARKUP",
    "OTHER",
    "PROSE",
    "STYLESHEET",
    "Workspace",
    "classify_document",
    "compile_glob",
    "matches_glob",
    "parse_manifest",
    "prunes_directory",
    "read_manifest_file",
    "split_document_lines",
]
