"""Pattern-based document analysis and question answering."""

from .document import MAX_EXPORTED_NAMES, MAX_HEADINGS, analyze_document, load_document
from .patterns import (
    DECLARATION_SHAPES,
    EXPORT_PATTERN,
    HEADING_PATTERN,
    STOPWORDS,
    DeclarationShape,
    extract_keywords,
    extract_named_query,
    keyword_forms,
    keyword_root,
    match_declaration,
    match_export,
    match_heading,
)
from .questions import (
    BEST_MATCH_MESSAGE,
    MAX_EVIDENCE_LINES,
    NOT_FOUND_MESSAGE,
    answer_question,
    class_matched_message,
    declarations_pointer_message,
    id_matched_message,
)

__all__ = [
    "BEST_MATCH_MESSAGE",
    "DECLARATION_SHAPES",
    "DeclarationShape",
    "EXPORT_PATTERN",
    "HEADING_PATTERN",
    "MAX_EVIDENCE_LINES",
    "MAX_EXPORTED_NAMES",
    "MAX_HEADINGS",
    "NOT_FOUND_MESSAGE",
    "STOPWORDS",
    "analyze_document",
    "answer_question",
    "class_matched_message",
    "declarations_pointer_message",
    "extract_keywords",
    "extract_named_query",
    "id_matched_message",
    "keyword_forms",
    "keyword_root",
    "load_document",
    "match_declaration",
    "match_export",
    "match_heading",
]
