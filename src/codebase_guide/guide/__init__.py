"""Guide engine: ranking, framework detection, walkthrough and explore-next."""

from .frameworks import (
    FRAMEWORK_CONFIG_GLOBS,
    FRAMEWORK_DEPENDENCIES,
    detect_frameworks,
    frameworks_from_config_files,
    frameworks_from_manifest,
)
from .models import (
    Declaration,
    DocumentSummary,
    EvidenceLine,
    FileCandidate,
    FrameworkSet,
    Manifest,
    NextSuggestion,
    QAResult,
    SourceDocument,
    SuggestionRule,
    WalkthroughStep,
)
from .next_steps import (
    MAX_NEXT_SUGGESTIONS,
    relative_import_specifiers,
    resolve_next_suggestions,
    resolve_relative_import,
)
from .suggestions import (
    DEPENDENCY_CACHE_EXCLUDE,
    MATCHES_PER_RULE,
    SUGGESTION_RULES,
    rank_suggestions,
)
from .walkthrough import build_walkthrough, find_by_fragment, find_by_suffix

__all__ = [
    "DEPENDENCY_CACHE_EXCLUDE",
    "Declaration",
    "DocumentSummary",
    "EvidenceLine",
    "FRAMEWORK_CONFIG_GLOBS",
    "FRAMEWORK_DEPENDENCIES",
    "FileCandidate",
    "FrameworkSet",
    "MATCHES_PER_RULE",
    "MAX_NEXT_SUGGESTIONS",
    "Manifest",
    "NextSuggestion",
    "QAResult",
    "SUGGESTION_RULES",
    "SourceDocument",
    "SuggestionRule",
    "WalkthroughStep",
    "build_walkthrough",
    "detect_frameworks",
    "find_by_fragment",
    "find_by_suffix",
    "frameworks_from_config_files",
    "frameworks_from_manifest",
    "rank_suggestions",
    "relative_import_specifiers",
    "resolve_next_suggestions",
    "resolve_relative_import",
]
