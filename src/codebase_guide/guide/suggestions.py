"""Rule-ordered ranking of files a newcomer should read first."""

from __future__ import annotations

from codebase_guide.guide.models import FileCandidate, SuggestionRule
from codebase_guide.guide.protocols import FindFilesFn, LabelFn

DEPENDENCY_CACHE_EXCLUDE = "**/node_modules/**"
MATCHES_PER_RULE = 20

ENTRY_POINT_REASON = "Likely application entry point."

SUGGESTION_RULES: tuple[SuggestionRule, ...] = (
    SuggestionRule("**/README.md", "Project overview and setup notes."),
    SuggestionRule("**/package.json", "Scripts, dependencies, and entry points."),
    SuggestionRule("**/src/index.*", ENTRY_POINT_REASON),
    SuggestionRule("**/src/main.*", ENTRY_POINT_REASON),
    SuggestionRule("**/src/app.*", "Core app wiring and middleware."),
    SuggestionRule("**/src/server.*", "HTTP server or runtime bootstrap."),
    SuggestionRule("**/src/routes/**", "Route definitions and endpoints."),
    SuggestionRule("**/src/controllers/**", "Endpoint handlers and business logic."),
    SuggestionRule("**/src/pages/**", "UI routes or page-level components."),
)


def rank_suggestions(
    find_files: FindFilesFn,
    rules: tuple[SuggestionRule, ...] = SUGGESTION_RULES,
    *,
    exclude: str = DEPENDENCY_CACHE_EXCLUDE,
    limit: int = MATCHES_PER_RULE,
    label_for: LabelFn | None = None,
    profile: dict[str, object] | None = None,
) -> list[FileCandidate]:
    """Evaluate rules in order; a file keeps the reason of the first rule that matched it.

    A rule whose search raises OSError contributes nothing and the remaining
    rules still run. When `profile` is given it receives per-rule counters.
    """
    seen: set[str] = set()
    candidates: list[FileCandidate] = []
    failed_rules: list[str] = []
    duplicate_matches = 0
    for rule in rules:
        try:
            paths = find_files(rule.glob, exclude, limit)
        except OSError:
            failed_rules.append(rule.glob)
            continue
        for path in paths:
            if path in seen:
                duplicate_matches += 1
                continue
            seen.add(path)
            label = label_for(path) if label_for is not None else path
            candidates.append(FileCandidate(label=label, reason=rule.reason, path=path))

    if profile is not None:
        profile.update(
            {
                "rule_count": len(rules),
                "candidate_count": len(candidates),
                "duplicate_matches": duplicate_matches,
                "failed_rules": failed_rules,
            }
        )
    return candidates
