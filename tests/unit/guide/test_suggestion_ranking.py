from __future__ import annotations

from codebase_guide.guide import MATCHES_PER_RULE, SuggestionRule, rank_suggestions
from codebase_guide.guide.protocols import FindFilesFn
from codebase_guide.workspace import matches_glob


def _finder(files: list[str]) -> FindFilesFn:
    def find(pattern: str, exclude: str | None = None, limit: int | None = None) -> list[str]:
        found = [
            path
            for path in sorted(files)
            if matches_glob(path, pattern) and not (exclude and matches_glob(path, exclude))
        ]
        return found if limit is None else found[:limit]

    return find


def test_rules_are_evaluated_in_declaration_order() -> None:
    find = _finder(["src/routes/users.ts", "src/index.ts", "package.json", "README.md"])

    ranked = rank_suggestions(find)

    assert [candidate.path for candidate in ranked] == [
        "README.md",
        "package.json",
        "src/index.ts",
        "src/routes/users.ts",
    ]
    assert ranked[2].reason == "Likely application entry point."


def test_first_matching_rule_keeps_its_reason() -> None:
    find = _finder(["src/pages/README.md"])

    ranked = rank_suggestions(find)

    assert len(ranked) == 1
    assert ranked[0].reason == "Project overview and setup notes."


def test_dependency_cache_is_excluded() -> None:
    find = _finder(["README.md", "node_modules/react/README.md", "node_modules/x/package.json"])

    ranked = rank_suggestions(find)

    assert [candidate.path for candidate in ranked] == ["README.md"]


def test_matches_are_capped_per_rule() -> None:
    files = [f"src/routes/route_{index:02d}.ts" for index in range(25)]
    find = _finder(files + ["src/controllers/users.ts"])

    ranked = rank_suggestions(find)

    routes = [candidate for candidate in ranked if candidate.path.startswith("src/routes/")]
    assert len(routes) == MATCHES_PER_RULE
    assert ranked[-1].path == "src/controllers/users.ts"


def test_failing_rule_is_skipped_and_recorded() -> None:
    inner = _finder(["README.md", "src/app.ts"])

    def flaky(pattern: str, exclude: str | None = None, limit: int | None = None) -> list[str]:
        if pattern == "**/README.md":
            raise PermissionError("denied")
        return inner(pattern, exclude, limit)

    profile: dict[str, object] = {}
    ranked = rank_suggestions(flaky, profile=profile)

    assert [candidate.path for candidate in ranked] == ["src/app.ts"]
    assert profile["failed_rules"] == ["**/README.md"]
    assert profile["candidate_count"] == 1


def test_custom_rules_labels_and_duplicate_count() -> None:
    find = _finder(["docs/a.md", "docs/b.md"])
    rules = (
        SuggestionRule("docs/a.md", "First."),
        SuggestionRule("docs/*.md", "Docs."),
    )
    profile: dict[str, object] = {}

    ranked = rank_suggestions(find, rules, label_for=lambda path: path.upper(), profile=profile)

    assert [(candidate.label, candidate.reason) for candidate in ranked] == [
        ("DOCS/A.MD", "First."),
        ("DOCS/B.MD", "Docs."),
    ]
    assert profile["duplicate_matches"] == 1
    assert profile["rule_count"] == 2
