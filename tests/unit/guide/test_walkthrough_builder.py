from __future__ import annotations

from codebase_guide.guide import FileCandidate, build_walkthrough, find_by_suffix


def _candidates(*labels: str) -> list[FileCandidate]:
    return [FileCandidate(label=label, reason="r", path=f"/ws/{label}") for label in labels]


def _titles(frameworks: tuple[str, ...]) -> list[str]:
    return [step.title for step in build_walkthrough([], frameworks)]


def test_next_and_react_steps_without_vite_pair() -> None:
    suggestions = _candidates(
        "README.md",
        "package.json",
        "src/pages/index.tsx",
        "src/pages/api/users.ts",
        "src/App.tsx",
    )

    steps = build_walkthrough(suggestions, ("Next.js", "React"))
    titles = [step.title for step in steps]

    assert titles == [
        "Read the README",
        "Check package or build config",
        "Review Next.js routing",
        "Check API routes",
        "Locate the root component",
        "Find the app entry point",
        "Trace routes or pages",
        "Inspect controllers or handlers",
        "Follow data and services",
    ]
    assert "Check Vite entry" not in titles
    targets = {step.title: step.target for step in steps}
    assert targets["Read the README"] == "/ws/README.md"
    assert targets["Review Next.js routing"] == "/ws/src/pages/index.tsx"
    assert targets["Check API routes"] == "/ws/src/pages/api/users.ts"
    assert targets["Locate the root component"] == "/ws/src/App.tsx"
    assert targets["Find the app entry point"] is None


def test_react_with_vite_adds_entry_then_root_component() -> None:
    titles = _titles(("React", "Vite"))

    assert titles[2:4] == ["Check Vite entry", "Locate the root component"]
    assert titles.count("Locate the root component") == 1


def test_vite_alone_adds_no_framework_steps() -> None:
    assert len(_titles(("Vite",))) == 6


def test_unrelated_frameworks_are_concatenated_in_detection_order() -> None:
    titles = _titles(("Angular", "Express"))

    assert titles[2:6] == [
        "Check Angular module",
        "Check routing module",
        "Find server setup",
        "Trace route registration",
    ]


def test_express_and_fastify_share_one_branch() -> None:
    assert _titles(("Express", "Fastify")).count("Find server setup") == 1


def test_steps_without_suggestions_have_no_target() -> None:
    steps = build_walkthrough([], ("Vue",))

    assert all(step.target is None for step in steps)
    assert [step.title for step in steps][2:5] == [
        "Check Vue entry",
        "Review root component",
        "Check routing",
    ]


def test_fragment_fallback_and_suffix_case() -> None:
    suggestions = _candidates("app/api/route.ts", "src/controllers/users.ts", "Readme.md")

    targets = {
        step.title: step.target for step in build_walkthrough(suggestions, ("Next.js",))
    }

    assert targets["Check API routes"] == "/ws/app/api/route.ts"
    assert targets["Inspect controllers or handlers"] == "/ws/src/controllers/users.ts"
    assert targets["Read the README"] == "/ws/Readme.md"


def test_first_suggestion_wins_for_suffix() -> None:
    suggestions = _candidates("docs/README.md", "README.md")

    assert find_by_suffix(suggestions, ("readme.md",)) == "/ws/docs/README.md"
