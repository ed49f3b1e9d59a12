"""Framework-aware learning sequence built from ranked suggestions."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from codebase_guide.guide.frameworks import (
    ANGULAR,
    ASTRO,
    EXPRESS,
    FASTIFY,
    NESTJS,
    NEXT_JS,
    NUXT,
    REACT,
    SVELTE,
    VITE,
    VUE,
)
from codebase_guide.guide.models import FileCandidate, FrameworkSet, WalkthroughStep


@dataclass(slots=True, frozen=True)
class StepTemplate:
    """Step resolved by label suffix first, then by label fragment."""

    title: str
    details: str
    suffixes: tuple[str, ...] = ()
    fragments: tuple[str, ...] = ()


@dataclass(slots=True, frozen=True)
class FrameworkBranch:
    applies: Callable[[FrameworkSet], bool]
    steps: tuple[StepTemplate, ...]


def _has(*names: str) -> Callable[[FrameworkSet], bool]:
    return lambda frameworks: any(name in frameworks for name in names)


_ROOT_COMPONENT = StepTemplate(
    "Locate the root component",
    "Trace into App.tsx or App.jsx.",
    suffixes=("src/App.tsx", "src/App.jsx", "src/App.ts", "src/App.js"),
)

OPENING_STEPS: tuple[StepTemplate, ...] = (
    StepTemplate(
        "Read the README",
        "Start with project goals, setup, and quickstart notes.",
        suffixes=("readme.md",),
    ),
    StepTemplate(
        "Check package or build config",
        "Look for scripts, dependencies, and entry points.",
        suffixes=("package.json", "pyproject.toml", "pom.xml", "build.gradle"),
    ),
)

FRAMEWORK_BRANCHES: tuple[FrameworkBranch, ...] = (
    FrameworkBranch(
        _has(NEXT_JS),
        (
            StepTemplate(
                "Review Next.js routing",
                "Routes come from app/ or pages/ directories.",
                suffixes=("app/layout.tsx", "app/page.tsx", "pages/_app.tsx", "pages/index.tsx"),
            ),
            StepTemplate(
                "Check API routes",
                "Look under app/api or pages/api for endpoints.",
                fragments=("pages/api/", "app/api/"),
            ),
        ),
    ),
    FrameworkBranch(
        lambda frameworks: REACT in frameworks and VITE in frameworks,
        (
            StepTemplate(
                "Check Vite entry",
                "Vite typically starts in src/main.tsx or src/main.jsx.",
                suffixes=("src/main.tsx", "src/main.jsx", "src/main.ts", "src/main.js"),
            ),
            _ROOT_COMPONENT,
        ),
    ),
    FrameworkBranch(
        lambda frameworks: REACT in frameworks and VITE not in frameworks,
        (_ROOT_COMPONENT,),
    ),
    FrameworkBranch(
        _has(VUE),
        (
            StepTemplate(
                "Check Vue entry",
                "Vue apps typically start in src/main.ts or src/main.js.",
                suffixes=("src/main.ts", "src/main.js"),
            ),
            StepTemplate(
                "Review root component",
                "Look for App.vue to understand layout and providers.",
                suffixes=("src/App.vue",),
            ),
            StepTemplate(
                "Check routing",
                "Vue Router lives in src/router.",
                fragments=("src/router/",),
            ),
        ),
    ),
    FrameworkBranch(
        _has(ANGULAR),
        (
            StepTemplate(
                "Check Angular module",
                "AppModule wires components and providers.",
                suffixes=("src/app/app.module.ts",),
            ),
            StepTemplate(
                "Check routing module",
                "Routes live in app-routing.module.ts.",
                suffixes=("src/app/app-routing.module.ts",),
            ),
        ),
    ),
    FrameworkBranch(
        _has(SVELTE),
        (
            StepTemplate(
                "Check Svelte entry",
                "SvelteKit routes live in src/routes.",
                fragments=("src/routes/",),
            ),
            StepTemplate(
                "Check Svelte config",
                "Svelte config defines adapters and preprocessors.",
                suffixes=("svelte.config.js", "svelte.config.ts"),
            ),
        ),
    ),
    FrameworkBranch(
        _has(NUXT),
        (
            StepTemplate(
                "Check Nuxt app entry",
                "Nuxt uses pages/ and app.vue for layout.",
                suffixes=("app.vue", "pages/index.vue"),
            ),
            StepTemplate(
                "Check Nuxt config",
                "Modules and runtime config live in nuxt.config.*.",
                suffixes=("nuxt.config.ts", "nuxt.config.js", "nuxt.config.mjs"),
            ),
        ),
    ),
    FrameworkBranch(
        _has(ASTRO),
        (
            StepTemplate(
                "Check Astro pages",
                "Astro routes live in src/pages.",
                fragments=("src/pages/",),
            ),
            StepTemplate(
                "Check Astro config",
                "Integrations and build settings are in astro.config.*.",
                suffixes=("astro.config.mjs", "astro.config.ts", "astro.config.js"),
            ),
        ),
    ),
    FrameworkBranch(
        _has(NESTJS),
        (
            StepTemplate(
                "Check NestJS entry",
                "Bootstrap happens in main.ts.",
                suffixes=("src/main.ts",),
            ),
            StepTemplate(
                "Inspect the root module",
                "AppModule wires controllers and providers.",
                suffixes=("src/app.module.ts",),
            ),
        ),
    ),
    FrameworkBranch(
        _has(EXPRESS, FASTIFY),
        (
            StepTemplate(
                "Find server setup",
                "Look for app.ts/server.ts to see middleware and routes.",
                suffixes=("src/app.ts", "src/server.ts", "server.js", "app.js"),
            ),
            StepTemplate(
                "Trace route registration",
                "Routes are usually organized under src/routes.",
                fragments=("src/routes/",),
            ),
        ),
    ),
)

CLOSING_STEPS: tuple[StepTemplate, ...] = (
    StepTemplate(
        "Find the app entry point",
        "Locate the main file that starts the app runtime.",
        suffixes=(
            "src/index.ts",
            "src/index.js",
            "src/main.ts",
            "src/main.js",
            "src/app.ts",
            "src/app.js",
            "src/server.ts",
            "src/server.js",
        ),
    ),
    StepTemplate(
        "Trace routes or pages",
        "Identify how requests or pages are registered.",
        suffixes=(
            "src/routes/index.ts",
            "src/routes/index.js",
            "src/pages/index.tsx",
            "src/pages/index.jsx",
        ),
    ),
    StepTemplate(
        "Inspect controllers or handlers",
        "See how endpoints map to logic.",
        fragments=("controllers/",),
    ),
    StepTemplate(
        "Follow data and services",
        "Find services, database clients, or data access layers.",
        fragments=("services/",),
    ),
)


def find_by_suffix(suggestions: Sequence[FileCandidate], suffixes: Sequence[str]) -> str | None:
    """First suggestion whose lowercased label ends with any suffix, compared case-insensitively."""
    lowered = tuple(suffix.lower() for suffix in suffixes)
    for suggestion in suggestions:
        if suggestion.label.lower().endswith(lowered):
            return suggestion.path
    return None


def find_by_fragment(suggestions: Sequence[FileCandidate], fragment: str) -> str | None:
    """First suggestion whose lowercased label contains the fragment."""
    needle = fragment.lower()
    for suggestion in suggestions:
        if needle in suggestion.label.lower():
            return suggestion.path
    return None


def resolve_step(template: StepTemplate, suggestions: Sequence[FileCandidate]) -> WalkthroughStep:
    target = find_by_suffix(suggestions, template.suffixes) if template.suffixes else None
    for fragment in template.fragments:
        if target is not None:
            break
        target = find_by_fragment(suggestions, fragment)
    return WalkthroughStep(title=template.title, details=template.details, target=target)


def build_walkthrough(
    suggestions: Sequence[FileCandidate], frameworks: FrameworkSet
) -> list[WalkthroughStep]:
    """Opening steps, every applicable framework branch in scan order, then closing steps.

    Branches are additive: a monorepo detected as both Angular and Express
    gets both sub-sequences concatenated.
    """
    templates: list[StepTemplate] = list(OPENING_STEPS)
    for branch in FRAMEWORK_BRANCHES:
        if branch.applies(frameworks):
            templates.extend(branch.steps)
    templates.extend(CLOSING_STEPS)
    return [resolve_step(template, suggestions) for template in templates]
