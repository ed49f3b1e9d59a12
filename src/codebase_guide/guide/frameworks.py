"""Framework family detection from manifest dependencies or config files."""

from __future__ import annotations

from codebase_guide.guide.models import FrameworkSet, Manifest
from codebase_guide.guide.protocols import FindFilesFn, ReadManifestFn
from codebase_guide.guide.suggestions import DEPENDENCY_CACHE_EXCLUDE

NEXT_JS = "Next.js"
REACT = "React"
VITE = "Vite"
VUE = "Vue"
ANGULAR = "Angular"
SVELTE = "Svelte"
NUXT = "Nuxt"
ASTRO = "Astro"
NESTJS = "NestJS"
EXPRESS = "Express"
FASTIFY = "Fastify"

# Scan order; the walkthrough uses the same order for its framework branches.
FRAMEWORK_DEPENDENCIES: tuple[tuple[str, tuple[str, ...]], ...] = (
    (NEXT_JS, ("next",)),
    (REACT, ("react",)),
    (VITE, ("vite",)),
    (VUE, ("vue",)),
    (ANGULAR, ("@angular/core",)),
    (SVELTE, ("svelte", "@sveltejs/kit")),
    (NUXT, ("nuxt",)),
    (ASTRO, ("astro",)),
    (NESTJS, ("@nestjs/core",)),
    (EXPRESS, ("express",)),
    (FASTIFY, ("fastify",)),
)

FRAMEWORK_CONFIG_GLOBS: tuple[tuple[str, str], ...] = (
    ("**/next.config.*", NEXT_JS),
    ("**/vite.config.*", VITE),
    ("**/angular.json", ANGULAR),
    ("**/svelte.config.*", SVELTE),
    ("**/nuxt.config.*", NUXT),
    ("**/astro.config.*", ASTRO),
    ("**/nest-cli.json", NESTJS),
)


def frameworks_from_manifest(manifest: Manifest | None) -> FrameworkSet:
    """Map dependency names to frameworks, ignoring versions."""
    if manifest is None:
        return ()
    names = manifest.dependency_names()
    return tuple(
        framework
        for framework, packages in FRAMEWORK_DEPENDENCIES
        if any(package in names for package in packages)
    )


def frameworks_from_config_files(
    find_files: FindFilesFn, exclude: str = DEPENDENCY_CACHE_EXCLUDE
) -> FrameworkSet:
    """Detect frameworks from the presence of their canonical config files."""
    detected: list[str] = []
    for pattern, framework in FRAMEWORK_CONFIG_GLOBS:
        try:
            found = find_files(pattern, exclude, 1)
        except OSError:
            continue
        if found and framework not in detected:
            detected.append(framework)
    return tuple(detected)


def detect_frameworks(
    read_manifest: ReadManifestFn,
    find_files: FindFilesFn,
    *,
    exclude: str = DEPENDENCY_CACHE_EXCLUDE,
) -> FrameworkSet:
    """Return detected frameworks; an empty tuple means no evidence, never an error."""
    try:
        manifest = read_manifest()
    except (OSError, ValueError):
        manifest = None
    detected = frameworks_from_manifest(manifest)
    if detected:
        return detected
    return frameworks_from_config_files(find_files, exclude)
