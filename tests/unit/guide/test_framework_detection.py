from __future__ import annotations

from codebase_guide.guide import Manifest, detect_frameworks, frameworks_from_manifest
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


def test_next_and_react_dependencies() -> None:
    manifest = Manifest(dependencies={"next": "13.0.0", "react": "18.0.0"})

    detected = detect_frameworks(lambda: manifest, _finder(["vite.config.ts"]))

    assert detected == ("Next.js", "React")


def test_dev_dependencies_and_scan_order() -> None:
    manifest = Manifest(
        dependencies={"fastify": "4", "react": "18"},
        dev_dependencies={"vite": "5", "@sveltejs/kit": "2"},
    )

    assert frameworks_from_manifest(manifest) == ("React", "Vite", "Svelte", "Fastify")


def test_missing_manifest_falls_back_to_config_files() -> None:
    find = _finder(["angular.json", "apps/web/vite.config.ts"])

    assert detect_frameworks(lambda: None, find) == ("Vite", "Angular")


def test_manifest_without_frameworks_falls_back() -> None:
    manifest = Manifest(dependencies={"lodash": "4"})

    detected = detect_frameworks(lambda: manifest, _finder(["nest-cli.json"]))

    assert detected == ("NestJS",)


def test_reader_errors_never_propagate() -> None:
    def broken() -> Manifest | None:
        raise ValueError("malformed")

    assert detect_frameworks(broken, _finder(["astro.config.mjs"])) == ("Astro",)


def test_config_files_in_dependency_cache_are_ignored() -> None:
    find = _finder(["node_modules/next/next.config.js"])

    assert detect_frameworks(lambda: None, find) == ()
