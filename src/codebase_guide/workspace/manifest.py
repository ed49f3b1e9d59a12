"""package.json reading for framework detection."""

from __future__ import annotations

import json
from pathlib import Path

from codebase_guide.guide.models import Manifest


def parse_manifest(text: str) -> Manifest | None:
    """Parse manifest JSON; return None when it is not a JSON object."""
    try:
        payload = json.loads(text)
    except json.JSONDecodeError:
        return None
    if not isinstance(payload, dict):
        return None
    return Manifest(
        dependencies=_dependency_map(payload.get("dependencies")),
        dev_dependencies=_dependency_map(payload.get("devDependencies")),
    )


def read_manifest_file(path: Path) -> Manifest | None:
    """Read and parse a manifest file, returning None on any read or parse failure."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    return parse_manifest(text)


def _dependency_map(value: object) -> dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {str(name): str(version) for name, version in value.items()}
