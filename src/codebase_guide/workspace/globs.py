"""Glob patterns in the `**/dir/*.{ts,js}` dialect used by workspace searches."""

from __future__ import annotations

import re
from functools import lru_cache

# Never a real path component, so it probes "everything below a directory".
_PRUNE_SENTINEL = "\x00/\x00"


@lru_cache(maxsize=256)
def compile_glob(pattern: str) -> re.Pattern[str]:
    """Compile a workspace glob into an anchored regex over relative POSIX paths.

    `**/` matches zero or more directories, `**` anything, `*` and `?` stay
    within one path segment, `[...]` is a character class and `{a,b}` an
    alternation.
    """
    return re.compile(rf"\A{_translate(pattern)}\Z")


def matches_glob(relative_path: str, pattern: str) -> bool:
    """Return True when a workspace-relative POSIX path matches the glob."""
    return compile_glob(pattern).match(relative_path) is not None


def matches_any(relative_path: str, patterns: tuple[str, ...]) -> bool:
    return any(matches_glob(relative_path, pattern) for pattern in patterns)


def prunes_directory(relative_dir: str, patterns: tuple[str, ...]) -> bool:
    """Return True when every path below relative_dir would be excluded."""
    probe = f"{relative_dir}/{_PRUNE_SENTINEL}"
    return matches_any(probe, patterns)


def _translate(pattern: str) -> str:
    output: list[str] = []
    index = 0
    length = len(pattern)
    while index < length:
        char = pattern[index]
        if pattern.startswith("**/", index):
            output.append("(?:.*/)?")
            index += 3
            continue
        if pattern.startswith("**", index):
            output.append(".*")
            index += 2
            continue
        if char == "*":
            output.append("[^/]*")
        elif char == "?":
            output.append("[^/]")
        elif char == "[":
            close = pattern.find("]", index + 1)
            if close == -1:
                output.append(re.escape(char))
            else:
                body = pattern[index + 1 : close]
                if body.startswith("!"):
                    body = "^" + body[1:]
                output.append(f"[{body}]")
                index = close
        elif char == "{":
            close = pattern.find("}", index + 1)
            if close == -1:
                output.append(re.escape(char))
            else:
                options = pattern[index + 1 : close].split(",")
                output.append("(?:" + "|".join(_translate(option) for option in options) + ")")
                index = close
        else:
            output.append(re.escape(char))
        index += 1
    return "".join(output)
