"""Built-in guide tools."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import asdict
from pathlib import Path

from codebase_guide.config import GuideConfig
from codebase_guide.render import build_cards, render_guide_markdown
from codebase_guide.security import (
    enforce_open_line_limits,
    enforce_read_policy,
    resolve_workspace_path,
)
from codebase_guide.session import EmptyQuestionError, GuideSession
from codebase_guide.tools.registry import ToolDispatchError, ToolHandler, ToolRegistry

LINE_RANGE_PATTERN = re.compile(r"^(\d+)(?:\s*-\s*(\d+))?$")

ReadAuditEntries = Callable[[str | None, int], list[dict[str, object]]]


def parse_line_range(text: str, line_count: int) -> tuple[int, int] | None:
    """Parse `"12"` or `"12-40"` into an inclusive 1-based range clamped to the file.

    The start is raised to 1 and the end to at least the start; a start past
    the end of the file yields None.
    """
    match = LINE_RANGE_PATTERN.match(text.strip())
    if match is None:
        return None
    start = max(1, int(match.group(1)))
    end = max(start, int(match.group(2) or match.group(1)))
    if start > line_count:
        return None
    return start, min(end, line_count)


def register_builtin_tools(
    registry: ToolRegistry,
    session: GuideSession,
    config: GuideConfig,
    read_audit_entries: ReadAuditEntries,
) -> None:
    """Register the guide tool set."""
    registry.register("guide.status", _status_handler(session, config))
    registry.register("guide.suggestions", _suggestions_handler(session))
    registry.register("guide.frameworks", _frameworks_handler(session))
    registry.register("guide.walkthrough", _walkthrough_handler(session))
    registry.register("guide.list_files", _list_files_handler(session, config))
    registry.register("guide.learn", _learn_handler(session, config))
    registry.register("guide.ask", _ask_handler(session))
    registry.register("guide.next", _next_handler(session))
    registry.register("guide.open_file", _open_file_handler(session, config))
    registry.register("guide.render", _render_handler(session))
    registry.register("guide.audit_log", _audit_log_handler(read_audit_entries))


def _optional_bool(arguments: dict[str, object], key: str, tool: str) -> bool:
    value = arguments.get(key, False)
    if not isinstance(value, bool):
        raise ToolDispatchError(code="INVALID_PARAMS", message=f"{tool} {key} must be boolean.")
    return value


def _required_string(arguments: dict[str, object], key: str, tool: str) -> str:
    value = arguments.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ToolDispatchError(
            code="INVALID_PARAMS",
            message=f"{tool} {key} must be a non-empty string.",
        )
    return value


def _readable_file(config: GuideConfig, path: str, tool: str) -> Path:
    resolved = resolve_workspace_path(config.workspace_root, path)
    enforce_read_policy(config.workspace_root, resolved, config.limits)
    if not resolved.is_file():
        raise ToolDispatchError(
            code="INVALID_PARAMS",
            message=f"{tool} path is not a readable file: {path}",
        )
    return resolved


def _status_handler(session: GuideSession, config: GuideConfig) -> ToolHandler:
    def handler(_: dict[str, object]) -> dict[str, object]:
        current = session.context.path
        return {
            "workspace_root": str(config.workspace_root),
            "frameworks": list(session.frameworks()),
            "learned_count": len(session.learned),
            "current_file": session.workspace.label_for(current) if current else None,
            "effective_config": config.to_public_dict(),
        }

    return handler


def _suggestions_handler(session: GuideSession) -> ToolHandler:
    def handler(_: dict[str, object]) -> dict[str, object]:
        learned = session.learned
        return {
            "suggestions": [
                {**asdict(candidate), "learned": candidate.path in learned}
                for candidate in session.suggestions()
            ]
        }

    return handler


def _frameworks_handler(session: GuideSession) -> ToolHandler:
    def handler(arguments: dict[str, object]) -> dict[str, object]:
        refresh = _optional_bool(arguments, "refresh", "guide.frameworks")
        if refresh:
            session.refresh()
        return {"frameworks": list(session.frameworks(refresh=refresh))}

    return handler


def _walkthrough_handler(session: GuideSession) -> ToolHandler:
    def handler(_: dict[str, object]) -> dict[str, object]:
        label_for = session.workspace.label_for
        return {
            "steps": [
                {
                    "title": step.title,
                    "details": step.details,
                    "target": step.target,
                    "target_label": label_for(step.target) if step.target else None,
                }
                for step in session.walkthrough()
            ]
        }

    return handler


def _list_files_handler(session: GuideSession, config: GuideConfig) -> ToolHandler:
    def handler(arguments: dict[str, object]) -> dict[str, object]:
        filter_value = arguments.get("filter", "")
        if not isinstance(filter_value, str):
            raise ToolDispatchError(
                code="INVALID_PARAMS",
                message="guide.list_files filter must be a string.",
            )
        max_results = arguments.get("max_results", config.limits.max_listed_files)
        if isinstance(max_results, bool) or not isinstance(max_results, int):
            raise ToolDispatchError(
                code="INVALID_PARAMS",
                message="guide.list_files max_results must be an integer.",
            )
        max_results = min(max(max_results, 1), config.limits.max_listed_files)

        workspace = session.workspace
        learned = session.learned
        needle = filter_value.strip().lower()
        files: list[dict[str, object]] = []
        for path in workspace.list_files(config.listing_excludes()):
            label = workspace.label_for(path)
            if needle and needle not in label.lower():
                continue
            files.append({"label": label, "path": path, "learned": path in learned})
        return {
            "files": files[:max_results],
            "total": len(files),
            "truncated": len(files) > max_results,
        }

    return handler


def _learn_handler(session: GuideSession, config: GuideConfig) -> ToolHandler:
    def handler(arguments: dict[str, object]) -> dict[str, object]:
        path = _required_string(arguments, "path", "guide.learn")
        declared_type = arguments.get("language")
        if declared_type is not None and not isinstance(declared_type, str):
            raise ToolDispatchError(
                code="INVALID_PARAMS",
                message="guide.learn language must be a string.",
            )
        resolved = _readable_file(config, path, "guide.learn")
        try:
            summary = session.learn(resolved.as_posix(), declared_type)
        except OSError as error:
            raise ToolDispatchError(
                code="INVALID_PARAMS",
                message=f"guide.learn could not read file: {path}",
            ) from error
        return {"summary": asdict(summary)}

    return handler


def _ask_handler(session: GuideSession) -> ToolHandler:
    def handler(arguments: dict[str, object]) -> dict[str, object]:
        question = arguments.get("question")
        if not isinstance(question, str):
            raise ToolDispatchError(
                code="INVALID_PARAMS",
                message="guide.ask question must be a string.",
            )
        try:
            result = session.ask(question)
        except EmptyQuestionError as error:
            raise ToolDispatchError(code="INVALID_PARAMS", message=str(error)) from error
        current = session.context.path
        return {
            **asdict(result),
            "current_file": session.workspace.label_for(current) if current else None,
        }

    return handler


def _next_handler(session: GuideSession) -> ToolHandler:
    def handler(_: dict[str, object]) -> dict[str, object]:
        current = session.context.path
        return {
            "current_file": session.workspace.label_for(current) if current else None,
            "suggestions": [asdict(item) for item in session.next_suggestions()],
        }

    return handler


def _open_file_handler(session: GuideSession, config: GuideConfig) -> ToolHandler:
    def handler(arguments: dict[str, object]) -> dict[str, object]:
        path = _required_string(arguments, "path", "guide.open_file")
        range_value = arguments.get("lines")
        if range_value is not None and not isinstance(range_value, str):
            raise ToolDispatchError(
                code="INVALID_PARAMS",
                message="guide.open_file lines must be a string such as '10-20'.",
            )
        resolved = _readable_file(config, path, "guide.open_file")
        lines = session.workspace.read_lines(resolved.as_posix())
        label = session.workspace.label_for(resolved.as_posix())
        if not lines:
            return {"path": label, "numbered_lines": [], "truncated": False}

        if range_value is None:
            start, end = 1, len(lines)
        else:
            parsed = parse_line_range(range_value, len(lines))
            if parsed is None:
                raise ToolDispatchError(
                    code="INVALID_PARAMS",
                    message=f"guide.open_file lines is not a valid range for {label}.",
                )
            start, end = parsed
            enforce_open_line_limits(start, end, config.limits)

        last = min(end, start + config.limits.max_open_lines - 1)
        return {
            "path": label,
            "numbered_lines": [
                {"line": number, "text": lines[number - 1]} for number in range(start, last + 1)
            ],
            "truncated": last < end,
        }

    return handler


def _render_handler(session: GuideSession) -> ToolHandler:
    def handler(_: dict[str, object]) -> dict[str, object]:
        suggestions = session.suggestions()
        walkthrough = session.walkthrough(suggestions)
        cards = build_cards(
            suggestions,
            walkthrough,
            session.learned,
            session.workspace.label_for,
        )
        markdown = render_guide_markdown(
            frameworks=session.frameworks(),
            cards=cards,
            context=session.context,
            next_suggestions=session.next_suggestions(),
        )
        return {"markdown": markdown}

    return handler


def _audit_log_handler(read_audit_entries: ReadAuditEntries) -> ToolHandler:
    def handler(arguments: dict[str, object]) -> dict[str, object]:
        since = arguments.get("since")
        if since is not None and not isinstance(since, str):
            raise ToolDispatchError(
                code="INVALID_PARAMS",
                message="guide.audit_log since must be an ISO-8601 string.",
            )
        limit = arguments.get("limit", 50)
        if isinstance(limit, bool) or not isinstance(limit, int):
            raise ToolDispatchError(
                code="INVALID_PARAMS",
                message="guide.audit_log limit must be an integer.",
            )
        return {"entries": read_audit_entries(since, min(max(limit, 1), 200))}

    return handler
