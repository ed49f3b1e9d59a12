"""JSON-lines STDIO server exposing the guide tools."""

from __future__ import annotations

import argparse
import itertools
import json
import sys
from dataclasses import dataclass, replace
from pathlib import Path
from typing import TextIO

from codebase_guide.config import CliOverrides, GuideConfig, load_effective_config
from codebase_guide.logging import AuditEvent, JsonlAuditLogger, sanitize_arguments, utc_timestamp
from codebase_guide.security import PathBlockedError, PolicyBlockedError
from codebase_guide.session import GuideSession
from codebase_guide.tools.builtin import register_builtin_tools
from codebase_guide.tools.registry import ToolDispatchError, ToolRegistry
from codebase_guide.workspace import Workspace

OVERSIZED_REASON = "Response exceeds max_total_bytes_per_response limit."
OVERSIZED_HINT = "Narrow the request, e.g. pass a filter, max_results or a smaller line range."


@dataclass(slots=True, frozen=True)
class ToolCall:
    """A request reduced to the tool it names and that tool's arguments."""

    request_id: str
    tool: str
    arguments: dict[str, object]


@dataclass(slots=True, frozen=True)
class RequestRejected(Exception):
    """Raised while unpacking a request that cannot reach any tool."""

    request_id: str
    code: str
    message: str
    audit_tool: str = "invalid_request"


def envelope(
    request_id: str,
    *,
    result: dict[str, object] | None = None,
    error: tuple[str, str] | None = None,
    blocked: bool = False,
) -> dict[str, object]:
    """Build a response; `error` is a (code, message) pair and implies ok=False."""
    response: dict[str, object] = {
        "request_id": request_id,
        "ok": error is None,
        "result": result or {},
        "warnings": [],
        "blocked": blocked,
    }
    if error is not None:
        code, message = error
        response["error"] = {"code": code, "message": message}
    return response


def blocked_envelope(request_id: str, reason: str, hint: str) -> dict[str, object]:
    return envelope(
        request_id,
        result={"reason": reason, "hint": hint},
        error=("PATH_BLOCKED", reason),
        blocked=True,
    )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codebase-guide",
        description="Read-only codebase orientation guide over JSON-lines STDIO.",
    )
    parser.add_argument("--workspace-root", default=".")
    parser.add_argument("--data-dir", type=Path, default=None)
    for flag in (
        "--max-file-bytes",
        "--max-open-lines",
        "--max-listed-files",
        "--max-total-bytes-per-response",
    ):
        parser.add_argument(flag, type=int, default=None)
    return parser


class GuideServer:
    """Routes one request per line to the guide tools and audits every call."""

    def __init__(self, config: GuideConfig) -> None:
        self._max_response_bytes = config.limits.max_total_bytes_per_response
        self._audit = JsonlAuditLogger(path=config.audit_log_path)
        self._session = GuideSession(Workspace(config.workspace_root), config)
        self._registry = ToolRegistry()
        register_builtin_tools(
            self._registry,
            session=self._session,
            config=config,
            read_audit_entries=self._audit.read,
        )
        self._fallback_ids = (f"req-{number:06d}" for number in itertools.count(1))

    @property
    def session(self) -> GuideSession:
        return self._session

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    def serve(self, in_stream: TextIO, out_stream: TextIO) -> None:
        """Answer each non-blank input line with one JSON response line."""
        for raw_line in in_stream:
            if not raw_line.strip():
                continue
            response = self.handle_json_line(raw_line.strip())
            out_stream.write(json.dumps(response, sort_keys=True) + "\n")
            out_stream.flush()

    def handle_json_line(self, raw_line: str) -> dict[str, object]:
        try:
            payload = json.loads(raw_line)
        except json.JSONDecodeError:
            request_id = next(self._fallback_ids)
            response = envelope(request_id, error=("INVALID_JSON", "Request must be valid JSON."))
            self._record(request_id, "invalid_json", {"raw_line_length": len(raw_line)}, response)
            return response
        return self.handle_payload(payload)

    def handle_payload(self, payload: object) -> dict[str, object]:
        """Validate, dispatch and audit one parsed request."""
        try:
            call = self._unpack(payload)
        except RequestRejected as rejected:
            response = envelope(rejected.request_id, error=(rejected.code, rejected.message))
            self._record(rejected.request_id, rejected.audit_tool, {}, response)
            return response

        response = self._dispatch(call)
        self._record(call.request_id, call.tool, call.arguments, response)
        return response

    def _unpack(self, payload: object) -> ToolCall:
        if not isinstance(payload, dict):
            raise RequestRejected(
                next(self._fallback_ids), "INVALID_REQUEST", "Request must be an object."
            )

        raw_id = payload.get("id")
        if isinstance(raw_id, int) and not isinstance(raw_id, bool):
            request_id = str(raw_id)
        elif isinstance(raw_id, str) and raw_id:
            request_id = raw_id
        else:
            request_id = next(self._fallback_ids)

        method = payload.get("method")
        params = payload.get("params", {})
        if not isinstance(method, str) or not method:
            raise RequestRejected(
                request_id, "INVALID_REQUEST", "Request method must be a non-empty string."
            )
        if not isinstance(params, dict):
            raise RequestRejected(request_id, "INVALID_PARAMS", "Request params must be an object.")
        if method != "tools/call":
            return ToolCall(request_id, method, params)

        # MCP-style envelope: {"name": ..., "arguments": {...}}
        name = params.get("name")
        arguments = params.get("arguments", {})
        if not isinstance(name, str) or not name:
            raise RequestRejected(
                request_id,
                "INVALID_PARAMS",
                "tools/call params.name must be a non-empty string.",
                audit_tool=method,
            )
        if not isinstance(arguments, dict):
            raise RequestRejected(
                request_id,
                "INVALID_PARAMS",
                "tools/call params.arguments must be an object.",
                audit_tool=name,
            )
        return ToolCall(request_id, name, arguments)

    def _dispatch(self, call: ToolCall) -> dict[str, object]:
        try:
            result = self._registry.dispatch(name=call.tool, arguments=call.arguments)
        except (PathBlockedError, PolicyBlockedError) as error:
            return blocked_envelope(call.request_id, error.reason, error.hint)
        except ToolDispatchError as error:
            return envelope(call.request_id, error=(error.code, error.message))
        except Exception:
            return envelope(
                call.request_id,
                error=("INTERNAL_ERROR", "Unhandled server error while executing tool."),
            )

        response = envelope(call.request_id, result=result)
        size = len(json.dumps(response, sort_keys=True).encode("utf-8"))
        if size > self._max_response_bytes:
            return blocked_envelope(call.request_id, OVERSIZED_REASON, OVERSIZED_HINT)
        return response

    def _record(
        self, request_id: str, tool: str, arguments: dict[str, object], response: dict[str, object]
    ) -> None:
        error = response.get("error")
        self._audit.append(
            AuditEvent(
                timestamp=utc_timestamp(),
                request_id=request_id,
                tool=tool,
                ok=response["ok"] is True,
                blocked=response["blocked"] is True,
                error_code=error["code"] if isinstance(error, dict) else None,
                metadata=sanitize_arguments(arguments),
            )
        )


def create_server(
    workspace_root: str,
    data_dir: str | None = None,
    cli_overrides: CliOverrides | None = None,
) -> GuideServer:
    """Create a server for a workspace, with `data_dir` as a shorthand override."""
    overrides = cli_overrides or CliOverrides()
    if data_dir is not None and overrides.data_dir is None:
        overrides = replace(overrides, data_dir=Path(data_dir))
    return GuideServer(config=load_effective_config(Path(workspace_root), overrides))


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for the codebase-guide process."""
    args = build_arg_parser().parse_args(argv)
    overrides = CliOverrides(
        data_dir=args.data_dir,
        max_file_bytes=args.max_file_bytes,
        max_open_lines=args.max_open_lines,
        max_listed_files=args.max_listed_files,
        max_total_bytes_per_response=args.max_total_bytes_per_response,
    )
    try:
        server = create_server(workspace_root=args.workspace_root, cli_overrides=overrides)
    except ValueError as error:
        print(f"codebase-guide: {error}", file=sys.stderr)
        return 2
    server.serve(in_stream=sys.stdin, out_stream=sys.stdout)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
