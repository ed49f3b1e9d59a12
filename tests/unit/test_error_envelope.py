from __future__ import annotations

import json
from pathlib import Path

from codebase_guide.server import create_server


def test_malformed_json_returns_invalid_json_error(tmp_path: Path) -> None:
    server = create_server(workspace_root=str(tmp_path))

    response = server.handle_json_line("{not-json")

    assert response["ok"] is False
    assert response["error"] == {
        "code": "INVALID_JSON",
        "message": "Request must be valid JSON.",
    }
    assert str(response["request_id"]).startswith("req-")


def test_unknown_tool_returns_explicit_error(tmp_path: Path) -> None:
    server = create_server(workspace_root=str(tmp_path))

    response = server.handle_payload(
        {"id": "abc-123", "method": "guide.unknown", "params": {"k": "v"}}
    )

    assert response["ok"] is False
    assert response["request_id"] == "abc-123"
    assert response["error"] == {
        "code": "UNKNOWN_TOOL",
        "message": "Unknown tool: guide.unknown",
    }


def test_invalid_tools_call_params_returns_invalid_params_error(tmp_path: Path) -> None:
    server = create_server(workspace_root=str(tmp_path))
    payload = {"id": 7, "method": "tools/call", "params": {"name": "guide.status", "arguments": []}}

    response = server.handle_payload(json.loads(json.dumps(payload)))

    assert response["ok"] is False
    assert response["request_id"] == "7"
    assert response["error"] == {
        "code": "INVALID_PARAMS",
        "message": "tools/call params.arguments must be an object.",
    }


def test_non_object_request_returns_invalid_request(tmp_path: Path) -> None:
    server = create_server(workspace_root=str(tmp_path))

    response = server.handle_payload(["guide.status"])

    assert response["ok"] is False
    assert response["error"]["code"] == "INVALID_REQUEST"
    assert response["request_id"] == "req-000001"


def test_missing_method_returns_invalid_request(tmp_path: Path) -> None:
    server = create_server(workspace_root=str(tmp_path))

    response = server.handle_payload({"id": "req-x", "params": {}})

    assert response["request_id"] == "req-x"
    assert response["error"] == {
        "code": "INVALID_REQUEST",
        "message": "Request method must be a non-empty string.",
    }


def test_tool_exception_maps_to_internal_error(tmp_path: Path) -> None:
    server = create_server(workspace_root=str(tmp_path))

    def explode(_: dict[str, object]) -> dict[str, object]:
        raise RuntimeError("boom")

    server.registry.register("guide.explode", explode)
    response = server.handle_payload({"id": "req-explode", "method": "guide.explode"})

    assert response["ok"] is False
    assert response["error"] == {
        "code": "INTERNAL_ERROR",
        "message": "Unhandled server error while executing tool.",
    }
    assert "boom" not in json.dumps(response)
