from __future__ import annotations

import json
from pathlib import Path

from codebase_guide.logging import sanitize_arguments
from codebase_guide.server import create_server


def test_audit_log_never_records_question_text(tmp_path: Path) -> None:
    (tmp_path / "index.ts").write_text("const token = 1;\n", encoding="utf-8")
    server = create_server(workspace_root=str(tmp_path))
    server.handle_payload({"id": "req-1", "method": "guide.learn", "params": {"path": "index.ts"}})
    server.handle_payload(
        {
            "id": "req-2",
            "method": "guide.ask",
            "params": {"question": "where is API_KEY=top-secret used?"},
        }
    )

    audit_path = tmp_path / ".codebase_guide" / "audit.jsonl"
    entries = [json.loads(line) for line in audit_path.read_text(encoding="utf-8").splitlines()]
    event = entries[-1]

    metadata = event["metadata"]
    assert event["tool"] == "guide.ask"
    assert metadata["question_present"] is True
    assert metadata["question_length"] == len("where is API_KEY=top-secret used?")
    assert "question" not in metadata
    assert "top-secret" not in json.dumps(event, sort_keys=True)
    assert entries[0]["metadata"] == {"path": "index.ts"}


def test_sanitize_keeps_known_knobs_verbatim() -> None:
    sanitized = sanitize_arguments(
        {
            "filter": "routes",
            "max_results": 5,
            "refresh": True,
            "lines": "1-20",
            "note": "token=abc123",
            "extra": ["a", "b"],
        }
    )

    assert sanitized == {
        "extra_length": 2,
        "extra_type": "list",
        "filter": "routes",
        "lines": "1-20",
        "max_results": 5,
        "note_length": len("token=abc123"),
        "note_present": True,
        "refresh": True,
    }
