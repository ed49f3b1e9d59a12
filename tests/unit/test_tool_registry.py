from __future__ import annotations

import pytest

from codebase_guide.tools import ToolDispatchError, ToolRegistry


def test_registry_keeps_deterministic_registration_order() -> None:
    registry = ToolRegistry()
    registry.register("guide.alpha", lambda _: {"tool": "alpha"})
    registry.register("guide.beta", lambda _: {"tool": "beta"})

    assert registry.names() == ("guide.alpha", "guide.beta")


def test_registry_dispatches_registered_tool() -> None:
    registry = ToolRegistry()
    registry.register("guide.echo", lambda payload: {"payload": payload})

    result = registry.dispatch("guide.echo", {"k": "v"})

    assert result == {"payload": {"k": "v"}}


def test_registry_rejects_duplicate_names() -> None:
    registry = ToolRegistry()
    registry.register("guide.echo", lambda payload: payload)

    with pytest.raises(ValueError, match="already registered"):
        registry.register("guide.echo", lambda payload: payload)


def test_unknown_tool_raises_dispatch_error() -> None:
    registry = ToolRegistry()

    with pytest.raises(ToolDispatchError) as error:
        registry.dispatch("guide.missing", {})

    assert error.value.code == "UNKNOWN_TOOL"
    assert error.value.message == "Unknown tool: guide.missing"
