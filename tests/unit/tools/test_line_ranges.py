from __future__ import annotations

import pytest

from codebase_guide.tools.builtin import parse_line_range


@pytest.mark.parametrize(
    ("text", "line_count", "expected"),
    [
        ("12", 40, (12, 12)),
        ("12-20", 40, (12, 20)),
        (" 5 - 9 ", 40, (5, 9)),
        ("0-3", 40, (1, 3)),
        ("30-10", 40, (30, 30)),
        ("35-99", 40, (35, 40)),
        ("41", 40, None),
        ("abc", 40, None),
        ("-3", 40, None),
    ],
)
def test_parse_line_range(text: str, line_count: int, expected: tuple[int, int] | None) -> None:
    assert parse_line_range(text, line_count) == expected
