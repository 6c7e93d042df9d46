from __future__ import annotations

from datetime import date

import pytest

from submanager.utils.date_helpers import days_until, parse_user_date
from submanager.utils.formatters import format_relative_days, format_status
from submanager.utils.text_helpers import escape_markdown, safe_text, truncate_text

from .conftest import days


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("2025-03-01", date(2025, 3, 1)),
        (" 2025/03/01 ", date(2025, 3, 1)),
        ("2025-02-30", None),
        ("next week", None),
        ("", None),
    ],
)
def test_parse_user_date(text, expected) -> None:
    assert parse_user_date(text) == expected


@pytest.mark.parametrize(
    ("offset", "expected"),
    [(0, "today"), (1, "tomorrow"), (-1, "yesterday"), (5, "in 5 days"), (-3, "3 days ago")],
)
def test_relative_days(today, offset, expected) -> None:
    assert format_relative_days(days(offset), today) == expected
    assert days_until(days(offset), today) == offset


def test_status_labels() -> None:
    assert format_status("expiring_soon") == "⏰ Expiring soon"
    assert format_status("mystery") == "❔ mystery"


def test_escaping() -> None:
    assert safe_text("<b>&</b>") == "&lt;b&gt;&amp;&lt;/b&gt;"
    assert safe_text(None) == ""
    assert escape_markdown("a_b*c`d[e") == "a\\_b\\*c\\`d\\[e"
    assert escape_markdown(None) == ""


def test_truncate_text() -> None:
    assert truncate_text("short") == "short"
    assert truncate_text("x" * 60, 10) == "xxxxxxx..."
