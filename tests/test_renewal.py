from __future__ import annotations

from datetime import date

import pytest

from submanager.services.renewal import add_months, renew

from .conftest import days


def test_expired_lease_renews_from_today(today) -> None:
    assert renew(days(-5), 1, today) == date(2025, 2, 15)


def test_running_lease_renews_from_current_expiry(today) -> None:
    assert renew(days(10), 1, today) == date(2025, 2, 25)


def test_lease_expiring_today_extends_from_today(today) -> None:
    assert renew(today, 2, today) == date(2025, 3, 15)


def test_missing_expiry_starts_today(today) -> None:
    assert renew(None, 1, today) == date(2025, 2, 15)


@pytest.mark.parametrize(
    "start, months, expected",
    [
        (date(2025, 1, 31), 1, date(2025, 2, 28)),
        (date(2024, 1, 31), 1, date(2024, 2, 29)),
        (date(2025, 3, 31), 1, date(2025, 4, 30)),
        (date(2025, 11, 30), 3, date(2026, 2, 28)),
        (date(2025, 12, 15), 1, date(2026, 1, 15)),
        (date(2025, 5, 10), 12, date(2026, 5, 10)),
    ],
)
def test_add_months_clamps_to_month_end(start, months, expected) -> None:
    assert add_months(start, months) == expected


@pytest.mark.parametrize("months", [0, -1])
def test_renew_rejects_non_positive_length(today, months) -> None:
    with pytest.raises(ValueError):
        renew(today, months, today)
