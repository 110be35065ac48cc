"""Unit tests for synthetic contest ids."""

from datetime import datetime, timezone

import pytest

from domain.identity import assign_contest_id, rolling_hash


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", 0),
        ("a", 97),
        ("ab", 3105),
        ("hello", 99162322),
        # Wraps to exactly the smallest 32-bit integer
        ("polygenelubricants", -2147483648),
        # Non-BMP characters hash as their two UTF-16 surrogates
        ("\U0001F600", 1772899),
    ],
)
def test_rolling_hash_known_values(text, expected):
    """Test that the rolling hash matches known 32-bit values."""
    assert rolling_hash(text) == expected


def test_rolling_hash_stays_in_int32_range_for_long_keys():
    """Test that long keys still hash into the signed 32-bit range."""
    value = rolling_hash("codechef|" + "Starters " * 200 + "|1700000000000")
    assert -(2**31) <= value < 2**31


def test_assign_contest_id_is_deterministic():
    """Test that the same platform, name and start always give the same id."""
    first = assign_contest_id("leetcode", "Biweekly Contest 100", 1700000000000)
    second = assign_contest_id("leetcode", "Biweekly Contest 100", 1700000000000)

    assert first == second
    assert first == abs(rolling_hash("leetcode|Biweekly Contest 100|1700000000000"))
    assert first >= 0


def test_assign_contest_id_accepts_datetime_start():
    """Test that a datetime start gives the same id as its epoch milliseconds."""
    start = datetime.fromtimestamp(1700000000, tz=timezone.utc)
    assert assign_contest_id("leetcode", "Biweekly Contest 100", start) == assign_contest_id(
        "leetcode", "Biweekly Contest 100", 1700000000000
    )


def test_assign_contest_id_absolute_value_of_min_int():
    """Test that the smallest 32-bit hash maps to a positive id."""
    # "polygenelubricants" hashes to -2**31; abs() must not overflow back to negative
    assert abs(rolling_hash("polygenelubricants")) == 2147483648


def test_assign_contest_id_differs_by_platform():
    """Test that the platform is part of the id."""
    a = assign_contest_id("leetcode", "Weekly Contest 400", 1700000000000)
    b = assign_contest_id("codechef", "Weekly Contest 400", 1700000000000)
    assert a != b


def test_assign_contest_id_matches_pinned_value():
    """Test that a known LeetCode contest keeps its published id."""
    assert assign_contest_id("leetcode", "Biweekly Contest 100", 1700000000000) == 1224696418
