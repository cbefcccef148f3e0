from datetime import UTC, date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from blogkit.date_utils import parse_post_date


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("2024-05-01", datetime(2024, 5, 1, tzinfo=UTC)),
        ("2024-05-01T10:15:00Z", datetime(2024, 5, 1, 10, 15, tzinfo=UTC)),
        ("May 1, 2024", datetime(2024, 5, 1, tzinfo=UTC)),
        (date(2024, 5, 1), datetime(2024, 5, 1, tzinfo=UTC)),
        (datetime(2024, 5, 1, 8, 0), datetime(2024, 5, 1, 8, 0, tzinfo=UTC)),
    ],
)
def test_parse_post_date_accepts_common_forms(value: object, expected: datetime) -> None:
    assert parse_post_date(value) == expected


def test_parse_post_date_keeps_explicit_offset() -> None:
    parsed = parse_post_date("2023-03-14T09:30:00+01:00")

    assert parsed is not None
    assert parsed.utcoffset() == timedelta(hours=1)
    assert parsed == datetime(2023, 3, 14, 8, 30, tzinfo=UTC)


def test_parse_post_date_applies_configured_zone_to_naive_values() -> None:
    tz = ZoneInfo("Europe/Stockholm")

    parsed = parse_post_date("2024-01-10T12:00:00", tz=tz)

    assert parsed == datetime(2024, 1, 10, 11, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("value", [None, "", "   ", "not a date", True, 20240501, ["2024-05-01"]])
def test_parse_post_date_returns_none_for_invalid_values(value: object) -> None:
    assert parse_post_date(value) is None
