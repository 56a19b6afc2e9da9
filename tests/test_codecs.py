from __future__ import annotations

import uuid
from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from revenue_tracker.api.schemas import RevenueQuery
from revenue_tracker.core.codecs import (
    InvalidDate,
    InvalidIdentifier,
    format_date,
    parse_date,
    parse_identifier,
)


def test_parse_identifier_accepts_uuid_string():
    value = parse_identifier("3c1212d0-0281-11ef-8c4d-98fa9b5e176f")
    assert value == uuid.UUID("3c1212d0-0281-11ef-8c4d-98fa9b5e176f")
    assert parse_identifier(value) is value


@pytest.mark.parametrize("raw", ["", "not-a-uuid", "3c1212d0-0281-11ef-8c4d", 12345, None])
def test_parse_identifier_rejects_malformed(raw):
    with pytest.raises(InvalidIdentifier):
        parse_identifier(raw)


def test_date_round_trip_is_identical():
    assert format_date(parse_date("2024-05-01")) == "2024-05-01"


@pytest.mark.parametrize(
    "raw",
    ["05-01-2024", "2024-5-1", "2024-05-01T00:00:00Z", "2024-02-30", "", 20240501, None],
)
def test_parse_date_rejects_anything_but_yyyy_mm_dd(raw):
    with pytest.raises(InvalidDate):
        parse_date(raw)


def test_format_date_discards_time_of_day():
    assert format_date(datetime(2024, 5, 1, 23, 59, tzinfo=timezone.utc)) == "2024-05-01"


def test_revenue_query_serializes_date_in_same_format():
    query = RevenueQuery.model_validate({"revenue_date": "2024-05-01"})
    assert query.revenue_date == date(2024, 5, 1)
    assert query.pov_timestamp is None
    assert query.model_dump(mode="json")["revenue_date"] == "2024-05-01"


def test_revenue_query_rejects_timestamp_as_date():
    with pytest.raises(ValidationError):
        RevenueQuery.model_validate({"revenue_date": "2024-05-01T10:00:00Z"})
