"""Tests for safe document navigation helpers."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

from licensereport.core import paths


DOC = {
    "service": {
        "applicationType": {"label": "Radio Station License (NEW)"},
        "particulars": [{"stationClass": "FX"}, {"stationClass": "FB"}],
        "applicationDetails": {"noOfYears": "3"},
    },
    "totalFee": "1250.50",
    "empty": None,
}


class TestResolve:
    def test_nested_dicts(self) -> None:
        assert paths.resolve(DOC, "service.applicationType.label") == "Radio Station License (NEW)"

    def test_list_index(self) -> None:
        assert paths.resolve(DOC, "service.particulars.1.stationClass") == "FB"

    def test_index_out_of_range_returns_default(self) -> None:
        assert paths.resolve(DOC, "service.particulars.5.stationClass", "x") == "x"

    def test_missing_segment_returns_default(self) -> None:
        assert paths.resolve(DOC, "service.validityEnd.date", "none") == "none"

    def test_none_value_returns_default(self) -> None:
        assert paths.resolve(DOC, "empty", "fallback") == "fallback"

    def test_walking_through_scalar_returns_default(self) -> None:
        assert paths.resolve(DOC, "totalFee.amount") is None

    def test_non_dict_root(self) -> None:
        assert paths.resolve("not a doc", "service") is None


class TestCoercion:
    def test_as_str_renders_numbers(self) -> None:
        assert paths.as_str(42) == "42"
        assert paths.as_str(True) == ""
        assert paths.as_str({"a": 1}, "d") == "d"

    def test_as_int(self) -> None:
        assert paths.as_int("3") == 3
        assert paths.as_int(2.0) == 2
        assert paths.as_int(2.5) == 0
        assert paths.as_int(True, 7) == 7
        assert paths.as_int("three", 1) == 1

    def test_as_decimal(self) -> None:
        assert paths.as_decimal("1250.50") == Decimal("1250.50")
        assert paths.as_decimal(10) == Decimal("10")
        assert paths.as_decimal("abc") == Decimal("0")
        assert paths.as_decimal("NaN") == Decimal("0")
        assert paths.as_decimal(None, Decimal("5")) == Decimal("5")

    def test_as_datetime_zulu(self) -> None:
        parsed = paths.as_datetime("2024-03-15T08:30:00Z")
        assert parsed == datetime(2024, 3, 15, 8, 30, tzinfo=timezone.utc)

    def test_as_datetime_mongo_wrapper(self) -> None:
        parsed = paths.as_datetime({"$date": "2024-01-02T00:00:00Z"})
        assert parsed == datetime(2024, 1, 2, tzinfo=timezone.utc)

    def test_as_datetime_naive_is_utc(self) -> None:
        parsed = paths.as_datetime("2024-01-02T10:00:00")
        assert parsed is not None
        assert parsed.tzinfo == timezone.utc

    def test_as_datetime_converts_offsets(self) -> None:
        parsed = paths.as_datetime("2024-01-02T01:00:00+08:00")
        assert parsed == datetime(2024, 1, 1, 17, tzinfo=timezone.utc)

    def test_as_datetime_garbage(self) -> None:
        assert paths.as_datetime("yesterday") is None
        assert paths.as_datetime(12345) is None

    def test_as_date(self) -> None:
        assert paths.as_date("2024-02-29") == date(2024, 2, 29)
        assert paths.as_date(date(2024, 1, 1)) == date(2024, 1, 1)
        assert paths.as_date("") is None


class TestGetters:
    def test_get_int_from_string(self) -> None:
        assert paths.get_int(DOC, "service.applicationDetails.noOfYears", 1) == 3

    def test_get_decimal(self) -> None:
        assert paths.get_decimal(DOC, "totalFee") == Decimal("1250.50")

    def test_get_list_wrong_type(self) -> None:
        assert paths.get_list(DOC, "totalFee") == []

    def test_get_dict_missing(self) -> None:
        assert paths.get_dict(DOC, "evaluator") == {}
