"""Tests for the shared field converters."""

import pytest

from extdata.ingestion.adapters.mappers import (
    NAIVE_ISO_FORMAT,
    SPACE_DATETIME_FORMAT,
    field,
    parse_rfc3339,
    parse_utc,
    require_list,
    require_mapping,
    to_float,
    to_int,
    to_text,
    unix_ms_to_seconds,
)
from extdata.ingestion.exceptions import ConversionError, DecodeError
from tests.fixtures import T0


class TestNumbers:
    @pytest.mark.parametrize("value", [0.5, "0.5", " 0.5", 1])
    def test_to_float_accepts_numbers_and_numeric_text(self, value):
        assert to_float(value, "x") == float(value)

    @pytest.mark.parametrize("value", [None, True, "", "abc", [1]])
    def test_to_float_rejects(self, value):
        with pytest.raises(ConversionError) as exc_info:
            to_float(value, "price")
        assert exc_info.value.field == "price"

    def test_to_int_accepts_integral_values(self):
        assert to_int(7, "n") == 7
        assert to_int(7.0, "n") == 7
        assert to_int("42", "n") == 42

    @pytest.mark.parametrize("value", [7.5, "4.2", None, False])
    def test_to_int_rejects(self, value):
        with pytest.raises(ConversionError):
            to_int(value, "n")

    def test_unix_ms_to_seconds_truncates(self):
        assert unix_ms_to_seconds(T0 * 1000 + 999) == T0


class TestText:
    def test_null_is_empty(self):
        assert to_text(None, "coin_price") == ""

    def test_numbers_keep_their_text_form(self):
        assert to_text("0.000123", "btc_price") == "0.000123"
        assert to_text(18.5, "coin_price") == "18.5"

    def test_structures_are_rejected(self):
        with pytest.raises(ConversionError):
            to_text({"usd": 1}, "coin_price")


class TestTimestamps:
    def test_space_format(self):
        assert parse_utc("2019-01-01 00:00:00", SPACE_DATETIME_FORMAT) == T0

    def test_naive_iso_ignores_fraction(self):
        assert parse_utc("2019-01-01T00:00:00.123", NAIVE_ISO_FORMAT) == T0

    def test_wrong_format(self):
        with pytest.raises(ConversionError):
            parse_utc("2019-01-01T00:00:00", SPACE_DATETIME_FORMAT)

    def test_non_text(self):
        with pytest.raises(ConversionError):
            parse_utc(T0, SPACE_DATETIME_FORMAT)

    @pytest.mark.parametrize(
        "value",
        ["2019-01-01T00:00:00Z", "2019-01-01T01:00:00+01:00", "2019-01-01T00:00:00"],
    )
    def test_rfc3339(self, value):
        assert parse_rfc3339(value) == T0

    def test_rfc3339_garbage(self):
        with pytest.raises(ConversionError):
            parse_rfc3339("not a time")


class TestShape:
    def test_require_list_under_key(self):
        assert require_list({"result": [1, 2]}, "result") == [1, 2]

    def test_require_list_missing_key(self):
        with pytest.raises(DecodeError):
            require_list({"message": "nope"}, "result")

    def test_require_list_wrong_type(self):
        with pytest.raises(DecodeError):
            require_list({"a": 1})

    def test_require_mapping(self):
        assert require_mapping({"hashrate": {}}, "hashrate") == {}
        with pytest.raises(DecodeError):
            require_mapping({"hashrate": []}, "hashrate")

    def test_field_missing(self):
        with pytest.raises(DecodeError):
            field([1, 2], 5)
        with pytest.raises(DecodeError):
            field({"a": 1}, "b")
