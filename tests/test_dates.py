import datetime as dt

import numpy as np
import pandas as pd
import pytest

from medals.dates import day_key, parse_day_key, parse_flexible_date


@pytest.mark.parametrize(
    "value",
    [
        "2024-07-27",
        "2024-07-27T23:30:00-05:00",
        dt.date(2024, 7, 27),
        dt.datetime(2024, 7, 27, 12, 0),
        pd.Timestamp("2024-07-27 08:00", tz="Asia/Tokyo"),
        np.datetime64("2024-07-27T10:00"),
        1722038400000,
    ],
)
def test_day_key_round_trip(value):
    d = parse_flexible_date(value)
    assert d is not None
    assert day_key(parse_day_key(day_key(d))) == day_key(d)


def test_parse_flexible_date_reads_naive_strings_as_utc():
    d = parse_flexible_date("2024-07-27")
    assert d == pd.Timestamp("2024-07-27", tz="UTC")


def test_parse_flexible_date_converts_offsets_to_utc():
    d = parse_flexible_date("2024-07-27T23:30:00-05:00")
    assert d == pd.Timestamp("2024-07-28 04:30", tz="UTC")
    assert day_key(d) == "2024-07-28"


def test_parse_flexible_date_reads_numbers_as_epoch_millis():
    assert parse_flexible_date(1722038400000) == pd.Timestamp("2024-07-27", tz="UTC")


@pytest.mark.parametrize("value", [None, "", "   ", "not a date", float("nan"), pd.NaT, 0, True, [1, 2]])
def test_parse_flexible_date_returns_none_for_unusable_input(value):
    assert parse_flexible_date(value) is None


def test_day_key_uses_utc_fields():
    late_evening_in_new_york = pd.Timestamp("2024-07-27 22:00", tz="America/New_York")
    assert day_key(late_evening_in_new_york) == "2024-07-28"


def test_day_key_treats_naive_values_as_utc():
    assert day_key(dt.datetime(2024, 7, 27, 23, 59)) == "2024-07-27"


def test_parse_day_key_is_utc_midnight():
    ts = parse_day_key("2024-08-01")
    assert ts == pd.Timestamp("2024-08-01 00:00", tz="UTC")
    assert str(ts.tz) == "UTC"


@pytest.mark.parametrize("key", ["2024-08", "2024-13-01", "abcd-ef-gh"])
def test_parse_day_key_rejects_malformed_keys(key):
    with pytest.raises(ValueError):
        parse_day_key(key)


@pytest.mark.parametrize("value", [0, "0", " 0 ", 0.0])
def test_parse_flexible_date_reads_zero_as_missing(value):
    assert parse_flexible_date(value) is None
