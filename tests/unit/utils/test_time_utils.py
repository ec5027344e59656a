#!/usr/bin/env python
"""Tests for the time conversion helpers."""

from datetime import date, datetime, timedelta, timezone

from funding_rate_downloader.utils.time_utils import (
    date_to_milliseconds,
    datetime_to_milliseconds,
    day_bounds_milliseconds,
    each_day,
    milliseconds_to_second,
    utc_today,
)


def test_datetime_to_milliseconds_naive_is_utc():
    assert datetime_to_milliseconds(datetime(2023, 1, 1)) == 1672531200000
    assert datetime_to_milliseconds(datetime(2023, 1, 1, 0, 0, 0, 123000)) == 1672531200123


def test_datetime_to_milliseconds_converts_aware_values():
    cet = timezone(timedelta(hours=1))
    assert datetime_to_milliseconds(datetime(2023, 1, 1, 1, 0, tzinfo=cet)) == 1672531200000


def test_day_bounds_cover_one_day():
    start, end = day_bounds_milliseconds(date(2023, 1, 1))

    assert start == date_to_milliseconds(date(2023, 1, 1)) == 1672531200000
    assert end == 1672617600000


def test_milliseconds_to_second_truncates():
    assert milliseconds_to_second(1672531200999) == datetime(2023, 1, 1)
    assert milliseconds_to_second(1672560000001) == datetime(2023, 1, 1, 8, 0, 0)


def test_utc_today_uses_utc_date():
    late_evening_new_york = datetime(2023, 1, 1, 22, 30, tzinfo=timezone(timedelta(hours=-5)))

    assert utc_today(late_evening_new_york) == date(2023, 1, 2)


def test_each_day_is_inclusive():
    days = list(each_day(date(2020, 2, 27), date(2020, 3, 1)))

    assert days == [date(2020, 2, 27), date(2020, 2, 28), date(2020, 2, 29), date(2020, 3, 1)]


def test_each_day_empty_when_end_before_start():
    assert list(each_day(date(2020, 3, 2), date(2020, 3, 1))) == []
