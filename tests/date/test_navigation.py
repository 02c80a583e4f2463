"""
tests/date/test_navigation.py

Covers:
  - Day, week, month, year and hour steps
  - Month-end and leap-year overflow
  - Weekday anchors within a Monday-first week
  - Start/end of day, first/last day of month and year
  - Field setters, including out-of-range values
  - set_from_fields with and without a reference date
  - Workday arithmetic
  - Chaining and clone()
"""

import copy

import pytest

from sitekit.date import CalendarError, SiteDate


def db(date):
    return date.datetime_db()


# ── Steps ─────────────────────────────────────────────────────────────────────

class TestSteps:

    def test_next_day_crosses_month(self, make):
        assert db(make("2024-01-31 10:00:00").next_day()) == "2024-02-01 10:00:00"

    def test_prev_day_into_leap_day(self, make):
        assert db(make("2024-03-01 10:00:00").prev_day()) == "2024-02-29 10:00:00"

    def test_next_and_prev_week(self, make):
        assert db(make("2024-12-28 08:00:00").next_week()) == "2025-01-04 08:00:00"
        assert db(make("2024-01-03 08:00:00").prev_week()) == "2023-12-27 08:00:00"

    def test_next_month(self, make):
        assert db(make("2024-01-15 10:00:00").next_month()) == "2024-02-15 10:00:00"

    def test_next_month_crosses_year(self, make):
        assert db(make("2024-12-15 10:00:00").next_month()) == "2025-01-15 10:00:00"

    def test_prev_month_crosses_year(self, make):
        assert db(make("2024-01-15 10:00:00").prev_month()) == "2023-12-15 10:00:00"

    def test_next_month_overflows_short_month(self, make):
        # February 31st does not exist and carries into March.
        assert db(make("2024-01-31 10:00:00").next_month()) == "2024-03-02 10:00:00"
        assert db(make("2023-01-31 10:00:00").next_month()) == "2023-03-03 10:00:00"

    def test_prev_month_overflows_short_month(self, make):
        assert db(make("2024-03-31 10:00:00").prev_month()) == "2024-03-02 10:00:00"

    def test_next_year_from_leap_day(self, make):
        assert db(make("2024-02-29 10:00:00").next_year()) == "2025-03-01 10:00:00"

    def test_prev_year(self, make):
        assert db(make("2024-06-15 10:00:00").prev_year()) == "2023-06-15 10:00:00"

    def test_next_and_prev_hour(self, make):
        assert db(make("2024-01-31 23:30:00").next_hour()) == "2024-02-01 00:30:00"
        assert db(make("2024-01-01 00:30:00").prev_hour()) == "2023-12-31 23:30:00"

    def test_next_hour_across_dst_gap(self, make):
        d = make("2024-03-31 01:30:00", timezone="Europe/Berlin")
        assert db(d.next_hour()) == "2024-03-31 03:30:00"

    def test_next_day_keeps_wall_time_across_dst(self, make):
        d = make("2024-03-30 12:00:00", timezone="Europe/Berlin")
        before = d.timestamp
        assert db(d.next_day()) == "2024-03-31 12:00:00"
        assert d.timestamp - before == 23 * 3600


# ── Weekday anchors ───────────────────────────────────────────────────────────

class TestWeekdayAnchors:

    @pytest.mark.parametrize(
        "method, expected",
        [
            ("set_monday", "2024-01-01"),
            ("set_tuesday", "2024-01-02"),
            ("set_wednesday", "2024-01-03"),
            ("set_thursday", "2024-01-04"),
            ("set_friday", "2024-01-05"),
            ("set_saturday", "2024-01-06"),
            ("set_sunday", "2024-01-07"),
        ],
    )
    def test_from_wednesday(self, make, method, expected):
        d = getattr(make("2024-01-03 14:15:16"), method)()
        assert d.date_db() == expected
        assert d.time_db() == "14:15:16"

    def test_week_starts_on_monday(self, make):
        sunday = make("2024-01-07 09:00:00")
        assert sunday.clone().set_monday().date_db() == "2024-01-01"
        assert sunday.clone().set_sunday().date_db() == "2024-01-07"

    def test_monday_stays_put(self, make):
        assert make("2024-01-01 09:00:00").set_monday().date_db() == "2024-01-01"


# ── Boundaries ────────────────────────────────────────────────────────────────

class TestBoundaries:

    def test_start_and_end_of_day(self, make):
        assert db(make("2024-01-03 14:15:16").set_start_of_day()) == "2024-01-03 00:00:00"
        assert db(make("2024-01-03 14:15:16").set_end_of_day()) == "2024-01-03 23:59:59"

    def test_first_day_of_month(self, make):
        assert db(make("2024-02-17 08:00:00").set_first_day_of_month()) == "2024-02-01 08:00:00"

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("2024-02-10 08:00:00", "2024-02-29 08:00:00"),
            ("2023-02-10 08:00:00", "2023-02-28 08:00:00"),
            ("1900-02-10 08:00:00", "1900-02-28 08:00:00"),
            ("2000-02-10 08:00:00", "2000-02-29 08:00:00"),
            ("2024-04-30 08:00:00", "2024-04-30 08:00:00"),
            ("2024-12-01 08:00:00", "2024-12-31 08:00:00"),
        ],
    )
    def test_last_day_of_month(self, make, text, expected):
        assert db(make(text).set_last_day_of_month()) == expected

    def test_first_and_last_day_of_year_keep_time(self, make):
        assert db(make("2024-06-15 13:14:15").set_first_day_of_year()) == "2024-01-01 13:14:15"
        assert db(make("2024-06-15 13:14:15").set_last_day_of_year()) == "2024-12-31 13:14:15"


# ── Field setters ─────────────────────────────────────────────────────────────

class TestFieldSetters:

    def test_set_day(self, make):
        assert db(make("2024-01-03 10:00:00").set_day(20)) == "2024-01-20 10:00:00"

    def test_set_day_overflows(self, make):
        assert db(make("2024-01-03 10:00:00").set_day(32)) == "2024-02-01 10:00:00"
        assert db(make("2024-02-03 10:00:00").set_day(30)) == "2024-03-01 10:00:00"

    def test_set_day_zero_is_last_day_of_previous_month(self, make):
        assert db(make("2024-03-03 10:00:00").set_day(0)) == "2024-02-29 10:00:00"

    def test_set_month(self, make):
        assert db(make("2024-01-03 10:00:00").set_month(7)) == "2024-07-03 10:00:00"

    def test_set_month_overflows(self, make):
        assert db(make("2024-01-03 10:00:00").set_month(13)) == "2025-01-03 10:00:00"
        assert db(make("2024-05-31 10:00:00").set_month(6)) == "2024-07-01 10:00:00"

    def test_set_year(self, make):
        assert db(make("2024-01-03 10:00:00").set_year(1999)) == "1999-01-03 10:00:00"

    def test_set_date_and_time(self, make):
        d = make("2024-01-03 10:00:00").set_date(2020, 2, 29).set_time(6, 7)
        assert db(d) == "2020-02-29 06:07:00"

    def test_set_time_overflows(self, make):
        assert db(make("2024-01-03 10:00:00").set_time(25, 0)) == "2024-01-04 01:00:00"

    def test_set_timestamp(self, make):
        assert db(make("2024-01-03 10:00:00").set_timestamp(0)) == "1970-01-01 03:00:00"


# ── set_from_fields ───────────────────────────────────────────────────────────

class TestSetFromFields:

    def test_missing_fields_come_from_self(self, make):
        d = make("2024-01-03 12:34:56").set_from_fields({"day": 10, "hour": 5})
        assert db(d) == "2024-01-10 05:34:00"

    def test_second_defaults_to_zero(self, make):
        assert make("2024-01-03 12:34:56").set_from_fields({}).second == 0

    def test_all_fields(self, make):
        fields = {"day": 1, "month": 2, "year": 2003, "hour": 4, "minute": 5, "second": 6}
        assert db(make("2024-01-03 12:34:56").set_from_fields(fields)) == "2003-02-01 04:05:06"

    def test_none_counts_as_missing(self, make):
        d = make("2024-01-03 12:34:56").set_from_fields({"year": None, "month": 3})
        assert db(d) == "2024-03-03 12:34:00"

    def test_reference_date(self, make):
        reference = make("1999-12-31 23:58:57")
        d = make("2024-01-03 12:34:56").set_from_fields({"second": 30}, reference)
        assert db(d) == "1999-12-31 23:58:30"

    def test_unknown_field_raises(self, make):
        with pytest.raises(CalendarError):
            make("2024-01-03 12:34:56").set_from_fields({"days": 3})


# ── Workdays ──────────────────────────────────────────────────────────────────

class TestWorkdays:

    def test_five_workdays_from_monday_is_next_monday(self, make):
        assert make("2024-01-01 09:00:00").add_workdays(5).date_db() == "2024-01-08"

    def test_friday_plus_one_is_monday(self, make):
        assert make("2024-01-05 09:00:00").add_workdays(1).weekday_name() == "Monday"

    def test_weekend_start_plus_one_is_monday(self, make):
        assert make("2024-01-06 09:00:00").add_workdays().date_db() == "2024-01-08"

    def test_subtract_from_monday_is_friday(self, make):
        assert make("2024-01-08 09:00:00").subtract_workdays(1).date_db() == "2024-01-05"

    def test_subtract_from_sunday(self, make):
        assert make("2024-01-07 09:00:00").subtract_workdays(2).date_db() == "2024-01-04"

    def test_add_then_subtract_returns(self, make):
        d = make("2024-01-03 09:00:00")
        assert d.add_workdays(12).subtract_workdays(12).date_db() == "2024-01-03"

    def test_keeps_time_of_day(self, make):
        assert make("2024-01-05 17:45:00").add_workdays(1).time_db() == "17:45:00"

    @pytest.mark.parametrize("n", [0, -3])
    def test_non_positive_is_noop(self, make, n):
        d = make("2024-01-06 09:00:00")
        assert d.add_workdays(n) is d
        assert d.subtract_workdays(n) is d
        assert db(d) == "2024-01-06 09:00:00"

    def test_twenty_workdays_crosses_four_weekends(self, make):
        assert make("2024-01-01 09:00:00").add_workdays(20).date_db() == "2024-01-29"


# ── Chaining and copies ───────────────────────────────────────────────────────

class TestChainingAndClone:

    def test_chained_calls_return_same_object(self, make):
        d = make("2024-01-03 10:00:00")
        assert d.next_day().set_end_of_day() is d
        assert db(d) == "2024-01-04 23:59:59"

    def test_clone_is_independent(self, make):
        d = make("2024-01-03 10:00:00")
        c = d.clone()
        c.next_month()
        assert db(d) == "2024-01-03 10:00:00"
        assert db(c) == "2024-02-03 10:00:00"
        assert c.timezone == d.timezone
        assert c.config is d.config

    def test_copy_module(self, make):
        d = make("2024-01-03 10:00:00")
        c = copy.copy(d)
        assert c == d and c is not d
