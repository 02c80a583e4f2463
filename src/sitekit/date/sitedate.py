from __future__ import annotations

import calendar
import datetime
import functools
import logging
import time
from typing import Mapping, Optional, Union
from zoneinfo import ZoneInfo

from sitekit.calendar import CalendarError, WorkWeek

from . import formats
from .config import DEFAULT_CONFIG, DateConfig
from .outcome import Outcome
from .timezones import ZoneInfoNotFoundError, load_zone, resolve_timezone

logger = logging.getLogger(__name__)

Timestamp = Union[int, float]
TimezoneLike = Union[str, ZoneInfo, None]

_WORK_WEEK = WorkWeek()
_FIELDS: tuple[str, ...] = ("day", "month", "year", "hour", "minute", "second")
_PARSE_ERRORS = (OSError, OverflowError, ValueError, TypeError)


# ── module helpers ───────────────────────────────────────────────────────────

def _zone(timezone: TimezoneLike, config: DateConfig) -> ZoneInfo:
    default = resolve_timezone(None, config.timezone)
    name = resolve_timezone(getattr(timezone, "key", timezone), default)
    try:
        return load_zone(name)
    except ZoneInfoNotFoundError:
        if name == default:
            raise
        logger.debug("Timezone %r is missing from the zone database, using %r", name, default)
        return load_zone(default)


def _now(tz: ZoneInfo, config: DateConfig) -> datetime.datetime:
    return datetime.datetime.fromtimestamp(int(config.now()), tz)


def _settle(moment: datetime.datetime) -> datetime.datetime:
    # Wall-clock results inside a DST gap move to the next valid instant.
    return moment.astimezone(datetime.timezone.utc).astimezone(moment.tzinfo)


def _normalized(
    year: int,
    month: int,
    day: int,
    hour: int,
    minute: int,
    second: int,
    tz: datetime.tzinfo,
) -> datetime.datetime:
    """
    Build a local time from fields that may be out of range.

    Overflow carries into the next unit: month 13 is January of the next
    year, day 0 is the last day of the previous month, 24:00:00 is midnight
    of the next day.
    """
    carry, month_index = divmod(int(month) - 1, 12)
    naive = datetime.datetime(int(year) + carry, month_index + 1, 1) + datetime.timedelta(
        days=int(day) - 1, hours=int(hour), minutes=int(minute), seconds=int(second)
    )
    return _settle(naive.replace(tzinfo=tz))


def _read(value: Union[str, Timestamp], layout: str, tz: ZoneInfo, config: DateConfig) -> datetime.datetime:
    if layout == formats.EPOCH_TAG:
        return datetime.datetime.fromtimestamp(int(value), tz)

    pattern = formats.resolve_layout(layout)
    parsed = datetime.datetime.strptime(str(value), pattern)
    if parsed.tzinfo is not None:
        return parsed.astimezone(tz)
    if not formats.has_date_fields(pattern):
        parsed = datetime.datetime.combine(_now(tz, config).date(), parsed.time())
    return parsed.replace(tzinfo=tz)


def _parse_moment(
    value: Union[str, Timestamp, None],
    layout: str,
    timezone: TimezoneLike,
    config: DateConfig,
) -> Outcome[datetime.datetime]:
    tz = _zone(timezone, config)
    if value is None or value == "now":
        return Outcome.ok(_now(tz, config))

    try:
        parsed = _read(value, layout, tz, config)
        # Whole seconds, wall-clock fields re-read in the resolved zone.
        naive = parsed.replace(microsecond=0, tzinfo=None)
        moment = _settle(naive.replace(tzinfo=tz))
    except _PARSE_ERRORS as exc:
        # The requested zone is dropped here as well; "now" is taken in the
        # configured default zone.
        logger.debug("Could not read %r with layout %r (%s), using now", value, layout, exc)
        return Outcome.recovered(
            _now(_zone(None, config), config),
            f"{value!r} does not match layout {layout!r}",
        )

    return Outcome.ok(moment)


def _seconds_of_day(text: str) -> int:
    parts = (str(text).split(":") + ["0", "0", "0"])[:3]
    total = 0
    for part, scale in zip(parts, (3600, 60, 1)):
        try:
            total += int(part) * scale
        except ValueError:
            pass
    return total


def _raw_strftime(layout: str, timestamp: Optional[Timestamp]) -> str:
    # Host formatter over the raw epoch; epochs localtime cannot convert
    # render the current time instead.
    if timestamp is not None:
        try:
            return time.strftime(layout, time.localtime(timestamp))
        except (OverflowError, OSError, ValueError, TypeError) as exc:
            logger.warning("Could not convert epoch %r (%s), formatting the current time", timestamp, exc)
    return time.strftime(layout)


# ── SiteDate ─────────────────────────────────────────────────────────────────

@functools.total_ordering
class SiteDate:
    """
    Timezone-aware date and time with site formatting helpers.

    Setters and navigation methods change the instance in place and return
    it, so chained calls all act on the same object.  Use clone() for an
    independent copy.

    Parameters
    ----------
    value : str or int, default "now"
        Text (or epoch seconds for the "time" layout) to read.  "now" or
        None gives the current instant.
    layout : str, default "db"
        A format tag ("time", "db", "db_datetime", "db_time", "site",
        "site_datetime", "site_time") or a literal strptime layout.
    timezone : str or ZoneInfo, optional
        Allow-listed zone name; anything else means the configured default.
    config : DateConfig
        Default zone and clock.
    """

    def __init__(
        self,
        value: Union[str, Timestamp, None] = "now",
        layout: str = "db",
        timezone: TimezoneLike = None,
        config: DateConfig = DEFAULT_CONFIG,
    ) -> None:
        self._moment: datetime.datetime = _parse_moment(value, layout, timezone, config).value
        self._config: DateConfig = config

    # ── construction ─────────────────────────────────────────────────────

    @classmethod
    def _from_moment(cls, moment: datetime.datetime, config: DateConfig) -> SiteDate:
        date = cls.__new__(cls)
        date._moment = moment
        date._config = config
        return date

    @classmethod
    def parse_outcome(
        cls,
        value: Union[str, Timestamp, None],
        layout: str = "db",
        timezone: TimezoneLike = None,
        config: DateConfig = DEFAULT_CONFIG,
    ) -> Outcome[SiteDate]:
        """Like parse(), but also reports whether the "now" fallback was used."""
        outcome = _parse_moment(value, layout, timezone, config)
        return Outcome(cls._from_moment(outcome.value, config), outcome.fallback, outcome.reason)

    @classmethod
    def parse(
        cls,
        value: Union[str, Timestamp, None],
        layout: str = "db",
        timezone: TimezoneLike = None,
        config: DateConfig = DEFAULT_CONFIG,
    ) -> SiteDate:
        return cls.parse_outcome(value, layout, timezone, config).value

    @classmethod
    def from_timestamp(
        cls,
        timestamp: Timestamp,
        timezone: TimezoneLike = None,
        config: DateConfig = DEFAULT_CONFIG,
    ) -> SiteDate:
        return cls.parse(timestamp, formats.EPOCH_TAG, timezone, config)

    def clone(self) -> SiteDate:
        return self._from_moment(self._moment, self._config)

    __copy__ = clone

    # ── fields ───────────────────────────────────────────────────────────

    @property
    def moment(self) -> datetime.datetime:
        return self._moment

    @property
    def config(self) -> DateConfig:
        return self._config

    @property
    def timezone(self) -> str:
        return str(self._moment.tzinfo)

    @property
    def timestamp(self) -> int:
        return int(self._moment.timestamp())

    @property
    def year(self) -> int:
        return self._moment.year

    @property
    def month(self) -> int:
        return self._moment.month

    @property
    def day(self) -> int:
        return self._moment.day

    @property
    def hour(self) -> int:
        return self._moment.hour

    @property
    def minute(self) -> int:
        return self._moment.minute

    @property
    def second(self) -> int:
        return self._moment.second

    @property
    def weekday(self) -> int:
        """Day of the week, 0 (Sunday) to 6 (Saturday)."""
        return self._moment.isoweekday() % 7

    def week_number(self) -> int:
        return self._moment.isocalendar()[1]

    # ── formatting ───────────────────────────────────────────────────────

    def format(self, layout: str = formats.FORMAT_DATE_DB, timestamp: Optional[Timestamp] = None) -> str:
        """
        Render the instant with a strftime layout.

        A `timestamp` (epoch seconds) is rendered instead of the instance's
        own value, in the instance's zone.
        """
        if timestamp is None:
            return self._moment.strftime(layout)
        return datetime.datetime.fromtimestamp(int(timestamp), self._moment.tzinfo).strftime(layout)

    def date_db(self, timestamp: Optional[Timestamp] = None) -> str:
        return self.format(formats.FORMAT_DATE_DB, timestamp)

    def date_site(self, timestamp: Optional[Timestamp] = None) -> str:
        return self.format(formats.FORMAT_DATE_SITE, timestamp)

    def datetime_db(self, timestamp: Optional[Timestamp] = None) -> str:
        return self.format(formats.FORMAT_DATETIME_DB, timestamp)

    def datetime_site(self, timestamp: Optional[Timestamp] = None) -> str:
        return self.format(formats.FORMAT_DATETIME_SITE, timestamp)

    def time_db(self, timestamp: Optional[Timestamp] = None) -> str:
        return self.format(formats.FORMAT_TIME_DB, timestamp)

    def time_site(self, timestamp: Optional[Timestamp] = None) -> str:
        return self.time_db(timestamp)

    @classmethod
    def format_from_epoch_outcome(
        cls,
        layout: str = formats.FORMAT_DATE_DB,
        timestamp: Optional[Timestamp] = None,
        config: DateConfig = DEFAULT_CONFIG,
    ) -> Outcome[str]:
        try:
            date = cls(config=config)
            if timestamp is not None:
                date.set_timestamp(timestamp)
            return Outcome.ok(date.format(layout))
        except Exception as exc:
            logger.warning("Could not build the current date (%s), formatting the raw epoch", exc)
            return Outcome.recovered(_raw_strftime(layout, timestamp), str(exc))

    @classmethod
    def format_from_epoch(
        cls,
        layout: str = formats.FORMAT_DATE_DB,
        timestamp: Optional[Timestamp] = None,
        config: DateConfig = DEFAULT_CONFIG,
    ) -> str:
        """Format `timestamp` (or now) in the config zone.  Never raises for clock or zone failures."""
        return cls.format_from_epoch_outcome(layout, timestamp, config).value

    @classmethod
    def date_db_from_timestamp(
        cls, timestamp: Optional[Timestamp] = None, config: DateConfig = DEFAULT_CONFIG
    ) -> str:
        return cls.format_from_epoch(formats.FORMAT_DATE_DB, timestamp, config)

    @staticmethod
    def date_db_format() -> str:
        return formats.FORMAT_DATE_DB

    @staticmethod
    def date_site_format() -> str:
        return formats.FORMAT_DATE_SITE

    @staticmethod
    def datetime_db_format() -> str:
        return formats.FORMAT_DATETIME_DB

    @staticmethod
    def datetime_site_format() -> str:
        return formats.FORMAT_DATETIME_SITE

    @staticmethod
    def time_db_format() -> str:
        return formats.FORMAT_TIME_DB

    @staticmethod
    def time_site_format() -> str:
        return formats.FORMAT_TIME_SITE

    # ── field setters ────────────────────────────────────────────────────

    def _rebuild(self, **fields: int) -> SiteDate:
        m = self._moment
        parts = {
            "year": m.year,
            "month": m.month,
            "day": m.day,
            "hour": m.hour,
            "minute": m.minute,
            "second": m.second,
        }
        parts.update(fields)
        self._moment = _normalized(tz=m.tzinfo, **parts)
        return self

    def set_date(self, year: int, month: int, day: int) -> SiteDate:
        return self._rebuild(year=year, month=month, day=day)

    def set_time(self, hour: int, minute: int, second: int = 0) -> SiteDate:
        return self._rebuild(hour=hour, minute=minute, second=second)

    def set_day(self, day: int) -> SiteDate:
        return self._rebuild(day=day)

    def set_month(self, month: int) -> SiteDate:
        return self._rebuild(month=month)

    def set_year(self, year: int) -> SiteDate:
        return self._rebuild(year=year)

    def set_timestamp(self, timestamp: Timestamp) -> SiteDate:
        self._moment = datetime.datetime.fromtimestamp(int(timestamp), self._moment.tzinfo)
        return self

    def set_from_fields(
        self, fields: Mapping[str, Optional[int]], reference: Optional[SiteDate] = None
    ) -> SiteDate:
        """
        Set any of day, month, year, hour, minute and second at once.

        Missing (or None) fields are taken from `reference`, which defaults
        to this instance, except second, which defaults to 0.
        """
        unknown = set(fields) - set(_FIELDS)
        if unknown:
            raise CalendarError(f"Unknown date fields: {sorted(unknown)}.")

        source = self if reference is None else reference

        def pick(key: str, fallback: int) -> int:
            value = fields.get(key)
            return fallback if value is None else int(value)

        return self._rebuild(
            year=pick("year", source.year),
            month=pick("month", source.month),
            day=pick("day", source.day),
            hour=pick("hour", source.hour),
            minute=pick("minute", source.minute),
            second=pick("second", 0),
        )

    # ── navigation ───────────────────────────────────────────────────────

    def _shift(self, days: int) -> SiteDate:
        # Calendar days keep the wall-clock time across DST changes.
        self._moment = _settle(self._moment + datetime.timedelta(days=days))
        return self

    def _elapse(self, hours: int) -> SiteDate:
        utc = self._moment.astimezone(datetime.timezone.utc) + datetime.timedelta(hours=hours)
        self._moment = utc.astimezone(self._moment.tzinfo)
        return self

    def next_day(self) -> SiteDate:
        return self._shift(1)

    def prev_day(self) -> SiteDate:
        return self._shift(-1)

    def next_week(self) -> SiteDate:
        return self._shift(7)

    def prev_week(self) -> SiteDate:
        return self._shift(-7)

    def next_month(self) -> SiteDate:
        return self._rebuild(month=self.month + 1)

    def prev_month(self) -> SiteDate:
        return self._rebuild(month=self.month - 1)

    def next_year(self) -> SiteDate:
        return self._rebuild(year=self.year + 1)

    def prev_year(self) -> SiteDate:
        return self._rebuild(year=self.year - 1)

    def next_hour(self) -> SiteDate:
        return self._elapse(1)

    def prev_hour(self) -> SiteDate:
        return self._elapse(-1)

    def _set_weekday(self, isoweekday: int) -> SiteDate:
        # Weeks run Monday to Sunday.
        return self._shift(isoweekday - self._moment.isoweekday())

    def set_monday(self) -> SiteDate:
        return self._set_weekday(1)

    def set_tuesday(self) -> SiteDate:
        return self._set_weekday(2)

    def set_wednesday(self) -> SiteDate:
        return self._set_weekday(3)

    def set_thursday(self) -> SiteDate:
        return self._set_weekday(4)

    def set_friday(self) -> SiteDate:
        return self._set_weekday(5)

    def set_saturday(self) -> SiteDate:
        return self._set_weekday(6)

    def set_sunday(self) -> SiteDate:
        return self._set_weekday(7)

    def set_start_of_day(self) -> SiteDate:
        return self._rebuild(hour=0, minute=0, second=0)

    def set_end_of_day(self) -> SiteDate:
        return self._rebuild(hour=23, minute=59, second=59)

    def set_first_day_of_month(self) -> SiteDate:
        return self._rebuild(day=1)

    def set_last_day_of_month(self) -> SiteDate:
        return self._rebuild(day=calendar.monthrange(self.year, self.month)[1])

    def set_first_day_of_year(self) -> SiteDate:
        return self._rebuild(month=1, day=1)

    def set_last_day_of_year(self) -> SiteDate:
        return self._rebuild(month=12, day=31)

    # ── workdays ─────────────────────────────────────────────────────────

    def add_workdays(self, days: int = 1) -> SiteDate:
        """Move forward `days` weekdays, skipping Saturdays and Sundays."""
        days = int(days)
        if days <= 0:
            return self
        target = _WORK_WEEK.offset(self._moment.date(), days)
        return self.set_date(target.year, target.month, target.day)

    def subtract_workdays(self, days: int = 1) -> SiteDate:
        days = int(days)
        if days <= 0:
            return self
        target = _WORK_WEEK.offset(self._moment.date(), -days)
        return self.set_date(target.year, target.month, target.day)

    # ── lookups ──────────────────────────────────────────────────────────

    def weekday_name(self, index: Optional[int] = None) -> Optional[str]:
        """Full English weekday name (0 = Sunday), or None when out of range."""
        return formats.weekday_name(self.weekday if index is None else index)

    def weekday_short_name(self, index: Optional[int] = None) -> Optional[str]:
        name = self.weekday_name(index)
        return name[:2] if name else None

    def month_name(self, index: Optional[int] = None) -> Optional[str]:
        """Full English month name (1 = January), or None when out of range."""
        return formats.month_name(self.month if index is None else index)

    def month_short_name(self, index: Optional[int] = None) -> Optional[str]:
        name = self.month_name(index)
        return name[:3] if name else None

    # ── comparison ───────────────────────────────────────────────────────

    def is_weekend(self) -> bool:
        return not _WORK_WEEK.is_workday(self._moment.date())

    def is_same_date(self, other: SiteDate) -> bool:
        return other.date_db() == self.date_db()

    def is_today(self, other: Optional[SiteDate] = None) -> bool:
        date = self if other is None else other
        try:
            now = SiteDate(config=self._config)
        except Exception as exc:
            logger.warning("Could not build the current date (%s), using the host date", exc)
            return date.date_db() == datetime.date.today().strftime(formats.FORMAT_DATE_DB)
        return date.date_db() == now.date_db()

    @staticmethod
    def compare(first: SiteDate, second: SiteDate, equal_means: bool = True) -> bool:
        """
        True when `first` is later than `second`.

        Equal instants return `equal_means`.
        """
        for date in (first, second):
            if not isinstance(date, SiteDate):
                raise CalendarError(f"Expected a SiteDate; got {type(date).__name__}.")
        if first.timestamp == second.timestamp:
            return equal_means
        return first.timestamp > second.timestamp

    is_first_bigger = compare

    @classmethod
    def is_time_between(
        cls,
        instant: SiteDate,
        from_time: str = "00:00:00",
        to_time: str = "23:59:59",
        today: Optional[SiteDate] = None,
    ) -> bool:
        """
        Check whether `instant` lies within a time-of-day range, inclusive.

        Times are "HH:MM:SS"; missing or unreadable parts count as 0.  The
        range is placed on the current day (or on `today` when given).  When
        `from_time` is later than `to_time` the range wraps around midnight:
        from `from_time` to the end of the day, or from the start of the day
        to `to_time`.
        """
        start = _seconds_of_day(from_time)
        end = _seconds_of_day(to_time)

        anchor = cls(config=instant.config) if today is None else today.clone()
        day_start = anchor.set_start_of_day().moment

        def at(seconds: int) -> datetime.datetime:
            return _settle(day_start + datetime.timedelta(seconds=seconds))

        moment = instant.moment
        if start <= end:
            return at(start) <= moment <= at(end)
        day_end = at(23 * 3600 + 59 * 60 + 59)
        return at(start) <= moment <= day_end or day_start <= moment <= at(end)

    @staticmethod
    def range_of_dates(start: SiteDate, end: SiteDate) -> list[SiteDate]:
        """Every calendar date from `start` to `end`, inclusive, one day apart."""
        dates: list[SiteDate] = []
        current = start.clone()
        last = end.moment.date()
        while current.moment.date() <= last:
            dates.append(current.clone())
            current.next_day()
        return dates

    # ── dunder ───────────────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SiteDate):
            return NotImplemented
        return self.timestamp == other.timestamp

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SiteDate):
            return NotImplemented
        return self.timestamp < other.timestamp

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return self.datetime_site()

    def __repr__(self) -> str:
        return f"SiteDate({self.datetime_db()!r}, timezone={self.timezone!r})"
