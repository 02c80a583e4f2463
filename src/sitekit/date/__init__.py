# src/sitekit/date/__init__.py
"""
sitekit.date
~~~~~~~~~~~~

A timezone-aware date/time value with the formats used across the site
(``YYYY-MM-DD`` for storage, ``DD.MM.YYYY`` for display), calendar
navigation, workday arithmetic and a fixed timezone allow-list.

Basic usage::

    from sitekit.date import SiteDate

    d = SiteDate("31.01.2024", "site")                 # Europe/Moscow
    d.next_day().set_end_of_day().datetime_db()        # → "2024-02-01 23:59:59"
    d.add_workdays(5).weekday_name()                   # → "Thursday"

Settings are passed explicitly rather than stored globally::

    from sitekit.date import SiteDate, configure

    cfg = configure("Europe/Berlin")
    SiteDate("2024-01-01", config=cfg).timezone        # → "Europe/Berlin"

Text that does not match its layout gives the current instant instead of an
error; ``SiteDate.parse_outcome`` reports when that happened.

Public API
----------
SiteDate               The main class.
DateConfig             Default timezone and clock.
configure              Build a validated DateConfig.
Outcome                Value plus fallback flag.
list_valid_timezones   The timezone allow-list.
CalendarError          Base exception for all calendar-related errors.
"""

from __future__ import annotations

from sitekit.calendar import CalendarError
from sitekit.date.config import DEFAULT_CONFIG, DateConfig, configure
from sitekit.date.outcome import Outcome
from sitekit.date.sitedate import SiteDate
from sitekit.date.timezones import DEFAULT_TIMEZONE, is_valid_timezone, list_valid_timezones

__all__ = [
    "SiteDate",
    "DateConfig",
    "DEFAULT_CONFIG",
    "DEFAULT_TIMEZONE",
    "configure",
    "Outcome",
    "is_valid_timezone",
    "list_valid_timezones",
    "CalendarError",
]
