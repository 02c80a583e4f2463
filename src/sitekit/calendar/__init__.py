# src/sitekit/calendar/__init__.py
"""
sitekit.calendar
~~~~~~~~~~~~~~~~

Working-day arithmetic.  A WorkWeek treats Monday to Friday as working days
and moves dates by whole working days through a NumPy business-day calendar.

Basic usage::

    import datetime
    from sitekit.calendar import WorkWeek

    week = WorkWeek()
    week.offset(datetime.date(2024, 1, 1), 5)         # → date(2024, 1, 8)
    week.offset(datetime.date(2024, 1, 6), -1)        # → date(2024, 1, 5)

Public API
----------
WorkWeek       The main class.
CalendarError  Base exception for all calendar-related errors.
"""

from __future__ import annotations

from sitekit.calendar._exceptions import CalendarError
from sitekit.calendar.workweek import WorkWeek

__all__ = [
    "WorkWeek",
    "CalendarError",
]
