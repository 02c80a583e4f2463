from __future__ import annotations

from typing import Optional

FORMAT_DATE_DB: str = "%Y-%m-%d"
FORMAT_DATE_SITE: str = "%d.%m.%Y"
FORMAT_TIME_DB: str = "%H:%M:%S"
FORMAT_TIME_SITE: str = "%H:%M:%S"
FORMAT_DATETIME_DB: str = f"{FORMAT_DATE_DB} {FORMAT_TIME_DB}"
FORMAT_DATETIME_SITE: str = f"{FORMAT_DATE_SITE} {FORMAT_TIME_SITE}"

# Tag for epoch-second input; it has no strptime layout.
EPOCH_TAG: str = "time"

LAYOUTS: dict[str, str] = {
    "db": FORMAT_DATE_DB,
    "db_datetime": FORMAT_DATETIME_DB,
    "db_time": FORMAT_TIME_DB,
    "site": FORMAT_DATE_SITE,
    "site_datetime": FORMAT_DATETIME_SITE,
    "site_time": FORMAT_TIME_SITE,
}

WEEKDAY_NAMES: tuple[str, ...] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

# Index 0 is unused so month numbers index directly.
MONTH_NAMES: tuple[str, ...] = (
    "",
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def resolve_layout(tag: str) -> str:
    """Map a format tag to its layout; unknown tags are layouts already."""
    return LAYOUTS.get(tag, tag)


def has_date_fields(layout: str) -> bool:
    return any(token in layout for token in ("%d", "%m", "%Y", "%y", "%j", "%b", "%B"))


def weekday_name(index: int) -> Optional[str]:
    if 0 <= index <= 6:
        return WEEKDAY_NAMES[index]
    return None


def month_name(index: int) -> Optional[str]:
    if 1 <= index <= 12:
        return MONTH_NAMES[index]
    return None
