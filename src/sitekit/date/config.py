from __future__ import annotations

import dataclasses
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from .timezones import DEFAULT_TIMEZONE, resolve_timezone

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


@dataclass(frozen=True, slots=True)
class DateConfig:
    """
    Settings every SiteDate is created under.

    timezone : zone used when none (or a disallowed one) is requested, and
               the zone "now" falls back to when parsing fails.
    clock    : source of the current epoch time.
    """

    timezone: str = DEFAULT_TIMEZONE
    clock: Clock = time.time

    def now(self) -> float:
        return float(self.clock())

    def replace(self, **changes) -> DateConfig:
        if "timezone" in changes:
            changes["timezone"] = resolve_timezone(changes["timezone"])
        return dataclasses.replace(self, **changes)


DEFAULT_CONFIG = DateConfig()


def configure(timezone: Optional[str] = None, clock: Optional[Clock] = None) -> DateConfig:
    """
    Build a DateConfig with a validated default timezone.

    Disallowed or missing timezones are replaced by DEFAULT_TIMEZONE.  The
    returned value has to be passed to SiteDate explicitly; nothing global is
    changed.
    """
    zone = resolve_timezone(timezone)
    logger.debug("Configured default timezone %r", zone)
    if clock is None:
        return DateConfig(timezone=zone)
    return DateConfig(timezone=zone, clock=clock)
