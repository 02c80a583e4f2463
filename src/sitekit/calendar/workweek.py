import datetime

import numpy as np


class WorkWeek:
    """
    Monday-to-Friday working week compiled into a NumPy business-day
    calendar.  Saturdays and Sundays are the only non-working days.

    offset() lands on the same day as walking one calendar day at a time and
    only counting the steps that land on a working day.
    """

    _WEEKMASK: str = "1111100"

    def __init__(self) -> None:
        self._busdaycal = np.busdaycalendar(weekmask=self._WEEKMASK)

    def is_workday(self, day: datetime.date) -> bool:
        return bool(np.is_busday(np.datetime64(day, "D"), busdaycal=self._busdaycal))

    def offset(self, day: datetime.date, days: int) -> datetime.date:
        """
        Move `day` by `days` working days (negative values move backwards).

        Rolling towards the opposite direction first means a start on a
        weekend is not counted as a step.  Zero returns `day` unchanged.
        """
        days = int(days)
        if days == 0:
            return day
        roll = "backward" if days > 0 else "forward"
        result = np.busday_offset(
            np.datetime64(day, "D"), days, roll=roll, busdaycal=self._busdaycal
        )
        return result.item()

    def __repr__(self) -> str:
        return f"WorkWeek(weekmask={self._WEEKMASK!r})"
