from __future__ import annotations

from enum import IntEnum


class Weekday(IntEnum):
    MON = 0
    TUE = 1
    WED = 2
    THU = 3
    FRI = 4
    SAT = 5
    SUN = 6

    @property
    def label(self) -> str:
        return DAYS[self.value]


DAYS: tuple[str, ...] = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

# Sunday is the long-run anchor; quality sessions live on Mon..Sat.
LONG_RUN_DAY = Weekday.SUN
QUALITY_DAYS: tuple[Weekday, ...] = tuple(d for d in Weekday if d != LONG_RUN_DAY)
