from __future__ import annotations

from enum import IntEnum


class Day(IntEnum):
    monday = 1
    tuesday = 2
    wednesday = 3
    thursday = 4
    friday = 5
    saturday = 6

    @property
    def label(self) -> str:
        return self.name.capitalize()


class TimeSlot(IntEnum):
    """Fixed teaching hours; slot n starts at (6 + n):00 and runs fifty minutes."""

    slot_1 = 1
    slot_2 = 2
    slot_3 = 3
    slot_4 = 4
    slot_5 = 5
    slot_6 = 6
    slot_7 = 7
    slot_8 = 8
    slot_9 = 9
    slot_10 = 10
    slot_11 = 11
    slot_12 = 12
    slot_13 = 13
    slot_14 = 14
    slot_15 = 15
    slot_16 = 16

    @property
    def start_time(self) -> str:
        return f"{6 + self.value:02d}:00"

    @property
    def end_time(self) -> str:
        return f"{6 + self.value:02d}:50"

    @property
    def label(self) -> str:
        return f"{self.start_time} - {self.end_time}"


DAY_VALUES = frozenset(day.value for day in Day)
TIME_VALUES = frozenset(slot.value for slot in TimeSlot)


def is_adjacent(a: TimeSlot, b: TimeSlot) -> bool:
    """True when ``b`` immediately follows ``a`` on the same day."""
    return int(b) - int(a) == 1
