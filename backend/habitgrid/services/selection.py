"""
Two-click date range selection on the year calendar.

The first click picks a start, the second completes the range (swapping
the boundaries if the second day is earlier) and a third click starts
over. The range is preview state only; nothing is deleted from it.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum


class SelectionState(str, Enum):
    IDLE = "idle"
    START_SELECTED = "start_selected"
    RANGE_COMPLETE = "range_complete"


@dataclass(frozen=True)
class SelectEvent:
    """Single-date selection emitted when a range is completed."""
    day: date
    project_id: int | None


class RangeSelection:
    """Range selection bound to the displayed year and the active project."""

    def __init__(self, year: int, project_id: int | None = None):
        self.year = year
        self.project_id = project_id
        self.start: date | None = None
        self.end: date | None = None

    @property
    def state(self) -> SelectionState:
        if self.start is None:
            return SelectionState.IDLE
        if self.end is None:
            return SelectionState.START_SELECTED
        return SelectionState.RANGE_COMPLETE

    @property
    def selected_range(self) -> tuple[date | None, date | None]:
        return self.start, self.end

    def reset(self) -> None:
        self.start = None
        self.end = None

    def click(self, day: date) -> SelectEvent | None:
        """
        Apply a click on `day`.

        Returns the select event when the click completes a range.
        Days outside the displayed year are ignored.
        """
        if day.year != self.year:
            return None

        state = self.state
        if state is SelectionState.START_SELECTED:
            if day < self.start:
                self.start, self.end = day, self.start
            else:
                self.end = day
            return SelectEvent(day=day, project_id=self.project_id)

        # Idle or complete: this day starts a new range
        self.start = day
        self.end = None
        return None
