import datetime as dt

from habitgrid.schemas.base import ApiModel


class CalendarCell(ApiModel):
    """One day cell of a year grid."""
    date: dt.date
    in_year: bool
    count: int = 0


class ProjectYear(ApiModel):
    """A project's year of day cells, grouped by week (Monday first)."""
    id: int
    name: str
    color: str
    year: int
    total: int
    weeks: list[list[CalendarCell]]
