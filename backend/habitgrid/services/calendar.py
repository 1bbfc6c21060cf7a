"""
Year grid for the calendar view.

A year is laid out as full weeks starting on Monday. The padding days
before January 1st and after December 31st belong to the neighbouring
years; they are rendered but never counted or clicked.
"""

from datetime import date, timedelta
from typing import Any, Iterable

from habitgrid.services.aggregation import count_by_project_and_day
from habitgrid.services.dates import day_key


def year_weeks(year: int) -> list[list[tuple[date, bool]]]:
    """Weeks of (day, in_year) cells covering the whole year."""
    first = date(year, 1, 1)
    last = date(year, 12, 31)

    start = first - timedelta(days=first.weekday())
    # The trailing padding stops at date.max, so 9999 ends on a short week
    end = last + timedelta(days=min(6 - last.weekday(), (date.max - last).days))

    cells = []
    for offset in range((end - start).days + 1):
        day = start + timedelta(days=offset)
        cells.append((day, day.year == year))
    return [cells[i:i + 7] for i in range(0, len(cells), 7)]


def project_year(project: Any, tasks: Iterable[Any], year: int) -> dict:
    """
    One project's year view: week grid with per-day task counts.

    Returns a dict shaped like the ProjectYear schema.
    """
    start, end = date(year, 1, 1), date(year, 12, 31)
    counts = count_by_project_and_day(tasks, start, end).get(project.id, {})

    weeks = [
        [
            {
                "date": day,
                "in_year": in_year,
                "count": counts.get(day_key(day), 0) if in_year else 0,
            }
            for day, in_year in week
        ]
        for week in year_weeks(year)
    ]
    return {
        "id": project.id,
        "name": project.name,
        "color": project.color,
        "year": year,
        "total": sum(counts.values()),
        "weeks": weeks,
    }
