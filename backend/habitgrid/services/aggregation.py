"""
Task aggregation.

Groups flat task lists by project and calendar day. The groupings drive
calendar cell coloring, celebration detection and the bulk delete of a
project's tasks on one day.

Tasks are any objects exposing `project_id` and `date` (a date or a
timestamp); rows loaded from the database and API schemas both qualify.
"""

from collections import defaultdict
from datetime import date, timedelta
from typing import Any, Iterable

from habitgrid.config import get_settings
from habitgrid.schemas.task import Celebration
from habitgrid.services.dates import day_key, to_day


def _in_range(day: date, start: date | None, end: date | None) -> bool:
    if start is not None and day < start:
        return False
    if end is not None and day > end:
        return False
    return True


def group_by_project_and_day(
    tasks: Iterable[Any],
    start: date | None = None,
    end: date | None = None,
    tz: str | None = None,
) -> dict[int, dict[str, list[Any]]]:
    """
    Map project_id -> day key (yyyy-MM-dd) -> tasks on that day.

    Tasks without a project, and tasks outside the inclusive
    [start, end] range when one is given, are left out.
    """
    grouped: dict[int, dict[str, list[Any]]] = defaultdict(lambda: defaultdict(list))
    for task in tasks:
        if task.project_id is None:
            continue
        day = to_day(task.date, tz)
        if not _in_range(day, start, end):
            continue
        grouped[task.project_id][day_key(day)].append(task)
    return {project_id: dict(days) for project_id, days in grouped.items()}


def count_by_project_and_day(
    tasks: Iterable[Any],
    start: date | None = None,
    end: date | None = None,
    tz: str | None = None,
) -> dict[int, dict[str, int]]:
    """Like group_by_project_and_day, with task counts instead of lists."""
    return {
        project_id: {key: len(day_tasks) for key, day_tasks in days.items()}
        for project_id, days in group_by_project_and_day(tasks, start, end, tz).items()
    }


def count_by_day(tasks: Iterable[Any], tz: str | None = None) -> dict[str, int]:
    """Day key -> number of tasks, across all projects."""
    counts: dict[str, int] = defaultdict(int)
    for task in tasks:
        counts[day_key(task.date, tz)] += 1
    return dict(counts)


def tasks_on_day(tasks: Iterable[Any], project_id: int, day: date, tz: str | None = None) -> list[Any]:
    """All tasks of one project on one day (duplicates included)."""
    return group_by_project_and_day(tasks, day, day, tz).get(project_id, {}).get(day_key(day), [])


def affects_multiple(tasks: Iterable[Any], project_id: int, day: date, tz: str | None = None) -> bool:
    """True when deleting a project's tasks on `day` removes more than one task."""
    return len(tasks_on_day(tasks, project_id, day, tz)) > 1


def streak_length(days: set[date], day: date) -> int:
    """Number of consecutive days ending at `day` that are all in `days`."""
    length = 0
    while day in days:
        length += 1
        if day == date.min:
            break
        day -= timedelta(days=1)
    return length


def detect_celebration(
    existing_tasks: Iterable[Any],
    day: date,
    streak_days: int | None = None,
    tz: str | None = None,
) -> Celebration | None:
    """
    Decide which celebration a new task on `day` earns.

    `existing_tasks` are the tasks that existed before the new one.
    Only the first task of a day celebrates; yearly beats monthly,
    monthly beats a streak, and a streak beats the plain daily one.
    The streak threshold defaults to the STREAK_DAYS setting.
    """
    if streak_days is None:
        streak_days = get_settings().streak_days

    active_days = {to_day(task.date, tz) for task in existing_tasks}
    if day in active_days:
        return None

    if not any(d.year == day.year for d in active_days):
        return Celebration(type="yearly", message=f"First task of {day.year}!")

    if not any((d.year, d.month) == (day.year, day.month) for d in active_days):
        return Celebration(type="monthly", message=f"First task in {day.strftime('%B %Y')}!")

    streak = streak_length(active_days | {day}, day)
    if streak >= streak_days:
        return Celebration(type="streak", message=f"{streak} days in a row!")

    return Celebration(type="daily", message="First task of the day!")
