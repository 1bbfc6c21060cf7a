#!/usr/bin/env python3
"""
Seed script to fill the calendar with demo data.

Creates a handful of colored projects and marks random days of a year
as done for each of them, with occasional duplicate marks on one day.

Usage:
    python -m scripts.seed [--projects 4] [--year 2024] [--density 0.4] [--clear]

Options:
    --projects N   Number of projects to create (default: 4)
    --year Y       Year to fill (default: current year)
    --density P    Chance that a project is marked on a given day (default: 0.4)
    --clear        Clear existing data before seeding
    --seed S       Random seed for reproducible data
"""

import argparse
import asyncio
import random
import time
from datetime import date, timedelta
from typing import List, Sequence, Tuple

from sqlalchemy import delete

from habitgrid.database import async_session_maker, get_session_context, init_db
from habitgrid.models import Project, Task

DEMO_PROJECTS = [
    ("Gym", "#EF4444"),
    ("Reading", "#3B82F6"),
    ("Meditation", "#10B981"),
    ("Spanish", "#F59E0B"),
    ("Guitar", "#8B5CF6"),
    ("Journaling", "#EC4899"),
]


async def clear_data():
    """Clear all existing data."""
    print("Clearing existing data...")
    async with get_session_context() as session:
        await session.execute(delete(Task))
        await session.execute(delete(Project))
    print("Data cleared.")


async def create_projects(count: int) -> List[Project]:
    """Create demo projects, cycling through the demo names."""
    projects = []
    for i in range(count):
        name, color = DEMO_PROJECTS[i % len(DEMO_PROJECTS)]
        if i >= len(DEMO_PROJECTS):
            name = f"{name} {i // len(DEMO_PROJECTS) + 1}"
        projects.append(Project(name=name, color=color))

    async with get_session_context() as session:
        session.add_all(projects)
        await session.flush()
    return projects


def generate_tasks(
    project_ids: Sequence[int],
    year: int,
    density: float = 0.4,
    rng: random.Random | None = None,
) -> List[Tuple[int, date]]:
    """
    Generate (project_id, day) marks for every day of `year`.

    Each project is marked on a day with probability `density`;
    about 5% of marks get a duplicate on the same day.
    """
    rng = rng or random.Random()
    marks = []

    day = date(year, 1, 1)
    while day.year == year:
        for project_id in project_ids:
            if rng.random() < density:
                marks.append((project_id, day))
                if rng.random() < 0.05:
                    marks.append((project_id, day))
        day += timedelta(days=1)

    return marks


async def insert_batch(marks: List[Tuple[int, date]]):
    """Insert tasks in batches for performance."""
    async with async_session_maker() as session:
        batch_size = 100

        print(f"Inserting {len(marks)} tasks...")
        for i in range(0, len(marks), batch_size):
            batch = [Task(project_id=project_id, date=day) for project_id, day in marks[i:i + batch_size]]
            session.add_all(batch)
            await session.flush()
            if (i + batch_size) % 500 == 0:
                print(f"  Inserted {min(i + batch_size, len(marks))} tasks...")

        await session.commit()


async def main():
    parser = argparse.ArgumentParser(description="Seed habitgrid with demo data")
    parser.add_argument("--projects", type=int, default=4, help="Number of projects")
    parser.add_argument("--year", type=int, default=date.today().year, help="Year to fill")
    parser.add_argument("--density", type=float, default=0.4, help="Daily mark probability")
    parser.add_argument("--clear", action="store_true", help="Clear existing data")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    args = parser.parse_args()

    await init_db()

    if args.clear:
        await clear_data()

    start = time.time()

    projects = await create_projects(args.projects)
    print(f"Created {len(projects)} projects: {', '.join(p.name for p in projects)}")

    marks = generate_tasks([p.id for p in projects], args.year, args.density, random.Random(args.seed))
    await insert_batch(marks)

    print(f"Seeded {len(marks)} tasks for {args.year} in {time.time() - start:.2f}s")


if __name__ == "__main__":
    asyncio.run(main())
