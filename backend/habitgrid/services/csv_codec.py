"""
CSV export/import of task records.

Export writes one row per task with the joined project name and color.
Import yields records lazily so callers can persist each row before the
next one is parsed.
"""

import csv
import io
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, Iterator

from habitgrid.exceptions import ValidationError
from habitgrid.services.dates import day_key, parse_day

EXPORT_COLUMNS = ("date", "project_name", "project_color")


@dataclass(frozen=True)
class TaskRecord:
    """One parsed import row."""
    line: int
    day: date
    project_name: str
    project_color: str | None  # None means "use the default color"


def encode_tasks(tasks: Iterable[Any]) -> str:
    """Serialize tasks (with their project loaded) to CSV text."""
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=EXPORT_COLUMNS, lineterminator="\n")
    writer.writeheader()
    for task in tasks:
        project = task.project
        writer.writerow({
            "date": day_key(task.date),
            "project_name": project.name if project else "",
            "project_color": project.color if project else "",
        })
    return buffer.getvalue()


def _row_error(line: int, field: str, message: str) -> ValidationError:
    return ValidationError(
        f"Line {line}: {message}",
        details=[{"loc": ["body", f"line {line}", field], "msg": message, "type": "csv_error"}],
    )


def read_records(text: str, tz: str | None = None) -> Iterator[TaskRecord]:
    """
    Parse CSV text into task records, one row at a time.

    Raises:
        ValidationError: When the header lacks a required column (on the
            first iteration), or when a row has an invalid date or an
            empty project name (when that row is reached).
    """
    reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")))
    header = [name.strip() for name in (reader.fieldnames or [])]
    missing = [column for column in EXPORT_COLUMNS if column not in header]
    if missing:
        raise ValidationError(
            f"CSV header is missing column(s): {', '.join(missing)}",
            details=[{"loc": ["body", "header"], "msg": f"missing {column}", "type": "csv_error"}
                     for column in missing],
        )
    reader.fieldnames = header

    for row in reader:
        values = {column: row.get(column) or "" for column in EXPORT_COLUMNS}
        if not any(value.strip() for value in values.values()):
            continue

        line = reader.line_num
        try:
            day = parse_day(values["date"], tz)
        except ValueError:
            raise _row_error(line, "date", f"invalid date {values['date']!r}") from None

        if not values["project_name"].strip():
            raise _row_error(line, "project_name", "project_name must not be empty")

        yield TaskRecord(
            line=line,
            day=day,
            project_name=values["project_name"],
            project_color=values["project_color"] if values["project_color"].strip() else None,
        )
