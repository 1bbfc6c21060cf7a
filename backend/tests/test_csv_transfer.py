"""
CSV export/import tests: the codec on its own and the HTTP round trip.
"""

from collections import Counter
from datetime import date
from types import SimpleNamespace

import pytest

from habitgrid.exceptions import ValidationError
from habitgrid.services.csv_codec import EXPORT_COLUMNS, encode_tasks, read_records


def _task(day, name=None, color=None):
    project = SimpleNamespace(name=name, color=color) if name else None
    return SimpleNamespace(date=day, project=project)


class TestCodec:

    def test_export_header_and_column_order(self):
        text = encode_tasks([
            _task(date(2024, 3, 1), "Gym", "#ff0000"),
            _task(date(2024, 2, 1), "Reading, books", "#0000ff"),
        ])
        lines = text.splitlines()
        assert lines[0] == ",".join(EXPORT_COLUMNS)
        assert lines[1] == "2024-03-01,Gym,#ff0000"
        assert lines[2] == '2024-02-01,"Reading, books",#0000ff'

    def test_export_of_nothing_is_just_the_header(self):
        assert encode_tasks([]) == "date,project_name,project_color\n"

    def test_task_without_project_exports_blank_fields(self):
        assert encode_tasks([_task(date(2024, 3, 1))]).splitlines()[1] == "2024-03-01,,"

    def test_read_skips_blank_lines_and_extra_columns(self):
        text = (
            "\ufeffproject_color,date,note,project_name\n"
            "\n"
            "#ff0000,2024-03-01,first,Gym\n"
            ",,,\n"
            ",2024-03-02T10:00:00Z,,Reading\n"
        )
        records = list(read_records(text))
        assert [(r.day, r.project_name, r.project_color) for r in records] == [
            (date(2024, 3, 1), "Gym", "#ff0000"),
            (date(2024, 3, 2), "Reading", None),
        ]
        assert records[0].line == 3

    def test_missing_header_column(self):
        with pytest.raises(ValidationError, match="project_color"):
            list(read_records("date,project_name\n2024-03-01,Gym\n"))

    def test_bad_row_fails_only_when_reached(self):
        records = read_records(
            "date,project_name,project_color\n"
            "2024-03-01,Gym,#ff0000\n"
            "someday,Gym,#ff0000\n"
        )
        assert next(records).project_name == "Gym"
        with pytest.raises(ValidationError, match="Line 3"):
            next(records)

    def test_empty_project_name_rejected(self):
        with pytest.raises(ValidationError, match="project_name"):
            list(read_records("date,project_name,project_color\n2024-03-01,,#fff\n"))

    def test_names_and_colors_are_kept_verbatim(self):
        text = (
            "date,project_name,project_color\n"
            "2024-03-01, Gym ,#ff0000 \n"
            "2024-03-02,Gym,  \n"
        )
        records = list(read_records(text))
        assert [(r.project_name, r.project_color) for r in records] == [
            (" Gym ", "#ff0000 "),
            ("Gym", None),
        ]

    def test_whitespace_only_project_name_rejected(self):
        with pytest.raises(ValidationError, match="Line 2"):
            list(read_records("date,project_name,project_color\n2024-03-01,   ,#fff\n"))


class TestTransferApi:

    @pytest.mark.asyncio
    async def test_export_download(self, client, make_project, make_task):
        gym = await make_project("Gym", "#ff0000")
        await make_task(gym["id"], "2024-03-01")
        await make_task(gym["id"], "2024-03-05")

        resp = await client.get("/api/export/csv")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/csv")
        assert resp.headers["content-disposition"] == 'attachment; filename="tasks.csv"'
        assert resp.text.splitlines() == [
            "date,project_name,project_color",
            "2024-03-05,Gym,#ff0000",
            "2024-03-01,Gym,#ff0000",
        ]

    @pytest.mark.asyncio
    async def test_round_trip_into_empty_store(self, client, make_project, make_task):
        gym = await make_project("Gym", "#ff0000")
        reading = await make_project("Reading", "#0000ff")
        await make_task(gym["id"], "2024-03-01")
        await make_task(gym["id"], "2024-03-01")
        await make_task(reading["id"], "2024-03-02")
        await make_task(reading["id"], "2023-12-31")

        exported = (await client.get("/api/export/csv")).text

        for project in (gym, reading):
            await client.delete(f"/api/projects/{project['id']}")
        assert (await client.get("/api/export/csv")).text.splitlines() == ["date,project_name,project_color"]

        resp = await client.post("/api/import/csv", content=exported, headers={"Content-Type": "text/plain"})
        assert resp.status_code == 200
        assert resp.json() == {"message": "Imported 4 records successfully"}

        reexported = (await client.get("/api/export/csv")).text
        assert Counter(reexported.splitlines()) == Counter(exported.splitlines())

        projects = (await client.get("/api/projects")).json()
        assert sorted(p["name"] for p in projects) == ["Gym", "Reading"]

    @pytest.mark.asyncio
    async def test_import_reuses_projects_by_exact_name(self, client, make_project):
        await make_project("Gym", "#ff0000")

        resp = await client.post(
            "/api/import/csv",
            content="date,project_name,project_color\n2024-03-01,Gym,#123456\n2024-03-02,gym,\n",
            headers={"Content-Type": "text/plain"},
        )
        assert resp.status_code == 200

        projects = {p["name"]: p["color"] for p in (await client.get("/api/projects")).json()}
        # Existing project keeps its color, a different case makes a new one
        assert projects == {"Gym": "#ff0000", "gym": "#4F46E5"}

    @pytest.mark.asyncio
    async def test_import_does_not_trim_project_names(self, client):
        resp = await client.post(
            "/api/import/csv",
            content="date,project_name,project_color\n2024-03-01,Gym,#ff0000\n2024-03-02, Gym ,#00ff00\n",
            headers={"Content-Type": "text/plain"},
        )
        assert resp.status_code == 200

        projects = (await client.get("/api/projects")).json()
        assert sorted(p["name"] for p in projects) == [" Gym ", "Gym"]

    @pytest.mark.asyncio
    async def test_failed_import_keeps_earlier_rows(self, client):
        resp = await client.post(
            "/api/import/csv",
            content=(
                "date,project_name,project_color\n"
                "2024-03-01,Gym,#ff0000\n"
                "2024-03-02,Gym,#ff0000\n"
                "not-a-date,Gym,#ff0000\n"
                "2024-03-04,Gym,#ff0000\n"
            ),
            headers={"Content-Type": "text/plain"},
        )
        assert resp.status_code == 400
        assert "Line 4" in resp.json()["message"]

        resp = await client.get("/api/tasks", params={"startDate": "2024-01-01", "endDate": "2024-12-31"})
        assert sorted(t["date"] for t in resp.json()) == ["2024-03-01", "2024-03-02"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", ["", "   \n", "day,name\n2024-03-01,Gym\n"])
    async def test_import_rejects_unusable_body(self, client, body):
        resp = await client.post("/api/import/csv", content=body, headers={"Content-Type": "text/plain"})
        assert resp.status_code == 400
        assert resp.json()["error"] == "validation_error"
