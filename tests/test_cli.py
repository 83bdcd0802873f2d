"""
End-to-end tests for the command line front end.
"""

import json

import pytest

from internship_tracker import cli
from internship_tracker.infra import config


@pytest.fixture
def env(tmp_path, monkeypatch):
    """Isolated config/data dirs with the JSON file backend"""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("INTERNSHIP_TRACKER_CONFIG_DIR", str(tmp_path / "config_home"))
    monkeypatch.setenv("INTERNSHIP_TRACKER_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("INTERNSHIP_TRACKER_STORAGE_BACKEND", "json")
    monkeypatch.setattr(config, "_settings", None)
    return tmp_path


def run(*argv):
    return cli.main(["--language", "en", *argv])


def stored_weeks(env):
    items = json.loads((env / "data" / "storage.json").read_text(encoding="utf-8"))
    return json.loads(items["internshipWeeks"])


def test_first_run_creates_week(env, capsys):
    assert run("weeks") == 0
    out = capsys.readouterr().out
    assert "* Week 1" in out
    assert len(stored_weeks(env)) == 1


def test_set_and_show(env, capsys):
    assert run("set", "monday", "individual", "3") == 0
    assert run("set", "tuesday", "individual", "2") == 0
    assert run("set", "tuesday", "group", "abc") == 0
    capsys.readouterr()

    assert run("show", "--day", "tuesday") == 0
    out = capsys.readouterr().out
    assert "Week 1 - Tuesday" in out
    total_line = next(line for line in out.splitlines() if line.startswith("Total Hours"))
    assert total_line.split()[-3:] == ["2", "5", "5"]


def test_week_lifecycle(env, capsys):
    run("new-week")
    run("new-week")
    weeks = stored_weeks(env)
    assert [w["name"] for w in weeks] == ["Week 1", "Week 2", "Week 3"]

    assert run("delete-week", "week 2") == 0
    assert [w["name"] for w in stored_weeks(env)] == ["Week 1", "Week 3"]

    assert run("delete-week", "nope") == 1
    assert "Week not found: nope" in capsys.readouterr().err


def test_set_on_named_week_and_clear(env):
    run("new-week")
    run("set", "friday", "supervision", "1.5", "--week", "Week 1")
    weeks = stored_weeks(env)
    assert weeks[0]["days"]["friday"]["supervision"] == 1.5
    assert weeks[1]["days"]["friday"]["supervision"] == 0

    run("clear", "--week", weeks[0]["id"])
    assert stored_weeks(env)[0]["days"]["friday"]["supervision"] == 0


def test_hour_types(env, capsys):
    assert run("add-type", "travel", "--category", "indirect") == 0
    assert run("add-type", "travel", "--category", "direct") == 1
    assert run("delete-type", "intake", "--category", "direct") == 0
    capsys.readouterr()

    run("types")
    out = capsys.readouterr().out
    assert "Direct Hours: individual, group" in out
    assert "Indirect Hours: consultation, documentation, supervision, travel" in out
    assert all("travel" in day for day in stored_weeks(env)[0]["days"].values())


def test_export_and_import(env, capsys):
    run("set", "monday", "individual", "4")
    assert run("export") == 0
    export_file = env / "internship_hours_data.json"
    assert export_file.exists()

    run("new-week")
    assert len(stored_weeks(env)) == 2

    assert run("import", str(export_file)) == 0
    weeks = stored_weeks(env)
    assert len(weeks) == 1
    assert weeks[0]["days"]["monday"]["individual"] == 4


def test_import_invalid_file(env, capsys):
    bad = env / "bad.json"
    bad.write_text('{"weeks": []}', encoding="utf-8")
    run("weeks")
    before = stored_weeks(env)

    assert run("import", str(bad)) == 1
    assert "Invalid data file" in capsys.readouterr().err
    assert stored_weeks(env) == before


def test_report_and_excel(env, capsys):
    run("set", "monday", "intake", "2")
    assert run("report", "--template", "hours_summary.md", "--output", str(env / "r.md")) == 0
    assert "| Intake Counseling | 2 |" in (env / "r.md").read_text(encoding="utf-8")

    assert run("excel", str(env / "hours.xlsx")) == 0
    assert (env / "hours.xlsx").exists()


def test_sqlite_backend(env, monkeypatch, capsys):
    monkeypatch.setenv("INTERNSHIP_TRACKER_STORAGE_BACKEND", "sqlite")
    monkeypatch.setattr(config, "_settings", None)

    assert run("set", "saturday", "group", "2") == 0
    monkeypatch.setattr(config, "_settings", None)
    capsys.readouterr()

    assert run("show", "--day", "saturday") == 0
    out = capsys.readouterr().out
    total_line = next(line for line in out.splitlines() if line.startswith("Total Hours"))
    assert total_line.split()[-3:] == ["2", "2", "2"]
    assert (env / "data" / "internship_hours.db").exists()


def test_show_and_report_without_weeks(env, capsys):
    run("delete-week", "Week 1")
    assert stored_weeks(env) == []
    capsys.readouterr()

    assert run("show") == 0
    assert "No week selected" in capsys.readouterr().out

    assert run("report", "--output", str(env / "empty.txt")) == 0
    assert "No week selected" in (env / "empty.txt").read_text(encoding="utf-8")

    assert run("show", "--week", "Week 1") == 1
    assert "Week not found: Week 1" in capsys.readouterr().err


def test_unreadable_storage_is_left_alone(env, capsys):
    storage = env / "data" / "storage.json"
    storage.mkdir(parents=True)

    assert run("weeks") == 1
    assert "Stored data could not be read" in capsys.readouterr().err
    assert storage.is_dir()
