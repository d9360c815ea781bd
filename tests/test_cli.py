import re

import pytest
from typer.testing import CliRunner

from run import app

ANSI = re.compile(r"\x1b\[[0-9;]*m")

runner = CliRunner()

EVENTS = """\
# sample
7/4;[holiday,blue] Independence Day
04-07-1990;[bday]Alice's Birthday
7/31?x;Broken rule
"""


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "events.txt").write_text(EVENTS, encoding="utf-8")
    return tmp_path


def invoke(*args):
    result = runner.invoke(app, list(args))
    return result, ANSI.sub("", result.output)


def test_show_month_with_events(workdir):
    result, output = invoke("show", "-m", "7", "-y", "2024", "--today", "2024-07-01")

    assert result.exit_code == 0, output
    assert "July 2024" in output
    assert "Wk Mo Tu We Th Fr Sa Su" in output
    assert "Thu, 04 Jul 2024 - Independence Day (In 3 days)" in output
    assert "Thu, 04 Jul 2024 - Alice's Birthday (34th Birthday) (In 3 days)" in output


def test_calendar_only_and_events_only(workdir):
    _, calendar = invoke("show", "-m", "7", "-y", "2024", "-c", "--today", "2024-07-01")
    assert "July 2024" in calendar
    assert "Events:" not in calendar

    _, events = invoke("show", "-m", "7", "-y", "2024", "-e", "--today", "2024-07-01")
    assert "Events:" in events
    assert "July 2024" not in events


def test_sunday_first_without_week_numbers(workdir):
    _, output = invoke("show", "-m", "9", "-y", "2024", "--sunday-first", "--no-weeks", "-c")

    assert "Su Mo Tu We Th Fr Sa" in output
    assert "Wk" not in output


def test_several_months_in_columns(workdir):
    _, output = invoke("show", "-m", "11", "-y", "2024", "-n", "3", "--columns", "2", "-c")

    assert "November 2024" in output
    assert "December 2024" in output
    assert "January 2025" in output


def test_missing_events_file_is_not_fatal(workdir):
    result, output = invoke("show", "-m", "7", "-y", "2024", "-f", "missing.txt")

    assert result.exit_code == 0
    assert "Info: Event file 'missing.txt' not found. Continuing without events." in output
    assert "July 2024" in output
    assert "Events:" not in output


def test_invalid_month_falls_back_to_current_month(workdir):
    result, output = invoke("show", "-m", "13", "-y", "2024", "-c", "--today", "2024-03-15")

    assert result.exit_code == 0
    assert "Warning: Month must be between 1 and 12" in output
    assert "March 2024" in output


def test_settings_file_provides_defaults(workdir):
    (workdir / "custom.yaml").write_text("num_months: 2\nshow_week_numbers: false\n", encoding="utf-8")

    _, output = invoke("show", "-m", "1", "-y", "2024", "-c", "--settings", "custom.yaml")

    assert "January 2024" in output
    assert "February 2024" in output
    assert "Wk" not in output


def test_invalid_settings_exit_with_error(workdir):
    (workdir / "bad.yaml").write_text("num_columns: 0\n", encoding="utf-8")

    result, output = invoke("show", "--settings", "bad.yaml")

    assert result.exit_code == 1
    assert "Error:" in output


def test_verify_config_reports_unrecognized_rules(workdir):
    result, output = invoke("verify-config")

    assert result.exit_code == 0
    assert "Found 3 rules." in output
    assert "Ignored 1 blank or comment lines." in output
    assert "1 rules not recognized: 7/31?x" in output


def test_verify_config_missing_file(workdir):
    result, output = invoke("verify-config", "-f", "nope.txt")

    assert result.exit_code == 1
    assert "Configuration invalid" in output


def test_verify_config_reports_out_of_range_rules(workdir):
    (workdir / "ranges.txt").write_text("5/9#1;No such weekday\n13/1;No such month\n\n5/1#1;Fine\n", encoding="utf-8")

    result, output = invoke("verify-config", "-f", "ranges.txt")

    assert result.exit_code == 0
    assert "Found 3 rules." in output
    assert "Ignored 1 blank or comment lines." in output
    assert "2 rules not recognized: 5/9#1, 13/1" in output


def test_show_december_9999(workdir):
    (workdir / "late.txt").write_text("12/25;Christmas\n01-01-9000;[bday]Old friend\n", encoding="utf-8")

    result, output = invoke("show", "-m", "12", "-y", "9999", "-f", "late.txt", "--today", "9999-12-20")

    assert result.exit_code == 0, output
    assert "December 9999" in output
    assert "Sat, 25 Dec 9999 - Christmas (In 5 days)" in output
