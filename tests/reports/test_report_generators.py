from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from lab_hours.reports.service import CSV_HEADER, ReportService
from lab_hours.students.model import Student

START = datetime(2016, 1, 10)


@pytest.fixture
def reports(students_repo, sessions_repo):
    return ReportService(students_repo, sessions_repo, strike_start=START, min_hours=5)


def test_csv_report_ordered_by_last_name(students_repo, reports):
    students_repo.add(Student(id=1003, first_name="Grace", last_name="Hopper", project_hours=12.3456))

    lines = reports.csv_report().split("\n")

    assert lines[0] == ",".join(CSV_HEADER) == "Last Name,First Name,Student ID,Project Hours"
    assert lines[1:] == [
        "Hopper,Grace,1003,12.35",
        "Lovelace,Ada,1001,0.0",
        "Turing,Alan,1002,0.0",
    ]


def test_strike_weeks_cover_now():
    reports = ReportService(None, None, strike_start=START)

    weeks = reports.strike_weeks(now=START + timedelta(days=15))

    assert [w.start for w in weeks] == [START, START + timedelta(days=7), START + timedelta(days=14)]
    assert weeks[-1].end == START + timedelta(days=21)


def test_strike_weeks_before_start_still_has_one_week():
    reports = ReportService(None, None, strike_start=START)

    assert len(reports.strike_weeks(now=START - timedelta(days=3))) == 1


def test_strike_report_sums_hours_per_week(sessions_repo, reports):
    # Week 0: Ada 3h + 3h, Alan 2h; week 1: Ada 1h; week 2 is still running
    sessions_repo.create(student_id=1001, time_in=START + timedelta(days=1, hours=16), time_out=START + timedelta(days=1, hours=19))
    sessions_repo.create(student_id=1001, time_in=START + timedelta(days=3, hours=16), time_out=START + timedelta(days=3, hours=19))
    sessions_repo.create(student_id=1002, time_in=START + timedelta(days=2, hours=16), time_out=START + timedelta(days=2, hours=18))
    sessions_repo.create(student_id=1001, time_in=START + timedelta(days=8, hours=16), time_out=START + timedelta(days=8, hours=17))
    # Open sessions and sessions before the start are ignored
    sessions_repo.create(student_id=1002, time_in=START + timedelta(days=9))
    sessions_repo.create(student_id=1002, time_in=START - timedelta(days=2), time_out=START - timedelta(days=2) + timedelta(hours=9))

    report = reports.strike_report(now=START + timedelta(days=15))

    by_name = {row.student.first_name: row for row in report.rows}
    assert len(report.weeks) == 3
    assert by_name["Ada"].weekly_hours == pytest.approx([6.0, 1.0, 0.0])
    assert by_name["Alan"].weekly_hours == pytest.approx([2.0, 0.0, 0.0])
    assert by_name["Ada"].strikes == 1
    assert by_name["Alan"].strikes == 2


def test_strike_report_without_sessions(reports):
    report = reports.strike_report(now=START + timedelta(days=8))

    assert [row.weekly_hours for row in report.rows] == [[0.0, 0.0], [0.0, 0.0]]
    assert [row.strikes for row in report.rows] == [1, 1]
    assert report.min_hours == 5
