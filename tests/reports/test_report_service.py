from __future__ import annotations

from datetime import date

import pytest

from src.kintai_system.kintai_system.core.exceptions import (
    AuthorizationError,
    DuplicateError,
    NotFoundError,
    ValidationError,
)
from src.kintai_system.kintai_system.reports.service import DailyReportService
from src.kintai_system.kintai_system.tags.model import Tag
from tests.fakes import FakeReportRepo, FakeTagRepo


def _service():
    tags = FakeTagRepo(
        [
            Tag(tag_id=1, name="Project A", notion_id="n-1", is_active=True),
            Tag(tag_id=2, name="Project B", notion_id="n-2", is_active=True),
            Tag(tag_id=3, name="Training", notion_id=None, is_active=False),
        ]
    )
    reports = FakeReportRepo(tags)
    return DailyReportService(reports, tags), reports


def test_efforts_summing_to_eight_hours_are_accepted():
    service, _ = _service()

    report = service.create(
        1,
        report_date=date(2024, 1, 15),
        work_content="Implemented the login screen",
        tag_efforts=[{"tag_id": 1, "hours": 3}, {"tag_id": 2, "hours": 5}],
    )

    assert report.total_hours == 8.0
    assert [(e.tag_name, e.hours) for e in report.tag_efforts] == [("Project A", 3.0), ("Project B", 5.0)]


def test_efforts_over_eight_hours_are_rejected_and_nothing_written():
    service, reports = _service()

    with pytest.raises(ValidationError) as exc:
        service.create(
            1,
            report_date=date(2024, 1, 15),
            work_content="Too much",
            tag_efforts=[{"tag_id": 1, "hours": 5}, {"tag_id": 2, "hours": 4}],
        )

    assert exc.value.status_code == 400
    assert reports.reports == {}


def test_decimal_hours_sum_exactly():
    service, _ = _service()

    report = service.create(
        1,
        report_date=date(2024, 1, 15),
        work_content="Fractions",
        tag_efforts=[{"tag_id": 1, "hours": 2.7}, {"tag_id": 2, "hours": 5.3}],
    )

    assert report.total_hours == 8.0


def test_hours_beyond_two_decimals_are_rejected_and_nothing_written():
    service, reports = _service()

    with pytest.raises(ValidationError) as exc:
        service.create(
            1,
            report_date=date(2024, 1, 15),
            work_content="Rounding",
            tag_efforts=[{"tag_id": 1, "hours": 4.005}, {"tag_id": 2, "hours": 3.995}],
        )

    assert "2 decimal places" in exc.value.message
    assert reports.reports == {}


def test_hours_with_trailing_zeros_are_accepted():
    service, _ = _service()

    report = service.create(
        1,
        report_date=date(2024, 1, 15),
        work_content="Trailing zeros",
        tag_efforts=[{"tag_id": 1, "hours": "4.500"}, {"tag_id": 2, "hours": "3.50"}],
    )

    assert report.total_hours == 8.0


def test_non_string_notes_are_rejected():
    service, reports = _service()

    with pytest.raises(ValidationError):
        service.create(1, report_date=date(2024, 1, 15), work_content="x", notes=5)
    with pytest.raises(ValidationError):
        service.create(1, report_date=date(2024, 1, 15), work_content=["x"])
    assert reports.reports == {}


def test_duplicate_report_for_same_day():
    service, _ = _service()
    service.create(1, report_date=date(2024, 1, 15), work_content="First")

    with pytest.raises(DuplicateError) as exc:
        service.create(1, report_date=date(2024, 1, 15), work_content="Second")

    assert "already exists" in exc.value.message


@pytest.mark.parametrize(
    "efforts",
    [
        [{"tag_id": 99, "hours": 1}],
        [{"tag_id": 1, "hours": 0}],
        [{"tag_id": 1, "hours": -1}],
        [{"tag_id": 1, "hours": "abc"}],
        [{"tag_id": 1, "hours": 1}, {"tag_id": 1, "hours": 2}],
        [{"hours": 1}],
        {"tag_id": 1, "hours": 1},
    ],
)
def test_invalid_efforts_are_rejected(efforts):
    service, reports = _service()

    with pytest.raises(ValidationError):
        service.create(1, report_date=date(2024, 1, 15), work_content="x", tag_efforts=efforts)
    assert reports.reports == {}


def test_date_and_content_are_required():
    service, _ = _service()

    with pytest.raises(ValidationError):
        service.create(1, report_date=None, work_content="x")
    with pytest.raises(ValidationError):
        service.create(1, report_date=date(2024, 1, 15), work_content="   ")
    with pytest.raises(ValidationError):
        service.get(1, None)


def test_update_replaces_efforts_wholesale():
    service, _ = _service()
    created = service.create(
        1,
        report_date=date(2024, 1, 15),
        work_content="Draft",
        tag_efforts=[{"tag_id": 1, "hours": 3}, {"tag_id": 2, "hours": 5}],
    )

    updated = service.update(
        1,
        created.report_id,
        work_content="Final",
        notes="done",
        tag_efforts=[{"tag_id": 2, "hours": 6}],
    )

    assert updated.work_content == "Final"
    assert updated.report_date == date(2024, 1, 15)
    assert updated.total_hours == 6.0
    assert [(e.tag_id, e.hours) for e in updated.tag_efforts] == [(2, 6.0)]


def test_update_checks_existence_and_ownership():
    service, _ = _service()
    created = service.create(1, report_date=date(2024, 1, 15), work_content="Mine")

    with pytest.raises(NotFoundError):
        service.update(1, 999, work_content="x")
    with pytest.raises(AuthorizationError):
        service.update(2, created.report_id, work_content="Not mine")


def test_list_is_newest_first_and_limited():
    service, _ = _service()
    for day in (1, 2, 3):
        service.create(1, report_date=date(2024, 1, day), work_content=f"day {day}")
    service.create(2, report_date=date(2024, 1, 4), work_content="other user")

    rows = service.list(1, limit=2)
    assert [r.report_date.day for r in rows] == [3, 2]

    rows = service.list(1, start=date(2024, 1, 1), end=date(2024, 1, 1))
    assert [r.report_date.day for r in rows] == [1]
