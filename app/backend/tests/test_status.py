from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from annual_planning.services.status import (
    STATUS_VOCABULARIES,
    ProgressStatus,
    add_months,
    classify,
    normalize_progress,
    normalize_status,
)

NOW = date(2025, 6, 15)


def test_normalize_progress_clamps_and_defaults() -> None:
    assert normalize_progress(150) == Decimal("100")
    assert normalize_progress(-10) == Decimal("0")
    assert normalize_progress("45.5") == Decimal("45.5")
    assert normalize_progress("80%") == Decimal("80")
    assert normalize_progress("n/a") == Decimal("0")
    assert normalize_progress(None) == Decimal("0")
    assert normalize_progress(float("inf")) == Decimal("100")
    assert normalize_progress("-inf") == Decimal("0")
    assert normalize_progress(float("nan")) == Decimal("0")


def test_classify_without_deadline() -> None:
    assert classify(150) is ProgressStatus.COMPLETED
    assert classify(100) is ProgressStatus.COMPLETED
    assert classify(-10) is ProgressStatus.NOT_STARTED
    assert classify(0) is ProgressStatus.NOT_STARTED
    assert classify("abc") is ProgressStatus.NOT_STARTED
    assert classify(40) is ProgressStatus.IN_PROGRESS
    assert classify(float("inf")) is ProgressStatus.COMPLETED
    assert classify(float("-inf")) is ProgressStatus.NOT_STARTED
    assert classify(float("nan")) is ProgressStatus.NOT_STARTED


def test_classify_with_deadline() -> None:
    past = "2025-05-01"
    future = "2025-12-31"

    assert classify(100, past, now=NOW) is ProgressStatus.COMPLETED
    assert classify(40, past, now=NOW) is ProgressStatus.DELAYED
    assert classify(40, future, now=NOW) is ProgressStatus.IN_PROGRESS
    assert classify(0, past, now=NOW) is ProgressStatus.NOT_STARTED
    assert classify(40, "2025-06-15", now=NOW) is ProgressStatus.IN_PROGRESS
    assert classify(40, "sometime", now=NOW) is ProgressStatus.IN_PROGRESS


def test_classify_accepts_datetime_now_and_grace_period() -> None:
    assert classify(40, date(2025, 6, 14), now=datetime(2025, 6, 15, 9, 30)) is ProgressStatus.DELAYED
    assert classify(40, "2025-05-31", now=NOW, grace_months=1) is ProgressStatus.IN_PROGRESS
    assert classify(40, "2025-04-30", now=NOW, grace_months=1) is ProgressStatus.DELAYED


def test_add_months_clamps_to_month_end() -> None:
    assert add_months(date(2025, 1, 31), 1) == date(2025, 2, 28)
    assert add_months(date(2025, 11, 15), 2) == date(2026, 1, 15)
    assert add_months(date(2025, 3, 1), 0) == date(2025, 3, 1)


def test_normalize_status_tokens() -> None:
    vocabulary = STATUS_VOCABULARIES["action_plans"]

    assert normalize_status("In Progress", vocabulary) is ProgressStatus.IN_PROGRESS
    assert normalize_status("in-progress", vocabulary) is ProgressStatus.IN_PROGRESS
    assert normalize_status(" 已完成 ", vocabulary) is ProgressStatus.COMPLETED
    assert normalize_status("逾期", vocabulary) is ProgressStatus.DELAYED
    assert normalize_status("未开始", vocabulary) is ProgressStatus.NOT_STARTED
    assert normalize_status("", vocabulary) is None
    assert normalize_status(None, vocabulary) is None
    assert normalize_status("whatever", vocabulary) is None


def test_vocabularies_differ_per_module() -> None:
    assert normalize_status("planning", STATUS_VOCABULARIES["major_events"]) is ProgressStatus.NOT_STARTED
    assert normalize_status("planning", STATUS_VOCABULARIES["targets"]) is None
    assert normalize_status("已达成", STATUS_VOCABULARIES["targets"]) is ProgressStatus.COMPLETED
    assert normalize_status("已达成", STATUS_VOCABULARIES["monthly_progress"]) is None
    assert normalize_status("draft", STATUS_VOCABULARIES["annual_plans"]) is ProgressStatus.NOT_STARTED
