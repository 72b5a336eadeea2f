"""Lifecycle status classification and status-token vocabularies."""

from __future__ import annotations

import calendar
import re
from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from annual_planning.services.values import HUNDRED, ZERO, parse_date, parse_number


class ProgressStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    DELAYED = "delayed"


def normalize_progress(value: Any) -> Decimal:
    """Clamp a progress reading to [0, 100]; non-numeric reads as 0."""

    number = parse_number(value)
    if number is None or number.is_nan():
        return ZERO
    if number < 0:
        return ZERO
    if number > HUNDRED:
        return HUNDRED
    return number


def add_months(value: date, months: int) -> date:
    if months <= 0:
        return value
    index = value.month - 1 + months
    year = value.year + index // 12
    month = index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def classify(
    progress: Any,
    deadline: Any = None,
    *,
    now: datetime | date | None = None,
    grace_months: int = 0,
) -> ProgressStatus:
    """Map progress percent and an optional deadline to a lifecycle status.

    Completion is checked before the deadline: a record at 100% is completed
    even when its deadline has passed. A record with no progress at all stays
    not started whatever its deadline; partial progress past the deadline
    reads as delayed.
    """

    value = normalize_progress(progress)
    if value >= HUNDRED:
        return ProgressStatus.COMPLETED
    if value <= 0:
        return ProgressStatus.NOT_STARTED

    due = parse_date(deadline)
    if due is not None:
        if now is None:
            today = date.today()
        elif isinstance(now, datetime):
            today = now.date()
        else:
            today = now
        if add_months(due, grace_months) < today:
            return ProgressStatus.DELAYED
    return ProgressStatus.IN_PROGRESS


def _token(value: str) -> str:
    return re.sub(r"[\s\-]+", "_", value.strip().lower())


ENGLISH_STATUS_TOKENS: dict[str, ProgressStatus] = {
    "completed": ProgressStatus.COMPLETED,
    "complete": ProgressStatus.COMPLETED,
    "done": ProgressStatus.COMPLETED,
    "finished": ProgressStatus.COMPLETED,
    "ahead": ProgressStatus.COMPLETED,
    "in_progress": ProgressStatus.IN_PROGRESS,
    "inprogress": ProgressStatus.IN_PROGRESS,
    "executing": ProgressStatus.IN_PROGRESS,
    "preparing": ProgressStatus.IN_PROGRESS,
    "on_track": ProgressStatus.IN_PROGRESS,
    "ongoing": ProgressStatus.IN_PROGRESS,
    "at_risk": ProgressStatus.IN_PROGRESS,
    "delayed": ProgressStatus.DELAYED,
    "overdue": ProgressStatus.DELAYED,
    "not_started": ProgressStatus.NOT_STARTED,
    "pending": ProgressStatus.NOT_STARTED,
}

CHINESE_STATUS_TOKENS: dict[str, ProgressStatus] = {
    "已完成": ProgressStatus.COMPLETED,
    "完成": ProgressStatus.COMPLETED,
    "已结束": ProgressStatus.COMPLETED,
    "进行中": ProgressStatus.IN_PROGRESS,
    "执行中": ProgressStatus.IN_PROGRESS,
    "推进中": ProgressStatus.IN_PROGRESS,
    "筹备中": ProgressStatus.IN_PROGRESS,
    "风险中": ProgressStatus.IN_PROGRESS,
    "已延期": ProgressStatus.DELAYED,
    "延期": ProgressStatus.DELAYED,
    "逾期": ProgressStatus.DELAYED,
    "待开始": ProgressStatus.NOT_STARTED,
    "未开始": ProgressStatus.NOT_STARTED,
}


def _vocabulary(*tables: Mapping[str, ProgressStatus]) -> dict[str, ProgressStatus]:
    merged: dict[str, ProgressStatus] = {}
    for table in tables:
        for key, value in table.items():
            merged[_token(key)] = value
    return merged


STATUS_VOCABULARIES: dict[str, dict[str, ProgressStatus]] = {
    "targets": _vocabulary(
        ENGLISH_STATUS_TOKENS,
        CHINESE_STATUS_TOKENS,
        {"achieved": ProgressStatus.COMPLETED, "已达成": ProgressStatus.COMPLETED},
    ),
    "monthly_progress": _vocabulary(ENGLISH_STATUS_TOKENS, CHINESE_STATUS_TOKENS),
    "major_events": _vocabulary(
        ENGLISH_STATUS_TOKENS,
        CHINESE_STATUS_TOKENS,
        {"planning": ProgressStatus.NOT_STARTED, "计划中": ProgressStatus.NOT_STARTED},
    ),
    "action_plans": _vocabulary(ENGLISH_STATUS_TOKENS, CHINESE_STATUS_TOKENS),
    "annual_plans": _vocabulary(
        ENGLISH_STATUS_TOKENS,
        CHINESE_STATUS_TOKENS,
        {
            "planning": ProgressStatus.NOT_STARTED,
            "draft": ProgressStatus.NOT_STARTED,
            "计划中": ProgressStatus.NOT_STARTED,
        },
    ),
}


def normalize_status(value: Any, vocabulary: Mapping[str, ProgressStatus]) -> ProgressStatus | None:
    """Look up a free-text status token; ``None`` when absent or unrecognized."""

    if value is None:
        return None
    text = str(value)
    if not text.strip():
        return None
    return vocabulary.get(_token(text))
