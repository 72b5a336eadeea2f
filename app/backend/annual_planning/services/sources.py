"""Source collections consumed by the reconciliation engine."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

logger = logging.getLogger(__name__)

Record = Mapping[str, Any]

ANNUAL_PLANS = "annual_plans"
TARGETS = "targets"
MONTHLY_PROGRESS = "monthly_progress"
MAJOR_EVENTS = "major_events"
ACTION_PLANS = "action_plans"

SOURCE_NAMES = (TARGETS, MONTHLY_PROGRESS, MAJOR_EVENTS, ACTION_PLANS, ANNUAL_PLANS)


@dataclass(slots=True)
class FetchResult:
    """Envelope returned by every data-source call."""

    success: bool
    data: list[dict[str, Any]] = field(default_factory=list)
    error: str | None = None


class PlanningDataSource(Protocol):
    def get_annual_plans(self, *, year: int, month: int | None = None) -> FetchResult: ...

    def get_department_targets(self, *, year: int) -> FetchResult: ...

    def get_monthly_progress(self, *, year: int) -> FetchResult: ...

    def get_major_events(self, *, year: int) -> FetchResult: ...

    def get_action_plans(self, *, year: int) -> FetchResult: ...

    def get_departments(self, *, status: str | None = "active") -> FetchResult: ...


@dataclass(frozen=True, slots=True)
class SourceCollections:
    """Snapshot of the five planning record collections."""

    targets: tuple[Record, ...] = ()
    monthly_progress: tuple[Record, ...] = ()
    major_events: tuple[Record, ...] = ()
    action_plans: tuple[Record, ...] = ()
    annual_plans: tuple[Record, ...] = ()

    def by_name(self) -> dict[str, tuple[Record, ...]]:
        return {name: getattr(self, name) for name in SOURCE_NAMES}


def records_from_result(name: str, result: FetchResult | None) -> tuple[Record, ...]:
    """Unwrap a fetch result; a failed or malformed fetch reads as empty."""

    if result is None or not result.success:
        logger.error(
            "Planning source %s unavailable, treating as empty: %s",
            name,
            result.error if result is not None else "no result",
        )
        return ()
    if not isinstance(result.data, (list, tuple)):
        logger.error("Planning source %s returned non-list payload, treating as empty", name)
        return ()
    return tuple(row for row in result.data if isinstance(row, Mapping))


def collections_from_results(
    *,
    targets: FetchResult | None,
    monthly_progress: FetchResult | None,
    major_events: FetchResult | None,
    action_plans: FetchResult | None,
    annual_plans: FetchResult | None,
) -> SourceCollections:
    return SourceCollections(
        targets=records_from_result(TARGETS, targets),
        monthly_progress=records_from_result(MONTHLY_PROGRESS, monthly_progress),
        major_events=records_from_result(MAJOR_EVENTS, major_events),
        action_plans=records_from_result(ACTION_PLANS, action_plans),
        annual_plans=records_from_result(ANNUAL_PLANS, annual_plans),
    )
