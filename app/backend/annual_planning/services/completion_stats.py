"""Per-module and overall completion statistics."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from annual_planning.services.sources import (
    ACTION_PLANS,
    ANNUAL_PLANS,
    MAJOR_EVENTS,
    MONTHLY_PROGRESS,
    SOURCE_NAMES,
    TARGETS,
    Record,
    SourceCollections,
)
from annual_planning.services.status import (
    STATUS_VOCABULARIES,
    ProgressStatus,
    classify,
    normalize_progress,
    normalize_status,
)
from annual_planning.services.values import HUNDRED, ZERO, has_number, percent_of, round_percent, to_decimal

ProgressExtractor = Callable[[Record], Decimal]


@dataclass(frozen=True, slots=True)
class CompletionStat:
    total: int = 0
    completed: int = 0
    in_progress: int = 0

    @property
    def rate(self) -> int:
        return round_percent(self.completed, self.total)

    def __add__(self, other: CompletionStat) -> CompletionStat:
        return CompletionStat(
            total=self.total + other.total,
            completed=self.completed + other.completed,
            in_progress=self.in_progress + other.in_progress,
        )


def _target_progress(record: Record) -> Decimal:
    return percent_of(record.get("current_value"), record.get("target_value"))


def _monthly_progress(record: Record) -> Decimal:
    if to_decimal(record.get("target_value")) != 0:
        return percent_of(record.get("actual_value"), record.get("target_value"))
    return normalize_progress(record.get("completion_rate"))


def _event_progress(record: Record) -> Decimal:
    return normalize_progress(record.get("progress"))


def _action_plan_progress(record: Record) -> Decimal:
    return normalize_progress(record.get("progress"))


def _annual_plan_progress(record: Record) -> Decimal:
    if has_number(record.get("progress")):
        return normalize_progress(record.get("progress"))
    return percent_of(record.get("actual_cost"), record.get("budget"))


@dataclass(frozen=True, slots=True)
class ModuleStrategy:
    """Status vocabulary and progress extractor for one planning module."""

    name: str
    vocabulary: Mapping[str, ProgressStatus]
    progress: ProgressExtractor
    deadline_field: str | None = None

    def classify_record(self, record: Record) -> ProgressStatus | None:
        """Explicit status when recognized, else the numeric progress rule.

        Returns ``None`` for the implicit not-started bucket.
        """

        explicit = normalize_status(record.get("status"), self.vocabulary)
        if explicit is not None:
            return explicit
        progress = self.progress(record)
        if progress >= HUNDRED:
            return ProgressStatus.COMPLETED
        if progress > ZERO:
            return ProgressStatus.IN_PROGRESS
        return None

    def row_status(
        self,
        record: Record,
        *,
        now: datetime | date | None = None,
        grace_months: int = 0,
    ) -> ProgressStatus:
        """Lifecycle status of a single row, deadline included."""

        explicit = normalize_status(record.get("status"), self.vocabulary)
        if explicit is not None:
            return explicit
        deadline = record.get(self.deadline_field) if self.deadline_field else None
        return classify(self.progress(record), deadline, now=now, grace_months=grace_months)


MODULE_STRATEGIES: dict[str, ModuleStrategy] = {
    TARGETS: ModuleStrategy(TARGETS, STATUS_VOCABULARIES[TARGETS], _target_progress),
    MONTHLY_PROGRESS: ModuleStrategy(
        MONTHLY_PROGRESS,
        STATUS_VOCABULARIES[MONTHLY_PROGRESS],
        _monthly_progress,
        deadline_field="end_date",
    ),
    MAJOR_EVENTS: ModuleStrategy(
        MAJOR_EVENTS,
        STATUS_VOCABULARIES[MAJOR_EVENTS],
        _event_progress,
        deadline_field="planned_date",
    ),
    ACTION_PLANS: ModuleStrategy(
        ACTION_PLANS,
        STATUS_VOCABULARIES[ACTION_PLANS],
        _action_plan_progress,
        deadline_field="when",
    ),
    ANNUAL_PLANS: ModuleStrategy(
        ANNUAL_PLANS,
        STATUS_VOCABULARIES[ANNUAL_PLANS],
        _annual_plan_progress,
        deadline_field="end_date",
    ),
}


def aggregate(records: Iterable[Record], strategy: ModuleStrategy) -> CompletionStat:
    total = 0
    completed = 0
    in_progress = 0
    for record in records:
        total += 1
        outcome = strategy.classify_record(record)
        if outcome is ProgressStatus.COMPLETED:
            completed += 1
        elif outcome is ProgressStatus.IN_PROGRESS:
            in_progress += 1
    return CompletionStat(total=total, completed=completed, in_progress=in_progress)


def overall_stat(module_stats: Mapping[str, CompletionStat]) -> CompletionStat:
    """Field-wise sum; the rate is recomputed from the summed counts."""

    overall = CompletionStat()
    for stat in module_stats.values():
        overall = overall + stat
    return overall


def status_breakdown(
    records: Iterable[Record],
    strategy: ModuleStrategy,
    *,
    now: datetime | date | None = None,
    grace_months: int = 0,
) -> dict[ProgressStatus, int]:
    """Row count per lifecycle status, every status present."""

    counts = {status: 0 for status in ProgressStatus}
    for record in records:
        counts[strategy.row_status(record, now=now, grace_months=grace_months)] += 1
    return counts


@dataclass(frozen=True, slots=True)
class CompletionOverview:
    modules: dict[str, CompletionStat]
    overall: CompletionStat
    breakdown: dict[str, dict[ProgressStatus, int]]


def compute_completion_overview(
    collections: SourceCollections,
    *,
    now: datetime | date | None = None,
    grace_months: int = 0,
) -> CompletionOverview:
    by_name = collections.by_name()
    modules = {name: aggregate(by_name[name], MODULE_STRATEGIES[name]) for name in SOURCE_NAMES}
    breakdown = {
        name: status_breakdown(by_name[name], MODULE_STRATEGIES[name], now=now, grace_months=grace_months)
        for name in SOURCE_NAMES
    }
    return CompletionOverview(modules=modules, overall=overall_stat(modules), breakdown=breakdown)
