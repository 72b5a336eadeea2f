"""Dense month x department pivot grid with source-priority fallback."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal

from annual_planning.services.indexing import GridKey, SourceIndices
from annual_planning.services.sources import MONTHLY_PROGRESS, TARGETS, Record
from annual_planning.services.status import ProgressStatus, classify
from annual_planning.services.values import ZERO, percent_of, q2, to_decimal

ALL_MONTHS = tuple(range(1, 13))
DEFAULT_TARGET_LEVEL = "A"


@dataclass(frozen=True, slots=True)
class GridCell:
    month: int
    department: str
    target: Decimal = ZERO
    current: Decimal = ZERO
    source: str | None = None
    target_level: str = DEFAULT_TARGET_LEVEL
    event_count: int = 0
    action_plan_count: int = 0

    @property
    def rate(self) -> Decimal:
        """Completion percent of the cell; zero when there is no target."""

        return q2(percent_of(self.current, self.target))

    @property
    def status(self) -> ProgressStatus:
        return classify(self.rate)


def scope_months(month: int | None) -> list[int]:
    if month is None:
        return list(ALL_MONTHS)
    return [month]


def _sum_field(records: Iterable[Record], field_name: str) -> Decimal:
    return sum((to_decimal(record.get(field_name)) for record in records), ZERO)


def _target_level(records: Sequence[Record]) -> str:
    for record in records:
        level = record.get("target_level")
        if level is not None and str(level).strip():
            return str(level).strip()
    return DEFAULT_TARGET_LEVEL


def build_cell(month: int, department: str, indices: SourceIndices) -> GridCell:
    key = GridKey(month, department)

    progress_rows = indices.monthly_progress.get(key, [])
    if progress_rows:
        target = _sum_field(progress_rows, "target_value")
        current = _sum_field(progress_rows, "actual_value")
        source: str | None = MONTHLY_PROGRESS
    else:
        target_rows = indices.targets.get(key, [])
        target = _sum_field(target_rows, "target_value")
        current = _sum_field(target_rows, "current_value")
        source = TARGETS if target_rows else None

    return GridCell(
        month=month,
        department=department,
        target=q2(target),
        current=q2(current),
        source=source,
        target_level=_target_level(indices.annual_plans.get(key, [])),
        event_count=len(indices.major_events.get(key, [])),
        action_plan_count=len(indices.action_plans.get(key, [])),
    )


def build_grid(months: Sequence[int], departments: Sequence[str], indices: SourceIndices) -> list[GridCell]:
    """One cell per (month, department) pair, month-major, zero-filled."""

    return [build_cell(month, department, indices) for month in months for department in departments]
