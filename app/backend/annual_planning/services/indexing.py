"""Month x department lookup indices over the planning record collections."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, NamedTuple

from annual_planning.services.departments import DEFAULT_TAXONOMY, DepartmentTaxonomy, resolve_department_name
from annual_planning.services.sources import (
    ACTION_PLANS,
    ANNUAL_PLANS,
    MAJOR_EVENTS,
    MONTHLY_PROGRESS,
    TARGETS,
    Record,
    SourceCollections,
)
from annual_planning.services.values import parse_date, to_decimal

_MONTH_TOKEN = re.compile(r"(\d{1,2})\s*月")
_NUMERIC_MONTH = re.compile(r"^\s*(\d{1,2})(?:\.0+)?\s*$")

MonthProjector = Callable[[Record], int | None]


class GridKey(NamedTuple):
    month: int
    department: str


def _valid_month(value: int) -> int | None:
    return value if 1 <= value <= 12 else None


def coerce_month(value: Any) -> int | None:
    """Read a direct month field (int or numeric text) as 1..12."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return _valid_month(value)
    if isinstance(value, (float, Decimal)):
        number = to_decimal(value)
        if number != number.to_integral_value():
            return None
        return _valid_month(int(number))
    text = str(value)
    match = _NUMERIC_MONTH.match(text)
    if match is not None:
        return _valid_month(int(match.group(1)))
    return parse_month_token(text)


def parse_month_token(value: Any) -> int | None:
    """Read a textual ``N月`` month token."""

    if value is None:
        return None
    match = _MONTH_TOKEN.search(str(value))
    if match is None:
        return None
    return _valid_month(int(match.group(1)))


def month_from_date(value: Any) -> int | None:
    parsed = parse_date(value)
    return parsed.month if parsed is not None else None


def direct_month(record: Record) -> int | None:
    return coerce_month(record.get("month"))


def event_month(record: Record) -> int | None:
    month = coerce_month(record.get("month"))
    if month is not None:
        return month
    for field_name in ("planned_date", "actual_date"):
        month = month_from_date(record.get(field_name))
        if month is not None:
            return month
    return None


def action_plan_month(record: Record) -> int | None:
    when = record.get("when")
    month = parse_month_token(when)
    if month is not None:
        return month
    month = month_from_date(when)
    if month is not None:
        return month
    return month_from_date(record.get("start_date"))


MONTH_PROJECTORS: dict[str, MonthProjector] = {
    TARGETS: direct_month,
    MONTHLY_PROGRESS: direct_month,
    ANNUAL_PLANS: direct_month,
    MAJOR_EVENTS: event_month,
    ACTION_PLANS: action_plan_month,
}


@dataclass(slots=True)
class IndexStats:
    indexed: int = 0
    missing_month: int = 0
    missing_department: int = 0
    excluded_department: int = 0

    @property
    def dropped(self) -> int:
        return self.missing_month + self.missing_department + self.excluded_department


def build_index(
    records: Iterable[Record],
    month_of: MonthProjector,
    *,
    department_map: Mapping[str, str],
    taxonomy: DepartmentTaxonomy = DEFAULT_TAXONOMY,
    stats: IndexStats | None = None,
) -> dict[GridKey, list[Record]]:
    """Group records by (month, department); out-of-scope records are dropped."""

    index: dict[GridKey, list[Record]] = {}
    for record in records:
        month = month_of(record)
        if month is None:
            if stats is not None:
                stats.missing_month += 1
            continue
        department = resolve_department_name(record, department_map)
        if department is None:
            if stats is not None:
                stats.missing_department += 1
            continue
        if not taxonomy.is_main(department):
            if stats is not None:
                stats.excluded_department += 1
            continue
        index.setdefault(GridKey(month, department), []).append(record)
        if stats is not None:
            stats.indexed += 1
    return index


@dataclass(slots=True)
class SourceIndices:
    targets: dict[GridKey, list[Record]] = field(default_factory=dict)
    monthly_progress: dict[GridKey, list[Record]] = field(default_factory=dict)
    major_events: dict[GridKey, list[Record]] = field(default_factory=dict)
    action_plans: dict[GridKey, list[Record]] = field(default_factory=dict)
    annual_plans: dict[GridKey, list[Record]] = field(default_factory=dict)
    stats: dict[str, IndexStats] = field(default_factory=dict)


def build_source_indices(
    collections: SourceCollections,
    *,
    department_map: Mapping[str, str],
    taxonomy: DepartmentTaxonomy = DEFAULT_TAXONOMY,
) -> SourceIndices:
    indices = SourceIndices()
    for name, records in collections.by_name().items():
        stats = IndexStats()
        index = build_index(
            records,
            MONTH_PROJECTORS[name],
            department_map=department_map,
            taxonomy=taxonomy,
            stats=stats,
        )
        setattr(indices, name, index)
        indices.stats[name] = stats
    return indices
