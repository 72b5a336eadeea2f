"""End-to-end reconciliation pass: departments, indices, grid, totals, stats."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime

from annual_planning.services.completion_stats import CompletionOverview, compute_completion_overview
from annual_planning.services.departments import (
    DEFAULT_TAXONOMY,
    DepartmentTaxonomy,
    build_department_map,
    collect_main_departments,
    resolve_department_name,
)
from annual_planning.services.indexing import MONTH_PROJECTORS, build_source_indices
from annual_planning.services.pivot_grid import GridCell, build_grid, scope_months
from annual_planning.services.sources import Record, SourceCollections
from annual_planning.services.totals import GridTotals, compute_totals

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PlanningFilter:
    year: int
    month: int | None = None
    department: str | None = None


@dataclass(frozen=True, slots=True)
class ReconciliationResult:
    selection: PlanningFilter
    departments: list[str]
    cells: list[GridCell]
    totals: GridTotals
    completion: CompletionOverview


def scope_departments(
    all_departments: Sequence[str],
    selected: str | None,
    taxonomy: DepartmentTaxonomy = DEFAULT_TAXONOMY,
) -> list[str]:
    if selected is None or not selected.strip():
        return list(all_departments)
    name = selected.strip()
    return [name] if name in all_departments and taxonomy.is_main(name) else []


def _filter_for_stats(
    collections: SourceCollections,
    selection: PlanningFilter,
    department_map: Mapping[str, str],
) -> SourceCollections:
    department = selection.department.strip() if selection.department else None
    if not department and selection.month is None:
        return collections

    def keep(name: str, record: Record) -> bool:
        if department and resolve_department_name(record, department_map) != department:
            return False
        if selection.month is not None and MONTH_PROJECTORS[name](record) != selection.month:
            return False
        return True

    return SourceCollections(
        **{
            name: tuple(record for record in records if keep(name, record))
            for name, records in collections.by_name().items()
        }
    )


def reconcile(
    collections: SourceCollections,
    departments: Sequence[Mapping[str, object]],
    selection: PlanningFilter,
    *,
    taxonomy: DepartmentTaxonomy = DEFAULT_TAXONOMY,
    now: datetime | date | None = None,
    grace_months: int = 0,
) -> ReconciliationResult:
    """Compute the grid, its totals and completion statistics.

    A pure function of its inputs: identical collections, selection and
    ``now`` give identical results.
    """

    department_map = build_department_map(departments)
    all_departments = collect_main_departments(
        collections.by_name().values(),
        departments,
        department_map,
        taxonomy,
    )
    grid_departments = scope_departments(all_departments, selection.department, taxonomy)

    indices = build_source_indices(collections, department_map=department_map, taxonomy=taxonomy)
    for name, stats in indices.stats.items():
        logger.debug(
            "Indexed %s: %d records in grid, %d dropped (month=%d, department=%d, excluded=%d)",
            name,
            stats.indexed,
            stats.dropped,
            stats.missing_month,
            stats.missing_department,
            stats.excluded_department,
        )

    cells = build_grid(scope_months(selection.month), grid_departments, indices)
    totals = compute_totals(cells)
    completion = compute_completion_overview(
        _filter_for_stats(collections, selection, department_map),
        now=now,
        grace_months=grace_months,
    )

    return ReconciliationResult(
        selection=selection,
        departments=grid_departments,
        cells=cells,
        totals=totals,
        completion=completion,
    )
