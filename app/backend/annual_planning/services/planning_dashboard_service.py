"""Application service serving the annual chart and completion dashboards."""

from __future__ import annotations

import logging
from datetime import date

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from annual_planning.core.config import get_settings
from annual_planning.repositories.planning_repository import PlanningRepository
from annual_planning.services.completion_stats import CompletionOverview, CompletionStat
from annual_planning.services.departments import DepartmentTaxonomy
from annual_planning.services.pivot_grid import GridCell
from annual_planning.services.reconciliation import PlanningFilter, ReconciliationResult, reconcile
from annual_planning.services.sources import PlanningDataSource, collections_from_results, records_from_result
from annual_planning.services.totals import GridTotals, Totals

logger = logging.getLogger(__name__)


class PlanningDashboardService:
    """Fetches the planning collections and runs the reconciliation pass."""

    def __init__(self, db: Session, source: PlanningDataSource | None = None) -> None:
        self.db = db
        self.source: PlanningDataSource = source or PlanningRepository(db)
        self.settings = get_settings()
        self.taxonomy = DepartmentTaxonomy.from_settings(self.settings)

    # ---------- Selection ----------
    def resolve_selection(
        self,
        *,
        year: int | None,
        month: int | None,
        department: str | None,
    ) -> PlanningFilter:
        if month is not None and not 1 <= month <= 12:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="month must be between 1 and 12.",
            )
        selected = department.strip() if department else None
        if selected and not self.taxonomy.is_main(selected):
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=f"Department '{selected}' is not a reportable main department.",
            )
        return PlanningFilter(
            year=year if year is not None else date.today().year,
            month=month,
            department=selected or None,
        )

    # ---------- Reconciliation ----------
    def run(self, selection: PlanningFilter) -> ReconciliationResult:
        year = selection.year
        collections = collections_from_results(
            targets=self.source.get_department_targets(year=year),
            monthly_progress=self.source.get_monthly_progress(year=year),
            major_events=self.source.get_major_events(year=year),
            action_plans=self.source.get_action_plans(year=year),
            annual_plans=self.source.get_annual_plans(year=year),
        )
        departments = records_from_result("departments", self.source.get_departments(status="active"))
        return reconcile(
            collections,
            departments,
            selection,
            taxonomy=self.taxonomy,
            now=date.today(),
            grace_months=self.settings.status_deadline_grace_months,
        )

    # ---------- Serialization ----------
    @staticmethod
    def serialize_cell(cell: GridCell) -> dict[str, object]:
        return {
            "month": cell.month,
            "department": cell.department,
            "target": str(cell.target),
            "current": str(cell.current),
            "rate": str(cell.rate),
            "status": cell.status.value,
            "source": cell.source,
            "target_level": cell.target_level,
            "event_count": cell.event_count,
            "action_plan_count": cell.action_plan_count,
        }

    @staticmethod
    def serialize_totals(row: Totals) -> dict[str, str]:
        return {"target": str(row.target), "current": str(row.current)}

    @classmethod
    def serialize_grid_totals(cls, totals: GridTotals) -> dict[str, object]:
        return {
            "by_month": [
                {"month": month, **cls.serialize_totals(row)} for month, row in sorted(totals.by_month.items())
            ],
            "by_department": [
                {"department": name, **cls.serialize_totals(row)}
                for name, row in sorted(totals.by_department.items())
            ],
            "grand": cls.serialize_totals(totals.grand),
        }

    @staticmethod
    def serialize_stat(stat: CompletionStat) -> dict[str, int]:
        return {
            "total": stat.total,
            "completed": stat.completed,
            "in_progress": stat.in_progress,
            "rate": stat.rate,
        }

    @classmethod
    def serialize_completion(cls, overview: CompletionOverview) -> dict[str, object]:
        return {
            "modules": {name: cls.serialize_stat(stat) for name, stat in overview.modules.items()},
            "overall": cls.serialize_stat(overview.overall),
            "status_breakdown": {
                name: {state.value: count for state, count in counts.items()}
                for name, counts in overview.breakdown.items()
            },
        }

    @staticmethod
    def serialize_selection(selection: PlanningFilter) -> dict[str, object]:
        return {
            "year": selection.year,
            "month": selection.month,
            "department": selection.department,
        }

    # ---------- Views ----------
    def annual_chart(
        self,
        *,
        year: int | None,
        month: int | None = None,
        department: str | None = None,
    ) -> dict[str, object]:
        result = self.run(self.resolve_selection(year=year, month=month, department=department))
        return {
            "selection": self.serialize_selection(result.selection),
            "departments": list(result.departments),
            "cells": [self.serialize_cell(cell) for cell in result.cells],
            "totals": self.serialize_grid_totals(result.totals),
        }

    def completion_overview(
        self,
        *,
        year: int | None,
        month: int | None = None,
        department: str | None = None,
    ) -> dict[str, object]:
        result = self.run(self.resolve_selection(year=year, month=month, department=department))
        return {
            "selection": self.serialize_selection(result.selection),
            **self.serialize_completion(result.completion),
        }

    def overview(
        self,
        *,
        year: int | None,
        month: int | None = None,
        department: str | None = None,
    ) -> dict[str, object]:
        result = self.run(self.resolve_selection(year=year, month=month, department=department))
        logger.info(
            "Planning overview for %s: %d cells across %d departments",
            result.selection.year,
            len(result.cells),
            len(result.departments),
        )
        return {
            "selection": self.serialize_selection(result.selection),
            "departments": list(result.departments),
            "cells": [self.serialize_cell(cell) for cell in result.cells],
            "totals": self.serialize_grid_totals(result.totals),
            "completion": self.serialize_completion(result.completion),
        }
