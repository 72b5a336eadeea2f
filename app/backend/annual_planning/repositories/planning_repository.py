"""Read-only repository serving the planning record collections."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from annual_planning.db.base import Base
from annual_planning.models.entities import (
    ActionPlan,
    AnnualWorkPlan,
    Department,
    DepartmentTarget,
    MajorEvent,
    MonthlyProgress,
)
from annual_planning.services.sources import FetchResult

logger = logging.getLogger(__name__)


def _row_to_record(row: Base) -> dict[str, Any]:
    return {column.key: getattr(row, column.key) for column in row.__table__.columns}


class PlanningRepository:
    """Fetch operations used by the reconciliation service.

    Every call returns a ``FetchResult``; database errors are reported as
    ``success=False`` instead of being raised.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def _fetch(self, name: str, statement: Select) -> FetchResult:
        try:
            rows = self.db.scalars(statement).all()
        except SQLAlchemyError as exc:
            logger.error("Error fetching %s: %s", name, exc)
            self.db.rollback()
            return FetchResult(success=False, data=[], error=str(exc))
        return FetchResult(success=True, data=[_row_to_record(row) for row in rows])

    # ---------- Planning collections ----------
    def get_annual_plans(
        self,
        *,
        year: int,
        month: int | None = None,
        sheet_type: str | None = None,
    ) -> FetchResult:
        statement = select(AnnualWorkPlan).where(AnnualWorkPlan.year == year)
        if month is not None:
            statement = statement.where(AnnualWorkPlan.month == month)
        if sheet_type is not None:
            statement = statement.where(AnnualWorkPlan.sheet_type == sheet_type)
        return self._fetch("annual_plans", statement.order_by(AnnualWorkPlan.id.asc()))

    def get_department_targets(self, *, year: int) -> FetchResult:
        return self._fetch(
            "department_targets",
            select(DepartmentTarget).where(DepartmentTarget.year == year).order_by(DepartmentTarget.id.asc()),
        )

    def get_monthly_progress(self, *, year: int) -> FetchResult:
        return self._fetch(
            "monthly_progress",
            select(MonthlyProgress).where(MonthlyProgress.year == year).order_by(MonthlyProgress.id.asc()),
        )

    def get_major_events(self, *, year: int) -> FetchResult:
        return self._fetch(
            "major_events",
            select(MajorEvent).where(MajorEvent.year == year).order_by(MajorEvent.id.asc()),
        )

    def get_action_plans(self, *, year: int) -> FetchResult:
        return self._fetch(
            "action_plans",
            select(ActionPlan).where(ActionPlan.year == year).order_by(ActionPlan.id.asc()),
        )

    # ---------- Departments ----------
    def get_departments(self, *, status: str | None = "active") -> FetchResult:
        statement = select(Department)
        if status is not None:
            statement = statement.where(Department.status == status)
        result = self._fetch("departments", statement.order_by(Department.name.asc()))
        if result.success:
            result.data = [{"id": row["id"], "name": row["name"]} for row in result.data]
        return result
