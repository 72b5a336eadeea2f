"""Dashboard endpoints for completion statistics."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from annual_planning.db.dependencies import get_db_session
from annual_planning.services.planning_dashboard_service import PlanningDashboardService

router = APIRouter(prefix="/dashboards", tags=["dashboards"])


def _service(db: Session) -> PlanningDashboardService:
    return PlanningDashboardService(db)


@router.get("/completion")
def get_completion_dashboard(
    year: int | None = Query(default=None, ge=2000, le=2100),
    month: int | None = Query(default=None, ge=1, le=12),
    department: str | None = None,
    db: Session = Depends(get_db_session),
) -> dict[str, object]:
    service = _service(db)
    return service.completion_overview(year=year, month=month, department=department)


@router.get("/overview")
def get_overview_dashboard(
    year: int | None = Query(default=None, ge=2000, le=2100),
    month: int | None = Query(default=None, ge=1, le=12),
    department: str | None = None,
    db: Session = Depends(get_db_session),
) -> dict[str, object]:
    service = _service(db)
    return service.overview(year=year, month=month, department=department)
