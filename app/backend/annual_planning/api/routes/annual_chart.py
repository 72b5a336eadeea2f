"""Annual planning chart endpoint (month x department pivot grid)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from annual_planning.db.dependencies import get_db_session
from annual_planning.services.planning_dashboard_service import PlanningDashboardService

router = APIRouter(prefix="/annual-chart", tags=["annual-chart"])


def _service(db: Session) -> PlanningDashboardService:
    return PlanningDashboardService(db)


@router.get("")
def get_annual_chart(
    year: int | None = Query(default=None, ge=2000, le=2100),
    month: int | None = Query(default=None, ge=1, le=12),
    department: str | None = None,
    db: Session = Depends(get_db_session),
) -> dict[str, object]:
    service = _service(db)
    return service.annual_chart(year=year, month=month, department=department)
