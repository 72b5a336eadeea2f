"""Top-level API router."""

from fastapi import APIRouter

from annual_planning.api.routes.annual_chart import router as annual_chart_router
from annual_planning.api.routes.dashboards import router as dashboards_router
from annual_planning.api.routes.health import router as health_router

api_router = APIRouter()
api_router.include_router(health_router, tags=["health"])
api_router.include_router(annual_chart_router)
api_router.include_router(dashboards_router)
