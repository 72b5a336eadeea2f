from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from annual_planning.db.base import Base
from annual_planning.db.dependencies import get_db_session
from annual_planning.main import create_app
from annual_planning.models.entities import (
    ActionPlan,
    AnnualWorkPlan,
    Department,
    DepartmentTarget,
    MajorEvent,
    MonthlyProgress,
)
from annual_planning.services.sources import FetchResult

TEST_TABLES = [
    Department.__table__,
    AnnualWorkPlan.__table__,
    DepartmentTarget.__table__,
    MonthlyProgress.__table__,
    MajorEvent.__table__,
    ActionPlan.__table__,
]


@pytest.fixture()
def db_session() -> Generator[Session, None, None]:
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=engine, tables=TEST_TABLES)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine, tables=TEST_TABLES)


@pytest.fixture()
def client(db_session: Session) -> Generator[TestClient, None, None]:
    app = create_app()

    def override_db() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[get_db_session] = override_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class FakePlanningSource:
    """In-memory data source returning canned fetch results."""

    def __init__(
        self,
        *,
        targets: list[dict] | None = None,
        monthly_progress: list[dict] | None = None,
        major_events: list[dict] | None = None,
        action_plans: list[dict] | None = None,
        annual_plans: list[dict] | None = None,
        departments: list[dict] | None = None,
        failing: set[str] | None = None,
    ) -> None:
        self.payloads = {
            "targets": targets or [],
            "monthly_progress": monthly_progress or [],
            "major_events": major_events or [],
            "action_plans": action_plans or [],
            "annual_plans": annual_plans or [],
            "departments": departments or [],
        }
        self.failing = failing or set()
        self.calls: list[tuple[str, dict]] = []

    def _result(self, name: str, **params: object) -> FetchResult:
        self.calls.append((name, params))
        if name in self.failing:
            return FetchResult(success=False, data=[], error="boom")
        return FetchResult(success=True, data=list(self.payloads[name]))

    def get_annual_plans(self, *, year: int, month: int | None = None) -> FetchResult:
        return self._result("annual_plans", year=year, month=month)

    def get_department_targets(self, *, year: int) -> FetchResult:
        return self._result("targets", year=year)

    def get_monthly_progress(self, *, year: int) -> FetchResult:
        return self._result("monthly_progress", year=year)

    def get_major_events(self, *, year: int) -> FetchResult:
        return self._result("major_events", year=year)

    def get_action_plans(self, *, year: int) -> FetchResult:
        return self._result("action_plans", year=year)

    def get_departments(self, *, status: str | None = "active") -> FetchResult:
        return self._result("departments", status=status)


@pytest.fixture()
def fake_source_factory():
    return FakePlanningSource
