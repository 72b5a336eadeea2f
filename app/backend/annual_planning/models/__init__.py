"""ORM model package."""

from annual_planning.models.entities import (
    ActionPlan,
    AnnualWorkPlan,
    Department,
    DepartmentTarget,
    MajorEvent,
    MonthlyProgress,
)

__all__ = [
    "ActionPlan",
    "AnnualWorkPlan",
    "Department",
    "DepartmentTarget",
    "MajorEvent",
    "MonthlyProgress",
]
