from __future__ import annotations

from decimal import Decimal

from annual_planning.services.indexing import build_source_indices
from annual_planning.services.pivot_grid import GridCell, build_grid, scope_months
from annual_planning.services.sources import SourceCollections
from annual_planning.services.status import ProgressStatus
from annual_planning.services.totals import compute_totals


def _indices(**collections):
    return build_source_indices(
        SourceCollections(**{name: tuple(rows) for name, rows in collections.items()}),
        department_map={"1": "销售部"},
    )


def test_monthly_progress_takes_priority_over_targets() -> None:
    indices = _indices(
        targets=[{"department": "销售部", "month": 3, "target_value": 100, "current_value": 40}],
        monthly_progress=[{"department_id": 1, "month": 3, "target_value": 120, "actual_value": 120}],
    )

    [cell] = build_grid([3], ["销售部"], indices)

    assert cell.target == Decimal("120.00")
    assert cell.current == Decimal("120.00")
    assert cell.rate == Decimal("100.00")
    assert cell.source == "monthly_progress"
    assert cell.status is ProgressStatus.COMPLETED


def test_targets_fill_cells_without_monthly_progress() -> None:
    indices = _indices(
        targets=[
            {"department": "销售部", "month": 3, "target_value": "60", "current_value": "20"},
            {"department": "销售部", "month": 3, "target_value": "40", "current_value": "5"},
        ],
    )

    [cell] = build_grid([3], ["销售部"], indices)

    assert cell.target == Decimal("100.00")
    assert cell.current == Decimal("25.00")
    assert cell.rate == Decimal("25.00")
    assert cell.source == "targets"
    assert cell.status is ProgressStatus.IN_PROGRESS


def test_empty_and_zero_target_cells() -> None:
    indices = _indices(targets=[{"department": "销售部", "month": 4, "target_value": 0, "current_value": 30}])

    empty, zero_target = build_grid([3, 4], ["销售部"], indices)

    assert empty == GridCell(month=3, department="销售部")
    assert empty.source is None
    assert empty.status is ProgressStatus.NOT_STARTED
    assert zero_target.current == Decimal("30.00")
    assert zero_target.rate == Decimal("0.00")
    assert zero_target.status is ProgressStatus.NOT_STARTED


def test_grid_is_dense_and_month_major() -> None:
    departments = ["平台部", "销售部"]

    cells = build_grid(scope_months(None), departments, _indices())

    assert len(cells) == 12 * len(departments)
    assert [(cell.month, cell.department) for cell in cells[:3]] == [(1, "平台部"), (1, "销售部"), (2, "平台部")]
    assert scope_months(5) == [5]


def test_cell_carries_plan_level_and_activity_counts() -> None:
    indices = _indices(
        annual_plans=[{"department_name": "销售部", "month": 3, "target_level": "S"}],
        major_events=[
            {"responsible_department": "销售部", "planned_date": "2025-03-10"},
            {"responsible_department": "销售部", "month": 3},
            {"responsible_department": "销售部", "month": 4},
        ],
        action_plans=[{"department_id": 1, "when": "3月"}],
    )

    march, april = build_grid([3, 4], ["销售部"], indices)

    assert march.target_level == "S"
    assert march.event_count == 2
    assert march.action_plan_count == 1
    assert april.target_level == "A"
    assert april.event_count == 1


def test_compute_totals() -> None:
    cells = [
        GridCell(month=1, department="平台部", target=Decimal("10.00"), current=Decimal("5.00")),
        GridCell(month=1, department="销售部", target=Decimal("20.00"), current=Decimal("20.00")),
        GridCell(month=2, department="销售部", target=Decimal("0.50"), current=Decimal("0.25")),
    ]

    totals = compute_totals(cells)

    assert totals.by_month[1].target == Decimal("30.00")
    assert totals.by_month[1].current == Decimal("25.00")
    assert totals.by_department["销售部"].target == Decimal("20.50")
    assert totals.by_department["平台部"].current == Decimal("5.00")
    assert totals.grand.target == Decimal("30.50")
    assert totals.grand.current == Decimal("25.25")


def test_compute_totals_of_empty_grid() -> None:
    totals = compute_totals([])

    assert totals.by_month == {}
    assert totals.by_department == {}
    assert totals.grand.target == Decimal("0.00")


def test_huge_amounts_do_not_break_the_grid() -> None:
    indices = _indices(
        targets=[
            {"department": "销售部", "month": 3, "target_value": "1e30", "current_value": "5e29"},
            {"department": "销售部", "month": 4, "target_value": 1e27, "current_value": 0},
            {"department": "销售部", "month": 5, "target_value": "1e400", "current_value": 3},
        ],
    )

    march, april, may = build_grid([3, 4, 5], ["销售部"], indices)
    totals = compute_totals([march, april, may])

    assert march.target == Decimal("1e30")
    assert march.rate == Decimal("50.00")
    assert march.status is ProgressStatus.IN_PROGRESS
    assert april.target == Decimal("1e27")
    assert may.target == Decimal("0.00")
    assert may.current == Decimal("3.00")
    assert totals.grand.target == Decimal("1e30") + Decimal("1e27")
