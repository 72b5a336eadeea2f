"""Per-month, per-department and grand totals over the pivot grid."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal

from annual_planning.services.pivot_grid import GridCell
from annual_planning.services.values import ZERO, q2, to_decimal


@dataclass(frozen=True, slots=True)
class Totals:
    target: Decimal = ZERO
    current: Decimal = ZERO

    def add(self, target: Decimal, current: Decimal) -> Totals:
        return Totals(target=self.target + target, current=self.current + current)


@dataclass(frozen=True, slots=True)
class GridTotals:
    by_month: dict[int, Totals] = field(default_factory=dict)
    by_department: dict[str, Totals] = field(default_factory=dict)
    grand: Totals = Totals()


def compute_totals(cells: Iterable[GridCell]) -> GridTotals:
    by_month: dict[int, Totals] = {}
    by_department: dict[str, Totals] = {}
    grand = Totals()

    for cell in cells:
        target = to_decimal(cell.target)
        current = to_decimal(cell.current)
        by_month[cell.month] = by_month.get(cell.month, Totals()).add(target, current)
        by_department[cell.department] = by_department.get(cell.department, Totals()).add(target, current)
        grand = grand.add(target, current)

    return GridTotals(
        by_month={month: Totals(q2(row.target), q2(row.current)) for month, row in by_month.items()},
        by_department={name: Totals(q2(row.target), q2(row.current)) for name, row in by_department.items()},
        grand=Totals(q2(grand.target), q2(grand.current)),
    )
