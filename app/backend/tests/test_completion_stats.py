from __future__ import annotations

from datetime import date

from annual_planning.services.completion_stats import (
    MODULE_STRATEGIES,
    CompletionStat,
    aggregate,
    compute_completion_overview,
    overall_stat,
    status_breakdown,
)
from annual_planning.services.sources import SourceCollections
from annual_planning.services.status import ProgressStatus


def test_completion_stat_rate_is_half_up_and_safe_on_empty() -> None:
    assert CompletionStat(total=8, completed=1).rate == 13
    assert CompletionStat(total=4, completed=1).rate == 25
    assert CompletionStat().rate == 0


def test_targets_use_current_over_target() -> None:
    records = [
        {"current_value": 100, "target_value": 100},
        {"current_value": 50, "target_value": 100},
        {"current_value": 0, "target_value": 100},
        {"current_value": 5, "target_value": 0},
    ]

    stat = aggregate(records, MODULE_STRATEGIES["targets"])

    assert stat == CompletionStat(total=4, completed=1, in_progress=1)
    assert stat.rate == 25


def test_explicit_status_wins_over_progress() -> None:
    records = [
        {"status": "已完成"},
        {"status": "进行中", "progress": 100},
        {"status": "延期", "progress": 50},
        {"progress": 100},
        {"status": "unknown", "progress": 20},
        {},
    ]

    stat = aggregate(records, MODULE_STRATEGIES["major_events"])

    assert stat.total == 6
    assert stat.completed == 2
    assert stat.in_progress == 2
    assert stat.rate == 33


def test_module_specific_progress_extractors() -> None:
    monthly = aggregate(
        [{"target_value": 0, "completion_rate": "100%"}, {"target_value": 200, "actual_value": 50}],
        MODULE_STRATEGIES["monthly_progress"],
    )
    annual = aggregate(
        [{"progress": "100"}, {"budget": 1000, "actual_cost": 500}, {"budget": 0, "actual_cost": 500}],
        MODULE_STRATEGIES["annual_plans"],
    )

    assert monthly == CompletionStat(total=2, completed=1, in_progress=1)
    assert annual == CompletionStat(total=3, completed=1, in_progress=1)


def test_overall_rate_is_recomputed_from_counts() -> None:
    modules = {
        "targets": CompletionStat(total=4, completed=1, in_progress=1),
        "major_events": CompletionStat(total=5, completed=2, in_progress=1),
        "action_plans": CompletionStat(),
    }

    overall = overall_stat(modules)

    assert overall == CompletionStat(total=9, completed=3, in_progress=2)
    assert overall.rate == 33


def test_status_breakdown_applies_deadlines() -> None:
    records = [
        {"when": "2025-03-01", "progress": 40},
        {"when": "2025-12-01", "progress": 40},
        {"when": "2025-03-01", "progress": 0},
        {"when": "3月", "progress": 100},
        {"status": "逾期"},
    ]

    counts = status_breakdown(records, MODULE_STRATEGIES["action_plans"], now=date(2025, 6, 1))

    assert counts == {
        ProgressStatus.NOT_STARTED: 1,
        ProgressStatus.IN_PROGRESS: 1,
        ProgressStatus.COMPLETED: 1,
        ProgressStatus.DELAYED: 2,
    }


def test_compute_completion_overview_covers_every_module() -> None:
    collections = SourceCollections(
        targets=({"current_value": 100, "target_value": 100},),
        major_events=({"status": "进行中"},),
    )

    overview = compute_completion_overview(collections, now=date(2025, 6, 1))

    assert set(overview.modules) == {"targets", "monthly_progress", "major_events", "action_plans", "annual_plans"}
    assert overview.modules["action_plans"] == CompletionStat()
    assert overview.overall == CompletionStat(total=2, completed=1, in_progress=1)
    assert overview.overall.rate == 50
    assert overview.breakdown["major_events"][ProgressStatus.IN_PROGRESS] == 1
    assert sum(overview.breakdown["annual_plans"].values()) == 0
