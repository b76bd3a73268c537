"""Period filtering and descriptive task aggregates."""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime, timedelta

from task_insights.features import (
    DEFAULT_COMPLETION_MINUTES,
    date_key,
    mode,
    percent,
    priority_weight,
    round_half_up,
    span_days,
    weekday_name,
)
from task_insights.schema import AnalyticsPeriod, CategoryAnalytics, Task, TaskAnalytics, TimeAnalytics

logger = logging.getLogger(__name__)

_PERIOD_WINDOWS = {
    "week": (7, "Last 7 days"),
    "month": (30, "Last 30 days"),
    "year": (365, "Last 12 months"),
}
_FALLBACK_PERIOD = "week"


def period_window(period: str, now: datetime) -> AnalyticsPeriod:
    """Resolve a period name into a concrete window ending at ``now``."""

    if period not in _PERIOD_WINDOWS:
        logger.warning("Unknown analytics period %r, falling back to %r", period, _FALLBACK_PERIOD)
        period = _FALLBACK_PERIOD
    days, label = _PERIOD_WINDOWS[period]
    return AnalyticsPeriod(name=period, label=label, start_date=now - timedelta(days=days), end_date=now)


def filter_by_period(tasks: list[Task], period, now: datetime) -> list[Task]:
    """Keep tasks created inside the window; ``period`` is a name or an AnalyticsPeriod."""

    window = period if isinstance(period, AnalyticsPeriod) else period_window(period, now)
    return [task for task in tasks if window.start_date <= task.created_at <= window.end_date]


def compute_overview(tasks: list[Task], now: datetime) -> TaskAnalytics:
    """Compute headline counts, rates and modes for a task set."""

    total = len(tasks)
    completed = sum(1 for task in tasks if task.completed)
    has_timed_completion = any(task.completed and task.completed_at for task in tasks)

    return TaskAnalytics(
        total_tasks=total,
        completed_tasks=completed,
        pending_tasks=total - completed,
        completion_rate=int(round_half_up(percent(completed, total))),
        average_tasks_per_day=round_half_up(total / span_days(tasks, now), 1),
        most_productive_day=mode((weekday_name(task.created_at) for task in tasks), "Monday"),
        most_common_category=mode((task.category for task in tasks), "Personal"),
        average_completion_time=DEFAULT_COMPLETION_MINUTES if has_timed_completion else 0,
    )


def compute_category_analytics(tasks: list[Task]) -> list[CategoryAnalytics]:
    stats: dict[str, dict] = defaultdict(lambda: {"total": 0, "completed": 0, "weights": []})
    for task in tasks:
        bucket = stats[task.category]
        bucket["total"] += 1
        bucket["completed"] += 1 if task.completed else 0
        bucket["weights"].append(priority_weight(task.priority))

    return [
        CategoryAnalytics(
            category=category,
            total_tasks=bucket["total"],
            completed_tasks=bucket["completed"],
            completion_rate=int(round_half_up(percent(bucket["completed"], bucket["total"]))),
            average_priority=round_half_up(sum(bucket["weights"]) / len(bucket["weights"]), 1),
        )
        for category, bucket in stats.items()
    ]


def compute_time_series(tasks: list[Task]) -> list[TimeAnalytics]:
    stats: dict[str, list[int]] = defaultdict(lambda: [0, 0])
    for task in tasks:
        bucket = stats[date_key(task.created_at)]
        bucket[0] += 1
        bucket[1] += 1 if task.completed else 0

    return [
        TimeAnalytics(
            date=day,
            tasks=count,
            completed=done,
            completion_rate=int(round_half_up(percent(done, count))),
        )
        for day, (count, done) in sorted(stats.items())
    ]
