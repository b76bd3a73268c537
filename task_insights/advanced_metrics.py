"""Advanced productivity metrics: velocity, focus, trend, burnout and load."""

from __future__ import annotations

from collections import Counter
from datetime import datetime, timedelta

import numpy as np

from task_insights.features import (
    completion_hours,
    completion_moment,
    date_key,
    days_between,
    hour_counts,
    hour_label,
    is_overdue,
    percent,
    round_half_up,
)
from task_insights.schema import AdvancedProductivityMetrics, Task, parse_timestamp

_FOCUS_CONSISTENCY_WEIGHT = 0.4
_FOCUS_COMPLETION_WEIGHT = 0.4
_FOCUS_ADHERENCE_WEIGHT = 0.2
_FOCUS_DEFAULT_UNTIMED = 50

_TREND_MIN_COMPLETED = 4
_TREND_DELTA = 0.1

_BURNOUT_WINDOW_DAYS = 7
_BURNOUT_DAILY_LOAD = 8
_BURNOUT_OVERDUE = 3
_BURNOUT_HIGH_PENDING = 2
_BURNOUT_HIGH_AT = 70
_BURNOUT_MEDIUM_AT = 40

_PEAK_HOUR_COUNT = 3
_DEFAULT_TASK_LOAD = 5
_MIN_TASK_LOAD = 3
_MAX_TASK_LOAD = 10

_OVERDUE_PENALTY_EACH = 5
_OVERDUE_PENALTY_CAP = 20


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def task_velocity(tasks: list[Task]) -> float:
    """Completed tasks per day across the span of completed work."""

    completed = [task for task in tasks if task.completed]
    if not completed:
        return 0.0

    first = min(task.created_at for task in completed)
    last = max(completion_moment(task) for task in completed)
    days = max(1.0, days_between(first, last))
    return round_half_up(len(completed) / days, 1)


def priority_adherence(tasks: list[Task]) -> int:
    """Share of high-priority tasks that are done, 0-100."""

    if not any(task.completed for task in tasks):
        return 0
    high = [task for task in tasks if task.priority == "high"]
    done = sum(1 for task in high if task.completed)
    return int(round_half_up(percent(done, len(high))))


def focus_score(tasks: list[Task]) -> int:
    """Blend completion-latency consistency, completion rate and priority adherence."""

    completed = [task for task in tasks if task.completed]
    if not completed:
        return 0

    hours = [value for value in (completion_hours(task) for task in completed) if value is not None]
    if not hours:
        return _FOCUS_DEFAULT_UNTIMED

    consistency = max(0.0, 100 - float(np.var(hours)) * 2)
    completion_rate = percent(len(completed), len(tasks))

    score = (
        consistency * _FOCUS_CONSISTENCY_WEIGHT
        + completion_rate * _FOCUS_COMPLETION_WEIGHT
        + priority_adherence(tasks) * _FOCUS_ADHERENCE_WEIGHT
    )
    return int(round_half_up(_clamp(score)))


def efficiency_trend(tasks: list[Task]) -> str:
    """Compare completion rates of the creation windows behind the recent and older halves."""

    completed = sorted((task for task in tasks if task.completed), key=completion_moment)
    if len(completed) < _TREND_MIN_COMPLETED:
        return "stable"

    midpoint = len(completed) // 2
    older, recent = completed[:midpoint], completed[midpoint:]
    pivot = recent[0].created_at

    recent_window = sum(1 for task in tasks if task.created_at >= pivot)
    older_window = sum(1 for task in tasks if task.created_at < pivot)
    if not recent_window or not older_window:
        return "stable"

    improvement = len(recent) / recent_window - len(older) / older_window
    if improvement > _TREND_DELTA:
        return "improving"
    if improvement < -_TREND_DELTA:
        return "declining"
    return "stable"


def burnout_risk(tasks: list[Task], now: datetime) -> str:
    window_start = now - timedelta(days=_BURNOUT_WINDOW_DAYS)
    daily_load = sum(1 for task in tasks if task.created_at >= window_start) / _BURNOUT_WINDOW_DAYS
    overdue = sum(1 for task in tasks if is_overdue(task, now))
    high_pending = sum(1 for task in tasks if not task.completed and task.priority == "high")

    risk = 0
    if daily_load > _BURNOUT_DAILY_LOAD:
        risk += 40
    if overdue > _BURNOUT_OVERDUE:
        risk += 30
    if high_pending > _BURNOUT_HIGH_PENDING:
        risk += 30

    if risk >= _BURNOUT_HIGH_AT:
        return "high"
    if risk >= _BURNOUT_MEDIUM_AT:
        return "medium"
    return "low"


def peak_hours(tasks: list[Task], count: int = _PEAK_HOUR_COUNT) -> list[int]:
    """Busiest creation hours (0-23) among completed tasks."""

    ranked = hour_counts(task.created_at.hour for task in tasks if task.completed)
    return [hour for hour, _ in ranked[:count]]


def peak_productivity_hours(tasks: list[Task], count: int = _PEAK_HOUR_COUNT) -> list[str]:
    return [hour_label(hour) for hour in peak_hours(tasks, count)]


def optimal_task_load(tasks: list[Task]) -> int:
    """Average completions per active day, kept within a sane daily range."""

    per_day = Counter(date_key(completion_moment(task)) for task in tasks if task.completed)
    if not per_day:
        return _DEFAULT_TASK_LOAD
    load = int(round_half_up(float(np.mean(list(per_day.values())))))
    return int(_clamp(load, _MIN_TASK_LOAD, _MAX_TASK_LOAD))


def productivity_score(tasks: list[Task], now: datetime) -> int:
    """Overall 0-100 score from completion rate, high-priority follow-through and overdue load."""

    if not tasks:
        return 0

    completion_rate = percent(sum(1 for task in tasks if task.completed), len(tasks))
    high = [task for task in tasks if task.priority == "high"]
    high_rate = percent(sum(1 for task in high if task.completed), len(high)) if high else 100.0
    overdue = sum(1 for task in tasks if is_overdue(task, now))
    penalty = min(_OVERDUE_PENALTY_CAP, overdue * _OVERDUE_PENALTY_EACH)

    score = completion_rate * 0.6 + high_rate * 0.4 - penalty
    return int(_clamp(round_half_up(score)))


def get_advanced_metrics(
    tasks: list[Task], now: datetime, peak_hour_count: int = _PEAK_HOUR_COUNT
) -> AdvancedProductivityMetrics:
    now = parse_timestamp(now)
    return AdvancedProductivityMetrics(
        task_velocity=task_velocity(tasks),
        focus_score=focus_score(tasks),
        efficiency_trend=efficiency_trend(tasks),
        burnout_risk=burnout_risk(tasks, now),
        peak_productivity_hours=peak_productivity_hours(tasks, peak_hour_count),
        optimal_task_load=optimal_task_load(tasks),
    )
