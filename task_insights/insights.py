"""Productivity, category, priority and time-of-day insight generators."""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime

from task_insights.features import (
    DEFAULT_COMPLETION_MINUTES,
    PRIORITY_LEVELS,
    is_overdue,
    mode,
    percent,
    priority_bucket,
    round_half_up,
    span_days,
    time_slot,
    weekday_name,
)
from task_insights.schema import (
    AnalyticsInsights,
    CategoryInsights,
    PriorityInsights,
    ProductivityInsights,
    Task,
    TimeInsights,
)

_TREND_UP_ABOVE = 70
_TREND_DOWN_BELOW = 50
_MAX_STREAK_DAYS = 7


def productivity_insights(tasks: list[Task], now: datetime) -> ProductivityInsights:
    """Weekday and time-of-day peaks plus a coarse streak and trend estimate."""

    completion_rate = percent(sum(1 for task in tasks if task.completed), len(tasks))

    if completion_rate > _TREND_UP_ABOVE:
        trend = "up"
    elif completion_rate < _TREND_DOWN_BELOW:
        trend = "down"
    else:
        trend = "stable"

    return ProductivityInsights(
        most_productive_day=mode((weekday_name(task.created_at) for task in tasks), "Monday"),
        most_productive_time=mode((time_slot(task.created_at.hour) for task in tasks), "Morning"),
        average_tasks_per_day=round_half_up(len(tasks) / span_days(tasks, now), 1),
        completion_rate=int(round_half_up(completion_rate)),
        # Bounded proxy, not a true consecutive-day streak.
        streak_days=min(_MAX_STREAK_DAYS, int(completion_rate // 10)),
        improvement_trend=trend,
    )


def category_insights(tasks: list[Task]) -> CategoryInsights:
    """Most/least active categories and how evenly work spreads across them."""

    totals: dict[str, int] = defaultdict(int)
    done: dict[str, int] = defaultdict(int)
    for task in tasks:
        totals[task.category] += 1
        done[task.category] += 1 if task.completed else 0

    if not totals:
        return CategoryInsights(
            most_active_category="Personal",
            most_completed_category="Personal",
            least_active_category="Learning",
            category_balance=0,
        )

    # sorted() is stable, so equal scores keep first-encountered order.
    categories = list(totals)
    most_active = sorted(categories, key=lambda name: -totals[name])[0]
    most_completed = sorted(categories, key=lambda name: -(done[name] / totals[name]))[0]
    least_active = sorted(categories, key=lambda name: totals[name])[0]

    ideal = len(tasks) / len(categories)
    variance = sum((totals[name] - ideal) ** 2 for name in categories) / len(categories)
    balance = max(0.0, 100 - variance / len(tasks) * 100)

    return CategoryInsights(
        most_active_category=most_active,
        most_completed_category=most_completed,
        least_active_category=least_active,
        category_balance=int(round_half_up(balance)),
    )


def priority_insights(tasks: list[Task], now: datetime) -> PriorityInsights:
    distribution = {level: 0 for level in PRIORITY_LEVELS}
    completion = {level: 0 for level in PRIORITY_LEVELS}
    for task in tasks:
        bucket = priority_bucket(task.priority)
        distribution[bucket] += 1
        if task.completed:
            completion[bucket] += 1

    return PriorityInsights(
        priority_distribution=distribution,
        completion_by_priority=completion,
        overdue_tasks=sum(1 for task in tasks if is_overdue(task, now)),
    )


def time_insights(tasks: list[Task]) -> TimeInsights:
    """Completion-time insights.

    Every completed task is charged the placeholder duration, so the fastest
    and slowest categories both resolve to the first completed category until
    real durations are tracked.
    """

    durations: dict[str, list[int]] = defaultdict(list)
    for task in tasks:
        if task.completed:
            durations[task.category].append(DEFAULT_COMPLETION_MINUTES)

    means = {category: sum(values) / len(values) for category, values in durations.items()}
    fastest = sorted(means, key=lambda name: means[name])[0] if means else "Personal"
    slowest = sorted(means, key=lambda name: -means[name])[0] if means else "Work"

    return TimeInsights(
        average_completion_time=DEFAULT_COMPLETION_MINUTES if durations else 0,
        fastest_category=fastest,
        slowest_category=slowest,
        time_of_day_preference=mode((time_slot(task.created_at.hour) for task in tasks), "Morning"),
    )


def generate_insights(tasks: list[Task], now: datetime) -> AnalyticsInsights:
    return AnalyticsInsights(
        productivity=productivity_insights(tasks, now),
        categories=category_insights(tasks),
        priorities=priority_insights(tasks, now),
        time=time_insights(tasks),
    )
