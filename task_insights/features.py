"""Shared task feature extraction and grouping helpers."""

from __future__ import annotations

import math
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Iterable, Optional

from task_insights.schema import Task, parse_timestamp

# Placeholder duration until real per-task duration tracking exists.
DEFAULT_COMPLETION_MINUTES = 45

PRIORITY_WEIGHTS = {"high": 3, "medium": 2, "low": 1}
NEUTRAL_PRIORITY_WEIGHT = 2
PRIORITY_LEVELS = ("high", "medium", "low")

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
DAY = timedelta(days=1)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round to the nearest value, halves away from zero for positives."""

    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def percent(part: int, whole: int) -> float:
    return part / whole * 100.0 if whole else 0.0


def priority_weight(priority: str) -> int:
    return PRIORITY_WEIGHTS.get(priority, NEUTRAL_PRIORITY_WEIGHT)


def priority_bucket(priority: str) -> str:
    """Map a priority string onto one of the three buckets; unknown values count as medium."""

    return priority if priority in PRIORITY_WEIGHTS else "medium"


def weekday_name(moment: datetime) -> str:
    return WEEKDAYS[moment.weekday()]


def time_slot(hour: int) -> str:
    if 6 <= hour < 12:
        return "Morning"
    if 12 <= hour < 17:
        return "Afternoon"
    if 17 <= hour < 21:
        return "Evening"
    return "Night"


def hour_label(hour: int) -> str:
    """Format a 0-23 hour as a 12-hour clock label such as '9 AM' or '12 PM'."""

    suffix = "AM" if hour < 12 else "PM"
    display = hour % 12 or 12
    return f"{display} {suffix}"


def date_key(moment: datetime) -> str:
    return moment.date().isoformat()


def days_between(start: datetime, end: datetime) -> float:
    return (end - start) / DAY


def mode(values: Iterable, default):
    """Most frequent value; ties go to the value encountered first."""

    counts = Counter(values)
    if not counts:
        return default
    return counts.most_common(1)[0][0]


def hour_counts(hours: Iterable[int]) -> list[tuple[int, int]]:
    """(hour, count) pairs by descending count, ties resolved toward the earlier hour."""

    counts = Counter(hours)
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))


def completion_moment(task: Task) -> datetime:
    return task.completed_at or task.created_at


def completion_hours(task: Task) -> Optional[float]:
    """Elapsed hours from creation to completion, or None when unknown."""

    if not task.completed or task.completed_at is None:
        return None
    return (task.completed_at - task.created_at).total_seconds() / 3600.0


def is_overdue(task: Task, now: datetime) -> bool:
    return not task.completed and task.due_date is not None and task.due_date < now


def span_days(tasks: list[Task], now: datetime) -> int:
    """Whole days from the earliest creation to now, never below one."""

    if not tasks:
        return 1
    earliest = min(task.created_at for task in tasks)
    return max(1, math.ceil(days_between(earliest, now)))


@dataclass
class TaskIndex:
    """Grouped views over one task snapshot, built once per call."""

    tasks: list[Task]
    now: datetime
    completed: list[Task] = field(default_factory=list)
    pending: list[Task] = field(default_factory=list)
    by_similarity: dict[tuple[str, str], list[Task]] = field(default_factory=dict)
    overdue_count: int = 0

    @classmethod
    def build(cls, tasks: Iterable[Task], now: datetime) -> "TaskIndex":
        snapshot = list(tasks)
        now = parse_timestamp(now)
        groups: dict[tuple[str, str], list[Task]] = defaultdict(list)
        for task in snapshot:
            groups[(task.category, task.priority)].append(task)

        return cls(
            tasks=snapshot,
            now=now,
            completed=[task for task in snapshot if task.completed],
            pending=[task for task in snapshot if not task.completed],
            by_similarity=dict(groups),
            overdue_count=sum(1 for task in snapshot if is_overdue(task, now)),
        )

    def similar_to(self, task: Task) -> list[Task]:
        """Tasks sharing category and priority with ``task``, excluding itself."""

        group = self.by_similarity.get((task.category, task.priority), [])
        return [other for other in group if other.id != task.id]
