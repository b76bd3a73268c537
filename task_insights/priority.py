"""Context-aware intelligent priority scoring and ranking."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from task_insights.advanced_metrics import peak_hours
from task_insights.features import days_between, mode, weekday_name
from task_insights.schema import PriorityContext, Task, parse_timestamp

_PRIORITY_POINTS = {"high": 40, "medium": 25, "low": 10}
_UNKNOWN_PRIORITY_POINTS = 20
_NO_EFFORT_POINTS = 5
_PATTERN_BONUS = 5
_AI_BONUS = 5
_FOCUS_BONUS = 5
_FOCUS_THRESHOLD = 25
_LOCATION_BONUS = 5
_MOBILE_QUICK_BONUS = 3
_CUSTOM_TAG_BONUS = 3


@dataclass(frozen=True)
class _PatternSignals:
    """Behavioral signals derived once from the full task list."""

    peak_hours: frozenset
    productive_weekday: Optional[str]

    @classmethod
    def from_tasks(cls, tasks: list[Task]) -> "_PatternSignals":
        weekday = mode((weekday_name(task.created_at) for task in tasks), None)
        return cls(peak_hours=frozenset(peak_hours(tasks)), productive_weekday=weekday)


def due_date_points(task: Task, now: datetime) -> int:
    if task.due_date is None:
        return 0
    days_until_due = days_between(now, task.due_date)
    if days_until_due <= 0:
        return 40
    if days_until_due < 1:
        return 35
    if days_until_due < 3:
        return 25
    if days_until_due < 7:
        return 15
    return 5


def priority_points(task: Task) -> int:
    return _PRIORITY_POINTS.get(task.priority, _UNKNOWN_PRIORITY_POINTS)


def effort_points(task: Task) -> int:
    """Lower effort earns more points."""

    if task.effort is None:
        return _NO_EFFORT_POINTS
    if task.effort <= 1:
        return 10
    if task.effort <= 2:
        return 7
    if task.effort <= 4:
        return 4
    return 1


def _pattern_points(task: Task, signals: _PatternSignals) -> int:
    points = 0
    if task.reminder_time is not None and task.reminder_time.hour in signals.peak_hours:
        points += _PATTERN_BONUS
    if (
        task.due_date is not None
        and signals.productive_weekday is not None
        and weekday_name(task.due_date) == signals.productive_weekday
    ):
        points += _PATTERN_BONUS
    return points


def _context_points(task: Task, context: PriorityContext, due_points: int, prio_points: int) -> int:
    points = 0
    if context.focus_mode:
        if due_points >= _FOCUS_THRESHOLD:
            points += _FOCUS_BONUS
        if prio_points >= _FOCUS_THRESHOLD:
            points += _FOCUS_BONUS
    if context.location and context.location in task.tags:
        points += _LOCATION_BONUS
    if context.device_state == "mobile" and task.effort is not None and task.effort <= 1:
        points += _MOBILE_QUICK_BONUS
    if context.custom_tags and any(tag in task.tags for tag in context.custom_tags):
        points += _CUSTOM_TAG_BONUS
    return points


def _score(
    task: Task,
    signals: _PatternSignals,
    now: datetime,
    context: PriorityContext,
    return_components: bool = False,
):
    due = due_date_points(task, now)
    prio = priority_points(task)
    components = {
        "due_date": due,
        "priority": prio,
        "effort": effort_points(task),
        "pattern": _pattern_points(task, signals),
        "ai_suggested": _AI_BONUS if task.ai_suggested else 0,
        "context": _context_points(task, context, due, prio),
    }
    total = max(0, min(100, sum(components.values())))

    if return_components:
        return {"score": total, **components}
    return total


def intelligent_priority_score(
    task: Task,
    all_tasks: list[Task],
    now: datetime,
    context: Optional[PriorityContext] = None,
    return_components: bool = False,
):
    """Score a task 0-100 by urgency, priority, effort, habits and situation."""

    signals = _PatternSignals.from_tasks(all_tasks)
    return _score(task, signals, parse_timestamp(now), context or PriorityContext(), return_components)


def rank_by_priority(
    tasks: list[Task], now: datetime, context: Optional[PriorityContext] = None
) -> list[Task]:
    """Order tasks by descending score; equal scores keep their input order."""

    signals = _PatternSignals.from_tasks(tasks)
    context = context or PriorityContext()
    now = parse_timestamp(now)
    scores = [_score(task, signals, now, context) for task in tasks]
    order = sorted(range(len(tasks)), key=lambda i: -scores[i])
    return [tasks[i] for i in order]
