"""Similarity-based completion predictions for pending tasks."""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Optional

import numpy as np

from task_insights.advanced_metrics import efficiency_trend, productivity_score
from task_insights.features import (
    DEFAULT_COMPLETION_MINUTES,
    TaskIndex,
    completion_hours,
    completion_moment,
    days_between,
    hour_counts,
    hour_label,
    mode,
    priority_weight,
    round_half_up,
)
from task_insights.schema import PredictiveInsights, Task, TaskPrediction

logger = logging.getLogger(__name__)

_DEFAULT_PROBABILITY = 70
_DEFAULT_CONFIDENCE = 30
_DEFAULT_SCHEDULING_HOUR = 9
_EMPTY_BACKLOG_PROBABILITY = 100
_EMPTY_BACKLOG_PRODUCTIVITY = 100

_PRIORITY_TIME_FACTORS = {"high": 0.8, "low": 1.2}
_TREND_FACTORS = {"improving": 1.1, "declining": 0.9, "stable": 1.0}

_BACKLOG_OVERDUE_LIMIT = 2
_BACKLOG_FACTOR = 0.9
_DUE_SOON_DAYS = 1
_DUE_SOON_FACTOR = 0.8
_DUE_LATER_DAYS = 7
_DUE_LATER_FACTOR = 1.1

_CONFIDENCE_PER_SIMILAR = 10
_CONFIDENCE_CAP = 90
_COMPLEXITY_TITLE_LENGTH = 50
_COMPLEXITY_MAX_PENALTY = 0.3

_ORDER_PROBABILITY_WEIGHT = 0.4
_ORDER_PRIORITY_WEIGHT = 20
_ORDER_URGENCY_HORIZON = 10


def similar_tasks(task: Task, index: TaskIndex) -> list[Task]:
    return index.similar_to(task)


def estimate_completion_time(task: Task, index: TaskIndex) -> int:
    """Mean elapsed minutes of similar completed tasks, scaled by priority."""

    minutes = [
        hours * 60
        for hours in (completion_hours(other) for other in similar_tasks(task, index))
        if hours is not None
    ]
    if not minutes:
        return DEFAULT_COMPLETION_MINUTES

    estimate = float(np.mean(minutes)) * _PRIORITY_TIME_FACTORS.get(task.priority, 1.0)
    return int(round_half_up(estimate))


def completion_probability(task: Task, index: TaskIndex) -> int:
    similar = similar_tasks(task, index)
    if not similar:
        return _DEFAULT_PROBABILITY

    probability = sum(1 for other in similar if other.completed) / len(similar) * 100
    if index.overdue_count > _BACKLOG_OVERDUE_LIMIT:
        probability *= _BACKLOG_FACTOR

    if task.due_date is not None:
        days_until_due = days_between(index.now, task.due_date)
        if days_until_due < _DUE_SOON_DAYS:
            probability *= _DUE_SOON_FACTOR
        if days_until_due > _DUE_LATER_DAYS:
            probability *= _DUE_LATER_FACTOR

    return int(round_half_up(max(0.0, min(100.0, probability))))


def optimal_scheduling(task: Task, index: TaskIndex) -> str:
    """Hour at which similar tasks most often get finished."""

    ranked = hour_counts(
        completion_moment(other).hour for other in similar_tasks(task, index) if other.completed
    )
    if not ranked:
        return hour_label(_DEFAULT_SCHEDULING_HOUR)
    return hour_label(ranked[0][0])


def prediction_confidence(task: Task, index: TaskIndex) -> int:
    similar = similar_tasks(task, index)
    if not similar:
        return _DEFAULT_CONFIDENCE

    base = min(_CONFIDENCE_CAP, len(similar) * _CONFIDENCE_PER_SIMILAR)
    # Longer titles stand in for more complex work.
    complexity = min(1.0, len(task.title) / _COMPLEXITY_TITLE_LENGTH)
    return int(round_half_up(base * (1 - complexity * _COMPLEXITY_MAX_PENALTY)))


def predict_task(task: Task, all_tasks, now: Optional[datetime] = None) -> TaskPrediction:
    """Predict outcome figures for one task.

    ``all_tasks`` is either a prebuilt :class:`TaskIndex` or a task list, in
    which case ``now`` is required.
    """

    if isinstance(all_tasks, TaskIndex):
        index = all_tasks
    elif now is None:
        raise ValueError("predict_task needs a reference time when given a plain task list")
    else:
        index = TaskIndex.build(all_tasks, now)
    return TaskPrediction(
        task_id=task.id,
        estimated_time=estimate_completion_time(task, index),
        completion_probability=completion_probability(task, index),
        optimal_time=optimal_scheduling(task, index),
        confidence=prediction_confidence(task, index),
    )


def _urgency_score(task: Task, now: datetime) -> int:
    if task.due_date is None:
        return 0
    return max(0, _ORDER_URGENCY_HORIZON - math.floor(days_between(now, task.due_date)))


def recommended_task_order(index: TaskIndex, predictions: dict[str, TaskPrediction]) -> list[str]:
    """Pending task ids ordered by likelihood, priority and due-date urgency."""

    def score(task: Task) -> float:
        return (
            predictions[task.id].completion_probability * _ORDER_PROBABILITY_WEIGHT
            + priority_weight(task.priority) * _ORDER_PRIORITY_WEIGHT
            + _urgency_score(task, index.now)
        )

    return [task.id for task in sorted(index.pending, key=score, reverse=True)]


def expected_productivity(index: TaskIndex, predictions: list[TaskPrediction]) -> int:
    if not predictions:
        return _EMPTY_BACKLOG_PRODUCTIVITY

    mean_probability = float(np.mean([p.completion_probability for p in predictions]))
    current = productivity_score(index.tasks, index.now)
    trend_factor = _TREND_FACTORS[efficiency_trend(index.tasks)]

    expected = mean_probability * 0.7 + current * 0.3 * trend_factor
    return int(round_half_up(max(0.0, min(100.0, expected))))


def get_predictive_insights(tasks: list[Task], now: datetime) -> PredictiveInsights:
    """Aggregate per-task predictions over the whole pending backlog."""

    index = TaskIndex.build(tasks, now)
    predictions = {task.id: predict_task(task, index) for task in index.pending}
    ordered = [predictions[task.id] for task in index.pending]
    logger.debug("Predicted %d pending tasks out of %d", len(ordered), len(index.tasks))

    if ordered:
        probability = int(round_half_up(float(np.mean([p.completion_probability for p in ordered]))))
    else:
        probability = _EMPTY_BACKLOG_PROBABILITY

    return PredictiveInsights(
        estimated_completion_time=int(sum(p.estimated_time for p in ordered)),
        completion_probability=probability,
        optimal_scheduling_time=mode((p.optimal_time for p in ordered), hour_label(_DEFAULT_SCHEDULING_HOUR)),
        recommended_task_order=recommended_task_order(index, predictions),
        expected_productivity=expected_productivity(index, ordered),
    )
