"""Actionable recommendations and narrative insights from productivity metrics."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from task_insights.advanced_metrics import get_advanced_metrics
from task_insights.config import DEFAULT_SETTINGS, EngineSettings
from task_insights.insights import category_insights, priority_insights
from task_insights.prediction import get_predictive_insights
from task_insights.schema import (
    AdvancedProductivityMetrics,
    CategoryInsights,
    PersonalizedInsights,
    PredictiveInsights,
    PriorityInsights,
    ProductivityRecommendation,
    Task,
    parse_timestamp,
)

_FOCUS_LOW = 60
_FOCUS_GOOD = 70
_FOCUS_POOR = 50
_FOCUS_EXCELLENT = 80
_PROBABILITY_LOW = 70
_PROBABILITY_HIGH = 80
_OVERDUE_LIMIT = 2
_BALANCE_LOW = 50
_BALANCE_HIGH = 70
_BACKLOG_MINUTES_LIMIT = 480


def _plain_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def generate_recommendations(
    advanced: AdvancedProductivityMetrics,
    predictive: PredictiveInsights,
    priorities: PriorityInsights,
    limit: int = DEFAULT_SETTINGS.recommendation_limit,
) -> list[ProductivityRecommendation]:
    """Evaluate each rule independently, then keep the highest-impact ones."""

    recommendations = []

    if advanced.burnout_risk == "high":
        recommendations.append(
            ProductivityRecommendation(
                id="workload-reduce",
                type="workload",
                title="Reduce Daily Task Load",
                description=(
                    "You're currently at high risk of burnout. Consider reducing your daily task load "
                    f"from {advanced.optimal_task_load} to {max(3, advanced.optimal_task_load - 2)} tasks per day."
                ),
                priority="high",
                impact=85,
                actionable=True,
                action_text="Review and prioritize tasks",
            )
        )

    if advanced.focus_score < _FOCUS_LOW:
        recommendations.append(
            ProductivityRecommendation(
                id="focus-improve",
                type="focus",
                title="Improve Task Focus",
                description=(
                    "Your focus score is below average. Try completing similar tasks in batches "
                    "and minimize interruptions during work sessions."
                ),
                priority="medium",
                impact=70,
                actionable=True,
                action_text="Enable focus mode",
            )
        )

    if predictive.completion_probability < _PROBABILITY_LOW:
        recommendations.append(
            ProductivityRecommendation(
                id="time-estimation",
                type="time",
                title="Improve Time Estimation",
                description=(
                    f"Your tasks have a {predictive.completion_probability}% completion probability. "
                    "Consider adding buffer time to your estimates."
                ),
                priority="medium",
                impact=60,
                actionable=True,
                action_text="Review time estimates",
            )
        )

    if priorities.overdue_tasks > _OVERDUE_LIMIT:
        recommendations.append(
            ProductivityRecommendation(
                id="priority-review",
                type="priority",
                title="Review Task Priorities",
                description=(
                    f"You have {priorities.overdue_tasks} overdue tasks. "
                    "Consider reprioritizing or rescheduling them."
                ),
                priority="high",
                impact=80,
                actionable=True,
                action_text="Review overdue tasks",
            )
        )

    if advanced.peak_productivity_hours:
        recommendations.append(
            ProductivityRecommendation(
                id="schedule-optimize",
                type="schedule",
                title="Optimize Your Schedule",
                description=(
                    f"Your peak productivity hours are {', '.join(advanced.peak_productivity_hours)}. "
                    "Schedule important tasks during these times."
                ),
                priority="medium",
                impact=65,
                actionable=True,
                action_text="Schedule important tasks",
            )
        )

    if advanced.efficiency_trend == "declining":
        recommendations.append(
            ProductivityRecommendation(
                id="efficiency-review",
                type="workload",
                title="Review Work Patterns",
                description=(
                    "Your efficiency has been declining. Consider taking breaks between tasks "
                    "and reviewing your work environment."
                ),
                priority="medium",
                impact=55,
                actionable=True,
                action_text="Take a break",
            )
        )

    return sorted(recommendations, key=lambda rec: rec.impact, reverse=True)[:limit]


def top_insights(
    advanced: AdvancedProductivityMetrics,
    predictive: PredictiveInsights,
    limit: int = DEFAULT_SETTINGS.narrative_limit,
) -> list[str]:
    insights = []
    if advanced.task_velocity > 0:
        insights.append(f"You complete an average of {_plain_number(advanced.task_velocity)} tasks per day")
    if advanced.focus_score > _FOCUS_GOOD:
        insights.append(f"Your focus score of {advanced.focus_score}% is excellent")
    elif advanced.focus_score < _FOCUS_POOR:
        insights.append(f"Your focus score of {advanced.focus_score}% has room for improvement")
    if advanced.peak_productivity_hours:
        insights.append(f"You're most productive during {advanced.peak_productivity_hours[0]}")
    if predictive.completion_probability > _PROBABILITY_HIGH:
        insights.append(
            f"You have a {predictive.completion_probability}% chance of completing your pending tasks"
        )
    if advanced.efficiency_trend == "improving":
        insights.append("Your productivity is trending upward - great work!")
    return insights[:limit]


def improvement_areas(
    advanced: AdvancedProductivityMetrics,
    priorities: PriorityInsights,
    categories: CategoryInsights,
    limit: int = DEFAULT_SETTINGS.narrative_limit,
) -> list[str]:
    areas = []
    if advanced.focus_score < _FOCUS_LOW:
        areas.append("Task focus and concentration")
    if priorities.overdue_tasks > _OVERDUE_LIMIT:
        areas.append("Meeting deadlines and due dates")
    if advanced.burnout_risk == "high":
        areas.append("Workload management and stress")
    if advanced.efficiency_trend == "declining":
        areas.append("Maintaining consistent productivity")
    if categories.category_balance < _BALANCE_LOW:
        areas.append("Balancing work across different categories")
    return areas[:limit]


def strengths(
    advanced: AdvancedProductivityMetrics,
    priorities: PriorityInsights,
    categories: CategoryInsights,
    limit: int = DEFAULT_SETTINGS.narrative_limit,
) -> list[str]:
    found = []
    if advanced.focus_score > _FOCUS_EXCELLENT:
        found.append("Excellent task focus and concentration")
    if priorities.completion_by_priority["high"] > 0:
        found.append("Strong completion of high-priority tasks")
    if advanced.efficiency_trend == "improving":
        found.append("Consistent productivity improvement")
    if advanced.burnout_risk == "low":
        found.append("Good workload management")
    if categories.category_balance > _BALANCE_HIGH:
        found.append("Well-balanced work across categories")
    return found[:limit]


def get_personalized_insights(
    tasks: list[Task], now: datetime, settings: Optional[EngineSettings] = None
) -> PersonalizedInsights:
    """Recommendations plus narrative insights over the full task list."""

    now = parse_timestamp(now)
    settings = settings or DEFAULT_SETTINGS
    advanced = get_advanced_metrics(tasks, now, settings.peak_hour_count)
    predictive = get_predictive_insights(tasks, now)
    priorities = priority_insights(tasks, now)
    categories = category_insights(tasks)

    return PersonalizedInsights(
        recommendations=generate_recommendations(advanced, predictive, priorities, settings.recommendation_limit),
        top_insights=top_insights(advanced, predictive, settings.narrative_limit),
        improvement_areas=improvement_areas(advanced, priorities, categories, settings.narrative_limit),
        strengths=strengths(advanced, priorities, categories, settings.narrative_limit),
    )


def workload_optimization_tips(tasks: list[Task], now: datetime) -> list[str]:
    advanced = get_advanced_metrics(tasks, now)
    tips = []
    if advanced.burnout_risk == "high":
        tips.extend(
            [
                "Consider reducing your daily task load by 20%",
                "Schedule breaks between task clusters",
                "Delegate or postpone non-urgent tasks",
            ]
        )
    if advanced.optimal_task_load > 8:
        tips.append(f"Your optimal daily task load is {advanced.optimal_task_load} tasks")
        tips.append("Break large tasks into smaller, manageable pieces")
    return tips


def focus_improvement_tips(tasks: list[Task], now: datetime) -> list[str]:
    advanced = get_advanced_metrics(tasks, now)
    tips = []
    if advanced.focus_score < _FOCUS_GOOD:
        tips.extend(
            [
                "Complete similar tasks in batches to maintain focus",
                "Minimize interruptions during work sessions",
                "Use the Pomodoro technique (25-minute focused work periods)",
                "Schedule important tasks during your peak hours",
            ]
        )
    if advanced.peak_productivity_hours:
        tips.append(f"Schedule complex tasks during {advanced.peak_productivity_hours[0]}")
    return tips


def time_management_advice(tasks: list[Task], now: datetime) -> list[str]:
    predictive = get_predictive_insights(tasks, now)
    advanced = get_advanced_metrics(tasks, now)
    advice = []
    if predictive.completion_probability < _PROBABILITY_HIGH:
        advice.append("Add 20% buffer time to your task estimates")
        advice.append("Review and adjust due dates for realistic timelines")
    if predictive.estimated_completion_time > _BACKLOG_MINUTES_LIMIT:
        advice.append("Consider spreading tasks across multiple days")
        advice.append("Prioritize tasks that can be completed quickly")
    if advanced.optimal_task_load > 6:
        advice.append("Limit daily tasks to maintain quality and focus")
    return advice
