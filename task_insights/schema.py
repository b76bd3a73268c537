"""Core data schema for tasks and analytics value objects."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from typing import Any, Optional

_REQUIRED_FIELDS = ("id", "title", "created_at")
_TIMESTAMP_FIELDS = ("created_at", "completed_at", "due_date", "reminder_time")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO instant into an aware datetime; naive values are taken as UTC."""

    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _plain(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    return value


class _Record:
    """Mixin rendering a dataclass into camelCase transport keys."""

    def to_dict(self) -> dict:
        return {_camel(f.name): _plain(getattr(self, f.name)) for f in fields(self)}


@dataclass(frozen=True)
class Task(_Record):
    """User-tracked unit of work, read-only to the engine."""

    id: str
    title: str
    category: str
    priority: str
    completed: bool
    created_at: datetime
    completed_at: Optional[datetime] = None
    due_date: Optional[datetime] = None
    tags: tuple[str, ...] = ()
    reminder_time: Optional[datetime] = None
    ai_suggested: bool = False
    effort: Optional[float] = None
    description: Optional[str] = None
    user_id: Optional[str] = None

    def __post_init__(self):
        for name in _TIMESTAMP_FIELDS:
            object.__setattr__(self, name, parse_timestamp(getattr(self, name)))

    @classmethod
    def from_dict(cls, item: dict, index: int = 1, label: str = "Item") -> "Task":
        """Build a task from a storage-style mapping with ISO timestamp strings."""

        missing = [name for name in _REQUIRED_FIELDS if item.get(name) in (None, "")]
        if missing:
            raise ValueError(f"{label} {index}: missing required fields {missing}")

        timestamps = {}
        for name in _TIMESTAMP_FIELDS:
            try:
                timestamps[name] = parse_timestamp(item.get(name))
            except (TypeError, ValueError) as exc:
                raise ValueError(f"{label} {index}: malformed {name}") from exc

        effort_raw = item.get("effort")
        effort = None
        if effort_raw not in (None, ""):
            try:
                effort = float(effort_raw)
            except (TypeError, ValueError) as exc:
                raise ValueError(f"{label} {index}: invalid effort") from exc

        tags = item.get("tags") or ()
        if isinstance(tags, str):
            tags = [tag.strip() for tag in tags.split(";") if tag.strip()]

        return cls(
            id=str(item["id"]).strip(),
            title=str(item["title"]),
            category=str(item.get("category") or "Personal").strip(),
            priority=str(item.get("priority") or "medium").strip().lower(),
            completed=_as_bool(item.get("completed", False)),
            created_at=timestamps["created_at"],
            completed_at=timestamps["completed_at"],
            due_date=timestamps["due_date"],
            tags=tuple(str(tag) for tag in tags),
            reminder_time=timestamps["reminder_time"],
            ai_suggested=_as_bool(item.get("ai_suggested", False)),
            effort=effort,
            description=item.get("description") or None,
            user_id=item.get("user_id") or None,
        )


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y"}
    return bool(value)


@dataclass(frozen=True)
class PriorityContext:
    """Situational signals for the intelligent priority scorer."""

    focus_mode: bool = False
    location: Optional[str] = None
    device_state: Optional[str] = None
    custom_tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class AnalyticsPeriod(_Record):
    """Named reporting window ending at the reference instant."""

    name: str
    label: str
    start_date: datetime
    end_date: datetime


@dataclass(frozen=True)
class TaskAnalytics(_Record):
    """Headline counts and rates for a task set."""

    total_tasks: int
    completed_tasks: int
    pending_tasks: int
    completion_rate: int
    average_tasks_per_day: float
    most_productive_day: str
    most_common_category: str
    average_completion_time: int


@dataclass(frozen=True)
class CategoryAnalytics(_Record):
    """Per-category totals, completion rate and mean priority weight."""

    category: str
    total_tasks: int
    completed_tasks: int
    completion_rate: int
    average_priority: float


@dataclass(frozen=True)
class TimeAnalytics(_Record):
    """Tasks created and completed on one calendar day."""

    date: str
    tasks: int
    completed: int
    completion_rate: int


@dataclass(frozen=True)
class ProductivityInsights(_Record):
    """Peak day and time slot with a coarse streak and trend."""

    most_productive_day: str
    most_productive_time: str
    average_tasks_per_day: float
    completion_rate: int
    streak_days: int
    improvement_trend: str


@dataclass(frozen=True)
class CategoryInsights(_Record):
    """Most and least active categories and their balance."""

    most_active_category: str
    most_completed_category: str
    least_active_category: str
    category_balance: int


@dataclass(frozen=True)
class PriorityInsights(_Record):
    """Task and completion counts per priority bucket."""

    priority_distribution: dict
    completion_by_priority: dict
    overdue_tasks: int


@dataclass(frozen=True)
class TimeInsights(_Record):
    """Completion-time figures and the preferred time of day."""

    average_completion_time: int
    fastest_category: str
    slowest_category: str
    time_of_day_preference: str


@dataclass(frozen=True)
class AnalyticsInsights(_Record):
    """All four insight groups for one snapshot."""

    productivity: ProductivityInsights
    categories: CategoryInsights
    priorities: PriorityInsights
    time: TimeInsights


@dataclass(frozen=True)
class AnalyticsData(_Record):
    """Period-scoped analytics snapshot consumed by the presentation layer."""

    period: AnalyticsPeriod
    overview: TaskAnalytics
    categories: list[CategoryAnalytics]
    time_data: list[TimeAnalytics]
    insights: AnalyticsInsights


@dataclass(frozen=True)
class AdvancedProductivityMetrics(_Record):
    """Derived productivity indicators over the full task list."""

    task_velocity: float
    focus_score: int
    efficiency_trend: str
    burnout_risk: str
    peak_productivity_hours: list[str]
    optimal_task_load: int


@dataclass(frozen=True)
class TaskPrediction(_Record):
    """Predicted outcome figures for one pending task."""

    task_id: str
    estimated_time: int
    completion_probability: int
    optimal_time: str
    confidence: int


@dataclass(frozen=True)
class PredictiveInsights(_Record):
    """Backlog-wide prediction summary."""

    estimated_completion_time: int
    completion_probability: int
    optimal_scheduling_time: str
    recommended_task_order: list[str]
    expected_productivity: int


@dataclass(frozen=True)
class ProductivityRecommendation(_Record):
    """Single actionable suggestion ranked by impact."""

    id: str
    type: str
    title: str
    description: str
    priority: str
    impact: int
    actionable: bool
    action_text: Optional[str] = None


@dataclass(frozen=True)
class PersonalizedInsights(_Record):
    """Recommendations plus narrative insights, areas to improve and strengths."""

    recommendations: list[ProductivityRecommendation] = field(default_factory=list)
    top_insights: list[str] = field(default_factory=list)
    improvement_areas: list[str] = field(default_factory=list)
    strengths: list[str] = field(default_factory=list)
