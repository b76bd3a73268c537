from datetime import timedelta

from task_insights.insights import (
    category_insights,
    generate_insights,
    priority_insights,
    productivity_insights,
    time_insights,
)


def _with_completion(make_task, done, total=10):
    return [make_task(completed=i < done) for i in range(total)]


def test_productivity_trend_and_streak(now, make_task):
    high = productivity_insights(_with_completion(make_task, 8), now)
    assert (high.completion_rate, high.streak_days, high.improvement_trend) == (80, 7, "up")

    middle = productivity_insights(_with_completion(make_task, 6), now)
    assert (middle.streak_days, middle.improvement_trend) == (6, "stable")

    low = productivity_insights(_with_completion(make_task, 4), now)
    assert (low.streak_days, low.improvement_trend) == (4, "down")


def test_productivity_peaks(now, make_task):
    friday_morning = now.replace(hour=9)
    tasks = [
        make_task(created_at=friday_morning),
        make_task(created_at=friday_morning.replace(hour=10)),
        make_task(created_at=now - timedelta(days=1, hours=-2)),
    ]
    insights = productivity_insights(tasks, now)
    assert insights.most_productive_day == "Friday"
    assert insights.most_productive_time == "Morning"


def test_productivity_empty_defaults(now):
    insights = productivity_insights([], now)
    assert insights.most_productive_day == "Monday"
    assert insights.most_productive_time == "Morning"
    assert insights.completion_rate == 0
    assert insights.streak_days == 0
    assert insights.improvement_trend == "down"


def test_category_insights(make_task):
    tasks = [
        make_task(category="Work", completed=True),
        make_task(category="Work", completed=True),
        make_task(category="Work"),
        make_task(category="Home", completed=True),
    ]
    insights = category_insights(tasks)
    assert insights.most_active_category == "Work"
    assert insights.most_completed_category == "Home"
    assert insights.least_active_category == "Home"
    assert insights.category_balance == 75


def test_category_insights_empty():
    insights = category_insights([])
    assert insights.most_active_category == "Personal"
    assert insights.least_active_category == "Learning"
    assert insights.category_balance == 0


def test_priority_insights(now, make_task):
    tasks = [
        make_task(priority="high", completed=True),
        make_task(priority="high", due_date=now - timedelta(days=1)),
        make_task(priority="low", completed=True, due_date=now - timedelta(days=1)),
        make_task(priority="urgent", due_date=now + timedelta(days=1)),
    ]
    insights = priority_insights(tasks, now)
    assert insights.priority_distribution == {"high": 2, "medium": 1, "low": 1}
    assert insights.completion_by_priority == {"high": 1, "medium": 0, "low": 1}
    assert insights.overdue_tasks == 1


def test_time_insights_uses_placeholder_duration(now, make_task):
    tasks = [
        make_task(category="Home", completed=True),
        make_task(category="Work", completed=True),
        make_task(category="Gym", created_at=now.replace(hour=19)),
        make_task(category="Gym", created_at=now.replace(hour=20)),
        make_task(category="Gym", created_at=now.replace(hour=18)),
    ]
    insights = time_insights(tasks)
    assert insights.average_completion_time == 45
    assert insights.fastest_category == "Home"
    assert insights.slowest_category == "Home"
    assert insights.time_of_day_preference == "Evening"


def test_time_insights_without_completions(make_task):
    insights = time_insights([make_task()])
    assert insights.average_completion_time == 0
    assert insights.fastest_category == "Personal"
    assert insights.slowest_category == "Work"


def test_generate_insights_bundles_all_generators(now, make_task):
    insights = generate_insights([make_task(completed=True)], now)
    assert insights.productivity.completion_rate == 100
    assert insights.categories.most_active_category == "Work"
    assert insights.priorities.priority_distribution["medium"] == 1
    assert insights.time.average_completion_time == 45
