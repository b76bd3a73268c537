import logging
from datetime import timedelta

from task_insights.metrics import (
    compute_category_analytics,
    compute_overview,
    compute_time_series,
    filter_by_period,
    period_window,
)
from task_insights.schema import CategoryAnalytics


def test_period_windows(now):
    assert period_window("week", now).start_date == now - timedelta(days=7)
    assert period_window("month", now).label == "Last 30 days"
    assert period_window("year", now).start_date == now - timedelta(days=365)


def test_unknown_period_falls_back_to_week(now, caplog):
    with caplog.at_level(logging.WARNING):
        window = period_window("decade", now)
    assert window.name == "week"
    assert "Unknown analytics period" in caplog.text


def test_filter_by_period_bounds(now, make_task):
    inside = make_task(created_at=now - timedelta(days=7))
    edge = make_task(created_at=now)
    old = make_task(created_at=now - timedelta(days=8))
    future = make_task(created_at=now + timedelta(minutes=1))
    assert filter_by_period([inside, edge, old, future], "week", now) == [inside, edge]
    assert len(filter_by_period([inside, edge, old, future], "month", now)) == 3


def test_overview_empty(now):
    overview = compute_overview([], now)
    assert overview.total_tasks == 0
    assert overview.completed_tasks == 0
    assert overview.pending_tasks == 0
    assert overview.completion_rate == 0
    assert overview.average_tasks_per_day == 0.0
    assert overview.most_productive_day == "Monday"
    assert overview.most_common_category == "Personal"
    assert overview.average_completion_time == 0


def test_overview_rates_and_span(now, make_task):
    tasks = [
        make_task(created_at=now - timedelta(days=3), completed=True, completed_at=now - timedelta(days=2)),
        make_task(created_at=now - timedelta(days=1)),
    ]
    overview = compute_overview(tasks, now)
    assert overview.completion_rate == 50
    assert overview.average_tasks_per_day == 0.7
    assert overview.average_completion_time == 45


def test_overview_completion_time_needs_timestamp(now, make_task):
    overview = compute_overview([make_task(completed=True)], now)
    assert overview.average_completion_time == 0


def test_overview_tie_break_is_first_encountered(now, make_task):
    tasks = [
        make_task(category="Home"),
        make_task(category="Work"),
        make_task(category="Work"),
        make_task(category="Home"),
    ]
    assert compute_overview(tasks, now).most_common_category == "Home"
    assert compute_overview(list(reversed(tasks)), now).most_common_category == "Home"
    assert compute_overview(tasks[1:3] + tasks[:1] + tasks[3:], now).most_common_category == "Work"


def test_completion_rate_monotonic(now, make_task):
    previous = -1
    for done in range(11):
        tasks = [make_task(completed=i < done) for i in range(10)]
        rate = compute_overview(tasks, now).completion_rate
        assert 0 <= rate <= 100
        assert rate >= previous
        previous = rate


def test_category_scenario_seventy_percent(make_task):
    tasks = [make_task(category="Work", completed=i < 7) for i in range(10)]
    categories = compute_category_analytics(tasks)
    assert categories[0] == CategoryAnalytics(
        category="Work", total_tasks=10, completed_tasks=7, completion_rate=70, average_priority=2.0
    )


def test_category_single_pending_task_is_zero(make_task):
    categories = compute_category_analytics([make_task(category="Errands", priority="high")])
    assert categories[0].completion_rate == 0
    assert categories[0].average_priority == 3.0


def test_category_unknown_priority_weight(make_task):
    tasks = [make_task(priority="low"), make_task(priority="someday")]
    assert compute_category_analytics(tasks)[0].average_priority == 1.5


def test_time_series_groups_by_calendar_day(now, make_task):
    tasks = [
        make_task(created_at=now - timedelta(hours=1), completed=True),
        make_task(created_at=now - timedelta(days=2)),
        make_task(created_at=now - timedelta(hours=2)),
    ]
    series = compute_time_series(tasks)
    assert [point.date for point in series] == ["2025-03-12", "2025-03-14"]
    assert series[1].tasks == 2
    assert series[1].completed == 1
    assert series[1].completion_rate == 50
    assert series[0].completion_rate == 0
