from datetime import timedelta

from task_insights.advanced_metrics import (
    burnout_risk,
    efficiency_trend,
    focus_score,
    get_advanced_metrics,
    optimal_task_load,
    peak_hours,
    peak_productivity_hours,
    productivity_score,
    task_velocity,
)
from task_insights.features import hour_label


def _done(make_task, created, completed, **overrides):
    return make_task(created_at=created, completed=True, completed_at=completed, **overrides)


def test_task_velocity(now, make_task):
    assert task_velocity([make_task()]) == 0.0
    tasks = [
        _done(make_task, now - timedelta(days=4), now - timedelta(days=3)),
        _done(make_task, now - timedelta(days=3), now - timedelta(days=2)),
        _done(make_task, now - timedelta(days=2, hours=5), now - timedelta(days=2)),
        make_task(),
    ]
    assert task_velocity(tasks) == 1.5


def test_focus_score_defaults(make_task):
    assert focus_score([]) == 0
    assert focus_score([make_task()]) == 0
    assert focus_score([make_task(completed=True)]) == 50


def test_focus_score_components(now, make_task):
    consistent = [
        _done(make_task, now - timedelta(hours=3), now - timedelta(hours=2), priority="high"),
        _done(make_task, now - timedelta(hours=5), now - timedelta(hours=4), priority="high"),
    ]
    assert focus_score(consistent) == 100

    mixed = [
        _done(make_task, now - timedelta(hours=3), now - timedelta(hours=2)),
        make_task(priority="high"),
    ]
    assert focus_score(mixed) == 60


def test_focus_score_bounds_with_erratic_latency(now, make_task):
    tasks = [
        _done(make_task, now - timedelta(days=20), now),
        _done(make_task, now - timedelta(hours=1), now),
        make_task(),
    ]
    assert 0 <= focus_score(tasks) <= 100


def test_efficiency_trend_needs_four_completions(now, make_task):
    tasks = [_done(make_task, now - timedelta(days=d + 1), now - timedelta(days=d)) for d in range(3)]
    tasks += [make_task(created_at=now - timedelta(days=10)) for _ in range(5)]
    assert efficiency_trend(tasks) == "stable"


def _trend_fixture(now, make_task, pending_created):
    completed = [
        _done(make_task, now - timedelta(days=10), now - timedelta(days=9)),
        _done(make_task, now - timedelta(days=9), now - timedelta(days=8)),
        _done(make_task, now - timedelta(days=3), now - timedelta(days=2)),
        _done(make_task, now - timedelta(days=2), now - timedelta(days=1)),
    ]
    return completed + [make_task(created_at=pending_created) for _ in range(4)]


def test_efficiency_trend_improving(now, make_task):
    tasks = _trend_fixture(now, make_task, now - timedelta(days=6))
    assert efficiency_trend(tasks) == "improving"


def test_efficiency_trend_declining(now, make_task):
    tasks = _trend_fixture(now, make_task, now - timedelta(hours=12))
    assert efficiency_trend(tasks) == "declining"


def test_efficiency_trend_without_older_window(now, make_task):
    created = now - timedelta(days=5)
    tasks = [_done(make_task, created, now - timedelta(days=d)) for d in range(4)]
    assert efficiency_trend(tasks) == "stable"


def test_burnout_risk_high_under_heavy_load(now, make_task):
    tasks = []
    for i in range(70):
        created = now - timedelta(hours=2 * i)
        if i < 4:
            tasks.append(make_task(created_at=created, due_date=now - timedelta(hours=1)))
        elif i < 7:
            tasks.append(make_task(created_at=created, priority="high"))
        else:
            tasks.append(make_task(created_at=created, completed=True))
    assert burnout_risk(tasks, now) == "high"


def test_burnout_risk_levels(now, make_task):
    overdue = [make_task(due_date=now - timedelta(days=1)) for _ in range(4)]
    high = [make_task(priority="high") for _ in range(3)]
    assert burnout_risk(overdue + high, now) == "medium"
    assert burnout_risk(overdue, now) == "low"
    assert burnout_risk([], now) == "low"


def test_peak_hours_break_ties_toward_earlier_hour(now, make_task):
    hours = [9, 14, 20, 9, 14, 7]
    tasks = [make_task(created_at=now.replace(hour=hour), completed=True) for hour in hours]
    tasks.append(make_task(created_at=now.replace(hour=20)))
    assert peak_hours(tasks) == [9, 14, 7]
    assert peak_productivity_hours(tasks) == ["9 AM", "2 PM", "7 AM"]


def test_hour_labels():
    assert hour_label(0) == "12 AM"
    assert hour_label(11) == "11 AM"
    assert hour_label(12) == "12 PM"
    assert hour_label(23) == "11 PM"


def test_optimal_task_load_is_clamped(now, make_task):
    assert optimal_task_load([]) == 5
    spread = [_done(make_task, now - timedelta(days=d, hours=1), now - timedelta(days=d)) for d in range(4)]
    assert optimal_task_load(spread) == 3
    burst = [_done(make_task, now - timedelta(hours=3), now - timedelta(minutes=m)) for m in range(12)]
    assert optimal_task_load(burst) == 10


def test_productivity_score(now, make_task):
    assert productivity_score([], now) == 0
    tasks = [
        make_task(priority="high", completed=True),
        make_task(priority="high"),
        make_task(completed=True),
        make_task(due_date=now - timedelta(days=1)),
    ]
    assert productivity_score(tasks, now) == 45


def test_productivity_score_bounds(now, make_task):
    overdue = [make_task(priority="high", due_date=now - timedelta(days=1)) for _ in range(6)]
    assert productivity_score(overdue, now) == 0
    assert productivity_score([make_task(completed=True)], now) == 100


def test_get_advanced_metrics_empty(now):
    metrics = get_advanced_metrics([], now)
    assert metrics.task_velocity == 0.0
    assert metrics.focus_score == 0
    assert metrics.efficiency_trend == "stable"
    assert metrics.burnout_risk == "low"
    assert metrics.peak_productivity_hours == []
    assert metrics.optimal_task_load == 5
