import itertools
from datetime import datetime, timedelta, timezone

import pytest

from task_insights.schema import Task

# Friday, noon UTC.
NOW = datetime(2025, 3, 14, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_task():
    counter = itertools.count(1)

    def factory(**overrides):
        number = next(counter)
        fields = {
            "id": f"t{number}",
            "title": f"Task {number}",
            "category": "Work",
            "priority": "medium",
            "completed": False,
            "created_at": NOW - timedelta(days=1),
        }
        fields.update(overrides)
        fields["tags"] = tuple(fields.get("tags", ()))
        return Task(**fields)

    return factory
