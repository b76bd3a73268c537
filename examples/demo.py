"""Demo script for task-insights."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from task_insights.adapters.json_adapter import parse
from task_insights.analytics import get_analytics
from task_insights.priority import rank_by_priority
from task_insights.recommendations import get_personalized_insights
from task_insights.schema import parse_timestamp

NOW = parse_timestamp("2025-03-14T18:00:00Z")


def main() -> None:
    tasks = parse("examples/sample_tasks.json")
    analytics = get_analytics(tasks, NOW, "week")
    personalized = get_personalized_insights(tasks, NOW)
    print("Overview:", analytics.overview.to_dict())
    print("Recommendations:", [rec.title for rec in personalized.recommendations])
    print("Strengths:", personalized.strengths)
    print("Ranked:", [task.title for task in rank_by_priority(tasks, NOW)])


if __name__ == "__main__":
    main()
