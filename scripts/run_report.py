"""Run the full analytics report over a CSV/JSON task file."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from task_insights.adapters import csv_adapter, json_adapter
from task_insights.advanced_metrics import get_advanced_metrics
from task_insights.analytics import export_analytics, get_analytics
from task_insights.config import DEFAULT_SETTINGS, load_settings
from task_insights.prediction import get_predictive_insights
from task_insights.priority import rank_by_priority
from task_insights.recommendations import get_personalized_insights
from task_insights.schema import parse_timestamp


def _load_tasks(path: Path):
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse(str(path))
    if suffix == ".json":
        return json_adapter.parse(str(path))
    raise ValueError("Unsupported input format, expected .csv or .json")


def main() -> None:
    parser = argparse.ArgumentParser(description="Run task-insights analytics report")
    parser.add_argument("--data", required=True, help="Path to CSV/JSON tasks file")
    parser.add_argument("--period", choices=["week", "month", "year"], default=None)
    parser.add_argument("--now", default=None, help="Reference ISO instant (defaults to the current time)")
    parser.add_argument("--settings", default=None, help="Optional YAML settings file")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    try:
        settings = load_settings(args.settings) if args.settings else DEFAULT_SETTINGS
        now = parse_timestamp(args.now) if args.now else datetime.now(timezone.utc)
        tasks = _load_tasks(Path(args.data))
    except ValueError as exc:
        parser.error(str(exc))

    analytics = get_analytics(tasks, now, args.period or settings.default_period)
    report = {
        "analytics": json.loads(export_analytics(analytics, now, settings)),
        "advanced": get_advanced_metrics(tasks, now, settings.peak_hour_count).to_dict(),
        "predictive": get_predictive_insights(tasks, now).to_dict(),
        "personalized": get_personalized_insights(tasks, now, settings).to_dict(),
        "ranked_task_ids": [task.id for task in rank_by_priority(tasks, now)],
        "n_tasks": len(tasks),
    }

    print(json.dumps(report, indent=settings.export_indent))

    outputs_dir = Path("outputs")
    outputs_dir.mkdir(parents=True, exist_ok=True)
    out_path = outputs_dir / "analytics_report.json"
    out_path.write_text(json.dumps(report, indent=settings.export_indent), encoding="utf-8")
    print(f"Saved analytics report to {out_path}")


if __name__ == "__main__":
    main()
