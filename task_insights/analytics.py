"""Period analytics orchestration and export."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Optional

from task_insights.config import DEFAULT_SETTINGS, EngineSettings
from task_insights.insights import generate_insights
from task_insights.metrics import (
    compute_category_analytics,
    compute_overview,
    compute_time_series,
    filter_by_period,
    period_window,
)
from task_insights.schema import AnalyticsData, Task, parse_timestamp

logger = logging.getLogger(__name__)


def get_analytics(tasks: list[Task], now: datetime, period: Optional[str] = None) -> AnalyticsData:
    """Build the analytics snapshot for tasks created within ``period`` before ``now``."""

    now = parse_timestamp(now)
    window = period_window(period or DEFAULT_SETTINGS.default_period, now)
    scoped = filter_by_period(tasks, window, now)
    logger.debug("Analytics for %s: %d of %d tasks in window", window.name, len(scoped), len(tasks))

    return AnalyticsData(
        period=window,
        overview=compute_overview(scoped, now),
        categories=compute_category_analytics(scoped),
        time_data=compute_time_series(scoped),
        insights=generate_insights(scoped, now),
    )


def export_analytics(
    data: AnalyticsData, exported_at: datetime, settings: Optional[EngineSettings] = None
) -> str:
    """Serialize an analytics snapshot into a JSON document."""

    settings = settings or DEFAULT_SETTINGS
    payload = {
        "exportDate": parse_timestamp(exported_at).isoformat(),
        "period": data.period.to_dict(),
        "overview": data.overview.to_dict(),
        "categories": [category.to_dict() for category in data.categories],
        "insights": data.insights.to_dict(),
    }
    return json.dumps(payload, indent=settings.export_indent, ensure_ascii=False)
