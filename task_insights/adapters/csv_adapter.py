"""CSV adapter for task records."""

from __future__ import annotations

import csv
import logging

from task_insights.schema import Task

logger = logging.getLogger(__name__)

# Tags share a single cell, separated by semicolons.
_TAG_SEPARATOR = ";"


def _normalize_row(row: dict) -> dict:
    item = {key.strip(): (value.strip() if isinstance(value, str) else value) for key, value in row.items() if key}
    tags = item.get("tags") or ""
    item["tags"] = [tag.strip() for tag in tags.split(_TAG_SEPARATOR) if tag.strip()]
    return item


def parse(file_path: str) -> list[Task]:
    """Parse CSV file into a list of tasks."""

    with open(file_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []

        tasks: list[Task] = []
        for row_number, row in enumerate(reader, start=2):
            tasks.append(Task.from_dict(_normalize_row(row), row_number, label="Row"))

    logger.debug("Parsed %d tasks from %s", len(tasks), file_path)
    return tasks
