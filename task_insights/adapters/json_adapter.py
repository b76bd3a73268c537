"""JSON adapter for task records."""

from __future__ import annotations

import json
import logging

from task_insights.schema import Task

logger = logging.getLogger(__name__)


def parse(file_path: str) -> list[Task]:
    """Parse a JSON file holding a list of task objects, or ``{"tasks": [...]}``."""

    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)

    if isinstance(payload, dict) and "tasks" in payload:
        payload = payload["tasks"]
    if not isinstance(payload, list):
        raise ValueError("JSON payload must be a list of objects")

    tasks = []
    for index, item in enumerate(payload, start=1):
        if not isinstance(item, dict):
            raise ValueError(f"Item {index}: expected an object")
        tasks.append(Task.from_dict(item, index))

    logger.debug("Parsed %d tasks from %s", len(tasks), file_path)
    return tasks
