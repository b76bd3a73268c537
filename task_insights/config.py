"""Engine settings and optional YAML overrides."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Union

import yaml

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineSettings:
    """Presentation-facing knobs; formula constants live with their formulas."""

    default_period: str = "week"
    recommendation_limit: int = 5
    narrative_limit: int = 3
    peak_hour_count: int = 3
    export_indent: int = 2

    def to_yaml(self) -> str:
        return yaml.safe_dump({f.name: getattr(self, f.name) for f in fields(self)}, sort_keys=False)


DEFAULT_SETTINGS = EngineSettings()


def load_settings(path: Union[str, Path]) -> EngineSettings:
    """Load settings from a YAML mapping, keeping defaults for absent keys."""

    with open(path, encoding="utf-8") as handle:
        payload = yaml.safe_load(handle) or {}

    if not isinstance(payload, dict):
        raise ValueError(f"Settings file {path} must contain a mapping")

    known = {f.name for f in fields(EngineSettings)}
    overrides = {}
    for key, value in payload.items():
        if key not in known:
            logger.warning("Ignoring unknown setting %r in %s", key, path)
            continue
        overrides[key] = value

    for key in ("recommendation_limit", "narrative_limit", "peak_hour_count", "export_indent"):
        if key in overrides:
            try:
                overrides[key] = int(overrides[key])
            except (TypeError, ValueError) as exc:
                raise ValueError(f"Setting {key!r} must be an integer") from exc

    return replace(DEFAULT_SETTINGS, **overrides)
