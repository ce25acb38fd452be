"""Task → model selection. Cheap models for palette extraction, mid-tier for full analysis."""

from __future__ import annotations

from screensight.config import Settings, settings as default_settings

_TASK_MODEL_MAP = {
    "analyze": "mid",
    "colors": "cheap",
}


def get_model_for_task(task: str, settings: Settings | None = None) -> str:
    cfg = settings or default_settings
    tier = _TASK_MODEL_MAP.get(task, "mid")
    if tier == "cheap":
        return cfg.model_cheap
    elif tier == "mid":
        return cfg.model_mid
    else:
        return cfg.model_frontier
