"""
Foundational configuration, task classification and the change log.

These modules do not import the orchestrator so the CLI and tests can load
them on their own.
"""

from .changelog import ChangeLog, ChangeLogEntry, render_change_log
from .classifier import HandlerName, TaskCategory, classify_task, matching_categories
from .config import ModelConfig, OrchestratorConfig, TAConfig, load_ta_config

__all__ = [
    "ChangeLog",
    "ChangeLogEntry",
    "HandlerName",
    "ModelConfig",
    "OrchestratorConfig",
    "TAConfig",
    "TaskCategory",
    "classify_task",
    "load_ta_config",
    "matching_categories",
    "render_change_log",
]
