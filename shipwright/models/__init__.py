"""Data models for shipwright"""

from .result import TaskOutcome, TaskReport, DeploymentResult

__all__ = [
    "TaskOutcome",
    "TaskReport",
    "DeploymentResult",
]
