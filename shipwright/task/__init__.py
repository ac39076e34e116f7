"""Tasks for shipwright"""

from .base import (
    AbstractTask,
    ReleaseAwareTask,
    Stage,
    TaskCapability,
    STAGE_PRE_DEPLOY,
    STAGE_DEPLOY,
    STAGE_POST_DEPLOY,
    STAGE_POST_RELEASE,
)
from .factory import TaskFactory, parse_task_entry

__all__ = [
    "AbstractTask",
    "ReleaseAwareTask",
    "Stage",
    "TaskCapability",
    "STAGE_PRE_DEPLOY",
    "STAGE_DEPLOY",
    "STAGE_POST_DEPLOY",
    "STAGE_POST_RELEASE",
    "TaskFactory",
    "parse_task_entry",
]
