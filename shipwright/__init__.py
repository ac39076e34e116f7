"""Shipwright - Task based remote deployments.

Runs ordered pipelines of deployment tasks against the hosts of an
environment over SSH, with timestamped release directories, a current
symlink and rollback to earlier releases.
"""

from .__version__ import __version__, __version_info__, __author__, __license__

# Configuration
from .config import Config, ConfigLoader

# Tasks
from .task import (
    AbstractTask,
    ReleaseAwareTask,
    Stage,
    TaskCapability,
    TaskFactory,
)

# Orchestration
from .services import DeployService
from .core.lock import EnvironmentLock

# Data models
from .models import TaskOutcome, TaskReport, DeploymentResult

# Exceptions
from .exceptions import (
    ShipwrightError,
    TaskError,
    SkipTask,
    ConfigError,
    EnvironmentNotFoundError,
    EnvironmentLockedError,
    TaskNotFoundError,
    DeploymentError,
)

__all__ = [
    # Version information
    "__version__",
    "__version_info__",
    "__author__",
    "__license__",

    # Configuration
    "Config",
    "ConfigLoader",

    # Tasks
    "AbstractTask",
    "ReleaseAwareTask",
    "Stage",
    "TaskCapability",
    "TaskFactory",

    # Orchestration
    "DeployService",
    "EnvironmentLock",

    # Data models
    "TaskOutcome",
    "TaskReport",
    "DeploymentResult",

    # Exceptions
    "ShipwrightError",
    "TaskError",
    "SkipTask",
    "ConfigError",
    "EnvironmentNotFoundError",
    "EnvironmentLockedError",
    "TaskNotFoundError",
    "DeploymentError",
]
