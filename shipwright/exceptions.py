"""Exception definitions for shipwright"""

from typing import Optional

from .constants import ErrorCode


class ShipwrightError(Exception):
    """Base exception for shipwright"""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.error_code = error_code


class TaskError(ShipwrightError):
    """Fatal task error: the message is shown and the pipeline aborts"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.TASK_FAILED)


class SkipTask(Exception):
    """Raised by a task that has nothing to do

    The pipeline continues as if the task had succeeded.
    """

    def __init__(self, reason: Optional[str] = None):
        super().__init__(reason or "")
        self.reason = reason


class ConfigError(ShipwrightError):
    """Configuration error"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.CONFIG_FORMAT_ERROR)


class EnvironmentNotFoundError(ConfigError):
    """Environment configuration file not found"""

    def __init__(self, environment: str, path: str = None):
        message = f"Environment not found: {environment}"
        if path:
            message += f" (expected {path})"
        ShipwrightError.__init__(self, message, ErrorCode.ENVIRONMENT_NOT_FOUND)
        self.environment = environment


class EnvironmentLockedError(ShipwrightError):
    """Environment is locked against deployments"""

    def __init__(self, environment: str, description: str = ""):
        message = f"The environment {environment} is locked, you must unlock it first"
        if description:
            message += f"\n{description}"
        super().__init__(message, ErrorCode.ENVIRONMENT_LOCKED)
        self.environment = environment


class TaskNotFoundError(ShipwrightError):
    """Task name could not be resolved"""

    def __init__(self, task_name: str):
        super().__init__(f"Task not found: {task_name}", ErrorCode.TASK_NOT_FOUND)
        self.task_name = task_name


class DeploymentError(ShipwrightError):
    """Deployment operation error"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.DEPLOYMENT_FAILED)
