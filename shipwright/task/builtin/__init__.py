"""Built-in tasks"""

from .composer import ComposerAbstractTask, ComposerInstallTask, ComposerGenerateAutoloadTask
from .releases import (
    PrepareReleaseTask,
    ReleaseTask,
    CleanUpReleasesTask,
    RollbackTask,
)
from .rsync import RsyncDeploymentTask
from .scm import GitUpdateTask

BUILTIN_TASKS = {
    "composer/install": ComposerInstallTask,
    "composer/generate-autoload": ComposerGenerateAutoloadTask,
    "releases/prepare": PrepareReleaseTask,
    "releases/release": ReleaseTask,
    "releases/clean-up": CleanUpReleasesTask,
    "releases/rollback": RollbackTask,
    "deployment/rsync": RsyncDeploymentTask,
    "scm/update": GitUpdateTask,
}

__all__ = [
    "BUILTIN_TASKS",
    "ComposerAbstractTask",
    "ComposerInstallTask",
    "ComposerGenerateAutoloadTask",
    "PrepareReleaseTask",
    "ReleaseTask",
    "CleanUpReleasesTask",
    "RollbackTask",
    "RsyncDeploymentTask",
    "GitUpdateTask",
]
