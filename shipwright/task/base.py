# shipwright/task/base.py
"""Task base class and stage definitions"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from types import MappingProxyType
from typing import Any, FrozenSet, Mapping, Optional, Union

from ..config import Config
from ..core import shell
from ..core.packager import ReleasePackager
from ..core.paths import ReleasePathResolver
from ..core.shell import CommandResult

logger = logging.getLogger(__name__)


class Stage(str, Enum):
    """Pipeline stages, in execution order"""
    PRE_DEPLOY = "pre-deploy"
    DEPLOY = "deploy"
    POST_RELEASE = "post-release"
    POST_DEPLOY = "post-deploy"

    @property
    def runs_remotely(self) -> bool:
        """Commands of deploy and post-release tasks run on the host"""
        return self in (Stage.DEPLOY, Stage.POST_RELEASE)


STAGE_PRE_DEPLOY = Stage.PRE_DEPLOY
STAGE_DEPLOY = Stage.DEPLOY
STAGE_POST_DEPLOY = Stage.POST_DEPLOY
STAGE_POST_RELEASE = Stage.POST_RELEASE


class TaskCapability(Enum):
    """Capabilities a task type can declare"""
    # Manages release paths itself; remote commands start in deployment.to
    RELEASE_AWARE = "release-aware"


class AbstractTask(ABC):
    """Base class for all tasks

    A task is created for one pipeline step with its configuration, stage,
    rollback flag and parameters, and none of these change afterwards.

    ``run()`` returns True on success and False on failure. It can also raise
    ``TaskError`` to abort the pipeline with a message, or ``SkipTask`` when
    there is nothing to do.
    """

    capabilities: FrozenSet[TaskCapability] = frozenset()

    def __init__(
        self,
        config: Config,
        in_rollback: bool = False,
        stage: Optional[Union[Stage, str]] = None,
        parameters: Optional[Mapping[str, Any]] = None,
    ):
        """Initialize task

        Args:
            config: Deployment configuration
            in_rollback: The task runs as part of a rollback
            stage: Stage the task runs in
            parameters: Task-local parameters
        """
        self._config = config
        self._in_rollback = bool(in_rollback)
        self._stage = Stage(stage) if stage is not None else None
        self._parameters = MappingProxyType(dict(parameters or {}))

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.get_name()!r} stage={self.stage}>"

    @abstractmethod
    def get_name(self) -> str:
        """Get the title of the task"""
        pass

    @abstractmethod
    def run(self) -> bool:
        """Run the task

        Returns:
            True on success, False on failure

        Raises:
            TaskError: Fatal error, the pipeline aborts
            SkipTask: Nothing to do, the pipeline continues
        """
        pass

    def init(self) -> None:
        """Initialize the task, called once before ``run`` (optional)"""
        pass

    @property
    def config(self) -> Config:
        return self._config

    @property
    def in_rollback(self) -> bool:
        return self._in_rollback

    @property
    def stage(self) -> Optional[Stage]:
        return self._stage

    @property
    def parameters(self) -> Mapping[str, Any]:
        return self._parameters

    @property
    def is_release_aware(self) -> bool:
        return TaskCapability.RELEASE_AWARE in self.capabilities

    def get_parameter(self, name: str, default: Any = None) -> Any:
        """Get a parameter, task-local first, then configuration-level"""
        return self._config.get_parameter(name, default, self._parameters)

    @property
    def path_resolver(self) -> ReleasePathResolver:
        return ReleasePathResolver(self._config)

    # Command execution

    def run_command_local(self, command: str) -> CommandResult:
        """Run a command on the local machine"""
        return shell.run_local(command)

    def run_command_remote(self, command: str, cd_to_directory_first: bool = True) -> CommandResult:
        """Run a command on the host the configuration is bound to

        Args:
            command: Shell command
            cd_to_directory_first: Change into the deployment directory
                (the current release unless the task is release-aware)

        Returns:
            CommandResult of the ssh invocation
        """
        remote_command = shell.escape_for_sh_c(command)
        if cd_to_directory_first:
            directory = self.path_resolver.remote_working_directory(self.is_release_aware)
            remote_command = f"cd {directory} && {remote_command}"

        logger.info(f"Run remote command {remote_command}")

        return self.run_command_local(shell.build_ssh_command(self._config, remote_command))

    def run_command(self, command: str) -> CommandResult:
        """Run a command locally or remotely depending on the stage

        deploy and post-release commands run on the host; pre-deploy and
        post-deploy commands run locally.
        """
        if self._stage is not None and self._stage.runs_remotely:
            return self.run_command_remote(command)
        return self.run_command_local(command)

    # Path composition

    def get_releases_aware_command(self, command: str) -> str:
        return self.path_resolver.releases_aware_command(command)

    def get_git_cache_aware_command(self, command: str) -> str:
        return self.path_resolver.git_cache_aware_command(command)

    def get_rsync_cache_aware_command(self, command: str) -> str:
        return self.path_resolver.rsync_cache_aware_command(command)

    # Release packaging

    def _packager(self) -> ReleasePackager:
        return ReleasePackager(self.run_command_remote, self.path_resolver)

    def tar_release(self, release_id) -> bool:
        """Pack a release on the host, see ``ReleasePackager.tar_release``"""
        return self._packager().tar_release(release_id)

    def untar_release(self, release_id) -> bool:
        """Unpack a release on the host, see ``ReleasePackager.untar_release``"""
        return self._packager().untar_release(release_id)


class ReleaseAwareTask(AbstractTask):
    """Base class for tasks that manage release paths themselves"""

    capabilities = frozenset({TaskCapability.RELEASE_AWARE})
