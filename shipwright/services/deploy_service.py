"""Deployment pipeline service"""

import logging
import time
from pathlib import Path
from typing import Any, Callable, List, Mapping, Optional, Tuple, Union

from ..config import Config
from ..core.lock import EnvironmentLock
from ..exceptions import EnvironmentLockedError, ShipwrightError, SkipTask, TaskError
from ..models import DeploymentResult, TaskOutcome, TaskReport
from ..task import Stage, TaskFactory
from ..task.factory import TaskEntry

logger = logging.getLogger(__name__)

Reporter = Callable[[TaskReport], None]
PipelineStep = Tuple[TaskEntry, Stage]


def _entry_name(entry: TaskEntry) -> str:
    if isinstance(entry, Mapping) and len(entry) == 1:
        return str(next(iter(entry)))
    return str(entry)


class DeployService:
    """Runs the task pipeline of an environment

    Stages run strictly in order: pre-deploy tasks once on the controller,
    then deploy and post-release tasks on each host in turn, then
    post-deploy tasks once on the controller.
    """

    def __init__(
        self,
        config: Config,
        project_root: Union[str, Path],
        task_factory: Optional[TaskFactory] = None,
        reporter: Optional[Reporter] = None,
    ):
        """Initialize deploy service

        Args:
            config: Environment configuration (not bound to a host)
            project_root: Project root directory
            task_factory: Task factory (default: one for ``project_root``)
            reporter: Called with each task report as soon as it is known
        """
        self.config = config
        self.project_root = Path(project_root)
        self.task_factory = task_factory or TaskFactory(self.project_root)
        self.reporter = reporter
        self.lock = EnvironmentLock(self.project_root, config.environment)

    def _check_lock(self) -> None:
        if self.lock.is_locked():
            raise EnvironmentLockedError(self.config.environment, self.lock.describe() or "")

    def _check_target(self, result: DeploymentResult) -> bool:
        if not self.config.hosts:
            result.abort(f"No hosts configured for environment {self.config.environment}")
            return False
        if not self.config.deployment("to"):
            result.abort(f"deployment.to is not configured for environment {self.config.environment}")
            return False
        return True

    def deploy(self) -> DeploymentResult:
        """Run a full deployment

        Returns:
            DeploymentResult with one report per task run

        Raises:
            EnvironmentLockedError: If the environment is locked
        """
        self._check_lock()

        result = DeploymentResult(
            environment=self.config.environment,
            release_id=self.config.get_release_id(),
        )
        logger.info(
            f"Deploying release {result.release_id} to {self.config.environment}"
        )

        if not self._check_target(result):
            result.complete()
            return result

        pre_deploy = [(e, Stage.PRE_DEPLOY) for e in self.config.get_tasks(Stage.PRE_DEPLOY)]
        if not self._run_steps(pre_deploy, self.config, result):
            if not result.aborted:
                result.fail("Pre-deploy tasks failed, no host was deployed")
            result.complete()
            return result

        for host in self.config.hosts:
            host_config = self.config.for_host(host)
            if not self._run_steps(self._host_steps(host_config), host_config, result):
                if result.aborted:
                    break
                result.mark_host_failed(host)

        if not result.aborted:
            post_deploy = [(e, Stage.POST_DEPLOY) for e in self.config.get_tasks(Stage.POST_DEPLOY)]
            if not self._run_steps(post_deploy, self.config, result) and not result.aborted:
                result.fail("Post-deploy tasks failed")

        if result.failed_hosts:
            result.fail(f"Deployment failed on: {', '.join(result.failed_hosts)}")

        result.complete()
        return result

    def rollback(self, release_id: Any) -> DeploymentResult:
        """Make an earlier release current on every host

        Args:
            release_id: Release id, or a negative offset such as ``-1``

        Returns:
            DeploymentResult of the rollback
        """
        self._check_lock()

        result = DeploymentResult(
            environment=self.config.environment,
            release_id=str(release_id),
            operation="rollback",
        )
        logger.info(f"Rolling back {self.config.environment} to release {release_id}")

        if not self._check_target(result):
            result.complete()
            return result

        for host in self.config.hosts:
            host_config = self.config.for_host(host)
            steps: List[PipelineStep] = [
                ({"releases/rollback": {"release": str(release_id)}}, Stage.DEPLOY),
            ]
            steps += [(e, Stage.POST_RELEASE) for e in host_config.get_tasks(Stage.POST_RELEASE)]

            if not self._run_steps(steps, host_config, result, in_rollback=True):
                if result.aborted:
                    break
                result.mark_host_failed(host)

        if result.failed_hosts:
            result.fail(f"Rollback failed on: {', '.join(result.failed_hosts)}")

        result.complete()
        return result

    def _host_steps(self, config: Config) -> List[PipelineStep]:
        releases = config.releases_enabled()

        steps: List[PipelineStep] = []
        if releases:
            steps.append(("releases/prepare", Stage.DEPLOY))
        steps += [(e, Stage.DEPLOY) for e in config.get_tasks(Stage.DEPLOY)]
        if releases:
            steps.append(("releases/release", Stage.DEPLOY))
        steps += [(e, Stage.POST_RELEASE) for e in config.get_tasks(Stage.POST_RELEASE)]
        if releases:
            steps.append(("releases/clean-up", Stage.POST_RELEASE))
        return steps

    def _run_steps(
        self,
        steps: List[PipelineStep],
        config: Config,
        result: DeploymentResult,
        in_rollback: bool = False,
    ) -> bool:
        """Run steps until one fails

        Returns:
            True if every step succeeded or was skipped
        """
        for entry, stage in steps:
            report = self.run_task(entry, stage, config, in_rollback=in_rollback)
            result.add_report(report)

            if self.reporter:
                self.reporter(report)

            if report.outcome == TaskOutcome.FATAL:
                result.abort(report.message)
                return False
            if report.outcome == TaskOutcome.FAILURE:
                return False

        return True

    def run_task(
        self,
        entry: TaskEntry,
        stage: Stage,
        config: Config,
        in_rollback: bool = False,
    ) -> TaskReport:
        """Create, initialize and run one task

        Args:
            entry: Task name or ``{name: parameters}`` mapping
            stage: Stage to run the task in
            config: Configuration (bound to a host for remote stages)
            in_rollback: The task runs as part of a rollback

        Returns:
            TaskReport describing the outcome
        """
        start = time.monotonic()
        report = TaskReport(
            task_name=_entry_name(entry),
            stage=stage.value,
            outcome=TaskOutcome.FATAL,
            host=config.host,
            in_rollback=in_rollback,
        )

        try:
            task = self.task_factory.create(entry, config, stage=stage, in_rollback=in_rollback)
        except ShipwrightError as e:
            report.message = str(e)
            logger.error(f"Cannot create task {report.task_name}: {e}")
            return report

        report.task_name = task.get_name()
        where = f" on {config.host}" if config.host else ""
        logger.info(f"Running {report.task_name}{where} ({stage.value})")

        try:
            task.init()
            if task.run():
                report.outcome = TaskOutcome.SUCCESS
            else:
                report.outcome = TaskOutcome.FAILURE
        except SkipTask as e:
            report.outcome = TaskOutcome.SKIPPED
            report.message = e.reason or ""
        except TaskError as e:
            report.message = str(e)
        except Exception as e:
            logger.exception(f"Task {report.task_name} raised an unexpected error")
            report.message = f"{type(e).__name__}: {e}"

        report.duration = time.monotonic() - start
        logger.info(f"{report.task_name}{where}: {report.outcome.value}")
        return report
