# shipwright/task/builtin/rsync.py
"""Rsync deployment task"""

import logging

from ..base import ReleaseAwareTask
from ...constants import DEFAULT_RSYNC_CACHE_DIR
from ...core.shell import build_ssh_transport, ssh_destination

logger = logging.getLogger(__name__)


class RsyncDeploymentTask(ReleaseAwareTask):
    """Copies ``deployment.from`` to the host with rsync

    The copy runs on the controller. With ``extras.rsync`` enabled the files
    go to the shared rsync cache first and are copied into the release on
    the host, so unchanged files are not transferred again.
    """

    def get_name(self) -> str:
        return "Deploying with rsync [built-in]"

    def _excludes(self) -> str:
        excludes = list(self.config.deployment("excludes", []) or [])
        excludes += list(self.get_parameter("excludes", []) or [])
        return " ".join(f"--exclude={pattern}" for pattern in excludes)

    def run(self) -> bool:
        source = str(self.config.deployment("from", "./")).rstrip("/") + "/"
        resolver = self.path_resolver
        deploy_root = resolver.deploy_root()
        use_cache = resolver.cache_enabled("rsync")

        if use_cache:
            target = f"{deploy_root}/{resolver.cache_directory('rsync', DEFAULT_RSYNC_CACHE_DIR)}"
        elif self.config.releases_enabled():
            target = f"{deploy_root}/{resolver.release_directory()}"
        else:
            target = deploy_root

        parts = [
            "rsync -avz --delete",
            f"-e \"{build_ssh_transport(self.config, allow_tty=False)}\"",
            self._excludes(),
            source,
            f"{ssh_destination(self.config)}:{target}/",
        ]
        command = " ".join(p for p in parts if p)

        result = self.run_command_local(command)
        if not result.success:
            logger.error(f"rsync to {target} failed: {result.output}")
            return False

        if use_cache and self.config.releases_enabled():
            copy = f"rsync -a --delete ./ {deploy_root}/{resolver.release_directory()}/"
            return self.run_command_remote(self.get_rsync_cache_aware_command(copy)).success

        return True
