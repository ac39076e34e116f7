# shipwright/task/builtin/releases.py
"""Release directory tasks: prepare, release, clean-up and rollback"""

import logging
from typing import List, Optional

from ..base import ReleaseAwareTask
from ...constants import CURRENT_LINK_NAME, DEFAULT_RELEASES_MAX
from ...exceptions import SkipTask, TaskError

logger = logging.getLogger(__name__)


def release_sort_key(release_id: str):
    """Order numeric release ids by value, before any other ids"""
    if release_id.isdecimal():
        return (0, int(release_id), release_id)
    return (1, 0, release_id)


class ReleasesTaskMixin:
    """Helpers shared by the release tasks

    Meant for release-aware tasks, whose remote commands start in the
    deployment root.
    """

    def list_releases(self) -> List[str]:
        """List release ids on the host, oldest first"""
        releases_dir = self.path_resolver.releases_directory
        result = self.run_command_remote(f"ls -1 {releases_dir}")
        if not result.success:
            return []

        releases = []
        for line in result.output.splitlines():
            name = line.strip()
            # Leftovers of an interrupted pack/unpack are not releases
            if name and not name.endswith("_tmp"):
                releases.append(name)
        return sorted(releases, key=release_sort_key)

    def current_release(self) -> Optional[str]:
        """Get the release id the current link points to"""
        result = self.run_command_remote(f"readlink {CURRENT_LINK_NAME} || echo \"\"")
        target = result.output.strip().rstrip("/")
        if not result.success or not target:
            return None
        return target.rsplit("/", 1)[-1]

    def swap_current(self, release_id) -> bool:
        """Point the current link to a release

        The link is created under a temporary name and moved over the old
        one, so readers see either the old or the new release.
        """
        release_dir = self.path_resolver.release_directory(release_id)
        temp_link = f"{CURRENT_LINK_NAME}.tmp"
        command = (
            f"ln -sfn {release_dir} {temp_link} && mv -Tf {temp_link} {CURRENT_LINK_NAME}"
        )
        return self.run_command_remote(command).success


class PrepareReleaseTask(ReleasesTaskMixin, ReleaseAwareTask):
    """Creates the directory of the new release"""

    def get_name(self) -> str:
        return "Preparing release [built-in]"

    def run(self) -> bool:
        if not self.config.releases_enabled():
            raise SkipTask("Releases are not enabled")

        release_dir = self.path_resolver.release_directory()
        return self.run_command_remote(f"mkdir -p {release_dir}").success


class ReleaseTask(ReleasesTaskMixin, ReleaseAwareTask):
    """Makes the new release current

    With ``release.compressreleases`` enabled, the release that was current
    before is packed afterwards.
    """

    def get_name(self) -> str:
        return "Releasing [built-in]"

    def run(self) -> bool:
        if not self.config.releases_enabled():
            raise SkipTask("Releases are not enabled")

        release_id = self.config.get_release_id()
        previous = self.current_release()

        if not self.swap_current(release_id):
            return False

        if (
            self.config.release("compressreleases", False) is True
            and previous
            and previous != release_id
        ):
            logger.info(f"Packing previous release {previous}")
            return self.tar_release(previous)

        return True


class CleanUpReleasesTask(ReleasesTaskMixin, ReleaseAwareTask):
    """Removes releases beyond ``release.max``, oldest first"""

    def get_name(self) -> str:
        return "Cleaning up old releases [built-in]"

    def run(self) -> bool:
        if not self.config.releases_enabled():
            raise SkipTask("Releases are not enabled")

        max_releases = int(self.config.release("max", DEFAULT_RELEASES_MAX))
        releases = self.list_releases()
        if len(releases) <= max_releases:
            raise SkipTask("No releases to clean up")

        keep = {self.config.get_release_id(), self.current_release()}
        stale = [r for r in releases[:len(releases) - max_releases] if r not in keep]
        if not stale:
            raise SkipTask("No releases to clean up")

        command = " && ".join(
            f"rm -rf {self.path_resolver.release_directory(r)}" for r in stale
        )
        return self.run_command_remote(command).success


class RollbackTask(ReleasesTaskMixin, ReleaseAwareTask):
    """Makes an earlier release current again

    The ``release`` parameter is either a release id or a negative offset
    from the current release (``-1`` is the one before it).
    """

    def get_name(self) -> str:
        return "Rollback release [built-in]"

    def run(self) -> bool:
        if not self.config.releases_enabled():
            raise TaskError("Releases are not enabled, there is nothing to roll back to")

        target = self.get_parameter("release")
        if target is None or str(target) == "":
            raise TaskError("No release to roll back to was given")

        releases = self.list_releases()
        release_id = self._resolve_target(str(target), releases)

        logger.info(f"Rolling back to release {release_id}")

        if not self.untar_release(release_id):
            return False
        return self.swap_current(release_id)

    def _resolve_target(self, target: str, releases: List[str]) -> str:
        if target.startswith("-") and target[1:].isdigit():
            current = self.current_release()
            if current not in releases:
                raise TaskError("Cannot resolve a relative release without a current release")
            index = releases.index(current) + int(target)
            if index < 0:
                raise TaskError(f"There is no release {target} relative to {current}")
            return releases[index]

        if target not in releases:
            raise TaskError(f"Release {target} not found")
        return target
