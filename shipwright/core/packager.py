# shipwright/core/packager.py
"""Packing and unpacking of releases on the remote host

A release is either unpacked (a directory of files) or packed (an empty
directory holding ``<release id>.tar.gz``). The state is never recorded: it
is inferred from the existence of the archive every time.

Each transition is a single remote command chained with ``&&``. A failing
step stops the chain, but steps that already ran are not undone, so a
failure can leave the release half moved. Callers must not pack or unpack
the same release from two processes at once.

A check that fails to run (for example an unreachable host) counts as
"not packed", whatever the command printed.
"""

import logging
from typing import Callable

from .paths import ReleasePathResolver
from .shell import CommandResult

logger = logging.getLogger(__name__)

RemoteRunner = Callable[[str], CommandResult]


class ReleasePackager:
    """Tars and untars releases through a remote command runner"""

    def __init__(self, run_remote: RemoteRunner, resolver: ReleasePathResolver):
        """Initialize packager

        Args:
            run_remote: Runs a command on the host, from the deployment root
            resolver: Path resolver for the deployment
        """
        self.run_remote = run_remote
        self.resolver = resolver

    def is_packed(self, release_id) -> bool:
        """Check whether the archive of a release exists on the host"""
        archive = self.resolver.release_archive(release_id)
        result = self.run_remote(f'test -e {archive} && echo "true" || echo ""')
        return result.success and result.output.strip() == "true"

    def tar_release(self, release_id) -> bool:
        """Pack a release into its archive

        Returns:
            True if the release is packed afterwards (or already was)
        """
        if self.is_packed(release_id):
            logger.debug(f"Release {release_id} is already packed")
            return True

        directory = self.resolver.release_directory(release_id)
        temp_directory = self.resolver.release_temp_directory(release_id)
        archive = self.resolver.release_archive(release_id)

        command = " && ".join([
            f"mv {directory} {temp_directory}",
            f"mkdir {directory}",
            f"tar cfz {archive} {temp_directory}",
            f"rm -rf {temp_directory}",
        ])
        result = self.run_remote(command)
        if not result.success:
            logger.warning(
                f"Packing release {release_id} failed, {directory} may be left "
                f"partially moved: {result.output}"
            )
        return result.success

    def untar_release(self, release_id) -> bool:
        """Expand a packed release back into its directory

        Returns:
            True if the release is unpacked afterwards (or already was)
        """
        if not self.is_packed(release_id):
            logger.debug(f"Release {release_id} is not packed")
            return True

        directory = self.resolver.release_directory(release_id)
        temp_directory = self.resolver.release_temp_directory(release_id)
        archive = self.resolver.release_archive(release_id)

        command = " && ".join([
            f"tar xfz {archive}",
            f"rm -rf {directory}",
            f"mv {temp_directory} {directory}",
        ])
        result = self.run_remote(command)
        if not result.success:
            logger.warning(
                f"Unpacking release {release_id} failed, {directory} may be left "
                f"partially moved: {result.output}"
            )
        return result.success
