# shipwright/core/paths.py
"""Release and cache directory resolution for remote commands"""

from ..config import Config
from ..constants import (
    DEFAULT_RELEASES_DIR,
    DEFAULT_SHARED_DIR,
    DEFAULT_GIT_CACHE_DIR,
    DEFAULT_RSYNC_CACHE_DIR,
    RELEASE_ARCHIVE_PATTERN,
    RELEASE_TEMP_SUFFIX,
)


class ReleasePathResolver:
    """Computes directory strings used to prefix commands with ``cd``

    Release paths are relative to the deployment root (``deployment.to``),
    which is the working directory of remote commands run by release-aware
    tasks.
    """

    def __init__(self, config: Config):
        self.config = config

    @property
    def releases_directory(self) -> str:
        return self.config.release("directory", DEFAULT_RELEASES_DIR)

    def release_directory(self, release_id=None) -> str:
        """Get ``<releases dir>/<release id>`` (current release by default)"""
        if release_id is None:
            release_id = self.config.get_release_id()
        return f"{self.releases_directory}/{release_id}"

    def release_archive(self, release_id) -> str:
        """Get the path of the packed form of a release"""
        archive = RELEASE_ARCHIVE_PATTERN.format(release_id=release_id)
        return f"{self.release_directory(release_id)}/{archive}"

    def release_temp_directory(self, release_id) -> str:
        return self.release_directory(release_id) + RELEASE_TEMP_SUFFIX

    def deploy_root(self) -> str:
        return str(self.config.deployment("to", "")).rstrip("/")

    def remote_working_directory(self, release_aware: bool = False) -> str:
        """Get the directory remote commands change into first

        Args:
            release_aware: The task manages release paths itself

        Returns:
            ``deployment.to``, plus ``/<releases dir>/<release id>`` when
            releases are enabled and the task is not release-aware
        """
        directory = self.deploy_root()
        if self.config.releases_enabled() and not release_aware:
            directory += "/" + self.release_directory()
        return directory

    def releases_aware_command(self, command: str) -> str:
        """Prefix ``command`` with a cd into the current release"""
        if self.config.releases_enabled():
            return f"cd {self.release_directory()} && {command}"
        return command

    def cache_aware_command(self, section: str, default_directory: str, command: str) -> str:
        """Prefix ``command`` with a cd into a shared cache directory

        Both ``extras.enabled`` and ``extras.<section>.enabled`` must be true.

        Args:
            section: Extras section name (``vcs`` or ``rsync``)
            default_directory: Cache directory used when none is configured
            command: Command to prefix

        Returns:
            Prefixed or unchanged command
        """
        if not self.cache_enabled(section):
            return command
        return f"cd {self.cache_directory(section, default_directory)} && {command}"

    def cache_enabled(self, section: str) -> bool:
        """Check ``extras.enabled`` and ``extras.<section>.enabled``"""
        if self.config.extras("enabled", "top", False) is not True:
            return False
        return self.config.extras(section, "enabled", False) is True

    def cache_directory(self, section: str, default_directory: str) -> str:
        """Get ``<shared dir>/<cache dir>`` relative to the deployment root"""
        shared_directory = self.config.extras("directory", "top", DEFAULT_SHARED_DIR)
        cache_directory = self.config.extras(section, "directory", default_directory)
        return f"{shared_directory}/{cache_directory}"

    def git_cache_aware_command(self, command: str) -> str:
        return self.cache_aware_command("vcs", DEFAULT_GIT_CACHE_DIR, command)

    def rsync_cache_aware_command(self, command: str) -> str:
        return self.cache_aware_command("rsync", DEFAULT_RSYNC_CACHE_DIR, command)
