# shipwright/task/builtin/scm.py
"""Source control tasks"""

from ..base import ReleaseAwareTask


class GitUpdateTask(ReleaseAwareTask):
    """Updates a git checkout to the tip of a branch

    Runs in the shared git cache when ``extras.vcs`` is enabled, otherwise
    in the current release.
    """

    def get_name(self) -> str:
        return "Updating git checkout [built-in]"

    def run(self) -> bool:
        branch = self.get_parameter("branch", self.config.get("scm.branch", "master"))
        command = f"git fetch origin && git reset --hard origin/{branch}"

        if self.path_resolver.cache_enabled("vcs"):
            command = self.get_git_cache_aware_command(command)
        else:
            command = self.get_releases_aware_command(command)

        return self.run_command(command).success
