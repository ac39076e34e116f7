"""Core functionality for shipwright"""

from .shell import CommandResult, run_local, build_ssh_command, escape_for_sh_c
from .paths import ReleasePathResolver
from .packager import ReleasePackager
from .lock import EnvironmentLock

__all__ = [
    "CommandResult",
    "run_local",
    "build_ssh_command",
    "escape_for_sh_c",
    "ReleasePathResolver",
    "ReleasePackager",
    "EnvironmentLock",
]
