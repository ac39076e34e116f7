# shipwright/core/shell.py
"""Local and SSH shell command execution

Commands are opaque strings handed to the shell. Apart from escaping double
quotes for the ``sh -c "..."`` wrapper used on remote hosts, nothing is
quoted: callers that interpolate untrusted values into a command are open to
shell injection.
"""

import logging
import subprocess
from dataclasses import dataclass
from typing import Optional

from ..config import Config
from ..constants import SSH_HOST_OPTIONS

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Result of a shell command"""
    command: str
    output: str
    exit_status: int

    @property
    def success(self) -> bool:
        return self.exit_status == 0


def run_local(command: str, cwd: Optional[str] = None) -> CommandResult:
    """Run a command through the local shell

    stderr is merged into the captured output. A non-zero exit status is
    reported in the result, never raised.

    Args:
        command: Shell command
        cwd: Working directory (default: the current directory)

    Returns:
        CommandResult with stripped output
    """
    logger.debug(f"Run local command {command}")

    try:
        completed = subprocess.run(
            command,
            shell=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            cwd=cwd,
        )
    except OSError as e:
        logger.error(f"Failed to start command {command}: {e}")
        return CommandResult(command=command, output=str(e), exit_status=127)

    output = (completed.stdout or "").strip()
    if completed.returncode != 0:
        logger.debug(f"Command exited with {completed.returncode}: {output}")

    return CommandResult(command=command, output=output, exit_status=completed.returncode)


def escape_for_sh_c(command: str) -> str:
    """Escape double quotes for transport inside ``sh -c "..."``"""
    return command.replace('"', '\\"')


def build_ssh_transport(config: Config, allow_tty: bool = True) -> str:
    """Build the ssh program and options, without the destination"""
    parts = ["ssh"]

    identity = config.get_host_identity_file_option()
    if identity:
        parts.append(identity)

    # general.ssh_needs_tty: true adds -t
    if allow_tty and config.general("ssh_needs_tty", False):
        parts.append("-t")

    parts.extend(["-p", str(config.get_host_port()), SSH_HOST_OPTIONS])

    timeout = config.get_connect_timeout_option()
    if timeout:
        parts.append(timeout)

    return " ".join(parts)


def ssh_destination(config: Config) -> str:
    """Get ``user@host`` (or ``host`` when no user is configured)"""
    user = config.deployment("user", "")
    host = config.get_host_name()
    return f"{user}@{host}" if user else host


def build_ssh_prefix(config: Config) -> str:
    """Build the ssh invocation for the host bound to ``config``"""
    return f"{build_ssh_transport(config)} {ssh_destination(config)}"


def build_ssh_command(config: Config, remote_command: str) -> str:
    """Wrap an already escaped remote command in an ssh invocation

    Args:
        config: Configuration bound to a host
        remote_command: Command body, escaped with ``escape_for_sh_c``

    Returns:
        Local command line running ``remote_command`` on the host
    """
    return f'{build_ssh_prefix(config)} "sh -c \\"{remote_command}\\""'
