"""
Unit tests for local command execution and ssh command construction.
"""

import subprocess
from unittest.mock import patch, MagicMock

import pytest

from shipwright.core.shell import (
    build_ssh_command,
    build_ssh_transport,
    escape_for_sh_c,
    run_local,
)

SSH_OPTIONS = "-q -o UserKnownHostsFile=/dev/null -o StrictHostKeyChecking=no"


class TestRunLocal:
    """Test running commands through the local shell."""

    @patch('shipwright.core.shell.subprocess.run')
    def test_success_output_is_stripped(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout="  hello\n")

        result = run_local("echo hello")

        assert result.success
        assert result.output == "hello"
        assert result.command == "echo hello"

    @patch('shipwright.core.shell.subprocess.run')
    def test_stderr_merged_into_stdout(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout="")

        run_local("ls", cwd="/tmp")

        kwargs = mock_run.call_args.kwargs
        assert kwargs["shell"] is True
        assert kwargs["stderr"] == subprocess.STDOUT
        assert kwargs["cwd"] == "/tmp"

    @patch('shipwright.core.shell.subprocess.run')
    def test_non_zero_exit_is_reported_not_raised(self, mock_run):
        mock_run.return_value = MagicMock(returncode=2, stdout="no such file\n")

        result = run_local("ls missing")

        assert not result.success
        assert result.exit_status == 2
        assert result.output == "no such file"

    @patch('shipwright.core.shell.subprocess.run')
    def test_os_error_is_a_failed_result(self, mock_run):
        mock_run.side_effect = OSError("no shell")

        result = run_local("anything")

        assert not result.success
        assert result.exit_status == 127
        assert "no shell" in result.output


class TestEscaping:
    """Test escaping for the sh -c wrapper."""

    def test_double_quotes_are_escaped(self):
        assert escape_for_sh_c('echo "hi"') == 'echo \\"hi\\"'

    def test_other_characters_untouched(self):
        command = "echo 'a' $HOME `date` && ls"

        assert escape_for_sh_c(command) == command


class TestSshCommand:
    """Test ssh invocation built from configuration."""

    def test_minimal_command(self, make_config):
        config = make_config()

        command = build_ssh_command(config, "ls")

        assert command == f'ssh -p 22 {SSH_OPTIONS} deploy@web1 "sh -c \\"ls\\""'

    def test_all_options(self, make_config):
        config = make_config(
            overrides={"deployment": {"identity-file": "~/.ssh/id", "timeout": 5}},
            general={"ssh_needs_tty": True},
            host="web1:2222",
        )

        command = build_ssh_command(config, "ls")

        assert command == (
            f'ssh -i ~/.ssh/id -t -p 2222 {SSH_OPTIONS} -o ConnectTimeout=5 '
            f'deploy@web1 "sh -c \\"ls\\""'
        )

    def test_without_user(self, make_config):
        config = make_config(overrides={"deployment": {"user": None}})

        command = build_ssh_command(config, "ls")

        assert command.endswith(' web1 "sh -c \\"ls\\""')
        assert "@" not in command

    def test_transport_without_tty(self, make_config):
        config = make_config(general={"ssh_needs_tty": True})

        assert "-t" not in build_ssh_transport(config, allow_tty=False).split()
        assert "-t" in build_ssh_transport(config).split()


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
