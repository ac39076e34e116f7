"""
Unit tests for the task base class: stages, parameters and command routing.
"""

import logging
from unittest.mock import patch, MagicMock

import pytest

from shipwright.core.shell import CommandResult
from shipwright.task import AbstractTask, ReleaseAwareTask, Stage, TaskCapability


class EchoTask(AbstractTask):

    def get_name(self):
        return "echo"

    def run(self):
        return self.run_command("echo hi").success


class ReleaseEchoTask(ReleaseAwareTask):

    def get_name(self):
        return "release echo"

    def run(self):
        return True


def ok(command):
    return CommandResult(command=command, output="", exit_status=0)


class TestTaskConstruction:
    """Test the immutable task state."""

    def test_defaults(self, make_config):
        task = EchoTask(make_config())

        assert task.in_rollback is False
        assert task.stage is None
        assert dict(task.parameters) == {}
        assert not task.is_release_aware

    def test_stage_from_string(self, make_config):
        task = EchoTask(make_config(), stage="post-release")

        assert task.stage is Stage.POST_RELEASE

    def test_unknown_stage(self, make_config):
        with pytest.raises(ValueError):
            EchoTask(make_config(), stage="build")

    def test_parameters_are_read_only(self, make_config):
        params = {"flags": "-v"}
        task = EchoTask(make_config(), parameters=params)

        with pytest.raises(TypeError):
            task.parameters["flags"] = "-q"

        params["flags"] = "changed"
        assert task.parameters["flags"] == "-v"

    def test_rollback_flag_and_stage_are_fixed(self, make_config):
        task = EchoTask(make_config(), stage="deploy", in_rollback=True)

        with pytest.raises(AttributeError):
            task.in_rollback = False
        with pytest.raises(AttributeError):
            task.stage = Stage.PRE_DEPLOY

        assert task.in_rollback is True
        assert task.stage is Stage.DEPLOY

    def test_parameter_lookup_order(self, make_config):
        config = make_config(parameters={"branch": "main", "env": "prod"})
        task = EchoTask(config, parameters={"branch": "feature"})

        assert task.get_parameter("branch") == "feature"
        assert task.get_parameter("env") == "prod"
        assert task.get_parameter("missing", "default") == "default"

    def test_release_aware_capability(self, make_config):
        task = ReleaseEchoTask(make_config())

        assert task.is_release_aware
        assert TaskCapability.RELEASE_AWARE in task.capabilities

    def test_abstract_methods_required(self, make_config):
        class Incomplete(AbstractTask):
            def get_name(self):
                return "incomplete"

        with pytest.raises(TypeError):
            Incomplete(make_config())


class TestCommandRouting:
    """Test which stages run commands on the host."""

    @pytest.mark.parametrize("stage, remote", [
        (Stage.PRE_DEPLOY, False),
        (Stage.DEPLOY, True),
        (Stage.POST_RELEASE, True),
        (Stage.POST_DEPLOY, False),
        (None, False),
    ])
    def test_stage_routing(self, make_config, stage, remote):
        task = EchoTask(make_config(), stage=stage)

        with patch.object(EchoTask, "run_command_remote", side_effect=ok) as mock_remote, \
                patch.object(EchoTask, "run_command_local", side_effect=ok) as mock_local:
            assert task.run()

        if remote:
            mock_remote.assert_called_once_with("echo hi")
            mock_local.assert_not_called()
        else:
            mock_local.assert_called_once_with("echo hi")
            mock_remote.assert_not_called()


class TestRemoteCommand:
    """Test the command line sent over ssh."""

    @patch('shipwright.core.shell.run_local')
    def test_remote_command_in_current_release(self, mock_run, make_config):
        mock_run.side_effect = ok
        task = EchoTask(make_config(release_id="7"), stage=Stage.DEPLOY)

        assert task.run()

        command = mock_run.call_args[0][0]
        assert command.startswith("ssh -p 22 ")
        assert command.endswith('deploy@web1 "sh -c \\"cd /var/www/releases/7 && echo hi\\""')

    @patch('shipwright.core.shell.run_local')
    def test_release_aware_task_stays_in_deploy_root(self, mock_run, make_config):
        mock_run.side_effect = ok
        task = ReleaseEchoTask(make_config(release_id="7"), stage=Stage.DEPLOY)

        task.run_command_remote("ls")

        assert mock_run.call_args[0][0].endswith('"sh -c \\"cd /var/www && ls\\""')

    @patch('shipwright.core.shell.run_local')
    def test_without_releases(self, mock_run, make_config):
        mock_run.side_effect = ok
        task = EchoTask(make_config(overrides={"release": {"enabled": False}}), stage="deploy")

        task.run_command_remote("ls")

        assert mock_run.call_args[0][0].endswith('"sh -c \\"cd /var/www && ls\\""')

    @patch('shipwright.core.shell.run_local')
    def test_without_cd(self, mock_run, make_config):
        mock_run.side_effect = ok
        task = EchoTask(make_config(), stage="deploy")

        task.run_command_remote("uptime", cd_to_directory_first=False)

        assert mock_run.call_args[0][0].endswith('deploy@web1 "sh -c \\"uptime\\""')

    @patch('shipwright.core.shell.run_local')
    def test_double_quotes_escaped(self, mock_run, make_config):
        mock_run.side_effect = ok
        task = EchoTask(make_config(), stage="deploy")

        task.run_command_remote('echo "x"')

        assert 'echo \\"x\\"' in mock_run.call_args[0][0]

    @patch('shipwright.core.shell.run_local')
    def test_remote_command_is_logged(self, mock_run, make_config, caplog):
        mock_run.side_effect = ok
        task = EchoTask(make_config(release_id="7"), stage="deploy")

        with caplog.at_level(logging.INFO, logger="shipwright.task.base"):
            task.run_command_remote("echo hi")

        assert "Run remote command cd /var/www/releases/7 && echo hi" in caplog.text

    @patch('shipwright.core.shell.run_local')
    def test_failed_remote_command(self, mock_run, make_config):
        mock_run.return_value = CommandResult(command="ssh", output="denied", exit_status=255)
        task = EchoTask(make_config(), stage="deploy")

        assert not task.run()


class TestPathHelpers:
    """Test the command prefix helpers exposed to tasks."""

    def test_helpers_delegate_to_resolver(self, make_config):
        config = make_config(
            release_id="42",
            overrides={"extras": {"enabled": True, "vcs": {"enabled": True}}},
        )
        task = EchoTask(config)

        assert task.get_releases_aware_command("ls") == "cd releases/42 && ls"
        assert task.get_git_cache_aware_command("ls") == "cd shared/git-remote-cache && ls"
        assert task.get_rsync_cache_aware_command("ls") == "ls"

    def test_tar_release_uses_remote_runner(self, make_config, fake_runner):
        task = ReleaseEchoTask(make_config(), stage="deploy")
        runner = fake_runner()

        with patch.object(ReleaseEchoTask, "run_command_remote", MagicMock(side_effect=runner)):
            assert task.tar_release("3")

        assert runner.commands[1].startswith("mv releases/3 releases/3_tmp/")


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
