"""
Unit tests for task creation and custom task loading.
"""

import textwrap

import pytest

from shipwright.exceptions import ConfigError, TaskNotFoundError
from shipwright.task import AbstractTask, Stage, TaskFactory, parse_task_entry
from shipwright.task.builtin import ComposerInstallTask, RollbackTask

CUSTOM_TASK = textwrap.dedent('''
    from shipwright.task import AbstractTask


    class NotifyTask(AbstractTask):

        def get_name(self):
            return "Notify " + self.get_parameter("channel", "ops")

        def run(self):
            return True
''')


def write_custom_task(project_root, name, source):
    tasks_dir = project_root / ".shipwright" / "tasks"
    path = tasks_dir / f"{name}.py"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(source)
    return path


class TestParseTaskEntry:
    """Test the two task entry forms."""

    def test_name(self):
        assert parse_task_entry("composer/install") == ("composer/install", {})

    def test_mapping_with_parameters(self):
        entry = {"composer/install": {"flags": "--no-dev"}}

        assert parse_task_entry(entry) == ("composer/install", {"flags": "--no-dev"})

    def test_mapping_without_parameters(self):
        assert parse_task_entry({"scm/update": None}) == ("scm/update", {})

    def test_mapping_with_two_keys(self):
        with pytest.raises(ConfigError):
            parse_task_entry({"a": {}, "b": {}})

    def test_parameters_must_be_mapping(self):
        with pytest.raises(ConfigError):
            parse_task_entry({"a": ["x"]})


class TestTaskFactory:
    """Test resolving task names."""

    def test_create_builtin(self, make_config, tmp_path):
        task = TaskFactory(tmp_path).create(
            {"composer/install": {"flags": "--no-dev"}},
            make_config(),
            stage="pre-deploy",
        )

        assert isinstance(task, ComposerInstallTask)
        assert task.stage is Stage.PRE_DEPLOY
        assert task.get_parameter("flags") == "--no-dev"
        assert task.in_rollback is False

    def test_create_in_rollback(self, make_config, tmp_path):
        task = TaskFactory(tmp_path).create(
            "releases/rollback", make_config(), stage=Stage.DEPLOY, in_rollback=True
        )

        assert isinstance(task, RollbackTask)
        assert task.in_rollback is True

    def test_unknown_task(self, make_config, tmp_path):
        with pytest.raises(TaskNotFoundError) as exc_info:
            TaskFactory(tmp_path).create("nope/nothing", make_config())

        assert exc_info.value.error_code == "SW004"

    def test_register(self, tmp_path):
        class IsolatedFactory(TaskFactory):
            _builtin = dict(TaskFactory.available())

        class HelloTask(AbstractTask):
            def get_name(self):
                return "hello"

            def run(self):
                return True

        IsolatedFactory.register("hello", HelloTask)

        assert IsolatedFactory(tmp_path).get_task_class("hello") is HelloTask
        assert "hello" not in TaskFactory.available()

    def test_register_rejects_non_tasks(self):
        class IsolatedFactory(TaskFactory):
            _builtin = {}

        with pytest.raises(TypeError):
            IsolatedFactory.register("bad", object)


class TestCustomTasks:
    """Test loading tasks from the project directory."""

    def test_load_custom_task(self, make_config, tmp_path):
        write_custom_task(tmp_path, "notify", CUSTOM_TASK)

        task = TaskFactory(tmp_path).create(
            {"custom/notify": {"channel": "deploys"}}, make_config(), stage="post-deploy"
        )

        assert task.get_name() == "Notify deploys"
        assert task.run() is True

    def test_custom_task_class_is_cached(self, tmp_path):
        write_custom_task(tmp_path, "notify", CUSTOM_TASK)
        factory = TaskFactory(tmp_path)

        assert factory.get_task_class("custom/notify") is factory.get_task_class("custom/notify")

    def test_missing_custom_task(self, tmp_path):
        with pytest.raises(TaskNotFoundError, match="custom/absent"):
            TaskFactory(tmp_path).get_task_class("custom/absent")

    def test_module_with_two_tasks(self, tmp_path):
        source = CUSTOM_TASK + textwrap.dedent('''

            class OtherTask(NotifyTask):
                pass
        ''')
        write_custom_task(tmp_path, "double", source)

        with pytest.raises(ConfigError, match="exactly one task class"):
            TaskFactory(tmp_path).get_task_class("custom/double")

    def test_module_that_fails_to_import(self, tmp_path):
        write_custom_task(tmp_path, "broken", "def oops(:\n")

        with pytest.raises(ConfigError, match="Failed to load"):
            TaskFactory(tmp_path).get_task_class("custom/broken")


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
