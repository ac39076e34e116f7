# shipwright/task/factory.py
"""Task creation from configuration entries"""

import importlib.util
import inspect
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Type, Union

from .base import AbstractTask, Stage
from .builtin import BUILTIN_TASKS
from ..config import Config
from ..constants import PROJECT_DIR, CUSTOM_TASKS_DIR, CUSTOM_TASK_PREFIX
from ..exceptions import ConfigError, TaskNotFoundError

logger = logging.getLogger(__name__)

TaskEntry = Union[str, Mapping[str, Optional[Mapping[str, Any]]]]


def parse_task_entry(entry: TaskEntry) -> Tuple[str, Dict[str, Any]]:
    """Split a configured task entry into name and parameters

    Entries are either a task name, or a mapping with one key, the task
    name, whose value holds the task-local parameters.
    """
    if isinstance(entry, str):
        return entry, {}

    if isinstance(entry, Mapping) and len(entry) == 1:
        name, parameters = next(iter(entry.items()))
        if parameters is None:
            parameters = {}
        if not isinstance(parameters, Mapping):
            raise ConfigError(f"Parameters of task {name} must be a mapping")
        return str(name), dict(parameters)

    raise ConfigError(f"Invalid task entry: {entry!r}")


class TaskFactory:
    """Resolves task names to task classes and instantiates them"""

    # Registry of built-in tasks
    _builtin: Dict[str, Type[AbstractTask]] = dict(BUILTIN_TASKS)

    def __init__(self, project_root: Optional[Union[str, Path]] = None):
        """Initialize task factory

        Args:
            project_root: Project root, used to find custom tasks
        """
        self.project_root = Path(project_root) if project_root else Path.cwd()
        self._custom: Dict[str, Type[AbstractTask]] = {}

    @property
    def custom_tasks_dir(self) -> Path:
        return self.project_root / PROJECT_DIR / CUSTOM_TASKS_DIR

    @classmethod
    def register(cls, name: str, task_class: Type[AbstractTask]) -> None:
        """Register a task class under a name"""
        if not (inspect.isclass(task_class) and issubclass(task_class, AbstractTask)):
            raise TypeError(f"{task_class!r} is not an AbstractTask subclass")
        cls._builtin[name] = task_class

    @classmethod
    def available(cls) -> Dict[str, Type[AbstractTask]]:
        return dict(cls._builtin)

    def get_task_class(self, name: str) -> Type[AbstractTask]:
        """Get the class implementing a task name

        Raises:
            TaskNotFoundError: If the name is unknown
        """
        if name.startswith(CUSTOM_TASK_PREFIX):
            return self._load_custom(name[len(CUSTOM_TASK_PREFIX):])

        task_class = self._builtin.get(name)
        if task_class is None:
            raise TaskNotFoundError(name)
        return task_class

    def create(
        self,
        entry: TaskEntry,
        config: Config,
        stage: Optional[Union[Stage, str]] = None,
        in_rollback: bool = False,
    ) -> AbstractTask:
        """Create a task from a configured entry

        Args:
            entry: Task name or ``{name: parameters}`` mapping
            config: Configuration for the task
            stage: Stage the task runs in
            in_rollback: The task runs as part of a rollback

        Returns:
            Task instance
        """
        name, parameters = parse_task_entry(entry)
        task_class = self.get_task_class(name)
        logger.debug(f"Creating task {name} ({task_class.__name__})")
        return task_class(config, in_rollback=in_rollback, stage=stage, parameters=parameters)

    def _load_custom(self, name: str) -> Type[AbstractTask]:
        if name in self._custom:
            return self._custom[name]

        module_path = self.custom_tasks_dir / f"{name}.py"
        if not module_path.is_file():
            raise TaskNotFoundError(CUSTOM_TASK_PREFIX + name)

        module_name = f"shipwright_custom_tasks.{name.replace('/', '.')}"
        spec = importlib.util.spec_from_file_location(module_name, module_path)
        if spec is None or spec.loader is None:
            raise TaskNotFoundError(CUSTOM_TASK_PREFIX + name)

        module = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            raise ConfigError(f"Failed to load custom task {module_path}: {e}") from e

        candidates = [
            obj for _, obj in inspect.getmembers(module, inspect.isclass)
            if issubclass(obj, AbstractTask)
            and not inspect.isabstract(obj)
            and obj.__module__ == module.__name__
        ]
        if len(candidates) != 1:
            raise ConfigError(
                f"Custom task module {module_path} must define exactly one task class, "
                f"found {len(candidates)}"
            )

        logger.info(f"Loaded custom task {name} from {module_path}")
        self._custom[name] = candidates[0]
        return candidates[0]
