# shipwright/cli/context.py
"""CLI context object"""

import os
from pathlib import Path
from typing import Optional

from ..config import ConfigLoader
from ..constants import PROJECT_DIR, ENV_PROJECT_ROOT


def find_project_root(start_path: Optional[Path] = None) -> Optional[Path]:
    """Find the project root directory by looking for the project directory

    The ``SHIPWRIGHT_PROJECT_ROOT`` environment variable takes precedence.

    Args:
        start_path: Starting directory (defaults to current directory)

    Returns:
        Project root path or None if not found
    """
    env_root = os.environ.get(ENV_PROJECT_ROOT)
    if env_root:
        env_path = Path(env_root).resolve()
        return env_path if (env_path / PROJECT_DIR).is_dir() else None

    current = Path(start_path).resolve() if start_path else Path.cwd()

    while True:
        if (current / PROJECT_DIR).is_dir():
            return current
        if current == current.parent:
            return None
        current = current.parent


class Context:
    """CLI context object with lazy project lookup"""

    def __init__(self, verbose: bool = False, debug: bool = False):
        self.verbose = verbose
        self.debug = debug
        self._project_root: Optional[Path] = None
        self._project_checked = False

    @property
    def project_root(self) -> Optional[Path]:
        """Get project root directory, or None outside a project"""
        if not self._project_checked:
            self._project_root = find_project_root()
            self._project_checked = True
        return self._project_root

    @property
    def loader(self) -> Optional[ConfigLoader]:
        root = self.project_root
        return ConfigLoader(root) if root else None
