# shipwright/core/lock.py
"""Environment lock files"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from ..constants import PROJECT_DIR, LOCK_FILE_PATTERN

logger = logging.getLogger(__name__)


class EnvironmentLock:
    """A lock file that blocks deployments to one environment"""

    def __init__(self, project_root: Union[str, Path], environment: str):
        self.environment = environment
        self.path = (
            Path(project_root) / PROJECT_DIR / LOCK_FILE_PATTERN.format(environment=environment)
        )

    def is_locked(self) -> bool:
        return self.path.exists()

    def describe(self) -> Optional[str]:
        """Get the lock description, or None if not locked"""
        if not self.is_locked():
            return None
        return self.path.read_text().strip()

    def lock(
        self,
        name: Optional[str] = None,
        email: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> Path:
        """Lock the environment

        Args:
            name: Who locks the environment
            email: Contact address
            reason: Why the environment is locked

        Returns:
            Path of the lock file
        """
        lines = [f"Locked environment at date: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}"]
        if name:
            lines.append(f"Locked by: {name}" + (f" ({email})" if email else ""))
        elif email:
            lines.append(f"Locked by: {email}")
        if reason:
            lines.append(f"Reason: {reason}")

        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("\n".join(lines) + "\n")
        logger.info(f"Locked environment {self.environment}")
        return self.path

    def unlock(self) -> bool:
        """Remove the lock file

        Returns:
            True if a lock file was removed
        """
        if not self.path.exists():
            return False
        self.path.unlink()
        logger.info(f"Unlocked environment {self.environment}")
        return True
