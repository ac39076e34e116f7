# shipwright/task/builtin/composer.py
"""Composer tasks"""

from ..base import AbstractTask
from ...constants import DEFAULT_COMPOSER_CMD


class ComposerAbstractTask(AbstractTask):
    """Base class for tasks running Composer"""

    def get_composer_cmd(self) -> str:
        """Get the Composer command

        ``general.composer_cmd`` wins over the ``composer_cmd`` parameter.
        """
        composer_cmd = self.get_parameter(
            "composer_cmd", self.config.general("composer_cmd", DEFAULT_COMPOSER_CMD)
        )
        return self.config.general("composer_cmd", composer_cmd)


class ComposerInstallTask(ComposerAbstractTask):

    def get_name(self) -> str:
        return "Installing Composer dependencies [built-in]"

    def run(self) -> bool:
        flags = self.get_parameter("flags", "--no-dev --no-interaction")
        return self.run_command(f"{self.get_composer_cmd()} install {flags}".rstrip()).success


class ComposerGenerateAutoloadTask(ComposerAbstractTask):

    def get_name(self) -> str:
        return "Generating Composer autoloader [built-in]"

    def run(self) -> bool:
        return self.run_command(f"{self.get_composer_cmd()} dump-autoload --optimize").success
