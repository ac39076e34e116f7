# shipwright/cli/decorators.py
"""Decorators for CLI commands"""

from functools import wraps
from typing import Callable

import click

from .context import Context
from .output import console
from ..constants import APP_NAME, EMOJI_ERROR


def environment_required(func: Callable) -> Callable:
    """Decorator that ensures the command targets a configured environment

    The command must take an ``environment`` argument. The decorator:
    1. Finds the project root directory
    2. Checks that the environment configuration file exists
    3. Stores the project root on the click context

    Args:
        func: Command function to decorate

    Returns:
        Decorated function
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        ctx = click.get_current_context()
        obj = ctx.ensure_object(Context)

        project_root = obj.project_root
        if not project_root:
            console.print(
                f"[red]{EMOJI_ERROR}[/red] Not in a {APP_NAME} project directory.\n"
                f"Run '{APP_NAME} init' to initialize a new project."
            )
            ctx.exit(1)

        environment = kwargs.get("environment")
        loader = obj.loader
        if not environment or not loader.has_environment(environment):
            available = ", ".join(loader.list_environments()) or "none"
            console.print(
                f"[red]{EMOJI_ERROR}[/red] Environment not found: {environment}\n"
                f"Expected {loader.environment_path(environment or '<env>')} "
                f"(available: {available})"
            )
            ctx.exit(1)

        return func(*args, **kwargs)

    return wrapper
