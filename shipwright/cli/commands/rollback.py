# shipwright/cli/commands/rollback.py
"""Rollback command implementation"""

import click
from rich.markup import escape

from ..context import Context
from ..decorators import environment_required
from ..logging_config import attach_file_logging
from ..output import console, format_deployment_result, print_task_report
from ...constants import EMOJI_ERROR, EMOJI_ARROW
from ...exceptions import DeploymentError, ShipwrightError
from ...services import DeployService


# ignore_unknown_options lets a relative release such as -1 through as an argument
@click.command(context_settings={"ignore_unknown_options": True})
@click.argument('environment')
@click.argument('release_id')
@click.pass_context
@environment_required
def rollback(ctx, environment, release_id):
    """Make an earlier release current again

    RELEASE_ID is a release directory name, or a negative number counting
    back from the current release.

    Examples:

        shipwright rollback production 20240120093000

        shipwright rollback production -1
    """
    obj: Context = ctx.obj

    try:
        config = obj.loader.load(environment)
        attach_file_logging(obj.project_root, config)

        console.print(
            f"{EMOJI_ARROW} Rolling back [magenta]{environment}[/magenta] "
            f"to release [bold]{release_id}[/bold]"
        )

        service = DeployService(config, obj.project_root, reporter=print_task_report)
        result = service.rollback(release_id)
        console.print()
        format_deployment_result(result, show_tasks=obj.verbose)
        result.raise_for_status()

    except DeploymentError:
        # Already shown in the result panel
        ctx.exit(1)
    except ShipwrightError as e:
        console.print(f"[red]{EMOJI_ERROR} {escape(str(e))}[/red]")
        ctx.exit(1)
