# shipwright/cli/commands/deploy.py
"""Deploy command implementation"""

from typing import Dict, Iterable

import click
from rich.markup import escape

from ..context import Context
from ..decorators import environment_required
from ..logging_config import attach_file_logging
from ..output import console, format_deployment_result, print_task_report
from ...constants import EMOJI_ERROR, EMOJI_ROCKET
from ...exceptions import DeploymentError, ShipwrightError
from ...services import DeployService


def parse_parameters(values: Iterable[str]) -> Dict[str, str]:
    """Parse ``key=value`` pairs given with ``-p``

    Raises:
        click.BadParameter: If a value has no ``=`` or an empty key
    """
    parameters = {}
    for value in values:
        key, sep, val = value.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(
                f"expected key=value, got '{value}'", param_hint="'-p' / '--parameter'"
            )
        parameters[key.strip()] = val
    return parameters


@click.command()
@click.argument('environment')
@click.option('--release-id', help='Release id to deploy as (default: current timestamp)')
@click.option('-p', '--parameter', 'parameters', multiple=True, metavar='KEY=VALUE',
              help='Parameter passed to every task (repeatable)')
@click.pass_context
@environment_required
def deploy(ctx, environment, release_id, parameters):
    """Deploy the project to an environment

    Runs the pre-deploy tasks locally, the deploy and post-release tasks on
    every host of the environment, then the post-deploy tasks locally.

    Examples:

        shipwright deploy production

        shipwright deploy staging -p branch=develop

        shipwright deploy production --release-id 20240120093000
    """
    obj: Context = ctx.obj
    params = parse_parameters(parameters)

    try:
        config = obj.loader.load(environment, release_id=release_id, parameters=params)
        log_path = attach_file_logging(obj.project_root, config)

        console.print(
            f"{EMOJI_ROCKET} Deploying release [bold]{config.get_release_id()}[/bold] "
            f"to [magenta]{environment}[/magenta]"
        )
        if log_path:
            console.print(f"[dim]Logging to {log_path}[/dim]")

        service = DeployService(config, obj.project_root, reporter=print_task_report)
        result = service.deploy()
        console.print()
        format_deployment_result(result, show_tasks=obj.verbose)
        result.raise_for_status()

    except DeploymentError:
        # Already shown in the result panel
        ctx.exit(1)
    except ShipwrightError as e:
        console.print(f"[red]{EMOJI_ERROR} {escape(str(e))}[/red]")
        ctx.exit(1)
