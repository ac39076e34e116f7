# shipwright/cli/commands/lock.py
"""Lock and unlock commands"""

import click

from ..context import Context
from ..decorators import environment_required
from ..output import console
from ...constants import MSG_LOCKED, MSG_UNLOCKED, EMOJI_WARNING
from ...core.lock import EnvironmentLock


@click.command()
@click.argument('environment')
@click.option('--name', help='Who locks the environment')
@click.option('--email', help='Contact e-mail address')
@click.option('--reason', help='Why deployments are blocked')
@click.pass_context
@environment_required
def lock(ctx, environment, name, email, reason):
    """Lock an environment against deployments

    Examples:

        shipwright lock production --name "Jane" --reason "Release freeze"
    """
    obj: Context = ctx.obj
    env_lock = EnvironmentLock(obj.project_root, environment)

    if env_lock.is_locked():
        console.print(f"{EMOJI_WARNING} Replacing existing lock:\n[dim]{env_lock.describe()}[/dim]")

    env_lock.lock(name=name, email=email, reason=reason)
    console.print(MSG_LOCKED.format(environment=environment))


@click.command()
@click.argument('environment')
@click.pass_context
@environment_required
def unlock(ctx, environment):
    """Remove the lock of an environment"""
    obj: Context = ctx.obj
    EnvironmentLock(obj.project_root, environment).unlock()
    console.print(MSG_UNLOCKED.format(environment=environment))
