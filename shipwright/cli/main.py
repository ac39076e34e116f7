# shipwright/cli/main.py
"""Main CLI entry point for shipwright"""

import sys
import logging

import click

from .context import Context
from .logging_config import setup_logging
from .output import console
from ..__version__ import __version__
from ..constants import APP_NAME

# Import all commands
from .commands import (
    init,
    deploy,
    rollback,
    lock,
)


@click.group(name=APP_NAME)
@click.version_option(__version__, prog_name=APP_NAME)
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('-d', '--debug', is_flag=True, help='Enable debug output')
@click.option('-q', '--quiet', is_flag=True, help='Suppress all output except errors')
@click.pass_context
def cli(ctx, verbose, debug, quiet):
    """Shipwright - Task based deployments over SSH

    Runs the task pipeline of an environment: pre-deploy tasks locally,
    deploy and post-release tasks on every host, post-deploy tasks locally.
    Releases are kept in timestamped directories with a current symlink.
    """
    if quiet:
        logging.disable(logging.CRITICAL)
    else:
        setup_logging(console, verbose=verbose, debug=debug)

    # Project lookup is lazy, init runs outside a project
    ctx.obj = Context(verbose=verbose, debug=debug)


# Register commands
cli.add_command(init.init)
cli.add_command(deploy.deploy)
cli.add_command(rollback.rollback)
cli.add_command(lock.lock)
cli.add_command(lock.unlock)


def main():
    """Main entry point for the CLI application

    This function handles:
    - Usage errors and exit codes requested by commands
    - Keyboard interrupts (exit status 130)
    - Unexpected exceptions with proper error display
    """
    try:
        exit_code = cli.main(prog_name=APP_NAME, standalone_mode=False)

    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)

    except (click.Abort, KeyboardInterrupt):
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)

    except Exception as e:
        console.print(f"[red]Unexpected error: {e}[/red]")
        if '--debug' in sys.argv or '-d' in sys.argv:
            console.print_exception()
        sys.exit(1)

    sys.exit(exit_code if isinstance(exit_code, int) else 0)


if __name__ == "__main__":
    main()
