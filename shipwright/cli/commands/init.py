# shipwright/cli/commands/init.py
"""Initialize command for creating the project configuration skeleton"""

from pathlib import Path

import click

from ..output import console
from ...constants import (
    APP_NAME,
    EMOJI_SUCCESS,
    EMOJI_WARNING,
    EMOJI_ROCKET,
    PROJECT_DIR,
    CONFIG_DIR,
    ENVIRONMENT_DIR,
    GENERAL_CONFIG_FILE,
    ENVIRONMENT_FILE_PATTERN,
    CUSTOM_TASKS_DIR,
    DEFAULT_MAX_LOGS,
    DEFAULT_RELEASES_DIR,
    DEFAULT_RELEASES_MAX,
)

GENERAL_TEMPLATE = """\
# General settings shared by every environment
name: {name}
logging: false
maxlogs: {max_logs}
ssh_needs_tty: false
"""

ENVIRONMENT_TEMPLATE = """\
# Environment: {environment}
deployment:
  user: deploy
  from: ./
  to: /var/www/{name}
  excludes:
    - .git
    - {project_dir}

release:
  enabled: true
  directory: {releases_dir}
  max: {releases_max}
  compressreleases: false

hosts:
  - localhost

tasks:
  pre-deploy: []
  deploy:
    - deployment/rsync
  post-release: []
  post-deploy: []
"""


@click.command()
@click.argument('path', required=False, default='.')
@click.option('--name', '-n', help='Project name (default: directory name)')
@click.option('--environment', '-e', 'environments', multiple=True,
              help='Create an example environment file (repeatable)')
@click.option('--force', '-f', is_flag=True, help='Overwrite existing configuration files')
@click.pass_context
def init(ctx, path, name, environments, force):
    """Initialize the project configuration

    Creates the .shipwright directory with general.yml, an environment
    directory and a directory for custom tasks.

    Examples:

        shipwright init

        shipwright init ./my-app -e staging -e production
    """
    project_path = Path(path).resolve()
    config_dir = project_path / PROJECT_DIR / CONFIG_DIR
    general_path = config_dir / GENERAL_CONFIG_FILE

    if general_path.exists() and not force:
        console.print(f"{EMOJI_WARNING} Project already initialized in {project_path}")
        console.print("Use --force to overwrite the configuration")
        ctx.exit(0)

    name = name or project_path.name
    console.print(f"{EMOJI_ROCKET} Initializing {APP_NAME} project...")

    environment_dir = config_dir / ENVIRONMENT_DIR
    environment_dir.mkdir(parents=True, exist_ok=True)
    (project_path / PROJECT_DIR / CUSTOM_TASKS_DIR).mkdir(exist_ok=True)

    general_path.write_text(GENERAL_TEMPLATE.format(name=name, max_logs=DEFAULT_MAX_LOGS))
    created = [general_path]

    for environment in environments:
        env_path = environment_dir / ENVIRONMENT_FILE_PATTERN.format(environment=environment)
        if env_path.exists() and not force:
            console.print(f"{EMOJI_WARNING} Keeping existing {env_path.name}")
            continue
        env_path.write_text(ENVIRONMENT_TEMPLATE.format(
            environment=environment,
            name=name,
            project_dir=PROJECT_DIR,
            releases_dir=DEFAULT_RELEASES_DIR,
            releases_max=DEFAULT_RELEASES_MAX,
        ))
        created.append(env_path)

    console.print(f"\n{EMOJI_SUCCESS} Project initialized successfully!")
    for created_path in created:
        console.print(f"  • {created_path.relative_to(project_path)}")

    console.print(f"\n{EMOJI_SUCCESS} Next steps:")
    console.print(f"1. Add an environment file under {PROJECT_DIR}/{CONFIG_DIR}/{ENVIRONMENT_DIR}/")
    console.print(f"2. {APP_NAME} deploy <environment>")
