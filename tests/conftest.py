"""Shared fixtures for the shipwright test suite"""

import copy
from pathlib import Path

import pytest

from shipwright.config import Config
from shipwright.core.shell import CommandResult

BASE_ENVIRONMENT = {
    "deployment": {
        "user": "deploy",
        "from": "./",
        "to": "/var/www/",
    },
    "release": {
        "enabled": True,
        "directory": "releases",
        "max": 5,
    },
    "hosts": ["web1"],
    "tasks": {},
}

GENERAL_YML = """\
name: demo
logging: false
"""

PRODUCTION_YML = """\
deployment:
  user: deploy
  from: ./
  to: /var/www/demo
release:
  enabled: true
  max: 3
hosts:
  - web1
  - web2:2222
tasks:
  pre-deploy:
    - composer/install: {flags: --no-dev}
  deploy:
    - deployment/rsync
  post-release: []
  post-deploy: []
"""


def _merge(base, overrides):
    merged = copy.deepcopy(base)
    for key, value in (overrides or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


@pytest.fixture
def make_config():
    """Build a Config from the base environment plus overrides"""
    def _make(
        overrides=None,
        general=None,
        parameters=None,
        release_id="7",
        host="web1",
        environment="production",
    ):
        return Config(
            environment=environment,
            general=general,
            environment_config=_merge(BASE_ENVIRONMENT, overrides),
            parameters=parameters,
            release_id=release_id,
            host=host,
        )
    return _make


@pytest.fixture
def project(tmp_path) -> Path:
    """A project tree with general.yml and a production environment"""
    config_dir = tmp_path / ".shipwright" / "config"
    (config_dir / "environment").mkdir(parents=True)
    (config_dir / "general.yml").write_text(GENERAL_YML)
    (config_dir / "environment" / "production.yml").write_text(PRODUCTION_YML)
    return tmp_path


class FakeRunner:
    """Stands in for a remote command runner

    Records every command. ``responses`` maps a command prefix to the
    output returned for it; commands containing one of ``fail_on`` exit 1.
    """

    def __init__(self, responses=None, fail_on=()):
        self.commands = []
        self.responses = responses or {}
        self.fail_on = fail_on

    def __call__(self, command, *args, **kwargs):
        self.commands.append(command)
        output = ""
        for prefix, response in self.responses.items():
            if command.startswith(prefix):
                output = response
                break
        status = 1 if any(marker in command for marker in self.fail_on) else 0
        return CommandResult(command=command, output=output, exit_status=status)


@pytest.fixture
def fake_runner():
    return FakeRunner
