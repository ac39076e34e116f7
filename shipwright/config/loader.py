# shipwright/config/loader.py
"""Configuration loading from the project directory"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import jsonschema
import yaml

from .config import Config
from ..constants import (
    PROJECT_DIR,
    CONFIG_DIR,
    ENVIRONMENT_DIR,
    GENERAL_CONFIG_FILE,
    ENVIRONMENT_FILE_PATTERN,
)
from ..exceptions import ConfigError, EnvironmentNotFoundError

logger = logging.getLogger(__name__)

_TASK_LIST = {
    "type": ["array", "null"],
    "items": {
        "anyOf": [
            {"type": "string"},
            {
                "type": "object",
                "minProperties": 1,
                "maxProperties": 1,
                "additionalProperties": {"type": ["object", "null"]},
            },
        ]
    },
}

ENVIRONMENT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "general": {"type": "object"},
        "deployment": {
            "type": "object",
            "properties": {
                "to": {"type": "string"},
                "from": {"type": "string"},
                "user": {"type": ["string", "null"]},
                "port": {"type": "integer"},
                "identity-file": {"type": ["string", "null"]},
                "timeout": {"type": ["integer", "null"]},
                "excludes": {"type": ["array", "null"], "items": {"type": "string"}},
            },
        },
        "release": {
            "type": "object",
            "properties": {
                "enabled": {"type": "boolean"},
                "directory": {"type": "string"},
                "max": {"type": "integer", "minimum": 1},
                "compressreleases": {"type": "boolean"},
            },
        },
        "hosts": {
            "anyOf": [
                {"type": "string"},
                {"type": "array", "items": {"type": "string"}},
                {"type": "null"},
            ]
        },
        "tasks": {
            "type": ["object", "null"],
            "properties": {
                "pre-deploy": _TASK_LIST,
                "deploy": _TASK_LIST,
                "post-release": _TASK_LIST,
                "post-deploy": _TASK_LIST,
            },
            "additionalProperties": False,
        },
        "extras": {"type": ["object", "null"]},
    },
}


class ConfigLoader:
    """Loads general and environment configuration of a project"""

    def __init__(self, project_root: Union[str, Path]):
        """Initialize config loader

        Args:
            project_root: Directory containing the .shipwright directory
        """
        self.project_root = Path(project_root)
        self.config_dir = self.project_root / PROJECT_DIR / CONFIG_DIR

    @property
    def general_path(self) -> Path:
        return self.config_dir / GENERAL_CONFIG_FILE

    def environment_path(self, environment: str) -> Path:
        return (
            self.config_dir
            / ENVIRONMENT_DIR
            / ENVIRONMENT_FILE_PATTERN.format(environment=environment)
        )

    def list_environments(self) -> List[str]:
        """List the environments defined in the project"""
        env_dir = self.config_dir / ENVIRONMENT_DIR
        if not env_dir.is_dir():
            return []
        return sorted(p.stem for p in env_dir.glob("*.yml"))

    def has_environment(self, environment: str) -> bool:
        return self.environment_path(environment).is_file()

    def load(
        self,
        environment: str,
        release_id: Optional[Any] = None,
        parameters: Optional[Mapping[str, Any]] = None,
    ) -> Config:
        """Load the configuration of an environment

        Args:
            environment: Environment name
            release_id: Release identifier (default: current timestamp)
            parameters: Configuration-level parameters

        Returns:
            Loaded configuration

        Raises:
            EnvironmentNotFoundError: If the environment file does not exist
            ConfigError: If a file is not valid YAML or fails validation
        """
        env_path = self.environment_path(environment)
        if not env_path.is_file():
            raise EnvironmentNotFoundError(environment, str(env_path))

        general = {}
        if self.general_path.is_file():
            general = self._read_yaml(self.general_path)

        data = self._read_yaml(env_path)
        self.validate(data, env_path)

        logger.debug(f"Loaded environment {environment} from {env_path}")

        return Config(
            environment=environment,
            general=general,
            environment_config=data,
            parameters=parameters,
            release_id=release_id,
        )

    def validate(self, data: Dict[str, Any], source: Path) -> None:
        """Validate an environment document against the schema"""
        try:
            jsonschema.validate(data, ENVIRONMENT_SCHEMA)
        except jsonschema.ValidationError as e:
            location = ".".join(str(p) for p in e.absolute_path) or "<root>"
            raise ConfigError(f"Invalid configuration in {source} at {location}: {e.message}")

    def _read_yaml(self, path: Path) -> Dict[str, Any]:
        with open(path, "r") as f:
            content = f.read()

        # Simple environment variable expansion
        content = os.path.expandvars(content)

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse {path}: {e}")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration file {path} must contain a mapping")
        return data
