# shipwright/config/config.py
"""Immutable deployment configuration"""

import copy
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from ..constants import DEFAULT_SSH_PORT, RELEASE_ID_FORMAT

_MISSING = object()


def _copy_value(value: Any) -> Any:
    """Return a private copy of mutable containers"""
    if isinstance(value, (dict, list)):
        return copy.deepcopy(value)
    return value


class Config:
    """Configuration for one environment, optionally bound to one host

    The configuration is a value: it is never modified after construction.
    ``for_host`` and ``with_release_id`` return new instances, so the same
    object can be shared by every task of a run.
    """

    def __init__(
        self,
        environment: Optional[str] = None,
        general: Optional[Mapping[str, Any]] = None,
        environment_config: Optional[Mapping[str, Any]] = None,
        parameters: Optional[Mapping[str, Any]] = None,
        release_id: Optional[Any] = None,
        host: Optional[str] = None,
    ):
        """Initialize configuration

        Args:
            environment: Environment name (e.g. "production")
            general: Contents of general.yml
            environment_config: Contents of the environment file
            parameters: Configuration-level parameters (e.g. from the CLI)
            release_id: Release identifier, defaults to a timestamp
            host: Host this configuration is bound to
        """
        self._environment = environment
        self._general: Dict[str, Any] = copy.deepcopy(dict(general or {}))
        self._data: Dict[str, Any] = copy.deepcopy(dict(environment_config or {}))
        self._parameters: Dict[str, Any] = copy.deepcopy(dict(parameters or {}))
        if release_id is None:
            release_id = datetime.now().strftime(RELEASE_ID_FORMAT)
        self._release_id = str(release_id)
        self._host = host

    def __repr__(self) -> str:
        return (
            f"Config(environment={self._environment!r}, "
            f"release_id={self._release_id!r}, host={self._host!r})"
        )

    @property
    def environment(self) -> Optional[str]:
        return self._environment

    @property
    def host(self) -> Optional[str]:
        return self._host

    @property
    def hosts(self) -> List[str]:
        """Hosts configured for the environment"""
        hosts = self._data.get("hosts") or []
        if isinstance(hosts, str):
            return [hosts]
        return [str(h) for h in hosts]

    # Derived instances

    def _replace(self, **changes) -> "Config":
        values = {
            "environment": self._environment,
            "general": self._general,
            "environment_config": self._data,
            "parameters": self._parameters,
            "release_id": self._release_id,
            "host": self._host,
        }
        values.update(changes)
        return Config(**values)

    def for_host(self, host: str) -> "Config":
        """Get a copy of this configuration bound to ``host``"""
        return self._replace(host=host)

    def with_release_id(self, release_id: Any) -> "Config":
        """Get a copy of this configuration using ``release_id``"""
        return self._replace(release_id=release_id)

    # Lookups

    def get(self, path: str, default: Any = None) -> Any:
        """Look up a dotted key path such as ``deployment.to``

        Missing keys, or keys traversing a non-mapping value, return
        ``default``.
        """
        node: Any = dict(self._data)
        node["general"] = self._merged_general()

        for part in path.split("."):
            if not isinstance(node, Mapping) or part not in node:
                return default
            node = node[part]

        if node is None:
            return default
        return _copy_value(node)

    def _merged_general(self) -> Dict[str, Any]:
        merged = dict(self._general)
        overrides = self._data.get("general")
        if isinstance(overrides, Mapping):
            merged.update(overrides)
        return merged

    def general(self, key: str, default: Any = None) -> Any:
        """Get a key of the general section (environment file wins)"""
        return self.get(f"general.{key}", default)

    def deployment(self, key: str, default: Any = None) -> Any:
        """Get a key of the deployment section"""
        return self._section_value("deployment", key, default)

    def release(self, key: str, default: Any = None) -> Any:
        """Get a key of the release section"""
        return self._section_value("release", key, default)

    def extras(self, key: str, sub_key: str = "top", default: Any = None) -> Any:
        """Get a key of the extras section

        ``sub_key="top"`` reads ``extras.<key>``; any other value reads
        ``extras.<key>.<sub_key>``.
        """
        section = self._data.get("extras")
        if not isinstance(section, Mapping) or key not in section:
            return default

        value = section[key]
        if sub_key != "top":
            if not isinstance(value, Mapping) or sub_key not in value:
                return default
            value = value[sub_key]

        if value is None:
            return default
        return _copy_value(value)

    def _section_value(self, section: str, key: str, default: Any) -> Any:
        data = self._data.get(section)
        if not isinstance(data, Mapping) or data.get(key) is None:
            return default
        return _copy_value(data[key])

    def get_parameter(
        self,
        name: str,
        default: Any = None,
        extra_parameters: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """Get a parameter

        Lookup order: ``extra_parameters`` (task-local), then the
        configuration-level parameters, then ``default``.
        """
        if extra_parameters and name in extra_parameters:
            return _copy_value(extra_parameters[name])
        if name in self._parameters:
            return _copy_value(self._parameters[name])
        return default

    @property
    def parameters(self) -> Dict[str, Any]:
        return copy.deepcopy(self._parameters)

    def get_tasks(self, stage: Any) -> List[Any]:
        """Get the task entries configured for a stage"""
        stage_name = getattr(stage, "value", stage)
        tasks = self._data.get("tasks")
        if not isinstance(tasks, Mapping):
            return []
        return list(_copy_value(tasks.get(stage_name) or []))

    # Release

    def get_release_id(self) -> str:
        return self._release_id

    def releases_enabled(self) -> bool:
        return self.release("enabled", False) is True

    # Host connection

    def _split_host(self):
        host = self._host or ""
        if host.count(":") == 1:
            name, port = host.split(":")
            return name, port
        return host, None

    def get_host_name(self) -> str:
        """Get host name without the port suffix"""
        return self._split_host()[0]

    def get_host_port(self) -> int:
        """Get SSH port: host suffix, then ``deployment.port``, then 22"""
        _, port = self._split_host()
        if port:
            return int(port)
        return int(self.deployment("port", DEFAULT_SSH_PORT))

    def get_host_identity_file_option(self) -> str:
        """Get the ssh ``-i`` option, empty when no identity file is set"""
        identity_file = self.deployment("identity-file")
        if identity_file:
            return f"-i {identity_file}"
        return ""

    def get_connect_timeout_option(self) -> str:
        """Get the ssh connect timeout option, empty when not configured"""
        timeout = self.deployment("timeout")
        if timeout:
            return f"-o ConnectTimeout={int(timeout)}"
        return ""
