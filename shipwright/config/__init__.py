"""Configuration for shipwright"""

from .config import Config
from .loader import ConfigLoader, ENVIRONMENT_SCHEMA

__all__ = [
    "Config",
    "ConfigLoader",
    "ENVIRONMENT_SCHEMA",
]
