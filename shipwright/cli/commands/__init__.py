# shipwright/cli/commands/__init__.py
"""CLI commands"""

from . import init
from . import deploy
from . import rollback
from . import lock

__all__ = [
    "init",
    "deploy",
    "rollback",
    "lock",
]
