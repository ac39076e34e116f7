"""Services for shipwright"""

from .deploy_service import DeployService

__all__ = [
    "DeployService",
]
