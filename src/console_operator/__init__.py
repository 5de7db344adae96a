"""Console operator package."""

from .config import OperatorConfig, OperatorContext  # noqa: F401
from .kube import ClusterAPI  # noqa: F401
from .operations.deployment import DeploymentOperations  # noqa: F401

__all__ = ["OperatorConfig", "OperatorContext", "ClusterAPI", "DeploymentOperations"]
