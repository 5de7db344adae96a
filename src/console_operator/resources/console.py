"""Read-only view of the Console custom resource that owns the Deployment."""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Mapping, Optional

from pydantic import Field

from .base import ResourceModel

CONSOLE_API_VERSION = "console.openshift.io/v1alpha1"
CONSOLE_KIND = "Console"


class ManagementState(str, Enum):
    """How the operator should treat the console workload."""

    MANAGED = "Managed"
    UNMANAGED = "Unmanaged"
    REMOVED = "Removed"


class ConsoleMetadata(ResourceModel):
    name: str
    namespace: Optional[str] = None
    uid: Optional[str] = None


class ConsoleSpec(ResourceModel):
    """Fields of the Console spec consumed by the operator."""

    count: int = 1
    management_state: ManagementState = Field(default=ManagementState.MANAGED, alias="managementState")


class Console(ResourceModel):
    """Owner of the console Deployment."""

    api_version: str = Field(default=CONSOLE_API_VERSION, alias="apiVersion")
    kind: str = CONSOLE_KIND
    metadata: ConsoleMetadata
    spec: ConsoleSpec = Field(default_factory=ConsoleSpec)

    @classmethod
    def from_manifest(cls, manifest: Mapping[str, Any]) -> "Console":
        """Parse a Console object as returned by the cluster."""

        data: Dict[str, Any] = {
            "apiVersion": manifest.get("apiVersion", CONSOLE_API_VERSION),
            "kind": manifest.get("kind", CONSOLE_KIND),
            "metadata": {
                key: value
                for key, value in (manifest.get("metadata") or {}).items()
                if key in ("name", "namespace", "uid")
            },
            "spec": manifest.get("spec") or {},
        }
        return cls.model_validate(data)

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> Optional[str]:
        return self.metadata.namespace
