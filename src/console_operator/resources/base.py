"""Shared resource definitions for the console operator."""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict


class ResourceModel(BaseModel):
    """Immutable base model for objects read from configuration or the cluster."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class ResourceRef(NamedTuple):
    """Identity of an object, enough to read or delete it."""

    api_version: str
    kind: str
    name: str
    namespace: Optional[str]


@dataclass(frozen=True)
class ResourceDefinition:
    """A desired Kubernetes manifest, built fresh for every reconciliation."""

    api_version: str
    kind: str
    metadata: Dict[str, Any]
    spec: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "metadata": self.metadata,
        }
        if self.spec is not None:
            body["spec"] = self.spec
        return body

    def with_metadata(self, metadata: Dict[str, Any]) -> "ResourceDefinition":
        return dataclasses.replace(self, metadata=metadata)

    @property
    def ref(self) -> ResourceRef:
        return ResourceRef(self.api_version, self.kind, self.name, self.namespace)

    @property
    def name(self) -> Optional[str]:
        return self.metadata.get("name")

    @property
    def namespace(self) -> Optional[str]:
        return self.metadata.get("namespace")
