"""Volume and volume mount projection for the console pod."""
from __future__ import annotations

from enum import Enum
from typing import Dict, List, Sequence, Tuple

from pydantic import Field

from .base import ResourceModel


class VolumeSourceKind(str, Enum):
    SECRET = "Secret"
    CONFIG_MAP = "ConfigMap"


class VolumeConfig(ResourceModel):
    """Declarative entry describing one volume and where it is mounted.

    The same entry yields both the pod level volume and the container level
    mount, so the two lists cannot drift apart.
    """

    name: str
    source: VolumeSourceKind
    path: str = Field(..., alias="mountPath")
    read_only: bool = Field(default=True, alias="readOnly")

    def to_volume(self) -> Dict[str, object]:
        if self.source is VolumeSourceKind.SECRET:
            return {"name": self.name, "secret": {"secretName": self.name}}
        if self.source is VolumeSourceKind.CONFIG_MAP:
            return {"name": self.name, "configMap": {"name": self.name}}
        raise ValueError(f"Volume {self.name!r} has no Secret or ConfigMap source.")

    def to_volume_mount(self) -> Dict[str, object]:
        return {"name": self.name, "readOnly": self.read_only, "mountPath": self.path}


DEFAULT_VOLUMES: Tuple[VolumeConfig, ...] = (
    VolumeConfig(name="console-serving-cert", source=VolumeSourceKind.SECRET, path="/var/serving-cert"),
    VolumeConfig(name="console-oauth-config", source=VolumeSourceKind.SECRET, path="/var/oauth-config"),
    VolumeConfig(name="console-config", source=VolumeSourceKind.CONFIG_MAP, path="/var/console-config"),
    VolumeConfig(name="service-ca", source=VolumeSourceKind.CONFIG_MAP, path="/var/service-ca"),
)


def volumes_for(configs: Sequence[VolumeConfig]) -> List[Dict[str, object]]:
    return [entry.to_volume() for entry in configs]


def volume_mounts_for(configs: Sequence[VolumeConfig]) -> List[Dict[str, object]]:
    return [entry.to_volume_mount() for entry in configs]


def project_volumes(
    configs: Sequence[VolumeConfig],
) -> Tuple[List[Dict[str, object]], List[Dict[str, object]]]:
    """Return index-aligned ``(volumes, mounts)`` for ``configs``."""

    return volumes_for(configs), volume_mounts_for(configs)
