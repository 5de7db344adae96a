"""Configuration models and helpers for the console operator."""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field

from .resources.deployment import DEFAULT_NAMESPACE
from .resources.volumes import DEFAULT_VOLUMES, VolumeConfig


class OperatorContext(BaseModel):
    """Connection context to interact with the cluster."""

    namespace: Optional[str] = DEFAULT_NAMESPACE
    kubeconfig: Optional[str] = None
    context: Optional[str] = None
    verify_ssl: bool = True
    field_manager: str = Field(default="console-operator")


class OperatorConfig(BaseModel):
    """Which objects the operator reconciles and how the pod mounts its inputs."""

    context: OperatorContext = Field(default_factory=OperatorContext)
    console_name: str = Field(default="cluster", alias="console")
    config_map_name: str = Field(default="console-config", alias="configMap")
    volumes: List[VolumeConfig] = Field(default_factory=lambda: list(DEFAULT_VOLUMES))

    model_config = {"populate_by_name": True}

    @classmethod
    def from_file(cls, path: str | Path) -> "OperatorConfig":
        document_path = Path(path)
        data = yaml.safe_load(document_path.read_text())
        if not isinstance(data, dict):
            raise ValueError("Configuration file must contain a mapping at the top level.")
        return cls.model_validate(data)
