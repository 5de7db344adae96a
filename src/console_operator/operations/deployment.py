"""Reconciliation of the console Deployment against live cluster state."""
from __future__ import annotations

import copy
import dataclasses
import logging
from typing import Any, Dict, Mapping, Optional, Sequence

from kubernetes.client import ApiException

from ..config import OperatorContext
from ..images import ImageConfig
from ..kube import ClusterAPI, is_already_exists, is_not_found
from ..resources.base import ResourceDefinition, ResourceRef
from ..resources.console import Console, ManagementState
from ..resources.deployment import CONFIG_MAP_VERSION_ANNOTATION, build_deployment
from ..resources.volumes import DEFAULT_VOLUMES, VolumeConfig
from ..utils import pod_template_annotations, resource_version

_LOG = logging.getLogger(__name__)


def with_fingerprint(definition: ResourceDefinition, version: str) -> ResourceDefinition:
    """Return a copy of ``definition`` whose pod template records ``version``."""

    spec = copy.deepcopy(definition.spec or {})
    template_metadata = spec.setdefault("template", {}).setdefault("metadata", {})
    template_metadata.setdefault("annotations", {})[CONFIG_MAP_VERSION_ANNOTATION] = version
    return dataclasses.replace(definition, spec=spec)


class DeploymentOperations:
    """Create, update or delete the console Deployment for a Console owner.

    Each call performs at most one write and never retries; the surrounding
    control loop is expected to call again on its own schedule.
    """

    def __init__(
        self,
        api: ClusterAPI,
        context: OperatorContext,
        volumes: Sequence[VolumeConfig] = DEFAULT_VOLUMES,
        images: Optional[ImageConfig] = None,
    ) -> None:
        self.api = api
        self.context = context
        self.volumes = tuple(volumes)
        self.images = images or ImageConfig.from_env()

    def desired(self, console: Console) -> ResourceDefinition:
        """Return a freshly built Deployment definition for ``console``."""

        return build_deployment(console, self.volumes, self.images.resolve(), self.context.namespace)

    def _read(self, ref: ResourceRef) -> Dict[str, Any]:
        return self.api.get(api_version=ref.api_version, kind=ref.kind, name=ref.name, namespace=ref.namespace)

    def apply(self, console: Console, config_map: Mapping[str, Any]) -> Dict[str, Any]:
        """Create the Deployment if it is missing, otherwise refresh its config fingerprint."""

        definition = self.desired(console)
        try:
            live = self._read(definition.ref)
        except ApiException as exc:
            if not is_not_found(exc):
                raise
            return self._create(with_fingerprint(definition, resource_version(config_map)))
        return self._update(live, config_map)

    def create(self, console: Console) -> Dict[str, Any]:
        return self._create(self.desired(console))

    def _create(self, definition: ResourceDefinition) -> Dict[str, Any]:
        try:
            created = self.api.create(definition)
        except ApiException as exc:
            if not is_already_exists(exc):
                _LOG.error("Failed to create Deployment %s: %s", definition.name, exc)
                raise
            _LOG.info("Deployment %s already exists; using the existing object", definition.name)
            return self._read(definition.ref)
        _LOG.info("Created Deployment %s/%s", definition.namespace, definition.name)
        return created

    def update(self, console: Console, config_map: Mapping[str, Any]) -> Dict[str, Any]:
        """Fetch the live Deployment and roll it if the ConfigMap version moved."""

        live = self._read(self.desired(console).ref)
        return self._update(live, config_map)

    def _update(self, live: Dict[str, Any], config_map: Mapping[str, Any]) -> Dict[str, Any]:
        name = live.get("metadata", {}).get("name")
        version = resource_version(config_map)
        annotations = pod_template_annotations(live)
        if annotations is not None and annotations.get(CONFIG_MAP_VERSION_ANNOTATION, "") == version:
            _LOG.debug("Deployment %s already at config version %r", name, version)
            return live

        # A changed pod template annotation makes the Deployment roll out new pods.
        updated = copy.deepcopy(live)
        template_metadata = updated.setdefault("spec", {}).setdefault("template", {}).setdefault("metadata", {})
        template_annotations = dict(template_metadata.get("annotations") or {})
        template_annotations[CONFIG_MAP_VERSION_ANNOTATION] = version
        template_metadata["annotations"] = template_annotations

        _LOG.info("Updating Deployment %s to config version %r", name, version)
        return self.api.replace(updated)

    def delete(self, console: Console) -> None:
        """Delete the Deployment; a Deployment that is already gone is not an error."""

        ref = self.desired(console).ref
        try:
            self.api.delete(api_version=ref.api_version, kind=ref.kind, name=ref.name, namespace=ref.namespace)
        except ApiException as exc:
            if not is_not_found(exc):
                raise
            _LOG.debug("Deployment %s not found during delete", ref.name)
            return
        _LOG.info("Deleted Deployment %s/%s", ref.namespace, ref.name)

    def sync(self, console: Console, config_map: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        """Drive the Deployment according to the owner's management state."""

        state = console.spec.management_state
        if state is ManagementState.REMOVED:
            self.delete(console)
            return None
        if state is ManagementState.UNMANAGED:
            _LOG.info("Console %s is unmanaged; leaving the Deployment alone", console.name)
            return None
        return self.apply(console, config_map)
