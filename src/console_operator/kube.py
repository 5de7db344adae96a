"""Low-level Kubernetes client helpers for the console operator."""
from __future__ import annotations

import copy
import logging
from typing import Any, Dict, Optional

from kubernetes import config
from kubernetes.client import ApiException
from kubernetes.dynamic import DynamicClient, ResourceInstance

from .config import OperatorContext
from .resources.base import ResourceDefinition

_LOG = logging.getLogger(__name__)

NOT_FOUND = 404
ALREADY_EXISTS = 409


def is_not_found(exc: ApiException) -> bool:
    return exc.status == NOT_FOUND


def is_already_exists(exc: ApiException) -> bool:
    return exc.status == ALREADY_EXISTS


def _as_dict(result: Any) -> Dict[str, Any]:
    return result.to_dict() if isinstance(result, ResourceInstance) else result


class ClusterAPI:
    """Thin wrapper around the Kubernetes dynamic client.

    Every call is a single request; errors surface as ``ApiException`` so the
    caller decides which statuses are benign.
    """

    def __init__(self, context: OperatorContext) -> None:
        self.context = context
        api_client = config.new_client_from_config(
            config_file=context.kubeconfig,
            context=context.context,
        )
        api_client.configuration.verify_ssl = context.verify_ssl
        self.api_client = api_client
        self.dynamic = DynamicClient(api_client)

    def _namespace(self, namespace: Optional[str]) -> Optional[str]:
        return namespace or self.context.namespace

    def get(self, api_version: str, kind: str, name: str, namespace: Optional[str] = None) -> Dict[str, Any]:
        """Read a single object."""

        resource = self.dynamic.resources.get(api_version=api_version, kind=kind)
        _LOG.debug("Reading %s/%s", kind, name)
        return _as_dict(resource.get(name=name, namespace=self._namespace(namespace)))

    def create(self, definition: ResourceDefinition) -> Dict[str, Any]:
        """Submit ``definition`` as a new object."""

        body = definition.to_dict()
        target_namespace = self._namespace(definition.namespace)
        if target_namespace:
            body["metadata"] = {**body["metadata"], "namespace": target_namespace}
        resource = self.dynamic.resources.get(api_version=definition.api_version, kind=definition.kind)
        _LOG.debug("Creating %s/%s", definition.kind, definition.name)
        return _as_dict(
            resource.create(body=body, namespace=target_namespace, field_manager=self.context.field_manager)
        )

    def replace(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """Replace an existing object with ``body``.

        ``body`` is expected to be a previously read object so that its
        ``resourceVersion`` guards against lost updates.
        """

        metadata = body.get("metadata", {})
        name = metadata.get("name")
        if not name:
            raise ValueError("Object name must be set to replace a resource.")
        target_namespace = self._namespace(metadata.get("namespace"))
        resource = self.dynamic.resources.get(api_version=body["apiVersion"], kind=body["kind"])
        _LOG.debug("Updating %s/%s", body["kind"], name)
        sanitized = self._sanitize_existing(body)
        return _as_dict(
            resource.replace(
                name=name,
                namespace=target_namespace,
                body=sanitized,
                field_manager=self.context.field_manager,
            )
        )

    def delete(self, api_version: str, kind: str, name: str, namespace: Optional[str] = None) -> None:
        """Delete an object; a missing object raises a 404 ``ApiException``."""

        resource = self.dynamic.resources.get(api_version=api_version, kind=kind)
        _LOG.debug("Deleting %s/%s", kind, name)
        resource.delete(name=name, namespace=self._namespace(namespace))

    @staticmethod
    def _sanitize_existing(body: Dict[str, Any]) -> Dict[str, Any]:
        sanitized = copy.deepcopy(body)
        metadata = sanitized.get("metadata", {})
        for field in [
            "creationTimestamp",
            "managedFields",
            "selfLink",
            "generation",
        ]:
            metadata.pop(field, None)
        sanitized.pop("status", None)
        return sanitized
