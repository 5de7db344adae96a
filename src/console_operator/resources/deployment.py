"""Desired state of the console Deployment."""
from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from .base import ResourceDefinition
from .console import Console
from .owner import bind_owner
from .volumes import VolumeConfig, project_volumes

DEPLOYMENT_NAME = "console"
DEFAULT_NAMESPACE = "openshift-console"
CONTAINER_NAME = "console"
CONSOLE_PORT = 8443
CONSOLE_PORT_NAME = "https"
TERMINATION_GRACE_PERIOD_SECONDS = 30
CONFIG_MAP_VERSION_ANNOTATION = "console.openshift.io/configmapversion"

CONSOLE_COMMAND = [
    "/opt/bridge/bin/bridge",
    "--public-dir=/opt/bridge/static",
    "--config=/var/console-config/console-config.yaml",
]


def console_labels() -> Dict[str, str]:
    return {"app": "console", "component": "ui"}


def readiness_probe() -> Dict[str, object]:
    return {
        "httpGet": {"path": "/health", "port": CONSOLE_PORT, "scheme": "HTTPS"},
        "timeoutSeconds": 1,
        "periodSeconds": 10,
        "successThreshold": 1,
        "failureThreshold": 3,
    }


def liveness_probe() -> Dict[str, object]:
    probe = readiness_probe()
    probe["initialDelaySeconds"] = 30
    return probe


def console_container(image: str, volume_mounts: List[Dict[str, object]]) -> Dict[str, object]:
    return {
        "name": CONTAINER_NAME,
        "image": image,
        "imagePullPolicy": "IfNotPresent",
        "command": list(CONSOLE_COMMAND),
        "ports": [
            {"name": CONSOLE_PORT_NAME, "protocol": "TCP", "containerPort": CONSOLE_PORT},
        ],
        "volumeMounts": volume_mounts,
        "readinessProbe": readiness_probe(),
        "livenessProbe": liveness_probe(),
        "terminationMessagePath": "/dev/termination-log",
        "terminationMessagePolicy": "File",
        "resources": {"limits": {}, "requests": {}},
    }


def build_deployment(
    console: Console,
    volumes: Sequence[VolumeConfig],
    image: str,
    default_namespace: Optional[str] = None,
) -> ResourceDefinition:
    """Build the Deployment the operator wants to exist for ``console``.

    The replica count is copied from the owner without validation; the API
    server is left to reject nonsensical values. The fingerprint annotation is
    seeded empty and filled in by the reconciler.
    """

    namespace = console.namespace or default_namespace or DEFAULT_NAMESPACE
    labels = console_labels()
    pod_volumes, volume_mounts = project_volumes(volumes)

    metadata: Dict[str, object] = {
        "name": DEPLOYMENT_NAME,
        "namespace": namespace,
        "labels": dict(labels),
    }
    spec: Dict[str, object] = {
        "replicas": console.spec.count,
        "selector": {"matchLabels": dict(labels)},
        "template": {
            "metadata": {
                "name": DEPLOYMENT_NAME,
                "labels": dict(labels),
                "annotations": {CONFIG_MAP_VERSION_ANNOTATION: ""},
            },
            "spec": {
                "restartPolicy": "Always",
                "schedulerName": "default-scheduler",
                "terminationGracePeriodSeconds": TERMINATION_GRACE_PERIOD_SECONDS,
                "securityContext": {},
                "containers": [console_container(image, volume_mounts)],
                "volumes": pod_volumes,
            },
        },
    }

    definition = ResourceDefinition(
        api_version="apps/v1",
        kind="Deployment",
        metadata=metadata,
        spec=spec,
    )
    return bind_owner(definition, console)
