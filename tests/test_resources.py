import pytest
from pydantic import ValidationError

from console_operator.images import ImageConfig, image_reference
from console_operator.resources.base import ResourceDefinition
from console_operator.resources.console import Console, ManagementState
from console_operator.resources.deployment import CONFIG_MAP_VERSION_ANNOTATION, build_deployment
from console_operator.resources.owner import bind_owner, owner_reference
from console_operator.resources.volumes import (
    DEFAULT_VOLUMES,
    VolumeConfig,
    VolumeSourceKind,
    project_volumes,
)


def _console(count: int = 2) -> Console:
    return Console.from_manifest(
        {
            "apiVersion": "console.openshift.io/v1alpha1",
            "kind": "Console",
            "metadata": {"name": "cluster", "namespace": "openshift-console", "uid": "abc-123", "resourceVersion": "9"},
            "spec": {"count": count, "managementState": "Managed", "baseAddress": "ignored"},
        }
    )


def test_console_manifest_parsing():
    console = _console(3)
    assert console.name == "cluster"
    assert console.namespace == "openshift-console"
    assert console.spec.count == 3
    assert console.spec.management_state is ManagementState.MANAGED


def test_volume_projection_is_index_aligned():
    configs = [
        VolumeConfig(name="serving-cert", source="Secret", path="/var/serving-cert"),
        VolumeConfig(name="console-config", source="ConfigMap", mountPath="/var/console-config", readOnly=False),
        VolumeConfig(name="oauth", source=VolumeSourceKind.SECRET, path="/var/oauth"),
    ]
    volumes, mounts = project_volumes(configs)
    assert len(volumes) == len(mounts) == len(configs)
    for volume, mount in zip(volumes, mounts):
        assert volume["name"] == mount["name"]
    assert volumes[0]["secret"] == {"secretName": "serving-cert"}
    assert volumes[1]["configMap"] == {"name": "console-config"}
    assert mounts[1] == {"name": "console-config", "readOnly": False, "mountPath": "/var/console-config"}


def test_volume_projection_of_empty_list():
    assert project_volumes([]) == ([], [])


def test_volume_config_requires_a_source():
    with pytest.raises(ValidationError):
        VolumeConfig(name="broken", path="/var/broken")
    with pytest.raises(ValidationError):
        VolumeConfig(name="broken", source="EmptyDir", path="/var/broken")


def test_volume_without_source_is_refused_by_projector():
    entry = VolumeConfig.model_construct(name="broken", source=None, path="/var/broken", read_only=True)
    with pytest.raises(ValueError):
        project_volumes([entry])


def test_deployment_labels_match_selector_and_template():
    body = build_deployment(_console(), DEFAULT_VOLUMES, "example/console:1").to_dict()
    labels = body["metadata"]["labels"]
    assert body["spec"]["selector"]["matchLabels"] == labels
    assert body["spec"]["template"]["metadata"]["labels"] == labels
    assert body["spec"]["selector"]["matchLabels"] is not body["spec"]["template"]["metadata"]["labels"]


def test_deployment_policy_fields_and_placeholder_fingerprint():
    body = build_deployment(_console(2), DEFAULT_VOLUMES, "example/console:1").to_dict()
    spec = body["spec"]
    pod = spec["template"]["spec"]
    assert spec["replicas"] == 2
    assert pod["restartPolicy"] == "Always"
    assert pod["terminationGracePeriodSeconds"] == 30
    assert spec["template"]["metadata"]["annotations"] == {CONFIG_MAP_VERSION_ANNOTATION: ""}
    container = pod["containers"][0]
    assert container["image"] == "example/console:1"
    assert container["ports"][0]["containerPort"] == 8443
    assert container["livenessProbe"]["initialDelaySeconds"] == 30
    assert "initialDelaySeconds" not in container["readinessProbe"]
    assert [m["name"] for m in container["volumeMounts"]] == [v["name"] for v in pod["volumes"]]


def test_deployment_passes_invalid_replica_count_through():
    body = build_deployment(_console(-1), DEFAULT_VOLUMES, "example/console").to_dict()
    assert body["spec"]["replicas"] == -1


def test_deployment_is_owned_by_console():
    body = build_deployment(_console(), DEFAULT_VOLUMES, "example/console").to_dict()
    (reference,) = body["metadata"]["ownerReferences"]
    assert reference["kind"] == "Console"
    assert reference["name"] == "cluster"
    assert reference["uid"] == "abc-123"
    assert reference["controller"] is True


def test_bind_owner_returns_new_definition():
    definition = ResourceDefinition(
        api_version="apps/v1",
        kind="Deployment",
        metadata={"name": "console", "namespace": "openshift-console"},
    )
    bound = bind_owner(definition, _console())
    rebound = bind_owner(bound, _console())
    assert "ownerReferences" not in definition.metadata
    assert len(bound.metadata["ownerReferences"]) == 1
    assert len(rebound.metadata["ownerReferences"]) == 1


def test_bind_owner_skips_owner_without_uid():
    definition = ResourceDefinition(
        api_version="apps/v1",
        kind="Deployment",
        metadata={"name": "console", "namespace": "openshift-console"},
    )
    owner = Console.model_validate({"metadata": {"name": "cluster"}})

    assert owner_reference(owner) is None
    assert "ownerReferences" not in bind_owner(definition, owner).metadata


def test_image_resolution_from_environment():
    assert image_reference("example/console", "") == "example/console"
    assert ImageConfig.from_env({"IMAGE": "example/console", "RELEASE_VERSION": "4.1"}).resolve() == (
        "example/console:4.1"
    )
    assert ImageConfig.from_env({"IMAGE": "example/console"}).resolve() == "example/console"
