from pathlib import Path

import yaml
from typer.testing import CliRunner

from console_operator.cli import app


runner = CliRunner()


def test_top_level_commands_present() -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for command in ("render", "reconcile", "delete"):
        assert command in result.stdout


def test_render_uses_config_and_owner(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("IMAGE", "example/console")
    monkeypatch.setenv("RELEASE_VERSION", "4.2")
    config_file = tmp_path / "operator.yaml"
    config_file.write_text(
        yaml.safe_dump(
            {
                "context": {"namespace": "console-ns"},
                "volumes": [{"name": "console-config", "source": "ConfigMap", "mountPath": "/var/console-config"}],
            }
        )
    )
    owner_file = tmp_path / "console.yaml"
    owner_file.write_text(yaml.safe_dump({"metadata": {"name": "cluster", "uid": "u-1"}, "spec": {"count": 3}}))

    result = runner.invoke(app, ["render", str(config_file), "--owner", str(owner_file)])

    assert result.exit_code == 0, result.output
    body = yaml.safe_load(result.stdout)
    assert body["kind"] == "Deployment"
    assert body["metadata"]["namespace"] == "console-ns"
    assert body["spec"]["replicas"] == 3
    pod = body["spec"]["template"]["spec"]
    assert pod["containers"][0]["image"] == "example/console:4.2"
    assert pod["volumes"] == [{"name": "console-config", "configMap": {"name": "console-config"}}]


def test_render_default_console_has_no_owner_reference(monkeypatch) -> None:
    monkeypatch.setenv("IMAGE", "example/console")
    monkeypatch.delenv("RELEASE_VERSION", raising=False)

    result = runner.invoke(app, ["render"])

    assert result.exit_code == 0, result.output
    body = yaml.safe_load(result.stdout)
    assert body["metadata"]["name"] == "console"
    assert "ownerReferences" not in body["metadata"]
    assert body["spec"]["template"]["spec"]["containers"][0]["image"] == "example/console"
