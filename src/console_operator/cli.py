"""Command line entry point for the console operator."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
import yaml
from rich import print as rich_print
from rich.logging import RichHandler

from .config import OperatorConfig
from .images import ImageConfig
from .kube import ClusterAPI
from .operations.deployment import DeploymentOperations
from .resources.console import CONSOLE_API_VERSION, CONSOLE_KIND, Console
from .resources.deployment import build_deployment

app = typer.Typer(help="Keep the console Deployment in its desired state.")


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, log_time_format="%X")],
    )


def _load_config(
    config_path: Optional[Path],
    namespace: Optional[str],
    kube_context: Optional[str],
    kubeconfig: Optional[Path],
) -> OperatorConfig:
    operator_config = OperatorConfig.from_file(config_path) if config_path else OperatorConfig()
    if namespace:
        operator_config.context.namespace = namespace
    if kube_context:
        operator_config.context.context = kube_context
    if kubeconfig:
        operator_config.context.kubeconfig = str(kubeconfig)
    return operator_config


def _create_api(operator_config: OperatorConfig) -> ClusterAPI:
    return ClusterAPI(operator_config.context)


def _create_operations(api: ClusterAPI, operator_config: OperatorConfig) -> DeploymentOperations:
    return DeploymentOperations(
        api,
        operator_config.context,
        volumes=operator_config.volumes,
        images=ImageConfig.from_env(),
    )


def _fetch_console(api: ClusterAPI, operator_config: OperatorConfig) -> Console:
    manifest = api.get(
        api_version=CONSOLE_API_VERSION,
        kind=CONSOLE_KIND,
        name=operator_config.console_name,
        namespace=operator_config.context.namespace,
    )
    return Console.from_manifest(manifest)


ConfigArgument = typer.Argument(None, help="Path to the operator configuration file.")
NamespaceOption = typer.Option(None, help="Override the namespace defined in the config.")
ContextOption = typer.Option(None, "--context", help="Override kubeconfig context.")
KubeconfigOption = typer.Option(None, help="Path to kubeconfig file.")
VerboseOption = typer.Option(False, "--verbose", help="Enable debug logging.")


@app.command("render")
def render(
    config_path: Optional[Path] = ConfigArgument,
    owner: Optional[Path] = typer.Option(None, help="Console manifest to render for instead of a default one."),
    namespace: Optional[str] = NamespaceOption,
    verbose: bool = VerboseOption,
) -> None:
    """Print the desired Deployment without contacting the cluster."""

    _configure_logging(verbose)
    operator_config = _load_config(config_path, namespace, None, None)
    if owner:
        console = Console.from_manifest(yaml.safe_load(owner.read_text()) or {})
    else:
        console = Console.model_validate(
            {"metadata": {"name": operator_config.console_name, "namespace": operator_config.context.namespace}}
        )
    definition = build_deployment(
        console,
        operator_config.volumes,
        ImageConfig.from_env().resolve(),
        operator_config.context.namespace,
    )
    typer.echo(yaml.safe_dump(definition.to_dict(), sort_keys=False))


@app.command("reconcile")
def reconcile(
    config_path: Optional[Path] = ConfigArgument,
    namespace: Optional[str] = NamespaceOption,
    kube_context: Optional[str] = ContextOption,
    kubeconfig: Optional[Path] = KubeconfigOption,
    verbose: bool = VerboseOption,
) -> None:
    """Run a single reconciliation pass for the console Deployment."""

    _configure_logging(verbose)
    operator_config = _load_config(config_path, namespace, kube_context, kubeconfig)
    api = _create_api(operator_config)
    console = _fetch_console(api, operator_config)
    config_map = api.get(
        api_version="v1",
        kind="ConfigMap",
        name=operator_config.config_map_name,
        namespace=console.namespace or operator_config.context.namespace,
    )
    result = _create_operations(api, operator_config).sync(console, config_map)
    if result is None:
        rich_print(f"[yellow]Console is {console.spec.management_state.value}; no Deployment applied.[/yellow]")
        return
    rich_print("[green]Console Deployment reconciled.[/green]")


@app.command("delete")
def delete(
    config_path: Optional[Path] = ConfigArgument,
    namespace: Optional[str] = NamespaceOption,
    kube_context: Optional[str] = ContextOption,
    kubeconfig: Optional[Path] = KubeconfigOption,
    verbose: bool = VerboseOption,
) -> None:
    """Delete the console Deployment."""

    _configure_logging(verbose)
    operator_config = _load_config(config_path, namespace, kube_context, kubeconfig)
    api = _create_api(operator_config)
    console = _fetch_console(api, operator_config)
    _create_operations(api, operator_config).delete(console)
    rich_print("[green]Console Deployment deleted.[/green]")


if __name__ == "__main__":  # pragma: no cover
    app()
