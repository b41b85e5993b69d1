"""Main CLI implementation using Typer."""

import asyncio
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from ecsdeploy.cli import commands
from ecsdeploy.deployer import ConfigError, ConfigManager
from ecsdeploy.errors import DeployerError
from ecsdeploy.models.config import DeployerConfig
from ecsdeploy.models.result import DeployStatus
from ecsdeploy.utils.logging import setup_logging


# Create Typer app
app = typer.Typer(
    name="ecsdeploy",
    help="Update ECS task definition images and deploy the service",
    add_completion=False,
)

# Console for rich output
console = Console(stderr=True)


def _load_config(config_file: Optional[Path], overrides: Dict[str, Any]) -> DeployerConfig:
    """Load configuration and set up logging."""
    manager = ConfigManager(config_file)
    config = asyncio.run(manager.load(overrides))
    setup_logging(config.log_level)
    return config


def _run_cli_command(
    handler: Callable[..., Any],
    config_file: Optional[Path],
    overrides: Dict[str, Any],
    **kwargs: Any,
):
    """Helper to run a CLI command with loaded configuration and error handling."""
    try:
        config = _load_config(config_file, overrides)
        return handler(config, **kwargs)
    except (ConfigError, ValidationError, DeployerError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e


def _overrides(
    containers: Optional[List[str]] = None,
    task: Optional[str] = None,
    service: Optional[str] = None,
    cluster: Optional[str] = None,
    region: Optional[str] = None,
    deregister: Optional[bool] = None,
    timeout: Optional[float] = None,
) -> Dict[str, Any]:
    return {
        "containers": containers,
        "timeout": timeout,
        "aws": {"region": region},
        "ecs": {
            "task": task,
            "service": service,
            "cluster": cluster,
            "deregister": deregister,
        },
    }


def _deploy(config: DeployerConfig, quiet: bool = False):
    problems = config.validate_for_deploy()
    if problems:
        for problem in problems:
            console.print(f"[red]Error:[/red] {problem}")
        raise typer.Exit(1)

    result = commands.deploy(config, quiet=quiet)
    if result.status == DeployStatus.FAILED:
        raise typer.Exit(1)


@app.command("deploy")
def deploy_command(
    containers: Optional[List[str]] = typer.Option(
        None, "--containers", help="Container images to update eg: (--containers con1=image1 --containers con2=image2)"
    ),
    task: Optional[str] = typer.Option(None, "--task", help="ECS Task Definition family"),
    service: Optional[str] = typer.Option(None, "--service", help="ECS Service name or ARN"),
    cluster: Optional[str] = typer.Option(None, "--cluster", help="ECS Service's Cluster Name or ARN"),
    region: Optional[str] = typer.Option(None, "--region", help="AWS Region"),
    deregister: Optional[bool] = typer.Option(
        None, "--deregister/--no-deregister", help="Deregister old task definition"
    ),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Deployment deadline in seconds"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Hide progress output"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file"),
):
    """Update container images and deploy the ECS service."""
    overrides = _overrides(containers, task, service, cluster, region, deregister, timeout)
    _run_cli_command(_deploy, config_file, overrides, quiet=quiet)


# Config subcommands
config_app = typer.Typer(help="Configuration commands")
app.add_typer(config_app, name="config")


@config_app.command("validate")
def config_validate_command(
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file"),
):
    """Validate the deployment configuration."""
    problems = _run_cli_command(commands.validate_config, config_file, {})
    if problems:
        raise typer.Exit(1)


def main():
    """Main entry point for CLI."""
    app()
