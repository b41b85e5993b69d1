"""Command implementations for CLI."""

import asyncio
from typing import Optional

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from ecsdeploy.deployer import Deployer
from ecsdeploy.models.config import DeployerConfig
from ecsdeploy.models.result import DeployResult, DeployStatus
from ecsdeploy.providers import EcsOrchestrator, create_ecs_client


console = Console()
stderr_console = Console(stderr=True)


def _create_deployer(config: DeployerConfig) -> Deployer:
    """Build a deployer talking to ECS with the configured credentials."""
    return Deployer(EcsOrchestrator(create_ecs_client(config.aws)))


def deploy(config: DeployerConfig, deployer: Optional[Deployer] = None, quiet: bool = False) -> DeployResult:
    """Update the task definition and deploy the service."""
    deployer = deployer or _create_deployer(config)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=stderr_console,
        disable=quiet,
    ) as progress:
        task = progress.add_task(
            f"Deploying {config.ecs.task} to {config.ecs.service}...", total=None
        )
        result = asyncio.run(
            deployer.deploy(
                family=config.ecs.task,
                images=config.containers,
                cluster=config.ecs.cluster,
                service=config.ecs.service,
                deregister=config.ecs.deregister,
                timeout=config.timeout,
            )
        )
        progress.update(task, completed=True)

    show_result(result)
    return result


def show_result(result: DeployResult):
    """Print a deployment summary."""
    table = Table(title="Deployment")
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    status_color = {
        DeployStatus.DONE: "green",
        DeployStatus.DONE_WITH_WARNING: "yellow",
        DeployStatus.FAILED: "red",
    }[result.status]
    table.add_row("Status", f"[{status_color}]{result.status.value}[/{status_color}]")
    table.add_row("Cluster", result.cluster)
    table.add_row("Service", result.service_name)
    table.add_row("Task Definition", result.definition.label if result.definition else result.family)
    if result.service and result.service.desired_count is not None:
        table.add_row("Desired Count", str(result.service.desired_count))
    console.print(table)

    if result.warning:
        console.print(f"[yellow]Warning:[/yellow] {result.warning}")
    if result.error:
        console.print(f"[red]Error:[/red] {result.error}")


def validate_config(config: DeployerConfig):
    """Show the effective configuration and what prevents a deployment."""
    table = Table(title="Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Region", config.aws.region or "[dim]default[/dim]")
    table.add_row("Static Credentials", "✓" if config.aws.has_static_credentials else "✗")
    table.add_row("Task Definition", config.ecs.task or "")
    table.add_row("Service", config.ecs.service or "")
    table.add_row("Cluster", config.ecs.cluster or "")
    table.add_row("Deregister", "✓" if config.ecs.deregister else "✗")
    for container in config.containers:
        table.add_row(f"Container {container.name}", container.image)
    console.print(table)

    problems = config.validate_for_deploy()
    for problem in problems:
        console.print(f"[red]✗[/red] {problem}")
    if not problems:
        console.print("[green]✓ Configuration is valid[/green]")
    return problems
