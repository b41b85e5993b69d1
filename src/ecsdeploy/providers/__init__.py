"""Orchestrator clients for ecsdeploy."""

from ecsdeploy.providers.base import OrchestratorClient
from ecsdeploy.providers.ecs import EcsOrchestrator, create_ecs_client

__all__ = [
    "OrchestratorClient",
    "EcsOrchestrator",
    "create_ecs_client",
]
