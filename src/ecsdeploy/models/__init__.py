"""Pydantic models for configuration and orchestrator resources."""

from ecsdeploy.models.config import DeployerConfig, AwsConfig, EcsConfig
from ecsdeploy.models.result import DefinitionUpdate, DeployResult, DeployStatus, WorkflowState
from ecsdeploy.models.service import Deployment, Service
from ecsdeploy.models.task_definition import ContainerDefinition, ContainerImage, TaskDefinition

__all__ = [
    "DeployerConfig",
    "AwsConfig",
    "EcsConfig",
    "DefinitionUpdate",
    "DeployResult",
    "DeployStatus",
    "WorkflowState",
    "Deployment",
    "Service",
    "ContainerDefinition",
    "ContainerImage",
    "TaskDefinition",
]
