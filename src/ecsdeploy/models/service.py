"""Service models."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class Deployment(BaseModel):
    """An in-flight deployment of a service."""
    id: Optional[str] = None
    status: Optional[str] = None
    task_definition: Optional[str] = None
    service_connect_configuration: Optional[Dict[str, Any]] = None

    class Config:
        """Pydantic config."""
        extra = "ignore"
        alias_generator = to_camel
        populate_by_name = True


class Service(BaseModel):
    """Live operational configuration of a deployed service."""
    service_name: str
    service_arn: Optional[str] = None
    cluster_arn: Optional[str] = None
    status: Optional[str] = None
    task_definition: Optional[str] = None
    desired_count: Optional[int] = None
    capacity_provider_strategy: Optional[List[Dict[str, Any]]] = None
    deployment_configuration: Optional[Dict[str, Any]] = None
    enable_ecs_managed_tags: Optional[bool] = Field(None, alias="enableECSManagedTags")
    enable_execute_command: Optional[bool] = None
    health_check_grace_period_seconds: Optional[int] = None
    load_balancers: Optional[List[Dict[str, Any]]] = None
    network_configuration: Optional[Dict[str, Any]] = None
    placement_constraints: Optional[List[Dict[str, Any]]] = None
    placement_strategy: Optional[List[Dict[str, Any]]] = None
    platform_version: Optional[str] = None
    propagate_tags: Optional[str] = None
    service_registries: Optional[List[Dict[str, Any]]] = None
    deployments: List[Deployment] = Field(default_factory=list)

    class Config:
        """Pydantic config."""
        extra = "ignore"
        alias_generator = to_camel
        populate_by_name = True

    @property
    def is_active(self) -> bool:
        return self.status != "INACTIVE"
