"""Service repointing."""

import copy
import logging
from typing import Any, Callable, Dict, Optional

from ecsdeploy.errors import ServiceNotFound
from ecsdeploy.models.result import WorkflowState
from ecsdeploy.models.service import Service
from ecsdeploy.models.task_definition import TaskDefinition
from ecsdeploy.providers.base import OrchestratorClient


logger = logging.getLogger(__name__)


def find_service_connect_configuration(service: Service, task_definition_arn: str) -> Optional[Dict[str, Any]]:
    """Return the service connect configuration of a deployment already running the revision."""
    for deployment in service.deployments:
        if deployment.task_definition == task_definition_arn:
            return deployment.service_connect_configuration
    return None


def build_update_request(
    service: Service,
    definition: TaskDefinition,
    service_connect: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Build an UpdateService request that only changes the task definition.

    The remaining operational settings are transferred from the current
    service description, one field at a time.
    """
    request: Dict[str, Any] = {
        "taskDefinition": definition.task_definition_arn,
        "forceNewDeployment": True,
    }
    fields = (
        ("capacityProviderStrategy", service.capacity_provider_strategy),
        ("deploymentConfiguration", service.deployment_configuration),
        ("desiredCount", service.desired_count),
        ("enableECSManagedTags", service.enable_ecs_managed_tags),
        ("enableExecuteCommand", service.enable_execute_command),
        ("healthCheckGracePeriodSeconds", service.health_check_grace_period_seconds),
        ("loadBalancers", service.load_balancers),
        ("networkConfiguration", service.network_configuration),
        ("placementConstraints", service.placement_constraints),
        ("placementStrategy", service.placement_strategy),
        ("platformVersion", service.platform_version),
        ("propagateTags", service.propagate_tags),
        ("serviceRegistries", service.service_registries),
        ("serviceConnectConfiguration", service_connect),
    )
    for key, value in fields:
        if value is not None:
            request[key] = copy.deepcopy(value)
    return request


class ServiceRepointer:
    """Points a service at a new task definition revision."""

    def __init__(self, client: OrchestratorClient, on_state: Optional[Callable[[WorkflowState], None]] = None):
        """Initialize service repointer."""
        self.client = client
        self._on_state = on_state

    def _advance(self, state: WorkflowState):
        if self._on_state:
            self._on_state(state)

    async def deploy(self, cluster: str, service: str, definition: TaskDefinition) -> Service:
        """Force a new deployment of a service on the given revision."""
        if not definition.task_definition_arn:
            raise ValueError(f"Task definition {definition.label} is not registered")

        current = await self.client.describe_service(cluster, service)
        if current is None or not current.is_active:
            raise ServiceNotFound(cluster, service)
        self._advance(WorkflowState.SERVICE_DESCRIBED)

        service_connect = find_service_connect_configuration(current, definition.task_definition_arn)
        if service_connect is not None:
            logger.debug(f"Carrying service connect configuration forward for {service}")

        request = build_update_request(current, definition, service_connect)
        updated = await self.client.update_service(cluster, service, request)
        self._advance(WorkflowState.SERVICE_UPDATED)
        logger.info(f"Service {updated.service_name} now deploying {definition.label}")
        return updated
