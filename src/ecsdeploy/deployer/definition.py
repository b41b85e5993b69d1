"""Task definition clone-and-patch."""

import copy
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from ecsdeploy.errors import ContainerMismatch, DefinitionNotFound, OrchestratorError
from ecsdeploy.models.result import DefinitionUpdate, WorkflowState
from ecsdeploy.models.task_definition import ContainerImage, TaskDefinition
from ecsdeploy.providers.base import OrchestratorClient


logger = logging.getLogger(__name__)

StateCallback = Callable[[WorkflowState], None]
RegisteredCallback = Callable[[TaskDefinition], None]


def _set(request: Dict[str, Any], key: str, value: Any):
    """Copy a value into the request unless it is absent."""
    if value is not None:
        request[key] = copy.deepcopy(value)


def build_registration_request(definition: TaskDefinition) -> Dict[str, Any]:
    """Build a RegisterTaskDefinition request from an existing revision.

    Every structural field is transferred explicitly. Read-only attributes
    of the revision (ARN, revision number, status) are not part of the
    request. Tags are only carried over when the revision has some, since
    an explicit empty tag list is rejected by the API.
    """
    request: Dict[str, Any] = {"family": definition.family}
    request["containerDefinitions"] = [
        c.model_dump(exclude_none=True) for c in definition.container_definitions
    ]
    _set(request, "cpu", definition.cpu)
    _set(request, "memory", definition.memory)
    _set(request, "ephemeralStorage", definition.ephemeral_storage)
    _set(request, "executionRoleArn", definition.execution_role_arn)
    _set(request, "taskRoleArn", definition.task_role_arn)
    _set(request, "networkMode", definition.network_mode)
    _set(request, "ipcMode", definition.ipc_mode)
    _set(request, "pidMode", definition.pid_mode)
    _set(request, "placementConstraints", definition.placement_constraints)
    _set(request, "proxyConfiguration", definition.proxy_configuration)
    _set(request, "requiresCompatibilities", definition.requires_compatibilities)
    _set(request, "runtimePlatform", definition.runtime_platform)
    _set(request, "volumes", definition.volumes)
    _set(request, "inferenceAccelerators", definition.inference_accelerators)
    if definition.tags:
        request["tags"] = copy.deepcopy(definition.tags)
    return request


def patch_container_images(request: Dict[str, Any], images: Sequence[ContainerImage]) -> List[str]:
    """Overwrite container images in a registration request.

    Returns the requested names that matched no container.
    """
    missing = []
    for requested in images:
        for container in request["containerDefinitions"]:
            if container.get("name") == requested.name:
                container["image"] = requested.image
                break
        else:
            missing.append(requested.name)
    return missing


class DefinitionUpdater:
    """Registers a new task definition revision with patched images."""

    def __init__(
        self,
        client: OrchestratorClient,
        on_state: Optional[StateCallback] = None,
        on_registered: Optional[RegisteredCallback] = None,
    ):
        """Initialize definition updater.

        ``on_registered`` receives the new revision as soon as it exists, before
        the old revision is deregistered.
        """
        self.client = client
        self._on_state = on_state
        self._on_registered = on_registered

    def _advance(self, state: WorkflowState):
        if self._on_state:
            self._on_state(state)

    async def resolve(self, family: str) -> TaskDefinition:
        """Fetch the latest active revision of a family."""
        arns = await self.client.list_active_revisions(family, limit=1)
        if not arns:
            raise DefinitionNotFound(family)

        definition = await self.client.describe_revision(arns[0])
        logger.debug(f"Resolved {family} to {definition.label}")
        return definition

    async def update(
        self,
        family: str,
        images: Sequence[ContainerImage],
        deregister: bool = True,
    ) -> DefinitionUpdate:
        """Register a copy of the latest revision with new container images."""
        if not family:
            raise ValueError("Task definition family must not be empty")
        if not images:
            raise ValueError("No container images specified")

        current = await self.resolve(family)
        self._advance(WorkflowState.DEFINITION_RESOLVED)

        request = build_registration_request(current)
        missing = patch_container_images(request, images)
        if missing:
            raise ContainerMismatch(family, missing)
        self._advance(WorkflowState.DEFINITION_PATCHED)

        registered = await self.client.register_revision(request)
        self._advance(WorkflowState.DEFINITION_REGISTERED)
        logger.info(f"Registered task definition {registered.label}")
        if self._on_registered:
            self._on_registered(registered)

        result = DefinitionUpdate(definition=registered, previous=current)
        if not deregister:
            return result

        try:
            await self.client.deregister_revision(current.task_definition_arn)
        except OrchestratorError as e:
            result.warning = f"previous task definition {current.label} was not deregistered: {e}"
            logger.warning(result.warning)
            return result

        self._advance(WorkflowState.OLD_DEFINITION_RETIRED)
        logger.info(f"Deregistered task definition {current.label}")
        return result
