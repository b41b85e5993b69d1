"""Deployment workflow engine."""

import asyncio
import contextlib
import logging
from typing import AsyncContextManager, Callable, Dict, Optional, Sequence, Tuple

from ecsdeploy.deployer.definition import DefinitionUpdater
from ecsdeploy.deployer.service import ServiceRepointer
from ecsdeploy.errors import DeployerError, DeploymentCancelled
from ecsdeploy.models.result import DefinitionUpdate, DeployResult, DeployStatus, WorkflowState
from ecsdeploy.models.service import Service
from ecsdeploy.models.task_definition import ContainerImage, TaskDefinition
from ecsdeploy.providers.base import OrchestratorClient


logger = logging.getLogger(__name__)

LockKey = Tuple[str, str, str]
SingleFlight = Callable[[LockKey], AsyncContextManager]


def no_single_flight(key: LockKey) -> AsyncContextManager:
    """Default hook: invocations are not serialized."""
    return contextlib.nullcontext()


class LocalSingleFlight:
    """Serializes deployments of the same family and service within a process.

    Revision lists and service configurations are read and written without
    any version check on the orchestrator side, so two concurrent runs for
    the same target can register divergent revisions. Callers spread across
    processes need an external lock with the same call signature.

    One lock is kept per distinct key for the life of the object. Long-lived
    callers deploying to an open-ended set of targets should scope an instance
    to a batch of deployments rather than share one forever.
    """

    def __init__(self):
        self._locks: Dict[LockKey, asyncio.Lock] = {}

    def __call__(self, key: LockKey) -> AsyncContextManager:
        return self._locks.setdefault(key, asyncio.Lock())


class Deployer:
    """Runs the update-definition then deploy-service workflow."""

    def __init__(self, client: OrchestratorClient, single_flight: Optional[SingleFlight] = None):
        """Initialize deployer."""
        self.client = client
        self.single_flight = single_flight or no_single_flight

    async def update_definition(
        self,
        family: str,
        images: Sequence[ContainerImage],
        deregister: bool = True,
    ) -> DefinitionUpdate:
        """Register a new revision of a family with patched images."""
        return await DefinitionUpdater(self.client).update(family, images, deregister=deregister)

    async def deploy_service(self, cluster: str, service: str, definition: TaskDefinition) -> Service:
        """Repoint a service at a registered revision."""
        return await ServiceRepointer(self.client).deploy(cluster, service, definition)

    async def deploy(
        self,
        family: str,
        images: Sequence[ContainerImage],
        cluster: str,
        service: str,
        deregister: bool = True,
        timeout: Optional[float] = None,
    ) -> DeployResult:
        """Run the full workflow and report a tagged result."""
        result = DeployResult(
            status=DeployStatus.FAILED,
            state=WorkflowState.IDLE,
            family=family,
            cluster=cluster,
            service_name=service,
            states=[WorkflowState.IDLE],
        )

        def advance(state: WorkflowState):
            result.state = state
            result.states.append(state)
            logger.debug(f"Deployment of {family} to {cluster}/{service}: {state.value}")

        logger.info(f"Deploying {family} to service {service} in cluster {cluster}")
        async with self.single_flight((family, cluster, service)):
            try:
                await asyncio.wait_for(
                    self._run(result, advance, images, deregister),
                    timeout=timeout,
                )
            except asyncio.TimeoutError:
                result.error = DeploymentCancelled(result.state.value)
            except (DeployerError, ValueError) as e:
                result.error = e

        if result.error is not None:
            result.status = DeployStatus.FAILED
            logger.error(
                f"Deployment of {family} to {cluster}/{service} failed at {result.state.value}: {result.error}"
            )
            advance(WorkflowState.FAILED)
            return result

        if result.warning:
            result.status = DeployStatus.DONE_WITH_WARNING
            advance(WorkflowState.DONE_WITH_WARNING)
        else:
            result.status = DeployStatus.DONE
            advance(WorkflowState.DONE)
        logger.info(f"Service {service} deployed with {result.definition.label}")
        return result

    async def _run(self, result: DeployResult, advance, images, deregister: bool):
        def registered(definition):
            result.definition = definition

        updater = DefinitionUpdater(self.client, on_state=advance, on_registered=registered)
        update = await updater.update(
            result.family, images, deregister=deregister
        )
        result.definition = update.definition
        result.warning = update.warning

        result.service = await ServiceRepointer(self.client, on_state=advance).deploy(
            result.cluster, result.service_name, update.definition
        )
