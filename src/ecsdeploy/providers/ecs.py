"""Amazon ECS implementation of the orchestrator client."""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ecsdeploy.errors import OrchestratorError
from ecsdeploy.models.config import AwsConfig
from ecsdeploy.models.service import Service
from ecsdeploy.models.task_definition import TaskDefinition
from ecsdeploy.providers.base import OrchestratorClient


logger = logging.getLogger(__name__)


def create_ecs_client(aws: Optional[AwsConfig] = None):
    """Create a boto3 ECS client.

    Static credentials are used only when both key parts are configured,
    otherwise the default credential chain applies. A missing region is
    reported as an OrchestratorError.
    """
    aws = aws or AwsConfig()
    session_kwargs: Dict[str, Any] = {}
    if aws.region:
        session_kwargs["region_name"] = aws.region
    if aws.has_static_credentials:
        session_kwargs["aws_access_key_id"] = aws.access_key_id
        session_kwargs["aws_secret_access_key"] = aws.secret_access_key
    try:
        session = boto3.session.Session(**session_kwargs)
        return session.client("ecs")
    except BotoCoreError as e:
        raise OrchestratorError("CreateClient", e) from e


class EcsOrchestrator(OrchestratorClient):
    """Orchestrator client backed by the boto3 ECS API."""

    def __init__(self, client=None):
        """Initialize with a boto3 ECS client."""
        self.client = client if client is not None else create_ecs_client()

    async def _call(self, operation: str, method: str, **kwargs) -> Dict[str, Any]:
        """Run a blocking boto3 call in a worker thread."""
        logger.debug(f"Calling {operation}")
        try:
            return await asyncio.to_thread(getattr(self.client, method), **kwargs)
        except (ClientError, BotoCoreError) as e:
            raise OrchestratorError(operation, e) from e

    async def list_active_revisions(self, family: str, limit: int = 1) -> List[str]:
        response = await self._call(
            "ListTaskDefinitions",
            "list_task_definitions",
            familyPrefix=family,
            status="ACTIVE",
            sort="DESC",
            maxResults=limit,
        )
        return list(response.get("taskDefinitionArns", []))

    async def describe_revision(self, identifier: str) -> TaskDefinition:
        response = await self._call(
            "DescribeTaskDefinition",
            "describe_task_definition",
            taskDefinition=identifier,
            include=["TAGS"],
        )
        return TaskDefinition.from_api(response["taskDefinition"], response.get("tags"))

    async def register_revision(self, request: Dict[str, Any]) -> TaskDefinition:
        response = await self._call(
            "RegisterTaskDefinition",
            "register_task_definition",
            **request,
        )
        return TaskDefinition.from_api(response["taskDefinition"], response.get("tags"))

    async def deregister_revision(self, identifier: str) -> None:
        await self._call(
            "DeregisterTaskDefinition",
            "deregister_task_definition",
            taskDefinition=identifier,
        )

    async def describe_service(self, cluster: str, service: str) -> Optional[Service]:
        response = await self._call(
            "DescribeServices",
            "describe_services",
            cluster=cluster,
            services=[service],
        )
        for failure in response.get("failures", []):
            logger.debug(f"DescribeServices failure for {failure.get('arn')}: {failure.get('reason')}")
        services = response.get("services", [])
        if not services:
            return None
        return Service.model_validate(services[0])

    async def update_service(self, cluster: str, service: str, patch: Dict[str, Any]) -> Service:
        response = await self._call(
            "UpdateService",
            "update_service",
            cluster=cluster,
            service=service,
            **patch,
        )
        return Service.model_validate(response["service"])
