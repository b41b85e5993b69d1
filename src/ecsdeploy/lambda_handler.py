"""Serverless entry point.

The handler receives an event naming the task definition family, the
service, its cluster and the container images, and answers with a JSON
encoded ``{status, code, message}`` payload. Failures also carry an
``error`` key naming the failure category.
"""

import asyncio
import json
import logging
import os
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError

from ecsdeploy.deployer import Deployer
from ecsdeploy.errors import (
    ContainerMismatch,
    DefinitionNotFound,
    DeployerError,
    OrchestratorError,
    ServiceNotFound,
)
from ecsdeploy.models.result import DeployResult, DeployStatus, WorkflowState
from ecsdeploy.models.task_definition import ContainerImage
from ecsdeploy.providers import EcsOrchestrator
from ecsdeploy.utils.logging import setup_logging


logger = logging.getLogger(__name__)

_deployer: Optional[Deployer] = None


class DeployEvent(BaseModel):
    """Invocation payload."""
    containers: List[ContainerImage] = Field(default_factory=list)
    service: str = ""
    task_definition: str = ""
    cluster: str = ""
    deregister: bool = True

    class Config:
        """Pydantic config."""
        extra = "ignore"

    def validate_request(self) -> Optional[str]:
        """Return the first missing field message, if any."""
        if not self.containers:
            return "no Docker images specified"
        if not self.task_definition:
            return "no ECS Task Definition specified"
        if not self.service:
            return "no ECS Service specified"
        if not self.cluster:
            return "no ECS Cluster specified"
        return None


def encode_message(status: int, code: str, message: str, error: Optional[str] = None) -> str:
    payload: Dict[str, Any] = {"status": status, "code": code, "message": message}
    if error:
        payload["error"] = error
    return json.dumps(payload)


def get_deployer() -> Deployer:
    """Return the deployer shared by warm invocations."""
    global _deployer
    if _deployer is None:
        # credentials come from the function's execution role
        _deployer = Deployer(EcsOrchestrator())
    return _deployer


def _failure_message(result: DeployResult) -> str:
    if isinstance(result.error, (DefinitionNotFound, ContainerMismatch)):
        return f"error updating task definition: {result.error}"
    if isinstance(result.error, ServiceNotFound):
        return f"error updating service: {result.error}"
    if WorkflowState.DEFINITION_REGISTERED in result.states:
        return f"error updating service: {result.error}"
    return f"error updating task definition: {result.error}"


def render_result(result: DeployResult) -> str:
    """Render a deployment result as a response payload."""
    if result.status == DeployStatus.FAILED:
        return encode_message(
            500,
            "internal_server_error",
            _failure_message(result),
            error=getattr(result.error, "code", DeployerError.code),
        )
    if result.status == DeployStatus.DONE_WITH_WARNING:
        return encode_message(
            200,
            "success_with_warning",
            f"ECS Service successfully deployed: {result.warning}",
        )
    return encode_message(200, "success", "ECS Service successfully deployed")


def handler(event: Dict[str, Any], context: Any = None, deployer: Optional[Deployer] = None) -> str:
    """Handle a deployment request."""
    setup_logging("DEBUG" if os.environ.get("DEBUG") else "INFO")

    try:
        request = DeployEvent.model_validate(event or {})
    except ValidationError as e:
        logger.warning(f"Invalid deployment request: {e}")
        return encode_message(400, "invalid_request", str(e))

    problem = request.validate_request()
    if problem:
        logger.warning(problem)
        return encode_message(400, "invalid_request", problem)

    try:
        deployer = deployer or get_deployer()
    except OrchestratorError as e:
        logger.error(f"Error creating ECS client: {e}")
        return encode_message(500, "internal_server_error", f"error creating ECS client: {e}", error=e.code)

    result = asyncio.run(
        deployer.deploy(
            family=request.task_definition,
            images=request.containers,
            cluster=request.cluster,
            service=request.service,
            deregister=request.deregister,
        )
    )

    if result.status == DeployStatus.FAILED:
        logger.error(f"Deployment failed: {result.error}")
    else:
        logger.info(f"ECS Service successfully deployed with {result.definition.label}")
    return render_result(result)
