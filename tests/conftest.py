"""Shared fixtures."""

import asyncio
import copy
from typing import Any, Dict, List, Optional

import pytest

from ecsdeploy.errors import OrchestratorError
from ecsdeploy.models.service import Service
from ecsdeploy.models.task_definition import TaskDefinition
from ecsdeploy.providers.base import OrchestratorClient


ARN_PREFIX = "arn:aws:ecs:us-east-1:123456789012"


def task_definition_arn(family: str, revision: int) -> str:
    return f"{ARN_PREFIX}:task-definition/{family}:{revision}"


API_DEFINITION = {
    "taskDefinitionArn": task_definition_arn("api", 7),
    "family": "api",
    "revision": 7,
    "status": "ACTIVE",
    "containerDefinitions": [
        {
            "name": "web",
            "image": "img:v1",
            "cpu": 256,
            "essential": True,
            "portMappings": [{"containerPort": 80, "hostPort": 80, "protocol": "tcp"}],
            "environment": [{"name": "ENV", "value": "prod"}],
        },
        {
            "name": "sidecar",
            "image": "img:base",
            "essential": False,
        },
    ],
    "cpu": "512",
    "memory": "1024",
    "networkMode": "awsvpc",
    "executionRoleArn": "arn:aws:iam::123456789012:role/api-execution",
    "taskRoleArn": "arn:aws:iam::123456789012:role/api-task",
    "requiresCompatibilities": ["FARGATE"],
    "runtimePlatform": {"cpuArchitecture": "X86_64", "operatingSystemFamily": "LINUX"},
    "ephemeralStorage": {"sizeInGiB": 30},
    "volumes": [{"name": "scratch"}],
    "placementConstraints": [],
    "compatibilities": ["EC2", "FARGATE"],
}

SVC_SERVICE = {
    "serviceName": "svc",
    "serviceArn": f"{ARN_PREFIX}:service/prod/svc",
    "clusterArn": f"{ARN_PREFIX}:cluster/prod",
    "status": "ACTIVE",
    "taskDefinition": task_definition_arn("api", 7),
    "desiredCount": 3,
    "runningCount": 3,
    "loadBalancers": [
        {"loadBalancerName": "lb-1", "containerName": "web", "containerPort": 80},
    ],
    "deploymentConfiguration": {"maximumPercent": 200, "minimumHealthyPercent": 100},
    "networkConfiguration": {
        "awsvpcConfiguration": {
            "subnets": ["subnet-1"],
            "securityGroups": ["sg-1"],
            "assignPublicIp": "DISABLED",
        }
    },
    "platformVersion": "LATEST",
    "propagateTags": "SERVICE",
    "enableECSManagedTags": True,
    "enableExecuteCommand": False,
    "healthCheckGracePeriodSeconds": 30,
    "placementConstraints": [],
    "placementStrategy": [],
    "serviceRegistries": [{"registryArn": "arn:aws:servicediscovery:us-east-1:123456789012:service/srv-1"}],
    "deployments": [
        {
            "id": "ecs-svc/1",
            "status": "PRIMARY",
            "taskDefinition": task_definition_arn("api", 7),
            "serviceConnectConfiguration": {"enabled": True, "namespace": "internal"},
        }
    ],
}


class FakeOrchestrator(OrchestratorClient):
    """In-memory orchestrator recording every call."""

    def __init__(self):
        self.definitions: List[TaskDefinition] = []
        self.services: Dict[str, Dict[str, Any]] = {}
        self.calls: List[str] = []
        self.registered: List[Dict[str, Any]] = []
        self.updates: List[Dict[str, Any]] = []
        self.deregister_error: Optional[Exception] = None
        self.update_delay: float = 0

    def add_definition(self, data: Dict[str, Any], tags=None) -> TaskDefinition:
        definition = TaskDefinition.from_api(copy.deepcopy(data), tags)
        self.definitions.append(definition)
        return definition

    def get(self, arn: str) -> TaskDefinition:
        for definition in self.definitions:
            if definition.task_definition_arn == arn:
                return definition
        raise OrchestratorError("DescribeTaskDefinition", KeyError(arn))

    async def list_active_revisions(self, family: str, limit: int = 1) -> List[str]:
        self.calls.append("list_active_revisions")
        await asyncio.sleep(0)
        arns = [
            d.task_definition_arn
            for d in reversed(self.definitions)
            if d.family == family and d.status == "ACTIVE"
        ]
        return arns[:limit]

    async def describe_revision(self, identifier: str) -> TaskDefinition:
        self.calls.append("describe_revision")
        await asyncio.sleep(0)
        return self.get(identifier).model_copy(deep=True)

    async def register_revision(self, request: Dict[str, Any]) -> TaskDefinition:
        self.calls.append("register_revision")
        self.registered.append(copy.deepcopy(request))
        await asyncio.sleep(0)
        revision = 1 + max(
            [d.revision for d in self.definitions if d.family == request["family"]] or [0]
        )
        data = copy.deepcopy(request)
        tags = data.pop("tags", None)
        data.update(
            taskDefinitionArn=task_definition_arn(request["family"], revision),
            revision=revision,
            status="ACTIVE",
        )
        return self.add_definition(data, tags).model_copy(deep=True)

    async def deregister_revision(self, identifier: str) -> None:
        self.calls.append("deregister_revision")
        await asyncio.sleep(0)
        if self.deregister_error:
            raise self.deregister_error
        self.get(identifier).status = "INACTIVE"

    async def describe_service(self, cluster: str, service: str) -> Optional[Service]:
        self.calls.append("describe_service")
        await asyncio.sleep(0)
        data = self.services.get(f"{cluster}/{service}")
        if data is None:
            return None
        return Service.model_validate(copy.deepcopy(data))

    async def update_service(self, cluster: str, service: str, patch: Dict[str, Any]) -> Service:
        self.calls.append("update_service")
        self.updates.append(copy.deepcopy(patch))
        await asyncio.sleep(self.update_delay)
        data = self.services[f"{cluster}/{service}"]
        data.update({k: v for k, v in copy.deepcopy(patch).items() if k != "forceNewDeployment"})
        return Service.model_validate(copy.deepcopy(data))


@pytest.fixture
def api_definition_data():
    """Raw payload of the active ``api`` revision."""
    return copy.deepcopy(API_DEFINITION)


@pytest.fixture
def svc_service_data():
    """Raw payload of service ``svc`` in cluster ``prod``."""
    return copy.deepcopy(SVC_SERVICE)


@pytest.fixture
def orchestrator(api_definition_data, svc_service_data):
    """Orchestrator with family ``api`` at revision 7 and service ``prod/svc``."""
    fake = FakeOrchestrator()
    fake.add_definition(api_definition_data)
    fake.services["prod/svc"] = svc_service_data
    return fake
