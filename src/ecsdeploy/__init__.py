"""
ecsdeploy - rolling image updates for Amazon ECS services.

Registers a new task definition revision with updated container images,
retires the previous revision and forces a new deployment of the service.
"""

__version__ = "1.0.0"

# Re-export key components for easier access
from ecsdeploy.deployer import Deployer, LocalSingleFlight
from ecsdeploy.models.config import DeployerConfig
from ecsdeploy.models.result import DeployResult, DeployStatus
from ecsdeploy.models.task_definition import ContainerImage

__all__ = [
    "ContainerImage",
    "Deployer",
    "DeployerConfig",
    "DeployResult",
    "DeployStatus",
    "LocalSingleFlight",
]
