"""Deployment workflow."""

from ecsdeploy.deployer.config import ConfigError, ConfigManager
from ecsdeploy.deployer.definition import DefinitionUpdater, build_registration_request, patch_container_images
from ecsdeploy.deployer.engine import Deployer, LocalSingleFlight
from ecsdeploy.deployer.service import ServiceRepointer, build_update_request

__all__ = [
    "ConfigError",
    "ConfigManager",
    "DefinitionUpdater",
    "Deployer",
    "LocalSingleFlight",
    "ServiceRepointer",
    "build_registration_request",
    "build_update_request",
    "patch_container_images",
]
