"""Orchestrator client interface."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ecsdeploy.models.service import Service
from ecsdeploy.models.task_definition import TaskDefinition


class OrchestratorClient(ABC):
    """Remote operations the deployer needs from the cluster orchestrator."""

    @abstractmethod
    async def list_active_revisions(self, family: str, limit: int = 1) -> List[str]:
        """List active revision identifiers of a family, most recent first."""
        pass

    @abstractmethod
    async def describe_revision(self, identifier: str) -> TaskDefinition:
        """Fetch the full task definition of a revision, tags included."""
        pass

    @abstractmethod
    async def register_revision(self, request: Dict[str, Any]) -> TaskDefinition:
        """Register a new revision and return it."""
        pass

    @abstractmethod
    async def deregister_revision(self, identifier: str) -> None:
        """Retire a revision."""
        pass

    @abstractmethod
    async def describe_service(self, cluster: str, service: str) -> Optional[Service]:
        """Describe a service, returning None when it does not exist."""
        pass

    @abstractmethod
    async def update_service(self, cluster: str, service: str, patch: Dict[str, Any]) -> Service:
        """Apply an update to a service and return the updated description."""
        pass
