"""Workflow result models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from ecsdeploy.models.service import Service
from ecsdeploy.models.task_definition import TaskDefinition


class DeployStatus(Enum):
    """Outcome of a deployment."""
    DONE = "done"
    DONE_WITH_WARNING = "done_with_warning"
    FAILED = "failed"


class WorkflowState(Enum):
    """Progress of a deployment workflow."""
    IDLE = "idle"
    DEFINITION_RESOLVED = "definition_resolved"
    DEFINITION_PATCHED = "definition_patched"
    DEFINITION_REGISTERED = "definition_registered"
    OLD_DEFINITION_RETIRED = "old_definition_retired"
    SERVICE_DESCRIBED = "service_described"
    SERVICE_UPDATED = "service_updated"
    DONE = "done"
    DONE_WITH_WARNING = "done_with_warning"
    FAILED = "failed"


@dataclass
class DefinitionUpdate:
    """Result of registering a patched task definition."""

    definition: TaskDefinition
    previous: TaskDefinition
    warning: Optional[str] = None

    @property
    def status(self) -> DeployStatus:
        if self.warning:
            return DeployStatus.DONE_WITH_WARNING
        return DeployStatus.DONE


@dataclass
class DeployResult:
    """Result of a full deployment."""

    status: DeployStatus
    state: WorkflowState
    family: str
    cluster: str
    service_name: str
    definition: Optional[TaskDefinition] = None
    service: Optional[Service] = None
    warning: Optional[str] = None
    error: Optional[Exception] = None
    states: List[WorkflowState] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status != DeployStatus.FAILED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "state": self.state.value,
            "family": self.family,
            "cluster": self.cluster,
            "service": self.service_name,
            "task_definition": self.definition.label if self.definition else None,
            "warning": self.warning,
            "error": str(self.error) if self.error else None,
        }
