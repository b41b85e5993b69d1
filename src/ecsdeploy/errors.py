"""Deployment errors."""

from typing import Iterable, Optional


class DeployerError(Exception):
    """Base class for deployment failures."""
    code = "deployer_error"


class DefinitionNotFound(DeployerError):
    """No active revision exists for a family."""
    code = "definition_not_found"

    def __init__(self, family: str):
        self.family = family
        super().__init__(f"no active task definition found for family {family}")


class ContainerMismatch(DeployerError):
    """Requested containers do not all exist in the current revision."""
    code = "container_mismatch"

    def __init__(self, family: str, missing: Iterable[str] = ()):
        self.family = family
        self.missing = list(missing)
        message = (
            f"containers in task definition {family} do not match the requested containers"
        )
        if self.missing:
            message += f" (not found: {', '.join(self.missing)})"
        super().__init__(message)


class ServiceNotFound(DeployerError):
    """Service does not exist in the cluster."""
    code = "service_not_found"

    def __init__(self, cluster: str, service: str):
        self.cluster = cluster
        self.service = service
        super().__init__(f"service {service} not found in cluster {cluster}")


class OrchestratorError(DeployerError):
    """A remote orchestrator call failed."""
    code = "orchestrator_error"

    def __init__(self, step: str, cause: Optional[BaseException] = None):
        self.step = step
        self.cause = cause
        super().__init__(f"{step} failed: {cause}")


class DeploymentCancelled(DeployerError):
    """The deployment deadline expired before the workflow finished."""
    code = "cancelled"

    def __init__(self, state: str):
        self.state = state
        super().__init__(f"deployment cancelled after {state}")
