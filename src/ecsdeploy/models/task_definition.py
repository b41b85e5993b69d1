"""Task definition models."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


class ContainerImage(BaseModel):
    """Requested image for a named container."""
    name: str = Field(..., description="Container name in the task definition")
    image: str = Field(..., description="Image reference to use")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        """Validate container name."""
        if not v.strip():
            raise ValueError("container name must not be empty")
        return v

    @classmethod
    def parse(cls, pair: str) -> "ContainerImage":
        """Parse a ``name=image`` pair."""
        name, sep, image = pair.partition("=")
        if not sep or not image:
            raise ValueError(f"Invalid container image '{pair}', expected name=image")
        return cls(name=name, image=image)


class ContainerDefinition(BaseModel):
    """Container definition.

    Only the fields the deployer touches are typed; everything else the
    orchestrator returns is kept as extra data and sent back unchanged.
    """
    name: str
    image: Optional[str] = None

    class Config:
        """Pydantic config."""
        extra = "allow"


class TaskDefinition(BaseModel):
    """An immutable revision of a task definition family."""
    family: str
    task_definition_arn: Optional[str] = None
    revision: Optional[int] = None
    status: Optional[str] = None
    container_definitions: List[ContainerDefinition] = Field(default_factory=list)
    cpu: Optional[str] = None
    memory: Optional[str] = None
    ephemeral_storage: Optional[Dict[str, Any]] = None
    execution_role_arn: Optional[str] = None
    task_role_arn: Optional[str] = None
    network_mode: Optional[str] = None
    ipc_mode: Optional[str] = None
    pid_mode: Optional[str] = None
    placement_constraints: Optional[List[Dict[str, Any]]] = None
    proxy_configuration: Optional[Dict[str, Any]] = None
    requires_compatibilities: Optional[List[str]] = None
    runtime_platform: Optional[Dict[str, Any]] = None
    volumes: Optional[List[Dict[str, Any]]] = None
    inference_accelerators: Optional[List[Dict[str, Any]]] = None
    tags: List[Dict[str, str]] = Field(default_factory=list)

    class Config:
        """Pydantic config."""
        extra = "ignore"
        alias_generator = to_camel
        populate_by_name = True

    @property
    def label(self) -> str:
        """Human readable ``family:revision`` label."""
        if self.revision is None:
            return self.family
        return f"{self.family}:{self.revision}"

    @classmethod
    def from_api(cls, data: Dict[str, Any], tags: Optional[List[Dict[str, str]]] = None) -> "TaskDefinition":
        """Build a task definition from an API payload."""
        definition = cls.model_validate(data)
        if tags:
            definition.tags = list(tags)
        return definition
