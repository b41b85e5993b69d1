"""Configuration models."""

from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from ecsdeploy.models.task_definition import ContainerImage


class AwsConfig(BaseModel):
    """AWS access configuration."""
    region: Optional[str] = None
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None

    @property
    def has_static_credentials(self) -> bool:
        return bool(self.access_key_id and self.secret_access_key)


class EcsConfig(BaseModel):
    """Deployment target."""
    task: Optional[str] = Field(None, description="Task definition family")
    service: Optional[str] = Field(None, description="Service name or ARN")
    cluster: Optional[str] = Field(None, description="Cluster name or ARN")
    deregister: bool = Field(default=True, description="Deregister the previous revision")


class DeployerConfig(BaseModel):
    """Main configuration model."""
    aws: AwsConfig = Field(default_factory=AwsConfig)
    ecs: EcsConfig = Field(default_factory=EcsConfig)
    containers: List[ContainerImage] = Field(default_factory=list)
    log_level: str = Field(default="INFO")
    timeout: Optional[float] = Field(None, gt=0)

    class Config:
        """Pydantic config."""
        extra = "ignore"

    @field_validator("containers", mode="before")
    @classmethod
    def parse_containers(cls, v):
        """Accept ``name=image`` strings next to mappings."""
        if v is None:
            return []
        items: List[Union[ContainerImage, dict]] = []
        for item in v:
            if isinstance(item, str):
                items.append(ContainerImage.parse(item))
            else:
                items.append(item)
        return items

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()

    def validate_for_deploy(self) -> List[str]:
        """Return the problems preventing a deployment, if any."""
        problems = []
        if not self.ecs.task:
            problems.append("no ECS Task Definition family specified")
        if not self.ecs.service:
            problems.append("no ECS Service specified")
        if not self.ecs.cluster:
            problems.append("no ECS Cluster specified")
        if not self.containers:
            problems.append("no containers specified")
        return problems
