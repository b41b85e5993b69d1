"""Tests for CLI command implementations."""

from unittest.mock import AsyncMock, MagicMock, patch

from ecsdeploy.cli.commands import deploy, validate_config
from ecsdeploy.models.config import DeployerConfig
from ecsdeploy.models.result import DeployResult, DeployStatus, WorkflowState


def _config():
    return DeployerConfig(
        ecs={"task": "api", "service": "svc", "cluster": "prod", "deregister": False},
        containers=["web=img:v2"],
        timeout=30,
    )


def test_deploy_passes_configuration_to_deployer():
    """Verify the deployer receives the configured target and images."""
    expected = DeployResult(
        status=DeployStatus.DONE,
        state=WorkflowState.DONE,
        family="api",
        cluster="prod",
        service_name="svc",
    )
    mock_deployer = MagicMock()
    mock_deployer.deploy = AsyncMock(return_value=expected)
    config = _config()

    result = deploy(config, deployer=mock_deployer, quiet=True)

    assert result is expected
    mock_deployer.deploy.assert_awaited_once_with(
        family="api",
        images=config.containers,
        cluster="prod",
        service="svc",
        deregister=False,
        timeout=30,
    )


@patch("ecsdeploy.cli.commands.create_ecs_client")
def test_deploy_builds_ecs_deployer(mock_create_client):
    config = _config()

    with patch("ecsdeploy.cli.commands.Deployer") as mock_deployer_class:
        mock_deployer_class.return_value.deploy = AsyncMock(return_value=DeployResult(
            status=DeployStatus.FAILED,
            state=WorkflowState.FAILED,
            family="api",
            cluster="prod",
            service_name="svc",
        ))
        deploy(config, quiet=True)

    mock_create_client.assert_called_once_with(config.aws)


def test_validate_config_lists_problems():
    problems = validate_config(DeployerConfig(ecs={"task": "api"}))

    assert "no ECS Service specified" in problems
    assert "no containers specified" in problems
