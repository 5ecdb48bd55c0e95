"""
CloudFormation stack deployment for ECS services and Lambda functions.
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List, Optional, Union

from cdeploy.constants import (
    FUNCTION_STACK_PATTERN,
    PACKAGED_TEMPLATE,
    PARAMETERS_DIR,
    SERVICE_STACK_PATTERN,
    STACK_CAPABILITIES,
    STACK_TEMPLATE_NAME,
)
from cdeploy.exceptions import CDeployError, ConfigurationError
from cdeploy.logger import DeployLogger
from cdeploy.services.git_service import GitService
from cdeploy.services.process_runner import ProcessRunner
from cdeploy.services.registry_service import RegistryService


def _format_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        return ",".join(_format_value(item) for item in value)
    return str(value)


def load_parameter_overrides(stack_dir: Union[str, Path], env_name: str) -> List[str]:
    """
    Read {stack_dir}/parameters/{env}.json as KEY=VALUE override strings.

    Raises:
        ConfigurationError: If the file is missing or has no Parameters object
    """
    path = Path(stack_dir) / PARAMETERS_DIR / f"{env_name}.json"
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise ConfigurationError(f"Parameter file not found: {path}")
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in parameter file: {path}", context=str(e))

    parameters = document.get("Parameters") if isinstance(document, dict) else None
    if not isinstance(parameters, dict):
        raise ConfigurationError(
            f"Parameter file has no 'Parameters' object: {path}",
            context='Expected {"Parameters": {"Key": "Value", ...}}',
        )

    return [f"{key}={_format_value(value)}" for key, value in parameters.items()]


class FailureDiagnostics(ABC):
    """What to do after a stack deploy fails, before the error propagates."""

    @abstractmethod
    def on_failure(self, runner: ProcessRunner, stack_name: str, region: str) -> None:
        pass


class StackEventsDiagnostics(FailureDiagnostics):
    """Stream the stack's recent events for the operator."""

    def __init__(self, logger: Optional[DeployLogger] = None):
        self.logger = logger

    def on_failure(self, runner: ProcessRunner, stack_name: str, region: str) -> None:
        if self.logger:
            self.logger.warning("Deploy failed, checking stack events")
        try:
            runner.stream(
                "aws",
                [
                    "cloudformation",
                    "describe-stack-events",
                    "--stack-name",
                    stack_name,
                    "--region",
                    region,
                ],
            )
        except CDeployError as e:
            if self.logger:
                self.logger.log(f"Could not fetch stack events: {e}", "WARNING")


class NoDiagnostics(FailureDiagnostics):
    """Let the failure propagate without extra output."""

    def on_failure(self, runner: ProcessRunner, stack_name: str, region: str) -> None:
        pass


class StackDeployer:
    """
    Applies CloudFormation templates with per-environment parameters.

    Service stacks: {stack_dir}/stack.yml deployed as {env}-service-{app}, with
    AppName and EnvironmentName overrides.
    Function stacks: template packaged to S3 first, deployed as {env}-{app},
    with an ImageUri override pointing at the current revision's image.
    """

    def __init__(
        self,
        runner: ProcessRunner,
        git: Optional[GitService] = None,
        logger: Optional[DeployLogger] = None,
        service_diagnostics: Optional[FailureDiagnostics] = None,
        function_diagnostics: Optional[FailureDiagnostics] = None,
    ):
        self.runner = runner
        self.git = git or GitService(runner)
        self.logger = logger
        self.service_diagnostics = service_diagnostics or StackEventsDiagnostics(logger)
        self.function_diagnostics = function_diagnostics or NoDiagnostics()

    def _deploy(
        self,
        template_file: Union[str, Path],
        stack_name: str,
        region: str,
        parameters: List[str],
        diagnostics: FailureDiagnostics,
    ) -> None:
        if self.logger:
            self.logger.log(f"Deploying stack {stack_name} from {template_file}")
        try:
            self.runner.stream(
                "aws",
                [
                    "cloudformation",
                    "deploy",
                    "--template-file",
                    str(template_file),
                    "--stack-name",
                    stack_name,
                    "--region",
                    region,
                    "--capabilities",
                    STACK_CAPABILITIES,
                    "--parameter-overrides",
                    *parameters,
                ],
            )
        except CDeployError:
            diagnostics.on_failure(self.runner, stack_name, region)
            raise

    def deploy_service_stack(
        self, region: str, env_name: str, app_name: str, stack_dir: Union[str, Path]
    ) -> None:
        """
        Deploy the ECS service stack of an app.

        Raises:
            ConfigurationError: If the parameter file is unusable
            CommandError: If the deploy fails (after stack events are shown)
        """
        stack_name = SERVICE_STACK_PATTERN.format(env=env_name, app=app_name)
        parameters = load_parameter_overrides(stack_dir, env_name)
        parameters.append(f"AppName={app_name}")
        parameters.append(f"EnvironmentName={env_name}")

        self._deploy(
            Path(stack_dir) / STACK_TEMPLATE_NAME,
            stack_name,
            region,
            parameters,
            self.service_diagnostics,
        )

    def deploy_function_stack(
        self,
        account: str,
        region: str,
        env_name: str,
        app_name: str,
        stack_dir: Union[str, Path],
        bucket: str,
    ) -> None:
        """
        Package and deploy the Lambda stack of an app.

        Raises:
            ConfigurationError: If the parameter file is unusable
            CommandError: If packaging or deploying fails
        """
        stack_name = FUNCTION_STACK_PATTERN.format(env=env_name, app=app_name)
        parameters = load_parameter_overrides(stack_dir, env_name)

        self.runner.stream(
            "aws",
            [
                "cloudformation",
                "package",
                "--template",
                str(Path(stack_dir) / STACK_TEMPLATE_NAME),
                "--s3-bucket",
                bucket,
                "--output-template",
                PACKAGED_TEMPLATE,
            ],
        )

        repository = f"{env_name}/{app_name}"
        tags = RegistryService.compute_tags(repository, account, region, self.git.get_revision())
        parameters.append(f"ImageUri={tags.specific}")

        self._deploy(
            PACKAGED_TEMPLATE,
            stack_name,
            region,
            parameters,
            self.function_diagnostics,
        )
