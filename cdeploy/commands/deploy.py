"""
Deploy Command

Apply an app's CloudFormation stack, as an ECS service or a Lambda function.
"""

from typing import Dict, Optional

import rich_click as click

from cdeploy.base import BaseCommand
from cdeploy.constants import DEPLOY_PARAMS, FUNCTION_APP_MARKER
from cdeploy.core.matching import MatchPolicy
from cdeploy.exceptions import ValidationError
from cdeploy.services.cluster_service import ClusterService
from cdeploy.services.stack_deployer import StackDeployer


class DeployCommand(BaseCommand):
    """
    Deploy an application stack.

    Apps whose name contains 'lambda' are packaged to the given S3 bucket and
    deployed as function stacks. Everything else is deployed as a service
    stack followed by a forced ECS redeployment, so the service runs the
    freshly pushed 'latest' image even when the stack itself did not change.
    """

    required_params = DEPLOY_PARAMS

    def __init__(
        self,
        params: Dict[str, Optional[str]],
        policy: Optional[MatchPolicy] = None,
        **kwargs,
    ):
        super().__init__(params, **kwargs)
        self.app_name = self.params["app_name"]
        self.stack_dir = self.params["stack_dir"]
        self.bucket = self.params.get("bucket")
        self.policy = policy

        if self.is_function and not self.bucket:
            raise ValidationError("No bucket specified for lambda deployment")

    @property
    def is_function(self) -> bool:
        return FUNCTION_APP_MARKER in self.app_name

    @property
    def operation(self) -> str:
        return f"deploy-{self.app_name}"

    def execute(self) -> None:
        """Execute deploy command."""
        logger = self.logger
        self.show_header(
            title="Deploy Stack",
            app=self.app_name,
            details={
                "Region": self.region,
                "Type": "function" if self.is_function else "service",
            },
        )

        deployer = StackDeployer(self.runner, logger=logger)

        if self.is_function:
            logger.step(f"Deploying function stack for {self.app_name}")
            deployer.deploy_function_stack(
                self.account_id,
                self.region,
                self.env,
                self.app_name,
                self.stack_dir,
                self.bucket,
            )
            logger.success("Function stack deployed")
            return

        logger.step(f"Deploying service stack for {self.app_name}")
        deployer.deploy_service_stack(self.region, self.env, self.app_name, self.stack_dir)
        logger.success("Service stack deployed")

        # TODO: skip the forced restart when the stack update already rolled the service
        logger.step("Restarting service")
        ClusterService(self.runner, policy=self.policy, logger=logger).restart(
            self.env, self.app_name
        )
        logger.success("Service restarted")


@click.command()
@click.option("--env", help="Target environment (dev, staging, prod)")
@click.option("--region", help="AWS region")
@click.option("--account", help="AWS account id")
@click.option("--app_name", help="Application name")
@click.option("--stack_dir", help="Directory holding stack.yml and parameters/")
@click.option("--bucket", help="S3 bucket for packaged artifacts (lambda apps only)")
@click.option("--verbose", "-v", is_flag=True, help="Show all command output")
def deploy(env, region, account, app_name, stack_dir, bucket, verbose):
    """
    Deploy an application stack with CloudFormation

    Parameters are read from {stack_dir}/parameters/{env}.json.

    Examples:
        # ECS service (stack dev-service-api), then forced redeployment
        cdeploy deploy --env dev --region us-east-1 --account 123456789012 \\
            --app_name api --stack_dir api/.aws

        # Lambda function (stack dev-resize-lambda)
        cdeploy deploy --env dev --region us-east-1 --account 123456789012 \\
            --app_name resize-lambda --stack_dir resize/.aws --bucket my-artifacts
    """
    params = {
        "env": env,
        "region": region,
        "account": account,
        "app_name": app_name,
        "stack_dir": stack_dir,
        "bucket": bucket,
    }
    cmd = DeployCommand(params, verbose=verbose)
    cmd.run()
