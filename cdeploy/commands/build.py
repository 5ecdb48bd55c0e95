"""
Build Command

Build a container image and push it to ECR, unless the revision is already
in the registry.
"""

import time
from typing import Dict, Optional

import rich_click as click

from cdeploy.base import BaseCommand
from cdeploy.constants import BUILD_PARAMS
from cdeploy.core.env_loader import EnvLoader
from cdeploy.services.git_service import GitService
from cdeploy.services.image_builder import ImageBuilder
from cdeploy.services.registry_service import RegistryService
from cdeploy.utils import format_duration


class BuildCommand(BaseCommand):
    """
    Build and push an application image.

    Steps:
    - Load .circleci/env/{env}.env (optional) as build environment
    - Log docker in to the registry
    - Skip when {env}/{app}:{revision} already exists
    - Build with revision and latest tags, then push both
    """

    required_params = BUILD_PARAMS

    def __init__(self, params: Dict[str, Optional[str]], **kwargs):
        super().__init__(params, **kwargs)
        self.dockerfile_path = self.params["dockerfile_path"]
        self.app_name = self.params["app_name"]
        self.build_dir = self.params["build_dir"]

    @property
    def operation(self) -> str:
        return f"build-{self.app_name}"

    @property
    def repository(self) -> str:
        return f"{self.env}/{self.app_name}"

    def execute(self) -> None:
        """Execute build command."""
        logger = self.logger
        self.show_header(
            title="Build Image",
            app=self.app_name,
            details={"Region": self.region, "Dockerfile": self.dockerfile_path},
        )

        logger.step("Loading environment")
        env_vars = EnvLoader(logger=logger).load(self.env)
        runner = self.runner.with_env(env_vars)

        registry = RegistryService(runner, classifier=self.classifier, logger=logger)
        builder = ImageBuilder(runner, classifier=self.classifier, logger=logger)

        logger.step("Authenticating to registry")
        registry.authenticate(self.region, self.account_id)
        logger.success(f"Logged in to {registry.registry_host(self.account_id, self.region)}")

        revision = GitService(runner).get_revision()
        if registry.tag_exists(self.repository, revision):
            logger.success(f"{self.repository}:{revision} already exists, skipping build")
            return

        logger.step(f"Building {revision} for {self.repository}")
        tags = registry.compute_tags(self.repository, self.account_id, self.region, revision)

        start = time.monotonic()
        builder.build(tags, self.dockerfile_path, self.build_dir)
        logger.success(f"Build time: {format_duration(time.monotonic() - start)}")

        logger.step("Pushing image")
        tick = time.monotonic()
        builder.push(tags)
        logger.success(f"Push time: {format_duration(time.monotonic() - tick)}")


@click.command()
@click.option("--env", help="Target environment (dev, staging, prod)")
@click.option("--region", help="AWS region")
@click.option("--account", help="AWS account id")
@click.option("--dockerfile_path", help="Path to the Dockerfile")
@click.option("--app_name", help="Application name (ECR repository is {env}/{app_name})")
@click.option("--build_dir", help="Docker build context directory")
@click.option("--verbose", "-v", is_flag=True, help="Show all command output")
def build(env, region, account, dockerfile_path, app_name, build_dir, verbose):
    """
    Build an image and push it to ECR

    The image is tagged with the current git revision and 'latest'. If the
    revision tag is already in the registry the build is skipped.

    Examples:
        cdeploy build --env dev --region us-east-1 --account 123456789012 \\
            --dockerfile_path api/Dockerfile --app_name api --build_dir api
    """
    params = {
        "env": env,
        "region": region,
        "account": account,
        "dockerfile_path": dockerfile_path,
        "app_name": app_name,
        "build_dir": build_dir,
    }
    cmd = BuildCommand(params, verbose=verbose)
    cmd.run()
