"""ECR registry operations: tag naming, tag lookup and docker login."""

import shlex
from typing import Optional

from cdeploy.constants import (
    ECR_HOST_PATTERN,
    LATEST_TAG,
    OP_DESCRIBE_IMAGES,
    REGISTRY_USERNAME,
)
from cdeploy.core.error_classifier import ErrorClassifier
from cdeploy.exceptions import CommandError
from cdeploy.logger import DeployLogger
from cdeploy.models.results import DeployTags
from cdeploy.services.process_runner import ProcessRunner


class RegistryService:
    """Service for image registry operations."""

    def __init__(
        self,
        runner: ProcessRunner,
        classifier: Optional[ErrorClassifier] = None,
        logger: Optional[DeployLogger] = None,
    ):
        """
        Initialize registry service.

        Args:
            runner: Process runner used for the aws/docker CLIs
            classifier: Decides which lookup errors mean "tag not found"
            logger: Optional run logger
        """
        self.runner = runner
        self.classifier = classifier or ErrorClassifier()
        self.logger = logger

    @staticmethod
    def registry_host(account: str, region: str) -> str:
        """Registry hostname for an account and region."""
        return ECR_HOST_PATTERN.format(account=account, region=region)

    @staticmethod
    def compute_tags(repository: str, account: str, region: str, revision: str) -> DeployTags:
        """
        Build the revision-specific and latest image references.

        Args:
            repository: Repository name (e.g. 'dev/api')
            account: AWS account id
            region: AWS region
            revision: Source revision used as the specific tag

        Returns:
            DeployTags
        """
        image = f"{RegistryService.registry_host(account, region)}/{repository}"
        return DeployTags(specific=f"{image}:{revision}", latest=f"{image}:{LATEST_TAG}")

    def tag_exists(self, repository: str, tag: str) -> bool:
        """
        Check whether an image tag is already in the registry.

        Returns:
            True if the tag exists, False if the registry reports it missing

        Raises:
            CommandError: For any other lookup failure
        """
        command = shlex.join(
            [
                "aws",
                "ecr",
                "describe-images",
                "--repository-name",
                repository,
                "--image-ids",
                f"imageTag={tag}",
            ]
        )
        try:
            self.runner.run(command)
            return True
        except CommandError as e:
            if self.classifier.is_acceptable(OP_DESCRIBE_IMAGES, e):
                return False
            if self.logger:
                self.logger.log(f"Error checking tag: {e}", "ERROR")
            raise

    def authenticate(self, region: str, account: str) -> None:
        """
        Log docker in to the registry with a temporary ECR password.

        Raises:
            CommandError: If either CLI fails
        """
        password_cmd = shlex.join(["aws", "ecr", "get-login-password", "--region", region])
        login_cmd = shlex.join(
            [
                "docker",
                "login",
                "--username",
                REGISTRY_USERNAME,
                "--password-stdin",
                self.registry_host(account, region),
            ]
        )
        self.runner.run(f"{password_cmd} | {login_cmd}")
