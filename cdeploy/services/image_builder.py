"""Docker image build and push."""

import shlex
from pathlib import Path
from typing import Optional, Union

from cdeploy.constants import OP_PUSH
from cdeploy.core.error_classifier import ErrorClassifier
from cdeploy.exceptions import CommandError
from cdeploy.logger import DeployLogger
from cdeploy.models.results import DeployTags
from cdeploy.services.process_runner import ProcessRunner


class ImageBuilder:
    """Handles Docker image building and pushing."""

    def __init__(
        self,
        runner: ProcessRunner,
        classifier: Optional[ErrorClassifier] = None,
        logger: Optional[DeployLogger] = None,
    ):
        self.runner = runner
        self.classifier = classifier or ErrorClassifier()
        self.logger = logger

    def build(
        self,
        tags: DeployTags,
        dockerfile_path: Union[str, Path],
        build_dir: Union[str, Path],
    ) -> None:
        """
        Build the image with both tags, streaming docker output.

        Raises:
            CommandError: If docker build fails
        """
        if self.logger:
            self.logger.log(f"Docker build cwd: {Path.cwd()}")

        self.runner.stream(
            "docker",
            [
                "build",
                "-t",
                tags.specific,
                "-t",
                tags.latest,
                "-f",
                str(dockerfile_path),
                str(build_dir),
                "--progress=plain",
            ],
        )

        if self.logger:
            self.logger.success("Build complete")

    def push(self, tags: DeployTags) -> None:
        """
        Push the specific tag, then latest.

        A push rejected because the tag is immutable and already present is
        treated as done.

        Raises:
            CommandError: For any other push failure
        """
        try:
            for tag in tags:
                if self.logger:
                    self.logger.log(f"Pushing to registry: {tag}")
                self.runner.run(shlex.join(["docker", "push", tag]))
        except CommandError as e:
            if self.classifier.is_acceptable(OP_PUSH, e):
                if self.logger:
                    self.logger.warning("Tag already exists, ignoring error")
                return
            if self.logger:
                self.logger.log(f"Error pushing tag {tags.specific}: {e}", "ERROR")
            raise

        if self.logger:
            self.logger.success("Upload complete")
