"""Source revision lookup."""

from cdeploy.constants import REVISION_LENGTH
from cdeploy.services.process_runner import ProcessRunner


class GitService:
    """Reads the revision of the current checkout."""

    def __init__(self, runner: ProcessRunner):
        self.runner = runner

    def get_revision(self) -> str:
        """Short commit hash of HEAD, used as the image tag."""
        return self.runner.run("git rev-parse HEAD")[:REVISION_LENGTH]
