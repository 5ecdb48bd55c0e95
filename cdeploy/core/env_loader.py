"""
EnvLoader - per-environment variables for build commands

Reads `.circleci/env/{env}.env` (KEY=VALUE per line) into an explicit map
that is handed to the process runner. The file is optional.
"""

from pathlib import Path
from typing import Dict, Optional

from dotenv import dotenv_values

from cdeploy.constants import ENV_FILE_PATTERN
from cdeploy.logger import DeployLogger


class EnvLoader:
    """Loads environment-specific variables without touching os.environ."""

    def __init__(self, base_dir: Optional[Path] = None, logger: Optional[DeployLogger] = None):
        """
        Initialize EnvLoader.

        Args:
            base_dir: Directory the env file path is resolved against (defaults to cwd)
            logger: Optional run logger
        """
        self.base_dir = base_dir or Path.cwd()
        self.logger = logger

    def env_file_path(self, env_name: str) -> Path:
        """Conventional env file location for an environment."""
        return self.base_dir / ENV_FILE_PATTERN.format(env=env_name)

    def load(self, env_name: str) -> Dict[str, Optional[str]]:
        """
        Load the env file for an environment.

        Lines are split on the first '='. A line without '=' yields the key
        with a None value, which the runner skips. Values are taken as
        written: ${VAR} references are not expanded.

        Args:
            env_name: Environment name (e.g. 'dev')

        Returns:
            Dict of variables, empty when the file does not exist
        """
        env_file = self.env_file_path(env_name)
        if not env_file.exists():
            if self.logger:
                self.logger.log(f"No env file at {env_file}, skipping")
            return {}

        env_vars = dict(dotenv_values(env_file, interpolate=False))
        if self.logger:
            for key in env_vars:
                self.logger.log(f"Setting env: {key}")
        return env_vars
