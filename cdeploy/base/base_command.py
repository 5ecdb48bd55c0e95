"""
Base Command Class

Abstract base for cdeploy commands.
Validates common parameters and provides logging, header display and
error handling.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional

from rich.console import Console

from cdeploy.constants import COMMON_PARAMS
from cdeploy.core.error_classifier import ErrorClassifier
from cdeploy.exceptions import CDeployError, ValidationError
from cdeploy.logger import DeployLogger, error_console
from cdeploy.services.process_runner import ProcessRunner
from cdeploy.ui_components import show_header

# Parameters whose error message names them differently from the flag
PARAM_LABELS = {"account": "aws_account_id"}


class BaseCommand(ABC):
    """
    Abstract base command class.

    Provides:
    - Fail-fast validation of required parameters (before any I/O)
    - Logger initialization
    - Header display
    - Error handling with exit codes
    """

    required_params: List[str] = []

    def __init__(
        self,
        params: Dict[str, Optional[str]],
        verbose: bool = False,
        runner: Optional[ProcessRunner] = None,
        classifier: Optional[ErrorClassifier] = None,
        log_root: Optional[Path] = None,
    ):
        """
        Initialize and validate command.

        Args:
            params: Flag name -> value mapping
            verbose: Show every log line in the console
            runner: Process runner (created on run() when omitted)
            classifier: Error classifier shared by the services
            log_root: Base directory for run logs

        Raises:
            ValidationError: If a required parameter is missing
        """
        self.params = {key: value for key, value in params.items() if value}
        self.verbose = verbose
        self.runner = runner
        self.classifier = classifier or ErrorClassifier()
        self.log_root = log_root
        self.console = Console()
        self.logger: Optional[DeployLogger] = None

        for key in COMMON_PARAMS + self.required_params:
            self.require(key)

        self.env: str = self.params["env"]
        self.region: str = self.params["region"]
        self.account_id: str = self.params["account"]

    def require(self, key: str) -> str:
        """
        Return a required parameter.

        Raises:
            ValidationError: If it is missing or empty
        """
        value = self.params.get(key)
        if not value:
            raise ValidationError(f"No {PARAM_LABELS.get(key, key)} specified")
        return value

    @property
    @abstractmethod
    def operation(self) -> str:
        """Operation name used for the log file."""
        pass

    def init_logger(self) -> DeployLogger:
        """Initialize the run logger for this command."""
        self.logger = DeployLogger(
            self.env, self.operation, verbose=self.verbose, log_root=self.log_root
        )
        return self.logger

    def show_header(self, title: str, app: Optional[str] = None, details: Optional[dict] = None) -> None:
        """Show command header (skip in verbose mode)."""
        if not self.verbose:
            show_header(title=title, env=self.env, app=app, details=details, console=self.console)

    @abstractmethod
    def execute(self) -> None:
        """
        Execute command logic.

        Must be implemented by subclasses.
        """
        pass

    def run(self) -> None:
        """
        Run command with logging and error handling.

        Raises:
            SystemExit: 1 on any failure, 130 when interrupted
        """
        logger = self.init_logger()
        logger.log(f"Parsed arguments: {self.params}")

        if self.runner is None:
            self.runner = ProcessRunner(logger=logger, console=self.console)

        try:
            self.execute()
        except KeyboardInterrupt:
            error_console.print("\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            logger.log_error("Operation cancelled by user")
            raise SystemExit(130)
        except CDeployError as e:
            logger.log_error(e.message, context=e.context)
            error_console.print(f"\n[dim]Logs saved to:[/dim] {logger.log_path}\n")
            raise SystemExit(1)
        except Exception as e:
            logger.log_error(f"{type(e).__name__}: {e}")
            error_console.print(f"\n[dim]Logs saved to:[/dim] {logger.log_path}\n")
            raise SystemExit(1)
        finally:
            logger.close()
