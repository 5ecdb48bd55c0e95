"""
Logging system for cdeploy
Provides real-time logging to files with clean console output
"""

import os
import re
from pathlib import Path
from datetime import datetime
from typing import Optional, TextIO
from rich.console import Console
from rich.markup import escape

from cdeploy.constants import (
    DEFAULT_LOG_DIR,
    LOG_DATE_FORMAT,
    LOG_DIR_ENV_VAR,
    LOG_TIME_FORMAT,
)

console = Console()
error_console = Console(stderr=True)

ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


def get_log_root() -> Path:
    """Resolve the directory run logs are written under."""
    return Path(os.environ.get(LOG_DIR_ENV_VAR, DEFAULT_LOG_DIR))


class DeployLogger:
    """
    Manages logging for build and deploy operations
    - Writes all output to log files in real-time
    - Shows clean progress lines in console (unless verbose)
    - Captures errors with context
    """

    def __init__(
        self,
        env_name: str,
        operation: str,
        verbose: bool = False,
        log_root: Optional[Path] = None,
    ):
        """
        Initialize logger

        Args:
            env_name: Target environment (e.g. 'dev', 'prod')
            operation: Operation name (e.g. 'build-api', 'deploy-api')
            verbose: If True, show all output in console
            log_root: Base directory for log files (defaults to get_log_root())
        """
        self.env_name = env_name
        self.operation = operation
        self.verbose = verbose
        self.log_file: Optional[TextIO] = None
        self.log_path: Optional[Path] = None
        self.current_step = ""
        self.has_errors = False

        # Structure: {log_root}/{env}/{date}/{time}_{operation}.log
        now = datetime.now()
        env_logs_dir = (log_root or get_log_root()) / env_name / now.strftime(LOG_DATE_FORMAT)
        env_logs_dir.mkdir(parents=True, exist_ok=True)

        self.log_path = env_logs_dir / f"{now.strftime(LOG_TIME_FORMAT)}_{operation}.log"

        # Line buffered for real-time tailing in CI
        self.log_file = open(self.log_path, "w", encoding="utf-8", buffering=1)

        self._write_log_header()

    def _write_log_header(self):
        """Write log file header"""
        header = f"""
{"=" * 80}
cdeploy Log
{"=" * 80}
Environment: {self.env_name}
Operation: {self.operation}
Started: {datetime.now().isoformat()}
{"=" * 80}

"""
        self.log_file.write(header)
        self.log_file.flush()

    def log(self, message: str, level: str = "INFO"):
        """
        Log a message to file and optionally console

        Args:
            message: Message to log
            level: Log level (INFO, WARNING, ERROR, DEBUG)
        """
        timestamp = datetime.now().strftime("%H:%M:%S")
        log_line = f"[{timestamp}] [{level}] {message}\n"

        if self.log_file:
            self.log_file.write(log_line)
            self.log_file.flush()

        if self.verbose:
            message = escape(message)
            if level == "ERROR":
                console.print(f"[red]{message}[/red]")
            elif level == "WARNING":
                console.print(f"[yellow]{message}[/yellow]")
            elif level == "DEBUG":
                console.print(f"[dim]{message}[/dim]")
            else:
                console.print(message)

    def log_command(self, command: str):
        """Log a command being executed"""
        self.log(f"Executing: {command}", "DEBUG")

    def log_output(self, output: str, stream: str = "stdout"):
        """
        Log command output to the log file.

        Console display is left to the caller (the streaming runner prints
        lines itself).

        Args:
            output: Command output (single line or multiline)
            stream: Stream name (stdout, stderr)
        """
        if not output or not self.log_file:
            return

        clean_output = ANSI_ESCAPE.sub("", output)
        for line in clean_output.splitlines() or [clean_output]:
            self.log_file.write(f"  [{stream}] {line}\n")
        self.log_file.flush()

    def log_error(self, error: str, context: Optional[str] = None):
        """
        Log an error with context

        Args:
            error: Error message
            context: Additional context (e.g., command that failed)
        """
        self.has_errors = True

        error_block = f"""
{"!" * 80}
ERROR OCCURRED
{"!" * 80}
{error}
"""
        if context:
            error_block += f"\nContext: {context}\n"

        error_block += f"{'!' * 80}\n\n"

        if self.log_file:
            self.log_file.write(error_block)
            self.log_file.flush()

        error_console.print(f"[bold red]✗ {escape(error)}[/bold red]", highlight=False)
        if context:
            error_console.print(f"  [color(208)]{escape(context)}[/color(208)]", highlight=False)

    def step(self, step_name: str):
        """
        Start a new step

        Args:
            step_name: Name of the step
        """
        if self.current_step and not self.verbose:
            console.print()

        self.current_step = step_name
        self.log(f"Step: {step_name}", "INFO")

        if not self.verbose:
            console.print(f"[color(214)]▶[/color(214)] [white]{escape(step_name)}[/white]")

    def success(self, message: str):
        """Log a success message"""
        self.log(message, "INFO")

        if not self.verbose:
            console.print(f"  [dim]✓ {escape(message)}[/dim]")

    def warning(self, message: str):
        """Log a warning message"""
        self.log(message, "WARNING")

        if not self.verbose:
            console.print(f"  [yellow]⚠[/yellow] [dim]{escape(message)}[/dim]")

    def close(self):
        """Close log file"""
        if self.log_file:
            footer = f"""
{"=" * 80}
Completed: {datetime.now().isoformat()}
Status: {"FAILED" if self.has_errors else "SUCCESS"}
{"=" * 80}
"""
            self.log_file.write(footer)
            self.log_file.close()
            self.log_file = None

