"""Process runner for the external tools (docker, aws, git)."""

import os
import shlex
import subprocess
from typing import Dict, List, Optional

from rich.console import Console

from cdeploy.exceptions import CommandError
from cdeploy.logger import DeployLogger
from cdeploy.models.results import ExecutionResult


class ProcessRunner:
    """
    Runs external commands in one of two modes.

    - Buffered (`run`): shell command, output captured, trimmed stdout returned
    - Streaming (`stream`): argument list without a shell, output forwarded
      to the console line by line while the process runs

    Environment overrides (e.g. values from the env file) are layered over
    the inherited environment for every spawned process. os.environ itself is
    never modified.
    """

    def __init__(
        self,
        logger: Optional[DeployLogger] = None,
        env: Optional[Dict[str, Optional[str]]] = None,
        console: Optional[Console] = None,
    ):
        """
        Initialize process runner.

        Args:
            logger: Run logger receiving commands and their output
            env: Environment overrides applied to every command
            console: Console streamed output is printed to
        """
        self.logger = logger
        self.env = dict(env or {})
        self.console = console or Console()

    def with_env(self, env: Dict[str, Optional[str]]) -> "ProcessRunner":
        """Return a runner sharing this logger with extra env overrides."""
        return ProcessRunner(
            logger=self.logger, env={**self.env, **env}, console=self.console
        )

    def _build_env(self, env: Optional[Dict[str, Optional[str]]]) -> Dict[str, str]:
        merged = dict(os.environ)
        for key, value in {**self.env, **(env or {})}.items():
            # Malformed env file lines carry no value
            if key and value is not None:
                merged[key] = value
        return merged

    def execute(
        self, command: str, env: Optional[Dict[str, Optional[str]]] = None
    ) -> ExecutionResult:
        """
        Run a shell command and capture its output without raising.

        Args:
            command: Command string, interpreted by the shell
            env: Extra environment overrides for this command

        Returns:
            ExecutionResult
        """
        if self.logger:
            self.logger.log_command(command)

        result = subprocess.run(
            command,
            shell=True,
            capture_output=True,
            encoding="utf-8",
            errors="replace",
            env=self._build_env(env),
            check=False,
        )

        if self.logger:
            self.logger.log_output(result.stdout, "stdout")
            self.logger.log_output(result.stderr, "stderr")

        return ExecutionResult(
            returncode=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
            command=command,
        )

    def run(self, command: str, env: Optional[Dict[str, Optional[str]]] = None) -> str:
        """
        Run a shell command and return its trimmed stdout.

        Raises:
            CommandError: If the command exits with a non-zero code. The error
                text includes the captured stderr (stdout when stderr is empty).
        """
        result = self.execute(command, env)
        if result.is_failure:
            raise CommandError(
                f"Command failed: {command}\nExit code: {result.returncode}",
                command=command,
                returncode=result.returncode,
                stderr=result.stderr.strip() or result.stdout.strip(),
            )
        return result.stdout.strip()

    def stream(
        self,
        program: str,
        args: List[str],
        env: Optional[Dict[str, Optional[str]]] = None,
    ) -> None:
        """
        Run a program and forward its output live.

        Args:
            program: Executable name (e.g. 'docker', 'aws')
            args: Argument list passed without shell interpolation
            env: Extra environment overrides for this command

        Raises:
            CommandError: If the process exits with a non-zero code
        """
        cmd = [program] + list(args)
        cmd_string = shlex.join(cmd)

        if self.logger:
            self.logger.log_command(cmd_string)

        process = subprocess.Popen(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            encoding="utf-8",
            errors="replace",
            bufsize=1,
            env=self._build_env(env),
        )

        try:
            if process.stdout:
                for line in process.stdout:
                    line = line.rstrip("\n")
                    if self.logger:
                        self.logger.log_output(line, "stdout")
                    self.console.print(line, markup=False, highlight=False)
        except BaseException:
            process.kill()
            raise
        finally:
            returncode = process.wait()

        if returncode != 0:
            raise CommandError(
                f'command "{program}" exited with code {returncode}',
                command=cmd_string,
                returncode=returncode,
            )
