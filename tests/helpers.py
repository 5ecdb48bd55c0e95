"""Test doubles and builders shared across the test modules."""

import json
from pathlib import Path
from typing import Dict, List, Optional, Union

from cdeploy.exceptions import CommandError

Response = Union[str, BaseException]


class FakeRunner:
    """
    Records commands instead of spawning them.

    `responses` maps a command fragment to the stdout returned (or the
    exception raised) by buffered runs; `stream_errors` does the same for
    streamed commands. The first matching fragment wins.
    """

    def __init__(
        self,
        responses: Optional[Dict[str, Response]] = None,
        stream_errors: Optional[Dict[str, BaseException]] = None,
    ):
        self.responses = dict(responses or {})
        self.stream_errors = dict(stream_errors or {})
        self.calls: List[tuple] = []
        self.env: Dict[str, Optional[str]] = {}
        self.logger = None

    def with_env(self, env):
        self.env.update(env)
        return self

    def run(self, command: str, env=None) -> str:
        self.calls.append(("run", command))
        for fragment, response in self.responses.items():
            if fragment in command:
                if isinstance(response, BaseException):
                    raise response
                return response
        return ""

    def stream(self, program: str, args, env=None) -> None:
        command = " ".join([program, *args])
        self.calls.append(("stream", command))
        for fragment, error in self.stream_errors.items():
            if fragment in command:
                raise error

    @property
    def commands(self) -> List[str]:
        return [call[1] for call in self.calls]

    def ran(self, fragment: str) -> bool:
        return any(fragment in command for command in self.commands)


def command_error(output: str, command: str = "aws", returncode: int = 1) -> CommandError:
    """CommandError shaped like ProcessRunner.run() raises it."""
    return CommandError(
        f"Command failed: {command}\nExit code: {returncode}",
        command=command,
        returncode=returncode,
        stderr=output,
    )


def write_parameters(stack_dir: Path, env: str, parameters: dict) -> Path:
    path = stack_dir / "parameters" / f"{env}.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps({"Parameters": parameters}), encoding="utf-8")
    return path
