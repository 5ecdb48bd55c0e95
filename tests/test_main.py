import subprocess

import pytest
from click.testing import CliRunner

from cdeploy import main as main_module
from tests.helpers import FakeRunner

BUILD_ARGS = [
    "build",
    "--env", "dev",
    "--region", "us-east-1",
    "--account", "123",
    "--dockerfile_path", "Dockerfile",
    "--app_name", "svc",
    "--build_dir", ".",
]


@pytest.fixture
def no_subprocess(monkeypatch: pytest.MonkeyPatch):
    def fail(*args, **kwargs):
        raise AssertionError("external process spawned")

    monkeypatch.setattr(subprocess, "run", fail)
    monkeypatch.setattr(subprocess, "Popen", fail)


def _main(monkeypatch: pytest.MonkeyPatch, args) -> int:
    monkeypatch.setattr("sys.argv", ["cdeploy", *args])
    with pytest.raises(SystemExit) as excinfo:
        main_module.main()
    return excinfo.value.code


@pytest.mark.parametrize("flag", ["--env", "--region", "--account"])
def test_missing_common_flag_exits_one_before_spawning(monkeypatch, capsys, no_subprocess, flag) -> None:
    index = BUILD_ARGS.index(flag)
    args = BUILD_ARGS[:index] + BUILD_ARGS[index + 2:]

    assert _main(monkeypatch, args) == 1
    assert "specified" in capsys.readouterr().err


def test_unknown_command_exits_one(monkeypatch, capsys, no_subprocess) -> None:
    assert _main(monkeypatch, ["release", "--env", "dev"]) == 1
    assert "No such command" in capsys.readouterr().err


def test_flag_without_value_exits_one(monkeypatch, no_subprocess) -> None:
    assert _main(monkeypatch, ["deploy", "--env"]) == 1


def test_existing_revision_exits_zero_without_build(monkeypatch) -> None:
    runner = FakeRunner({"rev-parse": "0123456789abcdef", "describe-images": "{}"})
    monkeypatch.setattr(
        "cdeploy.base.base_command.ProcessRunner", lambda **kwargs: runner
    )

    result = CliRunner().invoke(main_module.cli, BUILD_ARGS)

    assert result.exit_code == 0, result.output
    assert runner.ran("describe-images")
    assert not runner.ran("docker build")
    assert not runner.ran("docker push")


def test_help_lists_commands() -> None:
    result = CliRunner().invoke(main_module.cli, ["--help"])

    assert result.exit_code == 0
    assert "build" in result.output
    assert "deploy" in result.output
