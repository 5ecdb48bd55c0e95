from pathlib import Path

from cdeploy.logger import DeployLogger


def test_log_file_layout_and_footer(tmp_path: Path) -> None:
    logger = DeployLogger("dev", "build-api", log_root=tmp_path)

    logger.step("Building")
    logger.log_output("\x1b[32mgreen\x1b[0m\nsecond")
    logger.close()

    assert logger.log_path.parent.parent == tmp_path / "dev"
    assert logger.log_path.name.endswith("_build-api.log")
    content = logger.log_path.read_text()
    assert "Step: Building" in content
    assert "[stdout] green" in content
    assert "[stdout] second" in content
    assert "Status: SUCCESS" in content


def test_errors_mark_run_failed(tmp_path: Path, capsys) -> None:
    logger = DeployLogger("dev", "deploy-api", log_root=tmp_path)

    logger.log_error("No cluster found for environment dev", context="ResourceNotFoundError")
    logger.close()

    content = logger.log_path.read_text()
    assert "ERROR OCCURRED" in content
    assert "Status: FAILED" in content
    assert "No cluster found for environment dev" in capsys.readouterr().err


def test_log_root_from_environment(isolated_workdir: Path) -> None:
    logger = DeployLogger("prod", "deploy-api")
    logger.close()

    assert logger.log_path.is_relative_to(isolated_workdir / "logs" / "prod")
