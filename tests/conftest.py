from pathlib import Path

import pytest

from tests.helpers import FakeRunner


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture(autouse=True)
def isolated_workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every test from an empty directory with logs kept inside it."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CDEPLOY_LOG_DIR", str(tmp_path / "logs"))
    return tmp_path
