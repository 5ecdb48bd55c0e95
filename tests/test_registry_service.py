import pytest

from cdeploy.exceptions import CommandError
from cdeploy.services.registry_service import RegistryService
from tests.helpers import FakeRunner, command_error


@pytest.mark.parametrize(
    "repo,account,region,revision",
    [
        ("dev/api", "123456789012", "us-east-1", "a1b2c3d4"),
        ("prod/worker-lambda", "1", "eu-west-2", "ffffffff"),
    ],
)
def test_compute_tags_differ_only_by_tag(repo, account, region, revision) -> None:
    tags = RegistryService.compute_tags(repo, account, region, revision)

    image = f"{account}.dkr.ecr.{region}.amazonaws.com/{repo}"
    assert tags.specific == f"{image}:{revision}"
    assert tags.latest == f"{image}:latest"
    assert tags.specific.rsplit(":", 1)[0] == tags.latest.rsplit(":", 1)[0]


def test_tag_exists_when_describe_succeeds() -> None:
    runner = FakeRunner({"describe-images": '{"imageDetails": []}'})

    assert RegistryService(runner).tag_exists("dev/api", "a1b2c3d4") is True
    assert runner.commands == [
        "aws ecr describe-images --repository-name dev/api --image-ids imageTag=a1b2c3d4"
    ]


def test_tag_missing_on_image_not_found() -> None:
    runner = FakeRunner(
        {"describe-images": command_error("An error occurred (ImageNotFoundException)")}
    )

    assert RegistryService(runner).tag_exists("dev/api", "a1b2c3d4") is False


def test_other_lookup_errors_propagate_unchanged() -> None:
    error = command_error("An error occurred (RepositoryNotFoundException)")
    runner = FakeRunner({"describe-images": error})

    with pytest.raises(CommandError) as excinfo:
        RegistryService(runner).tag_exists("dev/api", "a1b2c3d4")
    assert excinfo.value is error


def test_authenticate_pipes_password_into_docker_login() -> None:
    runner = FakeRunner()

    RegistryService(runner).authenticate("us-east-1", "123456789012")

    assert runner.commands == [
        "aws ecr get-login-password --region us-east-1 | "
        "docker login --username AWS --password-stdin 123456789012.dkr.ecr.us-east-1.amazonaws.com"
    ]


def test_authenticate_failure_is_fatal() -> None:
    runner = FakeRunner({"get-login-password": command_error("Unable to locate credentials")})

    with pytest.raises(CommandError):
        RegistryService(runner).authenticate("us-east-1", "123456789012")
