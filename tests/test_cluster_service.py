import json

import pytest

from cdeploy.core.matching import StrictMatchPolicy
from cdeploy.exceptions import AmbiguousMatchError, ResourceNotFoundError
from cdeploy.services.cluster_service import ClusterService, arn_segment
from tests.helpers import FakeRunner

PREFIX = "arn:aws:ecs:us-east-1:123456789012"
CLUSTERS = json.dumps(
    {
        "clusterArns": [
            f"{PREFIX}:cluster/prod-main",
            f"{PREFIX}:cluster/dev-main",
            f"{PREFIX}:cluster/dev-batch",
        ]
    }
)
SERVICES = json.dumps(
    {
        "serviceArns": [
            f"{PREFIX}:service/dev-main/dev-service-web-ServiceXYZ",
            f"{PREFIX}:service/dev-main/dev-service-api-Service123",
            f"{PREFIX}:service/dev-main/dev-service-api-admin-Service456",
        ]
    }
)


def _runner() -> FakeRunner:
    return FakeRunner({"list-clusters": CLUSTERS, "list-services": SERVICES})


def test_arn_segment() -> None:
    assert arn_segment(f"{PREFIX}:cluster/dev-main", 1) == "dev-main"
    assert arn_segment(f"{PREFIX}:service/dev-main/api", 2) == "api"
    assert arn_segment(f"{PREFIX}:service/api", 2) == ""


def test_find_cluster_first_substring_match_wins() -> None:
    service = ClusterService(_runner())

    assert service.matching_clusters("dev") == [
        f"{PREFIX}:cluster/dev-main",
        f"{PREFIX}:cluster/dev-batch",
    ]
    assert service.find_cluster("dev") == f"{PREFIX}:cluster/dev-main"


def test_find_cluster_matches_name_not_account_or_region() -> None:
    with pytest.raises(ResourceNotFoundError, match="No cluster found for environment us-east"):
        ClusterService(_runner()).find_cluster("us-east")


def test_find_service_within_cluster() -> None:
    runner = _runner()
    cluster_arn = f"{PREFIX}:cluster/dev-main"

    service_arn = ClusterService(runner).find_service(cluster_arn, "api")

    assert service_arn == f"{PREFIX}:service/dev-main/dev-service-api-Service123"
    assert f"aws ecs list-services --cluster {cluster_arn}" in runner.commands


def test_find_service_not_found() -> None:
    with pytest.raises(ResourceNotFoundError, match="No service found for tag worker"):
        ClusterService(_runner()).find_service(f"{PREFIX}:cluster/dev-main", "worker")


def test_strict_policy_rejects_ambiguous_service() -> None:
    service = ClusterService(_runner(), policy=StrictMatchPolicy())

    with pytest.raises(AmbiguousMatchError):
        service.find_service(f"{PREFIX}:cluster/dev-main", "api")


def test_restart_forces_new_deployment() -> None:
    runner = _runner()

    ClusterService(runner).restart("dev", "web")

    assert runner.calls[-1] == (
        "stream",
        f"aws ecs update-service --cluster {PREFIX}:cluster/dev-main "
        f"--service {PREFIX}:service/dev-main/dev-service-web-ServiceXYZ --force-new-deployment",
    )


def test_restart_without_cluster_does_not_update() -> None:
    runner = FakeRunner({"list-clusters": json.dumps({"clusterArns": []})})

    with pytest.raises(ResourceNotFoundError):
        ClusterService(runner).restart("dev", "web")
    assert not runner.ran("update-service")
