"""ECS cluster/service lookup and forced redeployment."""

import json
import shlex
from typing import List, Optional

from cdeploy.core.matching import FirstMatchPolicy, MatchPolicy, find_matches
from cdeploy.exceptions import ResourceNotFoundError
from cdeploy.logger import DeployLogger
from cdeploy.services.process_runner import ProcessRunner


def arn_segment(arn: str, index: int) -> str:
    """Return the index-th '/'-separated segment of an ARN ('' if absent)."""
    parts = arn.split("/")
    return parts[index] if len(parts) > index else ""


class ClusterService:
    """
    Locates ECS clusters and services by name and restarts services.

    Cluster names are the part after 'cluster/' in the ARN; service names are
    the last segment of 'service/{cluster}/{service}' ARNs. Which match wins
    when several candidates contain the search string is up to the policy.
    """

    def __init__(
        self,
        runner: ProcessRunner,
        policy: Optional[MatchPolicy] = None,
        logger: Optional[DeployLogger] = None,
    ):
        self.runner = runner
        self.policy = policy or FirstMatchPolicy()
        self.logger = logger

    def list_clusters(self) -> List[str]:
        output = self.runner.run("aws ecs list-clusters")
        return json.loads(output).get("clusterArns", [])

    def list_services(self, cluster_arn: str) -> List[str]:
        output = self.runner.run(
            shlex.join(["aws", "ecs", "list-services", "--cluster", cluster_arn])
        )
        return json.loads(output).get("serviceArns", [])

    def matching_clusters(self, env_name: str) -> List[str]:
        """All cluster ARNs whose name contains env_name."""
        return find_matches(env_name, self.list_clusters(), key=lambda arn: arn_segment(arn, 1))

    def matching_services(self, cluster_arn: str, service_tag: str) -> List[str]:
        """All service ARNs in the cluster whose name contains service_tag."""
        return find_matches(
            service_tag, self.list_services(cluster_arn), key=lambda arn: arn_segment(arn, 2)
        )

    def find_cluster(self, env_name: str) -> str:
        """
        Resolve the cluster for an environment.

        Raises:
            ResourceNotFoundError: If no cluster name contains env_name
        """
        cluster_arn = self.policy.select(env_name, self.matching_clusters(env_name))
        if not cluster_arn:
            raise ResourceNotFoundError(f"No cluster found for environment {env_name}")
        return cluster_arn

    def find_service(self, cluster_arn: str, service_tag: str) -> str:
        """
        Resolve a service within a cluster.

        Raises:
            ResourceNotFoundError: If no service name contains service_tag
        """
        service_arn = self.policy.select(
            service_tag, self.matching_services(cluster_arn, service_tag)
        )
        if not service_arn:
            raise ResourceNotFoundError(f"No service found for tag {service_tag}")
        return service_arn

    def restart(self, env_name: str, app_name: str) -> None:
        """Force a new deployment so running tasks pick up the latest image."""
        cluster_arn = self.find_cluster(env_name)
        service_arn = self.find_service(cluster_arn, app_name)

        if self.logger:
            self.logger.log(f"Restarting {service_arn} in {cluster_arn}")

        self.runner.stream(
            "aws",
            [
                "ecs",
                "update-service",
                "--cluster",
                cluster_arn,
                "--service",
                service_arn,
                "--force-new-deployment",
            ],
        )
