"""
cdeploy Services Layer

Wrappers around the external CLIs (docker, aws, git).
"""

from .process_runner import ProcessRunner
from .git_service import GitService
from .registry_service import RegistryService
from .image_builder import ImageBuilder
from .cluster_service import ClusterService
from .stack_deployer import StackDeployer

__all__ = [
    "ProcessRunner",
    "GitService",
    "RegistryService",
    "ImageBuilder",
    "ClusterService",
    "StackDeployer",
]
