"""
Service facades, one per backend endpoint group.

Every method (login and logout aside) resolves the bearer header, dispatches
one request through ApiClient.request() and returns the decoded payload or raises ApiError.
"""

from console_client.services.auth import AuthService
from console_client.services.clusters import ClusterService
from console_client.services.compute import InfraService
from console_client.services.flavors import FlavorService
from console_client.services.images import ImageService
from console_client.services.keypairs import KeyPairService
from console_client.services.networks import NetworkService
from console_client.services.projects import ProjectService
from console_client.services.scaling import ScaleService
from console_client.services.security_groups import SecurityGroupService
from console_client.services.users import UserService
from console_client.services.volumes import VolumeService

__all__ = [
    "AuthService",
    "ClusterService",
    "FlavorService",
    "ImageService",
    "InfraService",
    "KeyPairService",
    "NetworkService",
    "ProjectService",
    "ScaleService",
    "SecurityGroupService",
    "UserService",
    "VolumeService",
]
