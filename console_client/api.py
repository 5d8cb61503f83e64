from typing import Optional

import requests

from console_client.credentials import CookieStore
from console_client.services import (
    AuthService,
    ClusterService,
    FlavorService,
    ImageService,
    InfraService,
    KeyPairService,
    NetworkService,
    ProjectService,
    ScaleService,
    SecurityGroupService,
    UserService,
    VolumeService,
)
from console_client.transport import ApiClient


class ConsoleApi:
    """All service facades sharing one ApiClient."""

    def __init__(self, client: ApiClient):
        self.client = client
        self.auth = AuthService(client)
        self.projects = ProjectService(client)
        self.users = UserService(client)
        self.images = ImageService(client)
        self.networks = NetworkService(client)
        self.infra = InfraService(client)
        self.volumes = VolumeService(client)
        self.flavors = FlavorService(client)
        self.security_groups = SecurityGroupService(client)
        self.keypairs = KeyPairService(client)
        self.clusters = ClusterService(client)
        self.scale = ScaleService(client)

    @classmethod
    def connect(
        cls,
        cookies: CookieStore,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None
    ) -> "ConsoleApi":
        return cls(ApiClient(base_url=base_url, cookies=cookies, session=session))
