from console_client.config import API_PATHS
from console_client.models import LoginRequest, SwitchProjectRequest
from console_client.services.base import BaseService, coerce

PATHS = API_PATHS["AUTH"]


class AuthService(BaseService):
    def login(self, data) -> dict:
        """Exchange username/password for a token; the only call made without one."""
        return self._request(
            "POST", PATHS["LOGIN"],
            action="logging in", endpoint="login",
            auth=False, body=coerce(LoginRequest, data),
        )

    def switch_project(self, data) -> dict:
        return self._request(
            "POST", PATHS["SWITCH_PROJECT"],
            action="switching project", endpoint="switch project",
            body=coerce(SwitchProjectRequest, data),
        )

    def get_projects(self) -> dict:
        return self._request(
            "GET", PATHS["PROJECTS"],
            action="fetching projects", endpoint="projects",
        )

    def logout(self) -> dict:
        return self._request(
            "POST", PATHS["LOGOUT"],
            action="logging out", endpoint="logout",
            auth=False, body={},
        )
