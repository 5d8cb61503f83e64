from console_client.config import API_PATHS
from console_client.models import UserCreateRequest, UserUpdateRequest
from console_client.services.base import BaseService, coerce

PATHS = API_PATHS["USERS"]


class UserService(BaseService):
    def create(self, data) -> dict:
        return self._request(
            "POST", PATHS["BASE"],
            action="creating user", endpoint="create user",
            body=coerce(UserCreateRequest, data),
        )

    def list(self) -> list:
        return self._request(
            "GET", PATHS["BASE"],
            action="fetching users", endpoint="users",
        )

    def get(self, user_id: str) -> dict:
        return self._request(
            "GET", PATHS["BASE"], user_id,
            action="fetching user", endpoint="user details",
        )

    def update(self, user_id: str, data) -> dict:
        return self._request(
            "PUT", PATHS["BASE"], user_id,
            action="updating user", endpoint="update user",
            body=coerce(UserUpdateRequest, data),
        )

    def delete(self, user_id: str) -> dict:
        return self._request(
            "DELETE", PATHS["BASE"], user_id,
            action="deleting user", endpoint="delete user",
        )

    def get_roles(self) -> dict:
        return self._request(
            "GET", PATHS["ROLES"],
            action="fetching roles", endpoint="roles",
        )
