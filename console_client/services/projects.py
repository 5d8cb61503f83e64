import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List

from console_client.config import API_PATHS
from console_client.errors import ApiError
from console_client.models import (
    AssignUserToProjectRequest,
    ProjectCreateRequest,
    ProjectUpdateRequest,
    RemoveUserFromProjectRequest,
    UpdateUserRolesRequest,
)
from console_client.services.base import BaseService, coerce

logger = logging.getLogger(__name__)

PATHS = API_PATHS["PROJECTS"]

_DETAIL_WORKERS = 8


class ProjectService(BaseService):
    def list(self) -> list:
        return self._request(
            "GET", PATHS["BASE"],
            action="fetching projects", endpoint="projects",
        )

    def list_details(self) -> List[dict]:
        """Details for every project; projects whose lookup fails are left out."""
        projects = self.list()
        if not projects:
            return []

        def _get(project):
            project_id = project.get("id") if isinstance(project, dict) else None
            if not project_id:
                logger.warning("Skipping project entry without an id: %r", project)
                return None
            try:
                return self.get(project_id)
            except ApiError as e:
                logger.warning("Skipping project %s: %s", project_id, e.message)
                return None

        with ThreadPoolExecutor(max_workers=min(_DETAIL_WORKERS, len(projects))) as pool:
            results = list(pool.map(_get, projects))
        return [r for r in results if r is not None]

    def create(self, data) -> dict:
        return self._request(
            "POST", PATHS["BASE"],
            action="creating project", endpoint="create project",
            body=coerce(ProjectCreateRequest, data),
        )

    def get(self, project_id: str) -> dict:
        return self._request(
            "GET", PATHS["BASE"], project_id,
            action="fetching project", endpoint="project details",
        )

    def get_unassigned_users(self, project_id: str) -> dict:
        return self._request(
            "GET", PATHS["BASE"], project_id, "unassigned_users",
            action="fetching unassigned users", endpoint="unassigned users",
        )

    def assign_user(self, data) -> dict:
        return self._request(
            "POST", PATHS["ASSIGN_USER"],
            action="assigning user", endpoint="assign user",
            body=coerce(AssignUserToProjectRequest, data),
        )

    def remove_user(self, data) -> dict:
        return self._request(
            "POST", PATHS["REMOVE_USER"],
            action="removing user", endpoint="remove user",
            body=coerce(RemoveUserFromProjectRequest, data),
        )

    def update_user_roles(self, data) -> dict:
        return self._request(
            "PUT", PATHS["UPDATE_USER_ROLES"],
            action="updating user roles", endpoint="update user roles",
            body=coerce(UpdateUserRolesRequest, data),
        )

    def update(self, project_id: str, data) -> dict:
        return self._request(
            "PUT", PATHS["BASE"], project_id,
            action="updating project", endpoint="update project",
            body=coerce(ProjectUpdateRequest, data),
        )

    def delete(self, project_id: str) -> dict:
        return self._request(
            "DELETE", PATHS["BASE"], project_id,
            action="deleting project", endpoint="delete project",
        )
