from console_client.config import API_PATHS
from console_client.models import ClusterActionRequest, ClusterCreateRequest
from console_client.services.base import BaseService, coerce

PATHS = API_PATHS["CLUSTERS"]


class ClusterService(BaseService):
    """Kubernetes clusters built from VMs."""

    def list(self) -> list:
        return self._request(
            "GET", PATHS["BASE"],
            action="fetching clusters", endpoint="clusters",
        )

    def get(self, cluster_id: int) -> dict:
        return self._request(
            "GET", PATHS["BASE"], cluster_id,
            action="fetching cluster", endpoint="cluster details",
        )

    def create_auto(self, data) -> dict:
        return self._request(
            "POST", PATHS["CREATE_AUTO"],
            action="creating cluster", endpoint="create cluster",
            body=coerce(ClusterCreateRequest, data),
        )

    def start(self, data) -> dict:
        return self._request(
            "POST", PATHS["START"],
            action="starting cluster", endpoint="start cluster",
            body=coerce(ClusterActionRequest, data),
        )

    def stop(self, data) -> dict:
        return self._request(
            "POST", PATHS["STOP"],
            action="stopping cluster", endpoint="stop cluster",
            body=coerce(ClusterActionRequest, data),
        )

    def delete(self, data) -> dict:
        return self._request(
            "POST", PATHS["DELETE"],
            action="deleting cluster", endpoint="delete cluster",
            body=coerce(ClusterActionRequest, data),
        )

    def get_dashboard_token(self, data) -> dict:
        return self._request(
            "GET", PATHS["DASHBOARD_TOKEN"],
            action="fetching dashboard token", endpoint="dashboard token",
            query=coerce(ClusterActionRequest, data),
        )
