from console_client.config import API_PATHS
from console_client.models import FlavorCreateRequest, FlavorUpdateRequest
from console_client.services.base import BaseService, coerce

PATHS = API_PATHS["FLAVORS"]


class FlavorService(BaseService):
    def list(self) -> list:
        return self._request(
            "GET", PATHS["BASE"],
            action="fetching flavors", endpoint="flavors",
        )

    def get(self, flavor_id: str) -> dict:
        return self._request(
            "GET", PATHS["BASE"], flavor_id,
            action="fetching flavor", endpoint="flavor details",
        )

    def create(self, data) -> dict:
        return self._request(
            "POST", PATHS["BASE"],
            action="creating flavor", endpoint="create flavor",
            body=coerce(FlavorCreateRequest, data),
        )

    def update(self, data) -> dict:
        """flavor_id goes in the path, every other set field in the query string."""
        request = coerce(FlavorUpdateRequest, data)
        return self._request(
            "PUT", PATHS["BASE"], request.flavor_id,
            action="updating flavor", endpoint="update flavor",
            query=request.model_dump(exclude={"flavor_id"}), body={},
        )

    def delete(self, flavor_id: str) -> dict:
        return self._request(
            "DELETE", PATHS["BASE"], flavor_id,
            action="deleting flavor", endpoint="delete flavor",
        )
