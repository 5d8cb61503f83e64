from console_client.config import API_PATHS
from console_client.models import ScaleNodeRequest, SendTestEmailRequest
from console_client.services.base import BaseService, coerce

PATHS = API_PATHS["SCALE"]


class ScaleService(BaseService):
    def health(self) -> dict:
        return self._request(
            "GET", PATHS["HEALTH"],
            action="fetching scaling health", endpoint="scale health",
        )

    def add_node(self, data) -> dict:
        return self._request(
            "POST", PATHS["ADD_NODE"],
            action="adding node", endpoint="add node",
            body=coerce(ScaleNodeRequest, data),
        )

    def send_test_email(self, data) -> dict:
        return self._request(
            "POST", PATHS["TEST_EMAIL"],
            action="sending test email", endpoint="test email",
            body=coerce(SendTestEmailRequest, data),
        )
