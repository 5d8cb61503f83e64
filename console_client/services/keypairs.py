from console_client.config import API_PATHS
from console_client.encoding import build_multipart
from console_client.models import KeyPairCreateRequest, KeyPairImportFromFileRequest
from console_client.services.base import BaseService, coerce

PATHS = API_PATHS["KEYPAIRS"]

PUBLIC_KEY_FILE_FIELD = "public_key"


class KeyPairService(BaseService):
    def list(self) -> list:
        return self._request(
            "GET", PATHS["BASE"],
            action="fetching keypairs", endpoint="keypairs",
        )

    def get(self, name: str) -> dict:
        return self._request(
            "GET", PATHS["BASE"], name,
            action="fetching keypair", endpoint="keypair details",
        )

    def create(self, data) -> dict:
        return self._request(
            "POST", PATHS["CREATE"],
            action="creating keypair", endpoint="create keypair",
            body=coerce(KeyPairCreateRequest, data),
        )

    def import_from_file(self, data) -> dict:
        request = coerce(KeyPairImportFromFileRequest, data)
        return self._request(
            "POST", PATHS["IMPORT_FROM_FILE"],
            action="importing keypair", endpoint="import keypair",
            form=build_multipart(request, PUBLIC_KEY_FILE_FIELD),
        )

    def delete(self, name: str) -> dict:
        return self._request(
            "DELETE", PATHS["BASE"], name,
            action="deleting keypair", endpoint="delete keypair",
        )
