from console_client.config import API_PATHS
from console_client.encoding import build_multipart
from console_client.models import (
    ImageCreateVolumeRequest,
    ImageImportFromNameRequest,
    ImageImportFromUploadRequest,
    ImageImportFromUrlRequest,
    ImageUpdateRequest,
)
from console_client.services.base import BaseService, coerce

PATHS = API_PATHS["IMAGES"]

UPLOAD_FILE_FIELD = "file"


class ImageService(BaseService):
    def list_images(self) -> list:
        return self._request(
            "GET", PATHS["BASE"],
            action="fetching images", endpoint="images",
        )

    def get_image_details(self, image_id: str) -> dict:
        return self._request(
            "GET", PATHS["BASE"], image_id,
            action="fetching image details", endpoint="image details",
        )

    def import_from_upload(self, data) -> dict:
        """Upload a disk image file as multipart form data."""
        request = coerce(ImageImportFromUploadRequest, data)
        return self._request(
            "POST", PATHS["IMPORT_FROM_UPLOAD"],
            action="uploading image", endpoint="image upload",
            form=build_multipart(request, UPLOAD_FILE_FIELD),
        )

    def import_from_url(self, data) -> dict:
        # image_url and image_name go in the query string, percent-encoded
        request = coerce(ImageImportFromUrlRequest, data)
        return self._request(
            "POST", PATHS["IMPORT_FROM_URL"],
            action="importing image from URL", endpoint="image import from URL",
            query=request, body={},
        )

    def import_from_name(self, data) -> dict:
        return self._request(
            "POST", PATHS["IMPORT_FROM_NAME"],
            action="importing image by name", endpoint="image import from name",
            body=coerce(ImageImportFromNameRequest, data),
        )

    def update_image(self, image_id: str, data) -> dict:
        return self._request(
            "PUT", PATHS["BASE"], image_id, "update",
            action="updating image", endpoint="image update",
            body=coerce(ImageUpdateRequest, data),
        )

    def delete_image(self, image_id: str) -> dict:
        return self._request(
            "DELETE", PATHS["BASE"], image_id,
            action="deleting image", endpoint="image delete",
        )

    def create_volume(self, data) -> dict:
        return self._request(
            "POST", PATHS["CREATE_VOLUME"],
            action="creating volume from image", endpoint="image create volume",
            body=coerce(ImageCreateVolumeRequest, data),
        )
