from console_client.config import API_PATHS
from console_client.models import (
    VolumeAttachRequest,
    VolumeChangeTypeRequest,
    VolumeCreateFromSnapshotRequest,
    VolumeCreateRequest,
    VolumeExtendRequest,
    VolumeSnapshotCreateRequest,
    VolumeSnapshotUpdateRequest,
    VolumeTypeCreateRequest,
    VolumeTypeUpdateRequest,
    VolumeUploadToImageRequest,
)
from console_client.services.base import BaseService, coerce

VOLUMES = API_PATHS["VOLUMES"]
VOLUME_TYPES = API_PATHS["VOLUME_TYPES"]
SNAPSHOTS = API_PATHS["SNAPSHOTS"]


class VolumeService(BaseService):
    """Volumes, their attachments, snapshots and volume types."""

    def list(self) -> list:
        return self._request(
            "GET", VOLUMES["BASE"],
            action="fetching volumes", endpoint="volumes",
        )

    def get(self, volume_id: str) -> dict:
        return self._request(
            "GET", VOLUMES["BASE"], volume_id,
            action="fetching volume", endpoint="volume details",
        )

    def create(self, data) -> dict:
        # the backend reads volume fields from the query string
        return self._request(
            "POST", VOLUMES["BASE"],
            action="creating volume", endpoint="create volume",
            query=coerce(VolumeCreateRequest, data), body={},
        )

    def delete(self, volume_id: str) -> dict:
        return self._request(
            "DELETE", VOLUMES["BASE"], volume_id,
            action="deleting volume", endpoint="delete volume",
        )

    def extend(self, data) -> dict:
        request = coerce(VolumeExtendRequest, data)
        return self._request(
            "POST", VOLUMES["BASE"], request.volume_id, "extend",
            action="extending volume", endpoint="extend volume",
            body=request.model_dump(exclude={"volume_id"}),
        )

    def attach(self, data) -> dict:
        request = coerce(VolumeAttachRequest, data)
        return self._request(
            "POST", VOLUMES["BASE"], request.volume_id, "attach",
            action="attaching volume", endpoint="attach volume",
            body=request.model_dump(exclude={"volume_id"}),
        )

    def detach(self, attachment_id: str) -> dict:
        return self._request(
            "DELETE", VOLUMES["ATTACHMENTS"], attachment_id,
            action="detaching volume", endpoint="detach volume",
        )

    def change_type(self, volume_id: str, data) -> dict:
        return self._request(
            "PUT", VOLUMES["BASE"], volume_id, "type",
            action="changing volume type", endpoint="change volume type",
            body=coerce(VolumeChangeTypeRequest, data),
        )

    def upload_to_image(self, data) -> dict:
        request = coerce(VolumeUploadToImageRequest, data)
        return self._request(
            "POST", VOLUMES["BASE"], request.volume_id, "upload-to-image",
            action="uploading volume to image", endpoint="upload to image",
            body=request.model_dump(exclude={"volume_id"}, exclude_none=True),
        )

    def get_available_instances(self, volume_id: str) -> list:
        return self._request(
            "GET", VOLUMES["BASE"], volume_id, "available-instances",
            action="fetching available instances", endpoint="available instances",
        )

    def get_attachments(self, volume_id: str) -> list:
        return self._request(
            "GET", VOLUMES["BASE"], volume_id, "attachement",
            action="fetching volume attachments", endpoint="volume attachments",
        )

    # Snapshots

    def list_snapshots(self) -> list:
        return self._request(
            "GET", SNAPSHOTS["BASE"],
            action="fetching snapshots", endpoint="snapshots",
        )

    def get_snapshot_details(self, snapshot_id: str) -> dict:
        return self._request(
            "GET", SNAPSHOTS["BASE"], snapshot_id,
            action="fetching snapshot details", endpoint="snapshot details",
        )

    def create_snapshot(self, data) -> dict:
        return self._request(
            "POST", SNAPSHOTS["BASE"],
            action="creating snapshot", endpoint="create snapshot",
            query=coerce(VolumeSnapshotCreateRequest, data), body={},
        )

    def update_snapshot(self, snapshot_id: str, data) -> dict:
        return self._request(
            "PUT", SNAPSHOTS["BASE"], snapshot_id,
            action="updating snapshot", endpoint="update snapshot",
            body=coerce(VolumeSnapshotUpdateRequest, data),
        )

    def delete_snapshot(self, snapshot_id: str) -> dict:
        return self._request(
            "DELETE", SNAPSHOTS["BASE"], snapshot_id,
            action="deleting snapshot", endpoint="delete snapshot",
        )

    def create_volume_from_snapshot(self, data) -> dict:
        return self._request(
            "POST", VOLUMES["BASE"],
            action="creating volume from snapshot", endpoint="create volume from snapshot",
            query=coerce(VolumeCreateFromSnapshotRequest, data), body={},
        )

    # Volume types

    def list_volume_types(self) -> list:
        return self._request(
            "GET", VOLUME_TYPES["LIST"],
            action="fetching volume types", endpoint="volume types",
        )

    def create_volume_type(self, data) -> dict:
        return self._request(
            "POST", VOLUME_TYPES["CREATE"],
            action="creating volume type", endpoint="create volume type",
            body=coerce(VolumeTypeCreateRequest, data),
        )

    def update_volume_type(self, data) -> dict:
        request = coerce(VolumeTypeUpdateRequest, data)
        return self._request(
            "PUT", VOLUME_TYPES["UPDATE"], request.volume_type_id,
            action="updating volume type", endpoint="update volume type",
            body=request.model_dump(exclude={"volume_type_id"}, exclude_none=True),
        )

    def delete_volume_type(self, volume_type_id: str) -> dict:
        return self._request(
            "DELETE", VOLUME_TYPES["BASE"], volume_type_id,
            action="deleting volume type", endpoint="delete volume type",
        )
