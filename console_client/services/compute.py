from console_client.config import API_PATHS
from console_client.encoding import build_multipart
from console_client.errors import EMPTY_PAYLOAD, ApiError
from console_client.models import (
    CreateFromDescriptionRequest,
    CreateSnapshotRequest,
    FloatingIPRequest,
    IdRequest,
    ImportVMwareRequest,
    InterfaceRequest,
    ResizeRequest,
    VMCreateRequest,
    VolumeRequest,
)
from console_client.services.base import BaseService, coerce

PATHS = API_PATHS["INFRA"]

VMDK_FILE_FIELD = "vmdk_file"

# action name -> (path key, progressive verb used in error messages)
POWER_ACTIONS = {
    "pause": ("PAUSE", "pausing"),
    "suspend": ("SUSPEND", "suspending"),
    "shelve": ("SHELVE", "shelving"),
    "rescue": ("RESCUE", "rescuing"),
}


class InfraService(BaseService):
    """Compute instances and the dashboard overview."""

    def list_instances(self) -> list:
        return self._request(
            "GET", PATHS["INSTANCES"],
            action="fetching instances", endpoint="instances",
        )

    def get_instance_details(self, instance_id: str) -> dict:
        return self._request(
            "GET", PATHS["INSTANCE_DETAILS"], instance_id,
            action="fetching instance details", endpoint="instance details",
        )

    def create_vm(self, data) -> dict:
        return self._request(
            "POST", PATHS["CREATE_VM"],
            action="creating VM", endpoint="create VM",
            body=coerce(VMCreateRequest, data),
        )

    def create_from_description(self, data) -> dict:
        return self._request(
            "POST", PATHS["CREATE_FROM_DESCRIPTION"],
            action="creating VM from description", endpoint="create from description",
            body=coerce(CreateFromDescriptionRequest, data),
        )

    def import_vmware_vm(self, data) -> dict:
        """Import a VMware VM by uploading its VMDK disk as multipart form data."""
        request = coerce(ImportVMwareRequest, data)
        return self._request(
            "POST", PATHS["IMPORT_VMWARE"],
            action="importing VMware VM", endpoint="import VMware VM",
            form=build_multipart(request, VMDK_FILE_FIELD),
        )

    def list_resources(self) -> dict:
        return self._request(
            "GET", PATHS["RESOURCES"],
            action="fetching resources", endpoint="resources",
        )

    def start_instance(self, instance_id: str) -> dict:
        return self._request(
            "POST", PATHS["START_INSTANCE"], instance_id,
            action="starting instance", endpoint="start instance",
        )

    def stop_instance(self, instance_id: str) -> dict:
        return self._request(
            "POST", PATHS["STOP_INSTANCE"], instance_id,
            action="stopping instance", endpoint="stop instance",
        )

    def reboot_instance(self, instance_id: str) -> dict:
        return self._request(
            "POST", PATHS["REBOOT_INSTANCE"], instance_id,
            action="rebooting instance", endpoint="reboot instance",
        )

    def delete_instance(self, instance_id: str) -> dict:
        return self._request(
            "DELETE", PATHS["DELETE_INSTANCE"], instance_id,
            action="deleting instance", endpoint="delete instance",
        )

    def resize(self, data) -> dict:
        return self._request(
            "POST", PATHS["RESIZE"],
            action="resizing instance", endpoint="resize instance",
            body=coerce(ResizeRequest, data),
        )

    def create_snapshot(self, data) -> dict:
        return self._request(
            "POST", PATHS["SNAPSHOT"],
            action="creating instance snapshot", endpoint="instance snapshot",
            body=coerce(CreateSnapshotRequest, data),
        )

    def _power_action(self, name: str, data) -> dict:
        path_key, verb = POWER_ACTIONS[name]
        return self._request(
            "POST", PATHS[path_key],
            action=f"{verb} instance", endpoint=f"{name} instance",
            body=coerce(IdRequest, data),
        )

    def pause(self, data) -> dict:
        return self._power_action("pause", data)

    def suspend(self, data) -> dict:
        return self._power_action("suspend", data)

    def shelve(self, data) -> dict:
        return self._power_action("shelve", data)

    def rescue(self, data) -> dict:
        return self._power_action("rescue", data)

    def get_console(self, data) -> dict:
        """Console URL for an instance; a payload without `url` is an error."""
        payload = self._request(
            "GET", PATHS["CONSOLE"],
            action="fetching console", endpoint="console",
            query=coerce(IdRequest, data),
        )
        if not isinstance(payload, dict) or not payload.get("url"):
            raise ApiError(EMPTY_PAYLOAD, "No console URL returned")
        return payload

    def get_logs(self, data) -> dict:
        return self._request(
            "GET", PATHS["LOGS"],
            action="fetching instance logs", endpoint="logs",
            query=coerce(IdRequest, data),
        )

    def attach_interface(self, data) -> dict:
        return self._request(
            "POST", PATHS["ATTACH_INTERFACE"],
            action="attaching interface", endpoint="attach interface",
            body=coerce(InterfaceRequest, data),
        )

    def detach_interface(self, data) -> dict:
        return self._request(
            "POST", PATHS["DETACH_INTERFACE"],
            action="detaching interface", endpoint="detach interface",
            body=coerce(InterfaceRequest, data),
        )

    def attach_floating_ip(self, data) -> dict:
        return self._request(
            "POST", PATHS["ATTACH_FLOATING_IP"],
            action="attaching floating IP", endpoint="attach floating IP",
            body=coerce(FloatingIPRequest, data),
        )

    def detach_floating_ip(self, data) -> dict:
        return self._request(
            "POST", PATHS["DETACH_FLOATING_IP"],
            action="detaching floating IP", endpoint="detach floating IP",
            body=coerce(FloatingIPRequest, data),
        )

    def attach_volume(self, data) -> dict:
        return self._request(
            "POST", PATHS["ATTACH_VOLUME"],
            action="attaching volume", endpoint="attach volume",
            body=coerce(VolumeRequest, data),
        )

    def detach_volume(self, data) -> dict:
        return self._request(
            "POST", PATHS["DETACH_VOLUME"],
            action="detaching volume", endpoint="detach volume",
            body=coerce(VolumeRequest, data),
        )

    def list_available_volumes(self) -> list:
        return self._request(
            "GET", PATHS["AVAILABLE_VOLUMES"],
            action="fetching available volumes", endpoint="available volumes",
        )

    def list_attached_volumes(self, data) -> list:
        return self._request(
            "POST", PATHS["ATTACHED_VOLUMES"],
            action="fetching attached volumes", endpoint="attached volumes",
            body=coerce(IdRequest, data),
        )

    def get_overview(self) -> dict:
        return self._request(
            "GET", PATHS["OVERVIEW"],
            action="fetching overview", endpoint="overview",
        )
