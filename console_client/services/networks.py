from console_client.config import API_PATHS
from console_client.models import (
    AttachPrivateNetworkRequest,
    FloatingIPAssociateRequest,
    FloatingIPCreateRequest,
    FloatingIPIdRequest,
    NetworkCreateRequest,
    RemoveRouterInterfaceRequest,
    RouterAddInterfaceRequest,
    RouterCreateRequest,
)
from console_client.services.base import BaseService, coerce

NETWORKS = API_PATHS["NETWORKS"]
ROUTERS = API_PATHS["ROUTERS"]
FLOATING_IPS = API_PATHS["FLOATING_IPS"]


class NetworkService(BaseService):
    """Networks, routers and floating IPs."""

    def list(self) -> list:
        return self._request(
            "GET", NETWORKS["LIST"],
            action="fetching networks", endpoint="networks",
        )

    def get(self, network_id: str) -> dict:
        return self._request(
            "GET", NETWORKS["BASE"], network_id,
            action="fetching network", endpoint="network details",
        )

    def create(self, data) -> dict:
        return self._request(
            "POST", NETWORKS["CREATE"],
            action="creating network", endpoint="create network",
            body=coerce(NetworkCreateRequest, data),
        )

    def delete(self, network_id: str) -> dict:
        return self._request(
            "DELETE", NETWORKS["DELETE"], network_id,
            action="deleting network", endpoint="delete network",
        )

    def public_networks(self) -> list:
        return self._request(
            "GET", NETWORKS["PUBLIC"],
            action="fetching public networks", endpoint="public networks",
        )

    def private_networks(self) -> list:
        return self._request(
            "GET", NETWORKS["PRIVATE"],
            action="fetching private networks", endpoint="private networks",
        )

    def list_vms(self) -> list:
        return self._request(
            "GET", NETWORKS["VMS"],
            action="fetching network VMs", endpoint="network VMs",
        )

    # Routers

    def create_router(self, data) -> dict:
        return self._request(
            "POST", ROUTERS["CREATE"],
            action="creating router", endpoint="create router",
            body=coerce(RouterCreateRequest, data),
        )

    def routers_list(self) -> list:
        return self._request(
            "GET", ROUTERS["LIST"],
            action="fetching routers", endpoint="routers",
        )

    def get_router(self, router_id: str) -> dict:
        # the backend route for router details ends with a slash
        return self._request(
            "GET", ROUTERS["BASE"], f"{router_id}/",
            action="fetching router", endpoint="router details",
        )

    def get_router_interfaces(self, router_id: str) -> list:
        return self._request(
            "GET", ROUTERS["BASE"], router_id, "interfaces",
            action="fetching router interfaces", endpoint="router interfaces",
        )

    def add_router_interface(self, router_id: str, data) -> dict:
        return self._request(
            "POST", ROUTERS["BASE"], router_id, "add-interface",
            action="adding router interface", endpoint="router add interface",
            body=coerce(RouterAddInterfaceRequest, data),
        )

    def attach_private_network(self, data) -> dict:
        return self._request(
            "POST", ROUTERS["ATTACH_PRIVATE_NETWORK"],
            action="attaching private network", endpoint="attach private network",
            body=coerce(AttachPrivateNetworkRequest, data),
        )

    def remove_router_interface(self, data) -> dict:
        return self._request(
            "POST", ROUTERS["REMOVE_INTERFACE"],
            action="removing router interface", endpoint="router remove interface",
            body=coerce(RemoveRouterInterfaceRequest, data),
        )

    # Floating IPs

    def list_floating_ips(self) -> list:
        return self._request(
            "GET", FLOATING_IPS["LIST"],
            action="fetching floating IPs", endpoint="floating IPs",
        )

    def create_floating_ip(self, data) -> dict:
        return self._request(
            "POST", FLOATING_IPS["CREATE"],
            action="creating floating IP", endpoint="create floating IP",
            body=coerce(FloatingIPCreateRequest, data),
        )

    def associate_floating_ip(self, data) -> dict:
        return self._request(
            "POST", FLOATING_IPS["ASSOCIATE"],
            action="associating floating IP", endpoint="associate floating IP",
            body=coerce(FloatingIPAssociateRequest, data),
        )

    def dissociate_floating_ip(self, data) -> dict:
        return self._request(
            "POST", FLOATING_IPS["DISSOCIATE"],
            action="dissociating floating IP", endpoint="dissociate floating IP",
            body=coerce(FloatingIPIdRequest, data),
        )

    def delete_floating_ip(self, data) -> dict:
        return self._request(
            "POST", FLOATING_IPS["DELETE"],
            action="deleting floating IP", endpoint="delete floating IP",
            body=coerce(FloatingIPIdRequest, data),
        )
