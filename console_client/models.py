"""
Request models.

Constructing one of these validates the form input before any network call is
made; invalid input raises pydantic.ValidationError, never ApiError.
"""

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

Visibility = Literal["private", "public"]
ImageVisibility = Literal["private", "public", "shared", "community"]


# Auth

class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class SwitchProjectRequest(BaseModel):
    project_id: str = Field(min_length=1)


# Projects & users

class ProjectAssignment(BaseModel):
    user_id: str
    roles: List[str]


class ProjectCreateRequest(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    domain_id: Optional[str] = None
    enabled: bool = True
    assignments: Optional[List[ProjectAssignment]] = None


class ProjectUpdateRequest(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    enabled: Optional[bool] = None


class AssignUserToProjectRequest(BaseModel):
    user_id: str
    project_id: str
    role_names: List[str] = Field(min_length=1)


class RemoveUserFromProjectRequest(BaseModel):
    user_id: str
    project_id: str


class UpdateUserRolesRequest(BaseModel):
    user_id: str
    project_id: str
    role_ids: List[str]


class UserProjectAssignment(BaseModel):
    project_id: str
    roles: List[str]


class UserCreateRequest(BaseModel):
    name: str = Field(min_length=1)
    email: Optional[str] = None
    password: str = Field(min_length=1)
    project_id: Optional[str] = None
    roles: Optional[List[str]] = None


class UserUpdateRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    enabled: Optional[bool] = None
    projects: Optional[List[UserProjectAssignment]] = None


# Images

class ImageImportFromUploadRequest(BaseModel):
    file: Any
    image_name: str = Field(min_length=1)
    visibility: Optional[Visibility] = None

    @field_validator("file")
    @classmethod
    def _file_required(cls, value):
        if value is None:
            raise ValueError("file is required")
        return value


class ImageImportFromUrlRequest(BaseModel):
    image_url: str = Field(min_length=1)
    image_name: str = Field(min_length=1)
    visibility: Optional[Visibility] = None


class ImageImportFromNameRequest(BaseModel):
    description: str = Field(min_length=1)
    visibility: Optional[Visibility] = None
    protected: bool = False


class ImageUpdateRequest(BaseModel):
    new_name: Optional[str] = None
    visibility: Optional[ImageVisibility] = None
    protected: Optional[bool] = None


class ImageCreateVolumeRequest(BaseModel):
    name: str = Field(min_length=1)
    size: int = Field(ge=1)
    image_id: str
    volume_type: Optional[str] = None
    visibility: Optional[ImageVisibility] = None
    protected: Optional[bool] = None


# Compute

class VMCreateRequest(BaseModel):
    name: str = Field(min_length=1)
    image_id: str
    flavor_id: str
    network_id: str
    key_name: str
    security_group: str
    admin_password: Optional[str] = None
    admin_username: Optional[str] = None


class CreateFromDescriptionRequest(BaseModel):
    description: str = Field(min_length=1)
    vm_name: str = Field(min_length=1)
    timeout: Optional[int] = Field(default=None, ge=1)


class ImportVMwareRequest(BaseModel):
    vm_name: str = Field(min_length=1)
    description: Optional[str] = None
    min_disk: Optional[int] = Field(default=None, ge=0)
    min_ram: Optional[int] = Field(default=None, ge=0)
    is_public: Optional[bool] = None
    flavor_id: str
    network_id: str
    key_name: str
    security_group: str
    admin_password: Optional[str] = None
    vmdk_file: Any

    @field_validator("vmdk_file")
    @classmethod
    def _file_required(cls, value):
        if value is None:
            raise ValueError("vmdk_file is required")
        return value


class ResizeRequest(BaseModel):
    instance_id: str
    new_flavor: str


class CreateSnapshotRequest(BaseModel):
    instance_id: str
    snapshot_name: str = Field(min_length=1)


class IdRequest(BaseModel):
    instance_id: str


class FloatingIPRequest(BaseModel):
    instance_id: str


class InterfaceRequest(BaseModel):
    instance_id: str
    network_id: str


class VolumeRequest(BaseModel):
    instance_id: str
    volume_id: str


# Volumes

class VolumeCreateRequest(BaseModel):
    name: str = Field(min_length=1)
    size: int = Field(ge=1)
    description: Optional[str] = None
    volume_type: Optional[str] = None
    availability_zone: Optional[str] = None
    source_vol_id: Optional[str] = None
    group_id: Optional[str] = None


class VolumeExtendRequest(BaseModel):
    volume_id: str
    new_size: int = Field(ge=1)


class VolumeAttachRequest(BaseModel):
    volume_id: str
    instance_id: str


class VolumeChangeTypeRequest(BaseModel):
    volume_type: str = Field(min_length=1)


class VolumeSnapshotCreateRequest(BaseModel):
    volume_id: str
    name: str = Field(min_length=1)
    description: Optional[str] = None


class VolumeUploadToImageRequest(BaseModel):
    volume_id: str
    image_name: str = Field(min_length=1)
    disk_format: Optional[Literal["raw", "qcow2", "vmdk", "vdi"]] = None
    container_format: Optional[Literal["bare", "ovf", "ova"]] = None


class VolumeCreateFromSnapshotRequest(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    snapshot_id: str
    volume_type: Optional[str] = None
    availability_zone: Optional[str] = None


class VolumeSnapshotUpdateRequest(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


class VolumeTypeCreateRequest(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    is_public: Optional[bool] = None


class VolumeTypeUpdateRequest(BaseModel):
    volume_type_id: str
    name: Optional[str] = None
    description: Optional[str] = None


# Flavors

class FlavorCreateRequest(BaseModel):
    name: str = Field(min_length=1)
    ram: int = Field(ge=1)
    vcpus: int = Field(ge=1)
    disk: Optional[int] = Field(default=None, ge=0)
    ephemeral: Optional[int] = Field(default=None, ge=0)
    swap: Optional[int] = Field(default=None, ge=0)
    is_public: Optional[bool] = None


class FlavorUpdateRequest(BaseModel):
    flavor_id: str
    name: Optional[str] = None
    vcpus: Optional[int] = Field(default=None, ge=1)
    ram: Optional[int] = Field(default=None, ge=1)
    disk: Optional[int] = Field(default=None, ge=0)
    ephemeral: Optional[int] = Field(default=None, ge=0)
    swap: Optional[int] = Field(default=None, ge=0)
    is_public: Optional[bool] = None
    description: Optional[str] = None


# Security groups

class SecurityGroupCreateRequest(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None


class SecurityGroupUpdateRequest(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


class SecurityGroupRuleCreateRequest(BaseModel):
    security_group_id: str
    direction: Literal["ingress", "egress"]
    ethertype: Optional[Literal["IPv4", "IPv6"]] = None
    protocol: str = Field(min_length=1)
    port_range_min: Optional[int] = Field(default=None, ge=0, le=65535)
    port_range_max: Optional[int] = Field(default=None, ge=0, le=65535)
    remote_ip_prefix: Optional[str] = None


# Networks

class AllocationPool(BaseModel):
    start: str
    end: str


class SubnetCreateRequest(BaseModel):
    name: str = Field(min_length=1)
    ip_version: Literal[4, 6] = 4
    cidr: str = Field(min_length=1)
    gateway_ip: str
    enable_dhcp: bool = True
    allocation_pools: List[AllocationPool] = Field(default_factory=list)
    dns_nameservers: List[str] = Field(default_factory=list)
    host_routes: List[str] = Field(default_factory=list)


class NetworkCreateRequest(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    mtu: int = Field(default=1500, ge=68)
    shared: bool = False
    port_security_enabled: bool = True
    is_external: bool = False
    availability_zone_hints: List[str] = Field(default_factory=list)
    subnet: SubnetCreateRequest


class RouterCreateRequest(BaseModel):
    router_name: str = Field(min_length=1)
    external_network_id: str


class RouterAddInterfaceRequest(BaseModel):
    subnet_id: str


class AttachPrivateNetworkRequest(BaseModel):
    router_id: str
    private_network_id: str


class RemoveRouterInterfaceRequest(BaseModel):
    router_id: str
    network_name: str


class FloatingIPCreateRequest(BaseModel):
    external_network_name: str = Field(min_length=1)
    floating_ip: Optional[str] = None
    description: Optional[str] = None


class FloatingIPAssociateRequest(BaseModel):
    floating_ip_id: str
    vm_id: str


class FloatingIPIdRequest(BaseModel):
    floating_ip_id: str


# Scaling

class ScaleNodeRequest(BaseModel):
    ip: str = Field(min_length=1)
    hostname: str = Field(min_length=1)
    type: Literal["control", "compute", "storage"]
    neutron_external_interface: str
    network_interface: str
    ssh_user: str
    ssh_password: str
    deploy_tag: str


class SendTestEmailRequest(BaseModel):
    to: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


# Keypairs

class KeyPairCreateRequest(BaseModel):
    name: str = Field(min_length=1)
    key_type: Optional[Literal["ssh", "x509"]] = None


class KeyPairImportFromFileRequest(BaseModel):
    name: str = Field(min_length=1)
    public_key: Any

    @field_validator("public_key")
    @classmethod
    def _file_required(cls, value):
        if value is None:
            raise ValueError("public_key is required")
        return value


# Clusters

class ClusterNodeConfig(BaseModel):
    name_prefix: str = Field(min_length=1)
    image_id: str
    flavor_id: str
    network_id: str
    security_group: str
    key_name: str


class ClusterCreateRequest(BaseModel):
    name: str = Field(min_length=1)
    password: Optional[str] = None
    nombremaster: int = Field(ge=1)
    nombreworker: int = Field(ge=0)
    node_config: ClusterNodeConfig


class ClusterActionRequest(BaseModel):
    cluster_id: int
