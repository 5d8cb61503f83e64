import os


def _int_env(name: str, default: int) -> int:
    raw = str(os.getenv(name, str(default))).strip()
    try:
        return int(raw)
    except Exception:
        return default


def _float_env(name: str, default: float) -> float:
    raw = str(os.getenv(name, str(default))).strip()
    try:
        return float(raw)
    except Exception:
        return default


def _bool_env(name: str, default: bool) -> bool:
    raw = str(os.getenv(name, "")).strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes"}


BACKEND_URL = str(os.getenv("CONSOLE_BACKEND_URL", "http://127.0.0.1:8000/api/v1")).strip().rstrip("/")
REQUEST_TIMEOUT = _float_env("CONSOLE_REQUEST_TIMEOUT", 30.0)
CONSOLE_ENV = str(os.getenv("CONSOLE_ENV", "development")).strip().lower()
IS_PRODUCTION = CONSOLE_ENV == "production"

# Background refresh intervals / staleness windows, in seconds
POLL_INSTANCES_SECONDS = _int_env("CONSOLE_POLL_INSTANCES", 15)
POLL_OVERVIEW_SECONDS = _int_env("CONSOLE_POLL_OVERVIEW", 30)
STALE_RULES_SECONDS = _int_env("CONSOLE_STALE_RULES", 45)

GUI_BIND_HOST = str(os.getenv("CONSOLE_GUI_BIND_HOST", "0.0.0.0")).strip()
GUI_PORT = _int_env("CONSOLE_GUI_PORT", 5000)
GUI_DEBUG = _bool_env("CONSOLE_GUI_DEBUG", False)
SECRET_KEY = str(os.getenv("CONSOLE_SECRET_KEY", "iaas-console-secret")).strip()

TOKEN_COOKIE = "token"
USER_COOKIE = "user"
SELECTED_PROJECT_COOKIE = "selectedProject"

API_PATHS = {
    "AUTH": {
        "LOGIN": "/auth/login",
        "SWITCH_PROJECT": "/auth/switch-project",
        "PROJECTS": "/auth/projects",
        "LOGOUT": "/auth/logout",
    },
    "PROJECTS": {
        "BASE": "/projects/",
        "ASSIGN_USER": "/projects/assign-user",
        "REMOVE_USER": "/projects/remove-user",
        "UPDATE_USER_ROLES": "/projects/update-user-roles",
    },
    "USERS": {
        "BASE": "/users/users",
        "ROLES": "/users/roles",
    },
    "IMAGES": {
        "BASE": "/image/images",
        "IMPORT_FROM_UPLOAD": "/image/images/import-from-upload",
        "IMPORT_FROM_URL": "/image/images/import-from-url",
        "IMPORT_FROM_NAME": "/image/images/import-from-name",
        "CREATE_VOLUME": "/image/volumes",
    },
    "NETWORKS": {
        "LIST": "/network/list",
        "BASE": "/network/networks",
        "CREATE": "/network/networks/create",
        "DELETE": "/network/delete",
        "PUBLIC": "/network/networks/public",
        "PRIVATE": "/network/networks/private",
        "VMS": "/network/vms",
    },
    "ROUTERS": {
        "LIST": "/network/routers",
        "BASE": "/network/router",
        "CREATE": "/network/router/create",
        "ATTACH_PRIVATE_NETWORK": "/network/router/attach-private-network",
        "REMOVE_INTERFACE": "/network/router/remove-interface",
    },
    "FLOATING_IPS": {
        "LIST": "/network/floatingips",
        "CREATE": "/network/floatingips/create",
        "ASSOCIATE": "/network/floatingips/associate",
        "DISSOCIATE": "/network/floatingips/dissociate",
        "DELETE": "/network/floatingips/delete",
    },
    "INFRA": {
        "INSTANCES": "/nova/instances",
        "INSTANCE_DETAILS": "/nova/servers",
        "CREATE_VM": "/nova/create-vm",
        "CREATE_FROM_DESCRIPTION": "/nova/create-from-description",
        "IMPORT_VMWARE": "/nova/import-vmware-vm",
        "START_INSTANCE": "/nova/start",
        "STOP_INSTANCE": "/nova/stop",
        "REBOOT_INSTANCE": "/nova/reboot",
        "DELETE_INSTANCE": "/nova/delete",
        "RESIZE": "/nova/resize",
        "SNAPSHOT": "/nova/snapshot",
        "PAUSE": "/nova/pause",
        "SUSPEND": "/nova/suspend",
        "SHELVE": "/nova/shelve",
        "RESCUE": "/nova/rescue",
        "CONSOLE": "/nova/console",
        "LOGS": "/nova/logs",
        "ATTACH_FLOATING_IP": "/nova/attach",
        "DETACH_FLOATING_IP": "/nova/detach",
        "ATTACH_INTERFACE": "/nova/interface/attach",
        "DETACH_INTERFACE": "/nova/interface/detach",
        "ATTACH_VOLUME": "/nova/volume/attach",
        "DETACH_VOLUME": "/nova/volume/detach",
        "AVAILABLE_VOLUMES": "/nova/volumes_avaible/list",
        "ATTACHED_VOLUMES": "/nova/volumes/attached",
        "RESOURCES": "/nova/resources",
        "OVERVIEW": "/dashboard/overview",
    },
    "VOLUMES": {
        "BASE": "/volume/volumes",
        "ATTACHMENTS": "/volume/volumes/attachments",
    },
    "VOLUME_TYPES": {
        "LIST": "/volume/volume-types/list",
        "BASE": "/volume/volume-types",
        "CREATE": "/volume/volume-types/create",
        "UPDATE": "/volume/volume-types/update",
    },
    "SNAPSHOTS": {
        "BASE": "/volume/snapshots",
    },
    "FLAVORS": {
        "BASE": "/flavor/flavors",
    },
    "SECURITY_GROUPS": {
        "BASE": "/securitygroups/security-groups",
    },
    "SECURITY_GROUP_RULES": {
        "BASE": "/securitygroups/security-groups/rules",
    },
    "KEYPAIRS": {
        "BASE": "/keypairs/keypairs",
        "CREATE": "/keypairs/keypairs/create",
        "IMPORT_FROM_FILE": "/keypairs/keypairs/import-from-file",
    },
    "CLUSTERS": {
        "BASE": "/cluster/clusters",
        "CREATE_AUTO": "/cluster/create-vm-cluster-auto",
        "START": "/cluster/clusters/start",
        "STOP": "/cluster/clusters/stop",
        "DELETE": "/cluster/clusters/delete",
        "DASHBOARD_TOKEN": "/cluster/k8s-dashboard/token",
    },
    "SCALE": {
        "HEALTH": "/scale/",
        "ADD_NODE": "/scale/node",
        "TEST_EMAIL": "/scale/test-email",
    },
}
