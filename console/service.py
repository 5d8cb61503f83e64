from flask import Flask, g, jsonify, redirect, request
import hashlib
import json
import logging
import atexit

import requests
from pydantic import ValidationError

from console.cookies import FlaskCookieStore
from console_client import config
from console_client.api import ConsoleApi
from console_client.errors import AUTH, ApiError
from console_client.models import (
    ImageImportFromUploadRequest,
    SecurityGroupCreateRequest,
    VolumeCreateRequest,
    VolumeExtendRequest,
)
from console_client.query_cache import QueryCache, run_mutation
from console_client.session import ConsoleSession
from console_client.transport import ApiClient

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = config.SECRET_KEY
BASE_URL = config.BACKEND_URL

# Shared connection pool for every backend call
http_session = requests.Session()

query_cache = QueryCache()

STALE_TIMES = {
    "instances": config.POLL_INSTANCES_SECONDS,
    "overview": config.POLL_OVERVIEW_SECONDS,
    "rules": config.STALE_RULES_SECONDS,
}

INSTANCE_ACTIONS = {"start", "stop", "reboot", "pause", "suspend", "shelve", "rescue"}

OVERVIEW_PAGE = "/dashboard/overview"
LOGIN_PAGE = "/login"


def shutdown_cache():
    query_cache.stop_all()
    http_session.close()


atexit.register(shutdown_cache)


def api() -> ConsoleApi:
    return ConsoleApi(ApiClient(base_url=BASE_URL, cookies=g.cookies, session=http_session))


def console_session() -> ConsoleSession:
    return ConsoleSession(api().client)


def cache_scope() -> str:
    """Key prefix for the caller's credential so sessions never share data."""
    raw = g.cookies.get(config.TOKEN_COOKIE) or ""
    return hashlib.sha256(raw.encode()).hexdigest()[:16] + ":"


def query_key(name: str) -> str:
    return cache_scope() + name


def cached(name: str, fetcher, stale_group: str = None):
    key = query_key(name)
    query_cache.register(key, fetcher, stale_time=STALE_TIMES.get(stale_group or name, 0))
    return query_cache.fetch(key)


def request_data() -> dict:
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def mutation_response(result, status: int = 200):
    if result.ok:
        return jsonify(result.to_dict()), status
    return jsonify(result.to_dict()), 400


@app.before_request
def load_cookies():
    g.cookies = FlaskCookieStore(request.cookies)

    # Page routing rules carried over from the browser console
    path = request.path
    logged_in = bool(request.cookies.get(config.USER_COOKIE)) and bool(request.cookies.get(config.TOKEN_COOKIE))
    if path == "/":
        return redirect(OVERVIEW_PAGE if logged_in else LOGIN_PAGE)
    if path in ("/dashboard", LOGIN_PAGE) and request.method == "GET" and logged_in:
        return redirect(OVERVIEW_PAGE)
    if (path == "/dashboard" or path.startswith("/dashboard/")) and not logged_in:
        return redirect(LOGIN_PAGE)
    return None


@app.after_request
def store_cookies(response):
    cookies = g.get("cookies")
    if cookies is not None:
        cookies.apply(response)
    return response


@app.errorhandler(ApiError)
def handle_api_error(exc: ApiError):
    status = 401 if exc.kind == AUTH else 502
    return jsonify(exc.to_dict()), status


@app.errorhandler(ValidationError)
def handle_validation_error(exc: ValidationError):
    return jsonify({
        "kind": "validation",
        "message": "Invalid request",
        "errors": json.loads(exc.json(include_url=False)),
    }), 422


@app.route('/healthz')
def healthz():
    return jsonify({"status": "ok", "backend": BASE_URL})


# Pages

@app.route('/login', methods=['GET'])
def login_page():
    return jsonify({"page": "login"})


@app.route('/dashboard')
@app.route('/dashboard/<path:page>')
def dashboard_page(page: str = "overview"):
    session = console_session()
    return jsonify({
        "page": page,
        "user": session.user,
        "selected_project": session.selected_project,
    })


# Session Routes

@app.route('/login', methods=['POST'])
def login():
    session = console_session()
    try:
        response = session.login(request_data())
    except ApiError as e:
        logger.info("Login failed: %s", e.message)
        raise
    return jsonify({
        "message": response.get("message") or "Login successful",
        "user_id": response.get("user_id"),
        "username": response.get("username"),
        "projects": response.get("projects") or [],
        "selected_project": session.selected_project,
    })


@app.route('/logout', methods=['POST'])
def logout():
    session = console_session()
    scope = cache_scope()
    try:
        response = session.logout()
    except ApiError as e:
        # cookies are already cleared; report the failure anyway
        return jsonify({"ok": False, "message": e.message}), 502
    finally:
        query_cache.forget(scope)
    return jsonify({"ok": True, "message": response.get("message") or "Logged out"})


@app.route('/session')
def session_info():
    session = console_session()
    credential = session.credential
    return jsonify({
        "logged_in": session.is_logged_in,
        "token_valid": session.has_valid_token,
        "expires_at": credential.expires_at if credential else None,
        "user": session.user,
        "selected_project": session.selected_project,
    })


@app.route('/projects')
def projects_list():
    return jsonify(api().auth.get_projects())


@app.route('/projects/switch', methods=['POST'])
def project_switch():
    project_id = request_data().get("project_id")
    if not project_id:
        return jsonify({"kind": "validation", "message": "project_id required"}), 422
    session = console_session()
    scope = cache_scope()
    result = run_mutation(
        session.switch_project, project_id,
        success="Project switched successfully!",
    )
    if result.ok:
        # queries cached under the previous token are unreachable now
        if cache_scope() != scope:
            query_cache.forget(scope)
        result.data = {"selected_project": session.selected_project}
    return mutation_response(result)


# Overview & Instance Routes

@app.route('/overview')
def overview():
    client = api()
    return jsonify(cached("overview", client.infra.get_overview))


@app.route('/instances')
def instances_list():
    client = api()
    return jsonify(cached("instances", client.infra.list_instances))


@app.route('/instances/<instance_id>')
def instance_details(instance_id):
    return jsonify(api().infra.get_instance_details(instance_id))


@app.route('/instances/<instance_id>/<action>', methods=['POST'])
def instance_action(instance_id, action):
    if action not in INSTANCE_ACTIONS:
        return jsonify({"kind": "validation", "message": f"Unknown instance action: {action}"}), 404
    infra = api().infra
    if action in ("start", "stop", "reboot"):
        fn, args = getattr(infra, f"{action}_instance"), (instance_id,)
    else:
        fn, args = getattr(infra, action), ({"instance_id": instance_id},)
    result = run_mutation(
        fn, *args,
        cache=query_cache,
        invalidate=[query_key("instances"), query_key("overview")],
        success=f"Instance {action} requested",
    )
    return mutation_response(result)


@app.route('/instances/<instance_id>', methods=['DELETE'])
def instance_delete(instance_id):
    result = run_mutation(
        api().infra.delete_instance, instance_id,
        cache=query_cache,
        invalidate=[query_key("instances"), query_key("overview")],
        success="Instance deleted",
    )
    return mutation_response(result)


@app.route('/instances/<instance_id>/console')
def instance_console(instance_id):
    return jsonify(api().infra.get_console({"instance_id": instance_id}))


@app.route('/instances/<instance_id>/logs')
def instance_logs(instance_id):
    return jsonify(api().infra.get_logs({"instance_id": instance_id}))


# Volume Routes

@app.route('/volumes')
def volume_list():
    client = api()
    return jsonify(cached("volumes", client.volumes.list))


@app.route('/volumes', methods=['POST'])
def volume_create():
    client = api()
    data = VolumeCreateRequest.model_validate(request_data())
    result = run_mutation(
        client.volumes.create, data,
        cache=query_cache,
        invalidate=[query_key("volumes"), query_key("overview")],
        success=f"Volume {data.name} created",
    )
    return mutation_response(result, 201)


@app.route('/volumes/<volume_id>', methods=['DELETE'])
def volume_delete(volume_id):
    result = run_mutation(
        api().volumes.delete, volume_id,
        cache=query_cache,
        invalidate=[query_key("volumes"), query_key("overview")],
        success="Volume deleted",
    )
    return mutation_response(result)


@app.route('/volumes/<volume_id>/extend', methods=['POST'])
def volume_extend(volume_id):
    data = VolumeExtendRequest.model_validate({**request_data(), "volume_id": volume_id})
    result = run_mutation(
        api().volumes.extend, data,
        cache=query_cache,
        invalidate=[query_key("volumes")],
        success="Volume extended",
    )
    return mutation_response(result)


# Network, Security Group, Keypair, Image & Cluster Routes

@app.route('/networks')
def network_list():
    client = api()
    return jsonify(cached("networks", client.networks.list))


@app.route('/security-groups')
def security_group_list():
    client = api()
    return jsonify(cached("security_groups", client.security_groups.list))


@app.route('/security-groups', methods=['POST'])
def security_group_create():
    data = SecurityGroupCreateRequest.model_validate(request_data())
    result = run_mutation(
        api().security_groups.create, data,
        cache=query_cache,
        invalidate=[query_key("security_groups")],
        success=f"Security group {data.name} created",
    )
    return mutation_response(result, 201)


@app.route('/security-groups/<security_group_id>/rules')
def security_group_rules(security_group_id):
    client = api()
    return jsonify(cached(
        f"rules:{security_group_id}",
        lambda: client.security_groups.list_rules(security_group_id),
        stale_group="rules",
    ))


@app.route('/keypairs')
def keypair_list():
    return jsonify(api().keypairs.list())


@app.route('/images/upload', methods=['POST'])
def image_upload():
    upload = request.files.get("file")
    if upload is None:
        return jsonify({"kind": "validation", "message": "file required"}), 422
    data = ImageImportFromUploadRequest.model_validate({
        "file": (upload.filename, upload.stream, upload.mimetype),
        "image_name": request.form.get("image_name"),
        "visibility": request.form.get("visibility") or None,
    })
    result = run_mutation(
        api().images.import_from_upload, data,
        success=f"Image {data.image_name} uploaded",
    )
    return mutation_response(result, 201)


@app.route('/clusters')
def cluster_list():
    return jsonify(api().clusters.list())


if __name__ == '__main__':
    app.run(host=config.GUI_BIND_HOST, port=config.GUI_PORT, debug=config.GUI_DEBUG)
