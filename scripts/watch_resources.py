import argparse
import json
import os
import sys
import time
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from console_client import config
from console_client.api import ConsoleApi
from console_client.credentials import MemoryCookieStore
from console_client.errors import ApiError
from console_client.query_cache import QueryCache
from console_client.session import ConsoleSession
from shared.logging_config import setup_logging


def login(console: ConsoleApi, username: str, password: str) -> ConsoleSession:
    session = ConsoleSession(console.client)
    session.login({"username": username, "password": password})
    return session


def print_snapshot(cache: QueryCache, keys) -> None:
    report = {key: cache.peek(key).to_dict() for key in keys}
    print(json.dumps(report, indent=2, default=str))


def main() -> int:
    parser = argparse.ArgumentParser(description="Poll instances and the dashboard overview from the console backend")
    parser.add_argument("--base-url", default=config.BACKEND_URL, help="Backend API base URL")
    parser.add_argument("--username", default=os.getenv("CONSOLE_USERNAME"), help="Login username")
    parser.add_argument("--password", default=os.getenv("CONSOLE_PASSWORD"), help="Login password")
    parser.add_argument("--token", default=os.getenv("CONSOLE_TOKEN"), help="Raw token cookie value, skips login")
    parser.add_argument("--instances-interval", type=float, default=config.POLL_INSTANCES_SECONDS)
    parser.add_argument("--overview-interval", type=float, default=config.POLL_OVERVIEW_SECONDS)
    parser.add_argument("--report-every", type=float, default=5.0, help="Seconds between printed snapshots")
    parser.add_argument("--once", action="store_true", help="Fetch once, print and exit")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()

    setup_logging("watch", level=args.log_level)

    cookies = MemoryCookieStore({config.TOKEN_COOKIE: args.token} if args.token else None)
    console = ConsoleApi.connect(cookies, base_url=args.base_url)

    session = None
    if not args.token:
        if not args.username or not args.password:
            parser.error("either --token or --username/--password is required")
        try:
            session = login(console, args.username, args.password)
        except ApiError as e:
            print(f"Login failed: {e.message}")
            return 1

    cache = QueryCache()
    queries = {
        "instances": (console.infra.list_instances, args.instances_interval),
        "overview": (console.infra.get_overview, args.overview_interval),
    }

    if args.once:
        failed = False
        for key, (fetcher, _) in queries.items():
            try:
                cache.fetch(key, fetcher)
            except ApiError:
                failed = True
        print_snapshot(cache, queries)
        return 1 if failed else 0

    for key, (fetcher, interval) in queries.items():
        cache.poll(key, fetcher, interval)

    try:
        while True:
            time.sleep(args.report_every)
            print_snapshot(cache, queries)
    except KeyboardInterrupt:
        print("\nStopping pollers...")
    finally:
        cache.stop_all()
        if session is not None:
            try:
                session.logout()
            except ApiError as e:
                print(f"Logout failed: {e.message}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
