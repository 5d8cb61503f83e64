"""
Console Gateway Launcher

Starts the IaaS admin console gateway.

This service provides:
- Login / logout / project switch with cookie-backed sessions
- Cached instance, overview, volume and network reads
- Instance, volume, security group and image mutations

Architecture:
-------------
- Flask web server (port 5000)
- requests session to the console backend REST API
- In-memory query cache with staleness windows per query

Usage:
------
python scripts/run_console.py

Environment Variables:
----------------------
CONSOLE_BACKEND_URL: Backend REST API base URL (default: http://127.0.0.1:8000/api/v1)
CONSOLE_GUI_PORT: Flask server port (default: 5000)
CONSOLE_GUI_BIND_HOST: Flask bind address (default: 0.0.0.0)
CONSOLE_GUI_DEBUG: Enable Flask debug mode (default: false)
CONSOLE_LOG_LEVEL: Logging level (default: INFO)
CONSOLE_LOG_FILE: Optional log file path
"""

import os
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from console_client import config
from shared.logging_config import setup_logging


def main():
    """Main entrypoint for the console gateway."""

    setup_logging(
        "console",
        level=os.getenv("CONSOLE_LOG_LEVEL", "INFO"),
        log_file=os.getenv("CONSOLE_LOG_FILE") or None,
    )

    # Import after logging is configured so module loggers pick it up
    from console.service import app

    print("=" * 60)
    print("IaaS Admin Console Gateway")
    print("=" * 60)

    print(f"Backend API: {config.BACKEND_URL}")
    print(f"Bind Address: {config.GUI_BIND_HOST}:{config.GUI_PORT}")
    print(f"Debug Mode: {config.GUI_DEBUG}")
    print(f"Secure Cookies: {config.IS_PRODUCTION}")

    print("\nQuery cache:")
    print(f"  - Instances stale after {config.POLL_INSTANCES_SECONDS}s")
    print(f"  - Overview stale after {config.POLL_OVERVIEW_SECONDS}s")
    print(f"  - Security group rules stale after {config.STALE_RULES_SECONDS}s")

    base = f"http://{config.GUI_BIND_HOST}:{config.GUI_PORT}"
    print("\n" + "=" * 60)
    print(f"Console available at: {base}")
    print("=" * 60)
    print("\nEndpoints:")
    print(f"  • Login: {base}/login")
    print(f"  • Session: {base}/session")
    print(f"  • Overview: {base}/overview")
    print(f"  • Instances: {base}/instances")
    print(f"  • Volumes: {base}/volumes")
    print(f"  • Networks: {base}/networks")
    print(f"  • Security Groups: {base}/security-groups")

    print("\nPress Ctrl+C to stop\n")

    try:
        app.run(
            host=config.GUI_BIND_HOST,
            port=config.GUI_PORT,
            debug=config.GUI_DEBUG,
            use_reloader=False  # Avoid a second process holding its own cache
        )
    except KeyboardInterrupt:
        print("\n\nShutting down console gateway...")
        # Cache pollers and the HTTP session are closed via atexit in service.py
        print("✓ Console gateway stopped")
        return 0
    except Exception as e:
        print(f"\n\nError running console gateway: {e}")
        import traceback
        traceback.print_exc()
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
