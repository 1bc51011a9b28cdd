"""Run the HTTP service: ``python -m beacon``.

Listens on BEACON_HOST/BEACON_PORT (default 127.0.0.1:8787).
"""

import os

import structlog
import uvicorn

from beacon.api import create_app
from beacon.config import Settings
from beacon.logging_config import configure_logging


def main() -> None:
    configure_logging(use_json=os.environ.get("BEACON_LOG_FORMAT", "json") != "console")
    settings = Settings.from_env()
    app = create_app(settings=settings)

    host = os.environ.get("BEACON_HOST", "127.0.0.1")
    port = int(os.environ.get("BEACON_PORT", "8787"))
    structlog.get_logger().info(
        "service_starting", host=host, port=port, provider=settings.provider
    )
    uvicorn.run(app, host=host, port=port, log_config=None)


if __name__ == "__main__":
    main()
