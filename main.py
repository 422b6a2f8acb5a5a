"""
Main entrypoint: AIScan FastAPI server.

Env: API_HOST, API_PORT, AISCAN_MAX_WORKERS, AISCAN_SETTINGS_PATH, LOG_LEVEL.

Equivalent: uvicorn backend_aiscan.api_server.app:app --host 0.0.0.0 --port 8000
"""

import os

# Configure structured JSON logging before other imports that may log
from backend_aiscan.aiscan_logging import get_logger
from backend_aiscan.config.env import get_api_host, get_api_port, get_max_workers, get_settings_path

logger = get_logger("main")


def main() -> None:
    """Run the FastAPI server in the main thread."""
    api_host = get_api_host()
    api_port = get_api_port()

    logger.info(
        "main_config_loaded",
        max_workers=get_max_workers(),
        settings_path=str(get_settings_path()),
    )

    from backend_aiscan.api_server.app import app
    import uvicorn

    logger.info("main_server_starting", host=api_host, port=api_port)
    uvicorn.run(app, host=api_host, port=api_port, log_level=os.getenv("LOG_LEVEL", "info").lower())


if __name__ == "__main__":
    main()
