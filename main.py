"""Entry point for the Classroom Grading Relay server."""

import sys

from dotenv import load_dotenv

# Environment must be populated before config reads it
load_dotenv()

import config
from utils.logger import setup_logger
from web.app import create_app

logger = setup_logger()


def main():
    """Reads settings once and serves the relay's HTTP endpoints."""
    try:
        settings = config.Settings.from_env()
    except ValueError as e:
        logger.critical(f"Invalid configuration: {e}")
        sys.exit(1)

    if not settings.gemini_api_key:
        logger.warning("GEMINI_API_KEY not set. /new-assignment requests will fail until it is configured.")

    app = create_app(settings)
    logger.info(f"Server is running on port {settings.port}")
    app.run(host="0.0.0.0", port=settings.port, debug=config.DEBUG)


if __name__ == "__main__":
    main()
