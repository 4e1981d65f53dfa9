"""Flask application factory for the relay."""

from typing import Optional

from flask import Flask
from flask.logging import default_handler
from flask_cors import CORS

import config
from services.factory import ServiceFactory
from utils.logger import attach_handlers, get_logger
from web.routes import relay_bp

logger = get_logger()

def create_app(settings: Optional[config.Settings] = None, service_factory: Optional[ServiceFactory] = None) -> Flask:
    """Creates the Flask app.

    Args:
        settings: Immutable settings; read from the environment when omitted.
        service_factory: Source of service clients; defaults to one built from ``settings``.

    Returns:
        The configured Flask application.
    """
    settings = settings or config.Settings.from_env()
    app = Flask(__name__)
    app.logger.removeHandler(default_handler)
    attach_handlers(app.logger)
    app.config['SETTINGS'] = settings
    app.config['SERVICE_FACTORY'] = service_factory or ServiceFactory(settings)
    CORS(app, origins=settings.cors_origins)
    app.register_blueprint(relay_bp)
    logger.info("Relay app created.")
    return app
