"""
Application Factory

Creates and configures the Flask application with all dependencies.
This factory pattern improves testability by allowing dependency injection
and configuration overrides.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from flask import Flask, jsonify
from flask_cors import CORS

from temp_file_registry.application.event_publisher import EventPublisher
from temp_file_registry.application.registry_service import RegistryService, utc_now
from temp_file_registry.config.settings import RegistryConfig
from temp_file_registry.domain.file_registry import FileRegistry
from temp_file_registry.infrastructure.event_handlers import LoggingEventHandler
from temp_file_registry.tasks.reaper import Reaper

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[RegistryConfig] = None,
    registry: Optional[FileRegistry] = None,
    clock: Callable[[], datetime] = utc_now,
) -> Flask:
    """
    Create and configure Flask application.

    Args:
        config: Registry configuration, loaded from the environment if None
        registry: Registry instance to serve, a fresh one if None
        clock: Callable returning the current UTC time

    Returns:
        Configured Flask application
    """
    if config is None:
        config = RegistryConfig.from_env()

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = config.max_content_length
    app.registry_config = config

    # Configure CORS
    CORS(
        app,
        resources={
            r"/*": {
                "origins": "*",
                "methods": ["GET", "POST", "OPTIONS"],
                "allow_headers": ["Content-Type"],
                "expose_headers": ["Content-Type", "Content-Disposition"],
                "max_age": 3600,
            }
        },
        send_wildcard=True,
    )

    _initialize_services(app, config, registry or FileRegistry(), clock)
    _register_blueprints(app)
    _register_health_endpoint(app)

    if config.reaper_enabled:
        app.reaper.start()

    return app


def _initialize_services(
    app: Flask,
    config: RegistryConfig,
    registry: FileRegistry,
    clock: Callable[[], datetime],
) -> None:
    """
    Build the registry, services and reaper and attach them to the app.

    Args:
        app: Flask application
        config: Registry configuration
        registry: Registry instance shared by handlers and reaper
        clock: Callable returning the current UTC time
    """
    event_publisher = EventPublisher()
    LoggingEventHandler(logging.getLogger("temp_file_registry.events")).subscribe_to(
        event_publisher
    )

    app.registry = registry
    app.event_publisher = event_publisher
    app.registry_service = RegistryService(
        registry,
        default_expiration_minutes=config.default_expiration_minutes,
        event_publisher=event_publisher,
        clock=clock,
    )
    app.reaper = Reaper(
        registry,
        interval_seconds=config.sweep_interval_seconds,
        event_publisher=event_publisher,
        clock=clock,
    )

    logger.debug(
        f"Services initialized (default expiration={config.default_expiration_minutes}min, "
        f"max upload={config.max_file_size_mb}MB)"
    )


def _register_blueprints(app: Flask) -> None:
    """
    Register API blueprints.

    Args:
        app: Flask application
    """
    from temp_file_registry.api.v1 import URL_PATH_PREFIX, create_api_blueprint

    app.register_blueprint(create_api_blueprint())

    logger.info(f"API registered at {URL_PATH_PREFIX} with Swagger UI at {URL_PATH_PREFIX}/docs")


def _get_health_status(app: Flask) -> tuple[dict, int]:
    """
    Get health status of the registry and the reaper.

    Args:
        app: Flask application instance

    Returns:
        Tuple of (health_status_dict, http_status_code)
    """
    reaper_running = app.reaper.running
    health_status = {
        "status": "ok" if reaper_running else "degraded",
        "message": "registry ready",
        "entries": len(app.registry),
        "reaper": "running" if reaper_running else "stopped",
    }
    status_code = 200 if reaper_running else 503
    return health_status, status_code


def _register_health_endpoint(app: Flask) -> None:
    """
    Register health check endpoint.

    Args:
        app: Flask application
    """

    @app.route("/health", methods=["GET"])
    def health():
        """
        Health check endpoint.
        Returns the live entry count and whether the reaper is running.
        """
        health_status, status_code = _get_health_status(app)
        return jsonify(health_status), status_code
