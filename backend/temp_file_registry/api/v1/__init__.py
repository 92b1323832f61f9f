"""
API v1 - Temp File Registry REST API

This module contains the versioned API endpoints with OpenAPI/Swagger documentation.
"""

import os

from flask import Blueprint
from flask_restx import Api

from .namespaces import files_ns

# Get API version from environment
API_VERSION = os.getenv("API_VERSION", "v1")
URL_PATH_PREFIX = f"/temp-file-registry/api/{API_VERSION}"


def create_api_blueprint() -> Blueprint:
    """
    Build the API v1 blueprint.

    A fresh blueprint and Api are created per application so several apps
    (one per test) can be built in the same process.

    Returns:
        Blueprint serving the API under URL_PATH_PREFIX
    """
    api_v1_bp = Blueprint("api_v1", __name__, url_prefix=URL_PATH_PREFIX)

    # Initialize Flask-RESTX API with Swagger documentation
    api = Api(
        api_v1_bp,
        version="1.0",
        title="Temp File Registry API",
        description="Temporary in-memory file registry with expiring entries",
        doc="/docs",  # Swagger UI will be available at <prefix>/docs
    )

    # Routes live directly under the prefix
    api.add_namespace(files_ns)
    return api_v1_bp
