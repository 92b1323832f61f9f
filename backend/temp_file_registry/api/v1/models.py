"""
API Models for request parsing and Swagger documentation
"""

from flask_restx import Model, fields, reqparse
from werkzeug.datastructures import FileStorage

# =============================================================================
# Request Parsers
# =============================================================================

upload_parser = reqparse.RequestParser()
upload_parser.add_argument(
    "file", location="files", type=FileStorage, required=True, help="File to store"
)
upload_parser.add_argument(
    "key", location="form", type=str, default="", help="Key the file is stored under"
)
upload_parser.add_argument(
    "expiryTimeMinutes",
    location="form",
    type=str,
    required=False,
    help="Expiry in minutes; non-integer values fall back to the server default",
)

download_parser = reqparse.RequestParser()
download_parser.add_argument(
    "key", location="args", type=str, required=True, help="Key of the stored file"
)
download_parser.add_argument(
    "delete",
    location="args",
    type=str,
    required=False,
    help='"true" deletes the file once the response has been sent',
)

# =============================================================================
# Response Models
# =============================================================================

entry_model = Model(
    "Entry",
    {
        "key": fields.String(description="Key the file is stored under"),
        "expiryTimeMinutes": fields.String(
            description="Expiry value as sent by the client"
        ),
        "expiresAt": fields.String(description="Expiry timestamp (ISO 8601)"),
        "createdAt": fields.String(description="Upload timestamp (ISO 8601)"),
        "contentType": fields.String(description="Declared content type of the file"),
        "fileName": fields.String(description="Declared file name"),
        "size": fields.Integer(description="Stored size in bytes"),
    },
)

upload_response = Model(
    "UploadResponse",
    {
        "message": fields.String(description="Description of the stored entry"),
        "entry": fields.Nested(entry_model, description="Stored entry metadata"),
    },
)

error_response = Model(
    "ErrorResponse",
    {
        "message": fields.String(description="Error message"),
        "error": fields.String(description="Error category", allow_null=True),
    },
)
