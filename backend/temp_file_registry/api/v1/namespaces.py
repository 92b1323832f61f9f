"""
API Namespaces - Organized endpoint groups
"""

import unicodedata
from functools import partial
from urllib.parse import quote

from flask import Response, current_app, request
from flask_restx import Namespace, Resource
from werkzeug.exceptions import MethodNotAllowed, RequestEntityTooLarge

from temp_file_registry.api.v1.models import (
    download_parser,
    entry_model,
    error_response,
    upload_parser,
    upload_response,
)
from temp_file_registry.domain.errors import (
    EntryNotFoundError,
    ErrorCategory,
    create_error_response,
)

DEFAULT_CONTENT_TYPE = "application/octet-stream"
CHUNK_SIZE = 64 * 1024

# =============================================================================
# Files Namespace - Upload and download operations
# =============================================================================

files_ns = Namespace("files", description="Temporary file operations", path="/")

for _model in (entry_model, upload_response, error_response):
    files_ns.add_model(_model.name, _model)


@files_ns.errorhandler(MethodNotAllowed)
def handle_method_not_allowed(error):
    """Render wrong-method requests as structured 405 responses."""
    allowed = [
        method for method in (error.valid_methods or []) if method not in ("HEAD", "OPTIONS")
    ]
    return create_error_response(
        ErrorCategory.METHOD_NOT_ALLOWED,
        f"Method Not Allowed. (Only {', '.join(allowed)} is allowed)",
        status_code=405,
    )


@files_ns.route("/upload")
class Upload(Resource):
    """Store a file under a key"""

    @files_ns.doc("upload_file")
    @files_ns.expect(upload_parser)
    @files_ns.response(200, "Stored", upload_response)
    @files_ns.response(400, "Bad Request", error_response)
    @files_ns.response(405, "Method Not Allowed", error_response)
    def post(self):
        """
        Upload a file

        Stores the multipart ``file`` part under ``key``, replacing any
        previous file with the same key. ``expiryTimeMinutes`` overrides the
        server default expiration when it is an integer.
        """
        current_app.logger.debug(f"{request.remote_addr} {request.full_path}")

        if request.mimetype != "multipart/form-data":
            return create_error_response(
                ErrorCategory.INVALID_REQUEST,
                "request Content-Type isn't multipart/form-data",
                status_code=400,
            )

        try:
            form = request.form
            files = request.files
        except RequestEntityTooLarge as e:
            return create_error_response(
                ErrorCategory.FILE_TOO_LARGE, e.description, status_code=400
            )

        file = files.get("file")
        if file is None:
            return create_error_response(
                ErrorCategory.INVALID_REQUEST,
                "multipart form is malformed or has no 'file' part",
                status_code=400,
            )

        try:
            content = file.read()
        except RequestEntityTooLarge as e:
            return create_error_response(
                ErrorCategory.FILE_TOO_LARGE, e.description, status_code=400
            )
        finally:
            file.close()

        service = current_app.registry_service
        try:
            entry = service.upload(
                key=form.get("key", ""),
                content=content,
                content_type=file.content_type,
                filename=file.filename,
                expiry_time_minutes=form.get("expiryTimeMinutes"),
            )
        except Exception as e:
            current_app.logger.exception(f"Unexpected error in /upload: {str(e)}")
            return create_error_response(
                ErrorCategory.SYSTEM_ERROR,
                f"Unexpected error: {str(e)}",
                status_code=500,
            )

        body = {"message": entry.describe(), "entry": entry.to_dict()}
        current_app.logger.debug(body["message"])
        return body, 200


@files_ns.route("/download")
class Download(Resource):
    """Serve a stored file by key"""

    @files_ns.doc("download_file")
    @files_ns.expect(download_parser)
    @files_ns.response(200, "File content")
    @files_ns.response(404, "File Not Found", error_response)
    @files_ns.response(405, "Method Not Allowed", error_response)
    def get(self):
        """
        Download a file

        Returns the bytes stored under ``key`` as an attachment. With
        ``delete=true`` the file is removed once the response has been sent.
        """
        current_app.logger.debug(f"{request.remote_addr} {request.full_path}")

        key = request.args.get("key", "")
        delete_requested = request.args.get("delete") == "true"
        service = current_app.registry_service

        try:
            entry = service.fetch(key)
        except EntryNotFoundError as e:
            current_app.logger.debug(str(e))
            return create_error_response(
                ErrorCategory.FILE_NOT_FOUND, "file not found.", status_code=404
            )

        current_app.logger.debug(entry.describe())

        # HEAD sends no body, so it never consumes the entry
        on_finish = None
        if delete_requested and request.method == "GET":
            on_finish = partial(service.discard, key, entry)

        response = Response(
            _stream_entry(entry, on_finish),
            content_type=entry.content_type or DEFAULT_CONTENT_TYPE,
        )
        response.headers["Content-Length"] = str(entry.size)
        response.headers["Cache-Control"] = "no-store"
        _set_attachment(response, entry.download_name())
        service.record_download(entry, delete_requested)
        return response


def _stream_entry(entry, on_finish=None):
    """
    Yield the entry content in chunks.

    ``on_finish`` runs once the last chunk was handed to the server or the
    iterator was closed mid-stream (client gone). A response that is closed
    before streaming starts never calls it.
    """
    stream = entry.open()
    try:
        chunk = stream.read(CHUNK_SIZE)
        while chunk:
            yield chunk
            chunk = stream.read(CHUNK_SIZE)
    finally:
        stream.close()
        if on_finish is not None:
            on_finish()


def _set_attachment(response, download_name):
    """Set Content-Disposition, with an RFC 5987 name for non-ASCII file names."""
    try:
        download_name.encode("ascii")
    except UnicodeEncodeError:
        simple = unicodedata.normalize("NFKD", download_name)
        simple = simple.encode("ascii", "ignore").decode("ascii")
        names = {
            "filename": simple,
            "filename*": f"UTF-8''{quote(download_name, safe='')}",
        }
    else:
        names = {"filename": download_name}
    response.headers.set("Content-Disposition", "attachment", **names)
