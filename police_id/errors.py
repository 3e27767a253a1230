"""
Error types raised by the member services and their JSON rendering.
"""

from flask import jsonify, request
from werkzeug.exceptions import HTTPException


class PoliceIdError(Exception):
    """Base error; carries the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class InvalidArgument(PoliceIdError):
    """Missing or malformed input, e.g. a required member field or search query."""

    status_code = 400


class NotFound(PoliceIdError):
    """Lookup or scan target does not exist."""

    status_code = 404


class StoreError(PoliceIdError):
    """Underlying database operation failed. The driver message is passed through."""

    status_code = 500


def register_error_handlers(app):
    @app.errorhandler(PoliceIdError)
    def handle_police_id_error(error):
        if error.status_code >= 500:
            app.logger.error(f"{request.method} {request.path} failed: {error.message}")
        return jsonify({'error': error.message}), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        # HTML pages keep werkzeug's default rendering
        if not request.path.startswith('/api/'):
            return error
        return jsonify({'error': error.description}), error.code
