"""JSON envelope and error handling shared by every ``/api`` endpoint.

Every JSON response has the same shape::

    {"success": true,  "data": ..., "message": "..."}
    {"success": false, "message": "...", "errors": [...], "code": "..."}
"""

import logging

from flask import jsonify, render_template, request
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from extensions import db
from i18n import gettext as _

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Raised by routes and services; rendered as an error envelope."""

    def __init__(self, status: int, message: str, errors=None, code: str | None = None):
        super().__init__(message)
        self.status = status
        self.message = message
        self.errors = errors
        self.code = code


def success_response(data=None, message: str | None = None, status: int = 200):
    body = {"success": True, "data": data}
    if message:
        body["message"] = message
    return jsonify(body), status


def error_response(message: str, status: int = 400, errors=None, code: str | None = None):
    body = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    if code:
        body["code"] = code
    return jsonify(body), status


def validation_errors(exc: ValidationError) -> list[dict]:
    """Flatten pydantic errors to ``[{field, message}]``."""
    out = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()) if part != "__root__")
        out.append({"field": field or None, "message": err.get("msg", "")})
    return out


def wants_json() -> bool:
    if request.path.startswith("/api/"):
        return True
    accept = request.accept_mimetypes
    return accept.accept_json and not accept.accept_html


def register_error_handlers(app) -> None:
    @app.errorhandler(ApiError)
    def handle_api_error(exc: ApiError):
        if exc.status == 404 and not wants_json():
            return render_template("errors/404.html"), 404
        return error_response(exc.message, exc.status, exc.errors, exc.code)

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        return error_response(_("validation_failed"), 400, validation_errors(exc), "validation_error")

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        if not wants_json():
            if exc.code == 404:
                return render_template("errors/404.html"), 404
            return exc
        return error_response(exc.description or exc.name, exc.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        db.session.rollback()
        if wants_json():
            return error_response(_("server_error"), 500)
        return render_template("errors/500.html"), 500
