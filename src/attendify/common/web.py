from __future__ import annotations

from functools import wraps
from typing import Any

from flask import Flask, current_app, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    IncompleteAttendanceError,
    MissingFieldsError,
    RemoteWriteError,
    ValidationError,
)
from ..core.enums import Role
from ..users.session import AuthSession


def payload() -> dict:
    """Request body as a dict: JSON first, form data otherwise."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def ok(**data: Any):
    return jsonify({"success": True, **data})


def status_for(error: DomainError) -> int:
    if isinstance(error, AuthenticationError):
        return 401
    if isinstance(error, AuthorizationError):
        return 403
    if isinstance(error, RemoteWriteError):
        return 502
    return 400


def error_response(error: DomainError, **extra: Any):
    body: dict[str, Any] = {"success": False, "message": str(error)}
    if isinstance(error, MissingFieldsError):
        body["fields"] = list(error.fields)
    elif isinstance(error, IncompleteAttendanceError):
        body["pending"] = list(error.pending)
    elif isinstance(error, ConflictError) and error.conflicting is not None:
        body["conflicting"] = error.conflicting.to_dict()
    body.update(extra)
    return jsonify(body), status_for(error)


def login_required(view):
    """Load the AuthSession for this request and hand its user to the view."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        auth = AuthSession.load(session)
        if not auth.is_authenticated:
            return error_response(AuthenticationError("Please log in to continue"))
        return view(auth.require_user(), *args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    def decorator(view):
        @wraps(view)
        def wrapper(user, *args, **kwargs):
            if user.role not in roles:
                return error_response(AuthorizationError("You do not have permission to access this page"))
            return view(user, *args, **kwargs)

        return wrapper

    return decorator


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        if isinstance(e, RemoteWriteError):
            current_app.logger.error("store write failed: %s", e)
        elif isinstance(e, ValidationError):
            current_app.logger.debug("rejected %s %s: %s", request.method, request.path, e)
        return error_response(e)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return jsonify({"success": False, "message": e.description}), e.code
        current_app.logger.exception("unhandled error on %s %s", request.method, request.path)
        message = f"Internal server error: {e}" if current_app.config.get("DEBUG") else "Internal server error"
        return jsonify({"success": False, "message": message}), 500
