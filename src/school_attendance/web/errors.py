from __future__ import annotations

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    TransactionFailure,
    ValidationError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    """Map the domain exception hierarchy to stable JSON responses."""

    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return jsonify({"message": str(e)}), 400

    @app.errorhandler(ConflictError)
    def _conflict(e: ConflictError):
        return jsonify({"message": str(e)}), 400

    @app.errorhandler(AuthenticationError)
    def _authentication(e: AuthenticationError):
        return jsonify({"message": str(e)}), 401

    @app.errorhandler(AuthorizationError)
    def _authorization(e: AuthorizationError):
        return jsonify({"message": "Access denied"}), 403

    # ScopeViolation is a NotFoundError and lands here too
    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return jsonify({"error": str(e)}), 404

    @app.errorhandler(TransactionFailure)
    def _transaction(e: TransactionFailure):
        logger.error("Transaction failure: %s", e)
        return jsonify({"error": "Server error", "details": str(e)}), 500

    @app.errorhandler(DomainError)
    def _domain(e: DomainError):
        return jsonify({"message": str(e)}), 400

    @app.errorhandler(429)
    def _rate_limited(e):
        return jsonify({"message": "too many requests, please try after 15 minutes"}), 429

    @app.errorhandler(HTTPException)
    def _http(e: HTTPException):
        return jsonify({"message": e.description}), e.code

    @app.errorhandler(Exception)
    def _unhandled(e: Exception):
        logger.exception("Unhandled error")
        return jsonify({"message": "Internal server error"}), 500
