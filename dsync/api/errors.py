"""Error handlers for the application.

Every error is rendered as ``{"error": <reason>, "message": <detail>}``; the
service has no HTML pages.
"""
from flask import jsonify
from werkzeug.exceptions import HTTPException


def _error(status: int, reason: str, message: str):
    return jsonify({"error": reason, "message": message}), status


def register_error_handlers(app):
    """Register error handlers with the Flask app."""

    @app.errorhandler(400)
    def bad_request(error):
        return _error(400, "Bad Request", _description(error, "Invalid request"))

    @app.errorhandler(401)
    def unauthorized(error):
        return _error(401, "Unauthorized", "Authentication required")

    @app.errorhandler(404)
    def not_found(error):
        return _error(404, "Not Found", "Resource not found")

    @app.errorhandler(405)
    def method_not_allowed(error):
        return _error(405, "Method Not Allowed", "Method not allowed for this resource")

    @app.errorhandler(413)
    def payload_too_large(error):
        limit = app.config.get("MAX_CONTENT_LENGTH")
        message = "Request payload exceeds maximum allowed size"
        if limit:
            message = f"{message} ({limit} bytes)"
        return _error(413, "Payload Too Large", message)

    @app.errorhandler(500)
    def internal_error(error):
        # ALWAYS log the full error, never return it to the client
        app.logger.error(f"Internal error: {error}", exc_info=True)
        return _error(500, "Internal Server Error", "An unexpected error occurred")

    @app.errorhandler(Exception)
    def handle_exception(error):
        """Handle uncaught exceptions."""
        # Pass through HTTP errors
        if isinstance(error, HTTPException):
            return error

        app.logger.error(f"Unhandled exception: {error}", exc_info=True)
        return _error(500, "Internal Server Error", "An unexpected error occurred")


def _description(error, default: str) -> str:
    description = getattr(error, "description", None)
    return str(description) if description else default
