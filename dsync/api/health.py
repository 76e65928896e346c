"""Liveness and readiness probes."""
from flask import Blueprint, current_app

bp = Blueprint("health", __name__)

TEXT_PLAIN = {"Content-Type": "text/plain"}


@bp.route("/health")
def health_check():
    """Process is up."""
    return ("ok", 200, TEXT_PLAIN)


@bp.route("/ready")
def readiness_check():
    """Ready once settings are loaded and the extractor is wired."""
    if current_app.config.get("APP_CONFIG") is None or current_app.extensions.get("dsync_extractor") is None:
        return ("not ready", 503, TEXT_PLAIN)
    return ("ready", 200, TEXT_PLAIN)
