"""Flask application factory and bootstrap.

This module provides the create_app() factory function for initializing
the Flask application with all blueprints and configuration.
"""
from __future__ import annotations
import logging
from typing import Optional

from flask import Flask

from dsync.config import AppConfig, load_settings
from dsync.core.reporting import LoggingReporter
from dsync.core.scim_attributes import AttributeExtractor


# ─────────────────────────────────────────────────────────────────────────────
# Application Factory
# ─────────────────────────────────────────────────────────────────────────────
def create_app(cfg: Optional[AppConfig] = None) -> Flask:
    """Create and configure Flask application."""
    cfg = cfg or load_settings()

    logging.basicConfig(
        level=getattr(logging, cfg.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = Flask(__name__)
    app.config["APP_CONFIG"] = cfg
    app.config["MAX_CONTENT_LENGTH"] = cfg.max_payload_bytes

    # One shared extractor: it only holds read-only configuration
    app.extensions["dsync_extractor"] = AttributeExtractor(
        reporter=LoggingReporter(),
        directory_ids_to_log=cfg.directory_ids_to_log,
    )

    from dsync.api import dsync, errors, health

    app.register_blueprint(health.bp)
    app.register_blueprint(dsync.bp)

    errors.register_error_handlers(app)

    print("[flask_app] Directory sync events accepted at /api/dsync/<directory_id>/events")
    if not cfg.webhook_auth_enabled:
        print("[flask_app] WARNING: Webhook authentication disabled")

    return app
