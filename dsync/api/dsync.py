"""Directory sync webhook endpoint.

Receives provisioning events pushed by the directory sync provider and
returns the custom attributes found in the SCIM payload.

Security:
    - Optional shared Bearer token (DSYNC_WEBHOOK_TOKEN), compared in constant time
    - Request body capped by MAX_CONTENT_LENGTH (413 above the limit)
"""

from __future__ import annotations
import hashlib
import hmac
import logging
from flask import Blueprint, abort, current_app, jsonify, request

from dsync.core.events import DirectorySyncEvent, EventError

bp = Blueprint("dsync", __name__, url_prefix="/api/dsync")

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Authentication Helpers
# ─────────────────────────────────────────────────────────────────────────────

def _log_auth_attempt(token: str, success: bool) -> None:
    """Log authentication attempt with a truncated token hash, never the token."""
    token_hash = hashlib.sha256(token.encode()).hexdigest()[:12]
    correlation_id = request.headers.get("X-Correlation-Id", "none")
    client_ip = request.headers.get("X-Forwarded-For", request.remote_addr)

    status = "SUCCESS" if success else "FAILED"
    logger.info(
        f"{status} dsync auth | token_hash={token_hash} | path={request.path} | "
        f"correlation_id={correlation_id} | client_ip={client_ip}"
    )


@bp.before_request
def validate_request():
    """Check the Bearer token when one is configured."""
    cfg = current_app.config.get("APP_CONFIG")
    if cfg is None or not cfg.webhook_auth_enabled:
        return None

    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        logger.warning("dsync request missing Bearer Authorization header")
        abort(401)

    token = auth_header[7:]
    valid = bool(token) and hmac.compare_digest(token, cfg.webhook_token)
    _log_auth_attempt(token, valid)
    if not valid:
        abort(401)
    return None


# ─────────────────────────────────────────────────────────────────────────────
# Routes
# ─────────────────────────────────────────────────────────────────────────────

@bp.route("/<directory_id>/events", methods=["POST"])
def receive_event(directory_id: str):
    """Extract custom attributes from one directory sync event.

    Unsupported event kinds are not an error: the response simply carries
    an empty ``attributes`` object.
    """
    payload = request.get_json(silent=True)
    if payload is None:
        abort(400, description="Request body must be a JSON object")

    try:
        event = DirectorySyncEvent.from_dict(payload)
    except EventError as e:
        logger.warning(f"Rejected dsync event for directory {directory_id}: {e}")
        abort(400, description=str(e))

    extractor = current_app.extensions["dsync_extractor"]
    attributes = extractor.extract(event, directory_id)

    logger.info(
        f"dsync event processed | directory_id={directory_id} | event={event.event} | "
        f"attributes={len(attributes)}"
    )
    return jsonify({
        "directory_id": directory_id,
        "event": event.event,
        "attributes": attributes,
    }), 200
