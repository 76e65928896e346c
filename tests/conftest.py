"""Pytest shared fixtures."""
import pathlib
import sys

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from dsync.config import AppConfig
from dsync.flask_app import create_app

CORE_SCHEMA = "urn:ietf:params:scim:schemas:core:2.0:User"


class RecordingReporter:
    """Reporter fake keeping every diagnostic as (severity, tag, message)."""

    def __init__(self):
        self.records = []

    def warn(self, tag, message):
        self.records.append(("warn", tag, message))

    def error(self, tag, message):
        self.records.append(("error", tag, message))

    def messages(self, severity):
        return [message for sev, _, message in self.records if sev == severity]


@pytest.fixture()
def reporter():
    return RecordingReporter()


@pytest.fixture()
def okta_payload():
    """User payload as pushed by Okta with two custom namespaces."""
    return {
        "event": "user.created",
        "directory_id": "dir_okta",
        "tenant": "acme",
        "product": "crm",
        "data": {
            "raw": {
                "schemas": [CORE_SCHEMA, "segment", "territory"],
                "userName": "member@samldemo.com",
                "name": {"givenName": "Member", "familyName": "Demo"},
                "emails": [{"primary": True, "value": "member@samldemo.com"}],
                "displayName": "Member SAML Demo",
                "territory": {"territory": "NAM"},
                "segment": {"segment": "SMB"},
                "externalId": "00ukzk1wrsKZqofit5d7",
                "groups": [],
                "active": True,
                "id": "b36ba9fa-783b-44e6-a770-a652cb9d71ba",
            }
        },
    }


# ─────────────────────────────────────────────────────────────────────────────
# Flask Test Client
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture()
def app_config():
    return AppConfig(directory_ids_to_log=frozenset({"dir_verbose"}))


@pytest.fixture()
def flask_app(app_config):
    flask_app = create_app(app_config)
    flask_app.config.update(TESTING=True)
    return flask_app


@pytest.fixture()
def client(flask_app):
    with flask_app.test_client() as client:
        yield client
