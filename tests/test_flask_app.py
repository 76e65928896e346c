from dsync.config import AppConfig
from dsync.core.scim_attributes import AttributeExtractor
from dsync.flask_app import create_app


def test_create_app_wires_config_and_extractor(flask_app, app_config):
    assert flask_app.config["APP_CONFIG"] is app_config
    assert flask_app.config["MAX_CONTENT_LENGTH"] == 65536

    extractor = flask_app.extensions["dsync_extractor"]
    assert isinstance(extractor, AttributeExtractor)
    assert extractor.directory_ids_to_log == {"dir_verbose"}


def test_blueprints_registered(flask_app):
    assert {"health", "dsync"} <= set(flask_app.blueprints)
    rules = {rule.rule for rule in flask_app.url_map.iter_rules()}
    assert "/api/dsync/<directory_id>/events" in rules


def test_create_app_loads_settings_from_env(monkeypatch):
    monkeypatch.setenv("DIRECTORY_IDS_TO_LOG", "dir_env")
    monkeypatch.setenv("DSYNC_MAX_PAYLOAD_BYTES", "1024")
    monkeypatch.delenv("DSYNC_WEBHOOK_TOKEN", raising=False)
    monkeypatch.setattr("dsync.config.settings.Path", lambda target: _Missing())

    app = create_app()
    assert app.config["APP_CONFIG"].directory_ids_to_log == {"dir_env"}
    assert app.config["MAX_CONTENT_LENGTH"] == 1024


def test_startup_warns_when_auth_disabled(capsys):
    create_app(AppConfig())
    assert "Webhook authentication disabled" in capsys.readouterr().out

    create_app(AppConfig(webhook_token="t"))
    assert "Webhook authentication disabled" not in capsys.readouterr().out


class _Missing:
    """Path stand-in for an empty /run/secrets."""

    def __truediv__(self, other):
        return self

    def exists(self):
        return False

    def is_file(self):
        return False
