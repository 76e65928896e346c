"""Settings loader with environment variable and Docker secrets integration."""
from __future__ import annotations
import os
from dataclasses import dataclass, field
from pathlib import Path

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_MAX_PAYLOAD_BYTES = 65536  # 64 KB


def _load_secret_from_file(secret_name: str, env_var: str | None = None) -> str | None:
    """
    Load secret from /run/secrets (Docker secrets pattern).

    Priority:
    1. /run/secrets/{secret_name} (Docker secrets mount)
    2. Environment variable (fallback)

    Returns:
        Secret value or None if not found
    """
    secret_file = Path("/run/secrets") / secret_name

    if secret_file.exists() and secret_file.is_file():
        try:
            secret_value = secret_file.read_text().strip()
            if secret_value:
                print(f"[settings] ✓ Loaded {secret_name} from /run/secrets")
                return secret_value
        except OSError as e:
            print(f"[settings] ✗ Failed to read /run/secrets/{secret_name}: {e}")

    if env_var:
        secret_value = os.getenv(env_var)
        if secret_value:
            print(f"[settings] ✓ Loaded {env_var} from environment (fallback)")
            return secret_value

    return None


def parse_id_list(raw: str | None) -> frozenset[str]:
    """Split a comma separated list of directory ids, dropping blanks."""
    if not raw:
        return frozenset()
    return frozenset(item.strip() for item in raw.split(",") if item.strip())


def parse_log_level(raw: str | None, file=None) -> str:
    """Normalize a level name. Unknown names fall back to INFO with a warning printed to ``file``."""
    level = (raw or "INFO").strip().upper()
    if level not in LOG_LEVELS:
        print(f"[settings] WARNING: Unknown LOG_LEVEL={raw!r}, falling back to INFO", file=file)
        return "INFO"
    return level


def _parse_positive_int(var_name: str, default: int) -> int:
    raw = os.environ.get(var_name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise RuntimeError(f"Environment variable {var_name} must be an integer, got {raw!r}.")
    if value <= 0:
        raise RuntimeError(f"Environment variable {var_name} must be positive, got {value}.")
    return value


@dataclass
class AppConfig:
    """Application configuration container."""
    # Directories whose extracted attributes are dumped to stdout
    directory_ids_to_log: frozenset[str] = field(default_factory=frozenset)

    # Shared secret expected in "Authorization: Bearer <token>" (empty disables the check)
    webhook_token: str = ""

    log_level: str = "INFO"
    max_payload_bytes: int = DEFAULT_MAX_PAYLOAD_BYTES

    @property
    def webhook_auth_enabled(self) -> bool:
        return bool(self.webhook_token)

    def should_log_directory(self, directory_id: str) -> bool:
        """Check whether verbose attribute dumps are enabled for a directory."""
        return directory_id in self.directory_ids_to_log


def load_settings() -> AppConfig:
    """Load application settings from environment and /run/secrets."""
    directory_ids_to_log = parse_id_list(os.environ.get("DIRECTORY_IDS_TO_LOG"))
    webhook_token = _load_secret_from_file("dsync_webhook_token", "DSYNC_WEBHOOK_TOKEN") or ""
    log_level = parse_log_level(os.environ.get("LOG_LEVEL"))
    max_payload_bytes = _parse_positive_int("DSYNC_MAX_PAYLOAD_BYTES", DEFAULT_MAX_PAYLOAD_BYTES)

    auth_label = "bearer" if webhook_token else "disabled"
    print(
        f"[settings] log_level={log_level}; webhook_auth={auth_label}; "
        f"verbose_directories={len(directory_ids_to_log)}"
    )
    if not webhook_token:
        print("[settings] WARNING: DSYNC_WEBHOOK_TOKEN not set, event endpoint accepts unauthenticated requests.")

    return AppConfig(
        directory_ids_to_log=directory_ids_to_log,
        webhook_token=webhook_token,
        log_level=log_level,
        max_payload_bytes=max_payload_bytes,
    )
