"""Local provider configuration stored as a flat key-value JSON file."""
import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path.home() / ".studygenie"
DEFAULT_CONFIG_PATH = str(DEFAULT_DATA_DIR / "config.json")

PROVIDER_KEYS = (
    "api_key",
    "auth_domain",
    "project_id",
    "storage_bucket",
    "messaging_sender_id",
    "app_id",
)


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> dict:
    path = Path(config_path)
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: expected a JSON object", path)
        return {}
    return data


def save_config(config_path: str, config: dict) -> None:
    path = Path(config_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config, indent=2), encoding="utf-8")


def get_setting(config_path: str, key: str, default: str = None) -> str | None:
    return load_config(config_path).get(key, default)


def set_setting(config_path: str, key: str, value: str) -> None:
    config = load_config(config_path)
    config[key] = value
    save_config(config_path, config)


def mask_secret(value: str, visible: int = 4) -> str:
    if not value:
        return ""
    if len(value) <= visible:
        return "*" * len(value)
    return "*" * (len(value) - visible) + value[-visible:]
