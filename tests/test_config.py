# tests/test_config.py
from studygenie.config import (
    PROVIDER_KEYS, get_setting, load_config, mask_secret, save_config, set_setting,
)


def test_load_missing_config(config_path):
    assert load_config(config_path) == {}


def test_round_trip(config_path):
    config = {key: f"value-{key}" for key in PROVIDER_KEYS}
    save_config(config_path, config)
    assert load_config(config_path) == config


def test_get_and_set_setting(config_path):
    assert get_setting(config_path, "project_id") is None
    assert get_setting(config_path, "project_id", "fallback") == "fallback"
    set_setting(config_path, "project_id", "studygenie-dev")
    set_setting(config_path, "app_id", "1:abc")
    assert get_setting(config_path, "project_id") == "studygenie-dev"
    assert load_config(config_path) == {"project_id": "studygenie-dev", "app_id": "1:abc"}


def test_save_creates_parent_dirs(tmp_path):
    path = str(tmp_path / "nested" / "dir" / "config.json")
    save_config(path, {"api_key": "k"})
    assert load_config(path) == {"api_key": "k"}


def test_corrupt_config_reads_empty(config_path, caplog):
    with open(config_path, "w") as f:
        f.write("{not json")
    assert load_config(config_path) == {}
    assert "Ignoring unreadable config" in caplog.text


def test_non_object_config_reads_empty(config_path):
    with open(config_path, "w") as f:
        f.write("[1, 2]")
    assert load_config(config_path) == {}


def test_mask_secret():
    assert mask_secret("") == ""
    assert mask_secret("abc") == "***"
    assert mask_secret("AIzaSyDKiT") == "******DKiT"
