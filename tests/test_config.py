"""Tests for environment-driven configuration and the app factory."""

from __future__ import annotations

import pytest

from empadas import create_app
from empadas.config import BaseConfig, DevConfig, ProductionConfig


def test_defaults_from_environment(data_dir):
    config = BaseConfig()

    assert config.STORAGE_BACKEND == "drive"
    assert config.DATA_DIR == data_dir.resolve()
    assert config.DEV_MODE is True
    assert config.DEV_FALLBACK is True
    assert config.ADMIN_TOKEN_TTL_SECONDS == 7 * 24 * 60 * 60


def test_invalid_storage_backend(data_dir, monkeypatch):
    monkeypatch.setenv("EMPADAS_STORAGE_BACKEND", "s3")

    with pytest.raises(ValueError):
        BaseConfig()


def test_production_disables_dev_mode_and_fallback(data_dir):
    config = ProductionConfig()

    assert config.DEV_MODE is False
    assert config.DEV_FALLBACK is False


def test_dev_fallback_can_be_disabled_in_dev(data_dir, monkeypatch):
    monkeypatch.setenv("EMPADAS_DEV_FALLBACK", "off")

    assert DevConfig().DEV_FALLBACK is False


def test_missing_env_and_presence(data_dir, monkeypatch):
    monkeypatch.setenv("GOOGLE_DRIVE_ADMIN_FOLDER_ID", "folder")
    config = BaseConfig()

    assert config.missing_env(config.REQUIRED_DRIVE_ENV) == ["GOOGLE_SERVICE_ACCOUNT_JSON_BASE64"]
    assert config.env_presence() == {
        "JWT_SECRET": True,
        "ADMIN_USERNAME": True,
        "ADMIN_PASSWORD": True,
        "GOOGLE_SERVICE_ACCOUNT_JSON_BASE64": False,
        "GOOGLE_DRIVE_ADMIN_FOLDER_ID": True,
    }


def test_create_app_testing_uses_local_storage(app):
    config = app.config["EMPADAS_CONFIG"]

    assert app.testing is True
    assert config.STORAGE_BACKEND == "local"
    assert set(app.blueprints) == {"rpc", "finance", "health"}


def test_unknown_config_name_falls_back_to_base(data_dir):
    app = create_app("staging")

    assert type(app.config["EMPADAS_CONFIG"]) is BaseConfig
