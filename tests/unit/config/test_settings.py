"""Unit tests for environment-driven builder settings."""

import importlib
import sys

import pytest
from pydantic import ValidationError

from batch_upsert import InconsistentKeysError, UpsertBuilder, UpsertRequest
from batch_upsert.config import Settings, get_settings


def _reload_settings_module():
    module_name = "batch_upsert.config.settings"
    sys.modules.pop(module_name, None)
    return importlib.import_module(module_name)


@pytest.mark.unit
class TestSettings:
    def test_defaults(self):
        settings = Settings()

        assert settings.missing_keys_behavior == "default"
        assert settings.paramstyle == "numeric"
        assert settings.batch_size == 1000
        assert settings.conflict_where_guard is True

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("UPSERT_MISSING_KEYS_BEHAVIOR", "throw")
        monkeypatch.setenv("UPSERT_PARAMSTYLE", "format")
        monkeypatch.setenv("UPSERT_BATCH_SIZE", "250")
        monkeypatch.setenv("UPSERT_CONFLICT_WHERE_GUARD", "false")

        settings = get_settings()

        assert settings.missing_keys_behavior == "throw"
        assert settings.paramstyle == "format"
        assert settings.batch_size == 250
        assert settings.conflict_where_guard is False

    def test_log_level_read_without_prefix(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        assert Settings().LOG_LEVEL == "DEBUG"

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    @pytest.mark.parametrize("value", ["0", "-5"])
    def test_batch_size_must_be_positive(self, monkeypatch, value):
        monkeypatch.setenv("UPSERT_BATCH_SIZE", value)
        with pytest.raises(ValidationError):
            Settings()

    def test_unknown_policy_rejected(self, monkeypatch):
        monkeypatch.setenv("UPSERT_MISSING_KEYS_BEHAVIOR", "ignore")
        with pytest.raises(ValidationError):
            Settings()


@pytest.mark.unit
class TestBuilderUsesSettings:
    def test_builder_picks_up_env_policy(self, monkeypatch):
        monkeypatch.setenv("UPSERT_MISSING_KEYS_BEHAVIOR", "throw")

        request = UpsertRequest(
            table="x", constraint_columns=["id"], rows=[{"id": 1}, {"id": 2, "other": 3}]
        )
        with pytest.raises(InconsistentKeysError):
            UpsertBuilder().build(request)

    def test_builder_picks_up_env_paramstyle(self, monkeypatch):
        monkeypatch.setenv("UPSERT_PARAMSTYLE", "format")

        builder = UpsertBuilder()

        assert builder.dialect.paramstyle == "format"
        stmt = builder.build(
            UpsertRequest(table="x", constraint_columns=["id"], rows=[{"id": 1}])
        )
        assert "VALUES (%s)" in stmt.sql


@pytest.mark.unit
def test_settings_reads_custom_env_file(tmp_path, monkeypatch):
    env_path = tmp_path / "custom.env"
    env_path.write_text("UPSERT_BATCH_SIZE=7\n")

    monkeypatch.setenv("UPSERT_ENV_FILE", str(env_path))

    settings_module = _reload_settings_module()
    try:
        assert settings_module.Settings().batch_size == 7
    finally:
        monkeypatch.delenv("UPSERT_ENV_FILE", raising=False)
        _reload_settings_module()
