"""Tests for wallet configuration."""

import pytest
from pathlib import Path

from pydantic import ValidationError

from wallet.config import WalletSettings, get_settings


class TestWalletSettings:
    """Tests for WalletSettings loading."""

    def test_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        settings = WalletSettings()
        assert settings.records_per_file == 100
        assert settings.sum_parallelism == 1
        assert settings.audit_enabled is True
        assert settings.data_dir == Path("data")

    def test_reads_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("WALLET_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("WALLET_RECORDS_PER_FILE", "5")
        monkeypatch.setenv("WALLET_SUM_PARALLELISM", "4")
        monkeypatch.setenv("WALLET_AUDIT_ENABLED", "false")
        settings = WalletSettings()
        assert settings.data_dir == tmp_path
        assert settings.records_per_file == 5
        assert settings.sum_parallelism == 4
        assert settings.audit_enabled is False

    def test_rejects_zero_records_per_file(self, tmp_path):
        with pytest.raises(ValidationError):
            WalletSettings(data_dir=tmp_path, records_per_file=0)

    def test_missing_data_dir_warns(self, tmp_path):
        with pytest.warns(UserWarning, match="data directory not found"):
            WalletSettings(data_dir=tmp_path / "missing")

    def test_get_settings_is_cached(self, tmp_path, monkeypatch):
        monkeypatch.setenv("WALLET_DATA_DIR", str(tmp_path))
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
