#!/usr/bin/env python3
"""
Configuration Tests

Settings come from the environment, matched case-sensitively.
"""

from pathlib import Path

from config import Settings, get_default_storage_path


class TestSettings:
    """Tests for Settings"""

    def test_defaults(self, monkeypatch):
        for name in ("STORAGE_DIR", "STORAGE_BACKEND", "ENFORCE_DAILY_LIMIT", "SUPABASE_URL", "SUPABASE_ANON_KEY"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings(_env_file=None)

        assert settings.STORAGE_DIR == get_default_storage_path()
        assert settings.STORAGE_BACKEND == "file"
        assert settings.ENFORCE_DAILY_LIMIT is False
        assert settings.supabase_configured is False

    def test_reads_environment(self, monkeypatch, temp_dir):
        monkeypatch.setenv("STORAGE_DIR", str(temp_dir))
        monkeypatch.setenv("ENFORCE_DAILY_LIMIT", "true")
        monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
        monkeypatch.setenv("SUPABASE_ANON_KEY", "anon")
        settings = Settings(_env_file=None)

        assert settings.ENFORCE_DAILY_LIMIT is True
        assert settings.storage_path == Path(temp_dir) / "storage.json"
        assert settings.supabase_configured is True

    def test_names_are_case_sensitive(self, monkeypatch):
        monkeypatch.delenv("ENFORCE_DAILY_LIMIT", raising=False)
        monkeypatch.setenv("enforce_daily_limit", "true")
        assert Settings(_env_file=None).ENFORCE_DAILY_LIMIT is False

    def test_env_file(self, monkeypatch, temp_dir):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        env_file = temp_dir / ".env"
        env_file.write_text("LOG_LEVEL=DEBUG\n")
        assert Settings(_env_file=env_file).LOG_LEVEL == "DEBUG"

    def test_create_directories(self, monkeypatch, temp_dir):
        target = temp_dir / "nested" / "pdfflow"
        monkeypatch.setenv("STORAGE_DIR", str(target))
        settings = Settings(_env_file=None)
        settings.create_directories()
        assert target.is_dir()
        assert settings.get_storage_info()["is_default"] is False
