"""
Jokebox — Settings Tests
=========================

What we test:
    ✅ Defaults match the documented environment contract
    ✅ MONGO_URI is required at startup
    ✅ Log level and CORS origin parsing
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from jokebox.config import Settings


@pytest.fixture
def clean_env(monkeypatch):
    for var in ("PORT", "MONGO_URI", "DB_NAME", "COLLECTION_NAME", "LOG_LEVEL", "CORS_ORIGINS"):
        monkeypatch.delenv(var, raising=False)


class TestSettings:

    def test_defaults(self, clean_env):
        s = Settings(_env_file=None)
        assert s.port == 5000
        assert s.db_name == "jokesdb"
        assert s.collection_name == "jokestable"
        assert s.mongo_uri == ""

    def test_reads_environment(self, clean_env, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("MONGO_URI", "mongodb://db:27017")
        monkeypatch.setenv("DB_NAME", "other")

        s = Settings(_env_file=None)

        assert s.port == 8080
        assert s.mongo_uri == "mongodb://db:27017"
        assert s.db_name == "other"

    def test_missing_mongo_uri_fails_validation(self, clean_env):
        with pytest.raises(ValueError, match="MONGO_URI"):
            Settings(_env_file=None).validate_required()

    def test_present_mongo_uri_passes_validation(self, clean_env):
        Settings(_env_file=None, mongo_uri="mongodb://db:27017").validate_required()

    def test_log_level_normalized(self, clean_env):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self, clean_env):
        with pytest.raises(PydanticValidationError):
            Settings(_env_file=None, log_level="chatty")

    def test_cors_origins_list(self, clean_env):
        s = Settings(_env_file=None, cors_origins="http://a.com, http://b.com")
        assert s.cors_origins_list == ["http://a.com", "http://b.com"]
