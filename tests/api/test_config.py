"""Tests for configuration classes."""

import os
from dataclasses import FrozenInstanceError, replace
from unittest.mock import patch

import pytest

from config import (
    AppConfig,
    CORSConfig,
    LoggingConfig,
    RateLimitConfig,
    RedisConfig,
    SecurityConfig,
    TableConfig,
    _parse_cors_origins,
)


class TestTableConfig:
    """Tests for TableConfig."""

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            table = TableConfig()

        assert table.min_bet == 1
        assert table.max_bet == 500
        assert table.max_players == 8
        assert table.starting_balance == 200
        assert table.reshuffle_fraction == 0.25
        assert table.bet_attempts == 3
        assert table.average_file == "average.txt"
        assert table.save_file == "blackjack_table.json"

    def test_from_env(self):
        env = {
            "TABLE_MIN_BET": "5",
            "TABLE_MAX_BET": "50",
            "TABLE_STARTING_BALANCE": "1000",
            "TABLE_AVERAGE_FILE": "/tmp/avg.txt",
            "TABLE_SAVE_FILE": "/tmp/save.json",
        }
        with patch.dict(os.environ, env):
            table = TableConfig()

        assert (table.min_bet, table.max_bet) == (5, 50)
        assert table.starting_balance == 1000
        assert table.average_file == "/tmp/avg.txt"
        assert table.save_file == "/tmp/save.json"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"min_bet": 0},
            {"min_bet": 10, "max_bet": 5},
            {"reshuffle_fraction": 0.0},
            {"reshuffle_fraction": 1.0},
        ],
    )
    def test_rejects_invalid_limits(self, overrides):
        with pytest.raises(ValueError):
            TableConfig(**overrides)

    def test_equal_limits_allowed(self):
        assert TableConfig(min_bet=10, max_bet=10).max_bet == 10

    def test_frozen(self):
        table = TableConfig()
        with pytest.raises(FrozenInstanceError):
            table.min_bet = 5
        assert replace(table, min_bet=5).min_bet == 5


class TestLoggingConfig:
    """Tests for LoggingConfig."""

    def test_default_level(self):
        with patch.dict(os.environ, {}, clear=True):
            assert LoggingConfig().level == "INFO"

    def test_level_from_env_is_uppercased(self):
        with patch.dict(os.environ, {"LOG_LEVEL": "debug"}):
            assert LoggingConfig().level == "DEBUG"


class TestServiceConfig:
    """Tests for the web service settings."""

    def test_cors_origins(self):
        with patch.dict(os.environ, {}, clear=True):
            assert CORSConfig().allowed_origins == ["http://localhost:8000"]
        with patch.dict(os.environ, {"CORS_ORIGINS": " http://a.test , ,http://b.test "}):
            assert _parse_cors_origins() == ["http://a.test", "http://b.test"]

    @pytest.mark.parametrize("value,enabled", [("true", True), ("TRUE", True), ("0", False), ("no", False)])
    def test_rate_limit_enabled(self, value, enabled):
        with patch.dict(os.environ, {"RATE_LIMIT_ENABLED": value, "RATE_LIMIT_RPM": "120"}):
            rate_limit = RateLimitConfig()
        assert rate_limit.enabled is enabled
        assert rate_limit.requests_per_minute == 120

    def test_secret_key(self):
        with patch.dict(os.environ, {"SECRET_KEY": "table-secret"}):
            assert SecurityConfig().secret_key == "table-secret"
        with patch.dict(os.environ, {}, clear=True):
            assert len(SecurityConfig().secret_key) > 0

    def test_redis_url(self):
        with patch.dict(os.environ, {}, clear=True):
            assert RedisConfig().url == "redis://localhost:6379/0"
        with patch.dict(os.environ, {"REDIS_HOST": "cache", "REDIS_PASSWORD": "pw", "REDIS_DB": "2"}):
            assert RedisConfig().url == "redis://:pw@cache:6379/2"


class TestAppConfig:
    """Tests for AppConfig."""

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            app = AppConfig()

        assert app.debug is False
        assert app.port == 8000
        assert app.session_ttl == 3600
        assert isinstance(app.table, TableConfig)
        assert isinstance(app.logging, LoggingConfig)

    def test_invalid_table_env_fails_fast(self):
        with patch.dict(os.environ, {"TABLE_MIN_BET": "20", "TABLE_MAX_BET": "10"}):
            with pytest.raises(ValueError):
                AppConfig()
