"""
Unit tests for configuration loading.
"""

import os

import pytest
from unittest.mock import patch

from game_dev_mcp.config import Settings
from game_dev_mcp.constants import LINEAR_API_URL, DEFAULT_KNOWLEDGE_TOPICS

CONFIG_VARS = (
    "LINEAR_API_URL",
    "GAME_DEV_KNOWLEDGE_TOPICS",
    "GAME_DEV_CONFIRM_FALLBACK",
    "LOG_LEVEL",
    "MCP_TRANSPORT",
    "HOST",
    "PORT",
)


@pytest.fixture
def clean_env(tmp_path):
    """Environment without any server settings, and no .env file"""
    env = {k: v for k, v in os.environ.items() if k not in CONFIG_VARS}
    with patch.dict(os.environ, env, clear=True):
        yield str(tmp_path / "missing.env")


class TestSettingsFromEnv:
    """Test Settings.from_env."""

    def test_defaults(self, clean_env):
        """Test defaults when nothing is configured."""
        settings = Settings.from_env(clean_env)

        assert settings.linear_api_url == LINEAR_API_URL
        assert settings.knowledge_topics == DEFAULT_KNOWLEDGE_TOPICS
        assert settings.confirm_fallback is False
        assert settings.log_level == "INFO"
        assert settings.transport == "stdio"
        assert settings.port == 8000

    def test_overrides(self, clean_env):
        """Test every variable is read."""
        with patch.dict(os.environ, {
            "LINEAR_API_URL": "http://localhost:9999/graphql",
            "GAME_DEV_KNOWLEDGE_TOPICS": "gsap, rapier ,,",
            "GAME_DEV_CONFIRM_FALLBACK": "Proceed",
            "LOG_LEVEL": "debug",
            "MCP_TRANSPORT": "HTTP",
            "HOST": "127.0.0.1",
            "PORT": "9000",
        }):
            settings = Settings.from_env(clean_env)

        assert settings.linear_api_url == "http://localhost:9999/graphql"
        assert settings.knowledge_topics == ("gsap", "rapier")
        assert settings.confirm_fallback is True
        assert settings.log_level == "DEBUG"
        assert settings.transport == "http"
        assert settings.host == "127.0.0.1"
        assert settings.port == 9000

    def test_dotenv_file_loaded(self, clean_env, tmp_path):
        """Test values are read from a .env file."""
        dotenv_path = tmp_path / ".env"
        dotenv_path.write_text("GAME_DEV_CONFIRM_FALLBACK=proceed\nPORT=8123\n")

        settings = Settings.from_env(str(dotenv_path))

        assert settings.confirm_fallback is True
        assert settings.port == 8123

    @pytest.mark.parametrize("name,value", [
        ("GAME_DEV_CONFIRM_FALLBACK", "maybe"),
        ("LOG_LEVEL", "LOUD"),
        ("MCP_TRANSPORT", "sse"),
        ("PORT", "eighty"),
    ])
    def test_invalid_values(self, clean_env, name, value):
        """Test unsupported values fail at startup."""
        with patch.dict(os.environ, {name: value}):
            with pytest.raises(ValueError) as exc_info:
                Settings.from_env(clean_env)

        assert name in str(exc_info.value)
