"""
Server configuration loaded from the environment.

Values come from process environment variables, optionally seeded from a
`.env` file. Linear credentials are read separately by LinearAuth.
"""
import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv

from .constants import LINEAR_API_URL, DEFAULT_KNOWLEDGE_TOPICS


_CONFIRM_FALLBACKS = {"proceed": True, "cancel": False}
_TRANSPORTS = {"stdio", "http"}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the MCP server"""
    linear_api_url: str = LINEAR_API_URL
    knowledge_topics: Tuple[str, ...] = DEFAULT_KNOWLEDGE_TOPICS
    confirm_fallback: bool = False
    log_level: str = "INFO"
    transport: str = "stdio"
    host: str = "0.0.0.0"
    port: int = 8000

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            dotenv_path: Optional .env file to load first. Existing
                environment variables are never overridden.

        Returns:
            Settings instance

        Raises:
            ValueError: If a variable holds an unsupported value
        """
        load_dotenv(dotenv_path)

        topics_raw = os.getenv("GAME_DEV_KNOWLEDGE_TOPICS")
        if topics_raw:
            topics = tuple(t.strip() for t in topics_raw.split(",") if t.strip())
        else:
            topics = DEFAULT_KNOWLEDGE_TOPICS

        fallback_raw = os.getenv("GAME_DEV_CONFIRM_FALLBACK", "cancel").strip().lower()
        if fallback_raw not in _CONFIRM_FALLBACKS:
            raise ValueError(
                f"Invalid GAME_DEV_CONFIRM_FALLBACK: '{fallback_raw}'. "
                f"Use one of: {', '.join(sorted(_CONFIRM_FALLBACKS))}"
            )

        log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
        if log_level not in _LOG_LEVELS:
            raise ValueError(f"Invalid LOG_LEVEL: '{log_level}'")

        transport = os.getenv("MCP_TRANSPORT", "stdio").strip().lower()
        if transport not in _TRANSPORTS:
            raise ValueError(
                f"Invalid MCP_TRANSPORT: '{transport}'. Use 'stdio' or 'http'"
            )

        port_raw = os.getenv("PORT", "8000")
        try:
            port = int(port_raw)
        except ValueError:
            raise ValueError(f"Invalid PORT: '{port_raw}'")

        return cls(
            linear_api_url=os.getenv("LINEAR_API_URL", LINEAR_API_URL),
            knowledge_topics=topics,
            confirm_fallback=_CONFIRM_FALLBACKS[fallback_raw],
            log_level=log_level,
            transport=transport,
            host=os.getenv("HOST", "0.0.0.0"),
            port=port,
        )
