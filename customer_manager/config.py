"""
Configuration
=============

Purpose:
- Read application settings from environment variables, loading a local `.env`
  first when one exists.

Dependencies:
- `python-dotenv` for local `.env` loading

Security Considerations:
- API keys are read from the environment only; never log them.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


def _load_env() -> None:
    """Load variables from .env if present (supports local runs outside uvicorn)."""
    env_path = Path(".env")
    if env_path.exists():
        load_dotenv(dotenv_path=env_path, override=False)


def _first_env(*names: str) -> str | None:
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return None


@dataclass
class Settings:
    """Application settings; `Settings.from_env()` is the normal constructor."""

    project_name: str = "Customer Manager API"
    api_version: str = "2.0.0"
    log_level: str = "INFO"
    log_file: str | None = None
    host: str = "0.0.0.0"
    port: int = 8000
    openai_api_key: str | None = None
    agent_model: str = "gpt-4o-mini"
    base_url: str | None = None
    memory_redis_url: str | None = None
    memory_max_turns: int = 10

    @property
    def agent_enabled(self) -> bool:
        return bool(self.openai_api_key)

    @classmethod
    def from_env(cls) -> "Settings":
        _load_env()
        return cls(
            project_name=os.getenv("PROJECT_NAME", cls.project_name),
            api_version=os.getenv("API_VERSION", cls.api_version),
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
            log_file=os.getenv("LOG_FILE") or None,
            host=os.getenv("HOST", cls.host),
            port=int(os.getenv("PORT", str(cls.port))),
            # Accept either naming, matching OpenAI-compatible proxies.
            openai_api_key=_first_env("OPENAI_API_KEY", "API_KEY"),
            agent_model=os.getenv("AGENT_MODEL", cls.agent_model),
            base_url=_first_env("OPENAI_BASE_URL", "BASE_URL"),
            memory_redis_url=_first_env("MEMORY_REDIS_URL", "REDIS_URL"),
            memory_max_turns=int(os.getenv("MEMORY_MAX_TURNS", str(cls.memory_max_turns))),
        )
