import logging
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

PORT = 3000
HOST = "0.0.0.0"


class Settings(BaseSettings):
    """Configuration read from the environment and an optional .env file."""

    openai_api_key: Optional[str] = None
    llm_model: str = "gpt-3.5-turbo"
    documents_dir: str = "Documents"
    # Answers are shown as plain text, so markdown is opt-in.
    answer_in_markdown: bool = False
    response_delay_ms: int = 2000
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @classmethod
    def from_env(cls) -> "Settings":
        settings = cls()
        if not settings.openai_api_key:
            raise RuntimeError("OPENAI_API_KEY not set. Create a .env with your key or set env var.")
        return settings


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
